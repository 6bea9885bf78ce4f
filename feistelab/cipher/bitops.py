"""Fixed-width word helpers shared by the key schedule and the round function."""
from __future__ import annotations

from typing import Tuple

MASK8 = 0xFF
MASK32 = 0xFFFFFFFF
MASK64 = 0xFFFFFFFFFFFFFFFF


def rotate_left(x: int, r: int, w: int) -> int:
    """Rotate-left x by r bits in a w-bit word."""
    mask = (1 << w) - 1
    r &= (w - 1)
    x &= mask
    return ((x << r) & mask) | (x >> (w - r))


def rotate_right(x: int, r: int, w: int) -> int:
    """Rotate-right x by r bits in a w-bit word."""
    mask = (1 << w) - 1
    r &= (w - 1)
    x &= mask
    return (x >> r) | ((x << (w - r)) & mask)


def split_block(block: int) -> Tuple[int, int]:
    """Split a 64-bit block into its (high, low) 32-bit halves."""
    return (block >> 32) & MASK32, block & MASK32


def join_halves(left: int, right: int) -> int:
    return ((left & MASK32) << 32) | (right & MASK32)


def split_bytes32(half: int) -> Tuple[int, int, int, int]:
    """Bytes of a 32-bit word, most significant first."""
    return (half >> 24) & MASK8, (half >> 16) & MASK8, (half >> 8) & MASK8, half & MASK8

"""Feistel round function and the key-independent permutation layer.

``mix`` is not invertible on its own; decryption relies on the Feistel
swap. ``permutation_step`` is a bijection on the (left, right) pair and
``inverse_permutation_step`` undoes it exactly.
"""
from __future__ import annotations

from typing import Tuple

from .bitops import MASK32, rotate_left, rotate_right, split_bytes32
from .sbox import SBoxSet

BYTE_SPREAD = 0x01010101


def mix(half: int, round_index: int, sboxes: SBoxSet, round_key: int = 0) -> int:
    """Substitute the four bytes of ``half`` through the round table and diffuse.

    ``round_key`` is replicated over the four bytes and xored into the input
    before substitution; the default of 0 leaves the input untouched.
    """
    table = sboxes[round_index]
    a, b, c, d = split_bytes32((half ^ (round_key * BYTE_SPREAD)) & MASK32)
    res = table[a] ^ table[b] ^ table[c] ^ table[d]
    res = rotate_left(res, 7, 32)
    res ^= res >> 16
    return rotate_left(res, 3, 32)


def permutation_step(left: int, right: int) -> Tuple[int, int]:
    left ^= right >> 3
    right ^= (left << 5) & MASK32
    return rotate_left(left, 16, 32), rotate_right(right, 8, 32)


def inverse_permutation_step(left: int, right: int) -> Tuple[int, int]:
    # Undo the rotations first, then the xors in reverse order.
    right = rotate_left(right, 8, 32)
    left = rotate_right(left, 16, 32)
    right ^= (left << 5) & MASK32
    left ^= right >> 3
    return left, right

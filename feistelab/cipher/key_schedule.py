"""Round-key schedule: 32 one-byte round keys from a 64-bit master key.

Each round key is one byte of a 64-bit mixing hash of (key, round index).
The hash is a small rotate/xor/shift loop; distinct master keys are not
guaranteed to give distinct round-key sets.

Research / education only. Do NOT use in production.
"""
from __future__ import annotations

from typing import Tuple

from feistelab.errors import InvalidKeyFormat

from .bitops import MASK8, MASK64, rotate_left

ROUNDS = 32
HASH_CONSTANT = 0xA5A5A5A5A5A5A5A5
HASH_ITERATIONS = 8

RoundKeySet = Tuple[int, ...]


def mixing_hash(key: int, round_index: int) -> int:
    """64-bit mixing hash of the master key for one round."""
    h = (key ^ HASH_CONSTANT) & MASK64
    for j in range(HASH_ITERATIONS):
        h = rotate_left(h, 7, 64) ^ (round_index * 157 + j * 73)
        h ^= ((h << 11) & MASK64) ^ (h >> 3)
    return h & MASK64


def generate_round_keys(key: int, *, rounds: int = ROUNDS) -> RoundKeySet:
    """Derive the round-key set for ``key``.

    Round ``i`` takes byte ``i % 8`` (counted from the least significant end)
    of ``mixing_hash(key, i)``.
    """
    if not 0 <= key <= MASK64:
        raise InvalidKeyFormat(f"master key must be a 64-bit unsigned value, got {key:#x}")
    return tuple(
        (mixing_hash(key, i) >> ((i % 8) * 8)) & MASK8
        for i in range(rounds)
    )

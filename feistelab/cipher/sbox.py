"""Round-indexed substitution tables built from inverses modulo 257.

Research / education only. Do NOT use in production.
"""
from __future__ import annotations

from functools import lru_cache
from typing import Tuple

from .key_schedule import ROUNDS

MODULUS = 257
SBOX_SIZE = 256
ROUND_OFFSET = 17
INPUT_MASK = 0x5F

SBox = Tuple[int, ...]
SBoxSet = Tuple[SBox, ...]


def mod_inverse(a: int) -> int:
    """Smallest x in 1..255 with (a * x) % 257 == 1, or 0 when none exists."""
    for x in range(1, SBOX_SIZE):
        if (a * x) % MODULUS == 1:
            return x
    return 0


def sbox_input(value: int, round_index: int) -> int:
    """Residue whose inverse fills entry ``value`` of the round's table.

    Zero has no inverse, so it is mapped to 1.
    """
    m = ((value + round_index * ROUND_OFFSET) % SBOX_SIZE) ^ INPUT_MASK
    return m or 1


@lru_cache(maxsize=None)
def generate_sbox(round_index: int) -> SBox:
    return tuple(mod_inverse(sbox_input(v, round_index)) for v in range(SBOX_SIZE))


@lru_cache(maxsize=None)
def generate_sbox_set(rounds: int = ROUNDS) -> SBoxSet:
    """All round tables, computed once per process and shared read-only."""
    return tuple(generate_sbox(r) for r in range(rounds))

"""Differential and linear analysis of the round S-boxes.

The tables are inverses modulo 257 and are not permutations of 0..255:
inputs 0 and 1 of the residue map share an inverse, so every table has one
repeated value. The DDT and LAT are still well defined over 8-bit inputs.

Research / education only. Do NOT use in production.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Sequence

import numpy as np

from feistelab.cipher.key_schedule import ROUNDS
from feistelab.cipher.sbox import MODULUS, SBOX_SIZE, generate_sbox, sbox_input

_PARITY = np.array([bin(i).count("1") & 1 for i in range(SBOX_SIZE)], dtype=np.int64)


@dataclass
class SBoxAnalysisResult:
    """Structured result of S-box differential/linear analysis."""
    round_index: int
    sbox_size: int
    ddt_max: int                # Max DDT entry for dx != 0 (ideal for 8-bit: 4)
    lat_max_abs: int            # Max |Walsh| over nonzero masks (lower = better)
    is_bijective: bool
    distinct_values: int
    valid_inverses: int         # Entries x with (m * x) % 257 == 1
    differential_uniformity: str  # "good" / "fair" / "poor"
    linearity: str              # "good" / "fair" / "poor"

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def summary(self) -> str:
        bij = "bijective" if self.is_bijective else f"NOT bijective ({self.distinct_values} distinct)"
        return (
            f"round {self.round_index + 1} S-box ({self.sbox_size}-entry): "
            f"DDT_max={self.ddt_max} ({self.differential_uniformity}), "
            f"LAT_max={self.lat_max_abs} ({self.linearity}), {bij}, "
            f"{self.valid_inverses}/{self.sbox_size} valid inverses"
        )


def ddt_max(table: Sequence[int]) -> int:
    """Return max entry in the difference distribution table excluding dx=0."""
    s = np.asarray(table, dtype=np.int64)
    n = len(s)
    x = np.arange(n)
    max_v = 0
    for dx in range(1, n):
        dy = s ^ s[x ^ dx]
        max_v = max(max_v, int(np.bincount(dy, minlength=n).max()))
    return max_v


def lat_max_abs(table: Sequence[int]) -> int:
    """Return max |sum_x (-1)^(a.x ^ b.S(x))| over nonzero masks a, b."""
    s = np.asarray(table, dtype=np.int64)
    masks = np.arange(len(s))
    x_signs = 1 - 2 * _PARITY[np.bitwise_and.outer(masks, masks)]
    y_signs = 1 - 2 * _PARITY[np.bitwise_and.outer(masks, s)]
    walsh = x_signs @ y_signs.T
    return int(np.abs(walsh[1:, 1:]).max())


def count_valid_inverses(table: Sequence[int], round_index: int) -> int:
    return sum(
        1 for v, x in enumerate(table)
        if x != 0 and (sbox_input(v, round_index) * x) % MODULUS == 1
    )


def _rate_differential_uniformity(ddt: int) -> str:
    if ddt <= 4:
        return "good"
    elif ddt <= 8:
        return "fair"
    else:
        return "poor"


def _rate_linearity(lat: int) -> str:
    if lat <= 16:
        return "good"
    elif lat <= 32:
        return "fair"
    else:
        return "poor"


def analyze_sbox(round_index: int) -> SBoxAnalysisResult:
    """Analyze the S-box of one round for differential/linear properties."""
    if not 0 <= round_index < ROUNDS:
        raise ValueError(f"round_index must be in 0..{ROUNDS - 1}, got {round_index}")

    table = generate_sbox(round_index)
    ddt = ddt_max(table)
    lat = lat_max_abs(table)
    distinct = len(set(table))

    return SBoxAnalysisResult(
        round_index=round_index,
        sbox_size=len(table),
        ddt_max=ddt,
        lat_max_abs=lat,
        is_bijective=distinct == len(table),
        distinct_values=distinct,
        valid_inverses=count_valid_inverses(table, round_index),
        differential_uniformity=_rate_differential_uniformity(ddt),
        linearity=_rate_linearity(lat),
    )


def analyze_all_sboxes(rounds: int = ROUNDS) -> List[SBoxAnalysisResult]:
    return [analyze_sbox(r) for r in range(rounds)]

"""Human-readable renderings of blocks, round keys, S-boxes and round traces.

The cipher never prints; front-ends and DEBUG logging render its
structured values with these helpers.
"""
from __future__ import annotations

from typing import Iterable, List, Sequence

from feistelab.cipher.block import RoundState


def format_binary(value: int, bits: int = 64) -> str:
    """Binary string with a space after every 8 bits, most significant first."""
    digits = format(value & ((1 << bits) - 1), f"0{bits}b")
    return " ".join(digits[i:i + 8] for i in range(0, bits, 8))


def format_round_keys(round_keys: Sequence[int]) -> List[str]:
    return [f"Round {i + 1} Key: 0x{rk:02x}" for i, rk in enumerate(round_keys)]


def format_sbox(table: Sequence[int], per_row: int = 16) -> List[str]:
    return [
        " ".join(str(v) for v in table[i:i + per_row])
        for i in range(0, len(table), per_row)
    ]


def format_round_trace(states: Iterable[RoundState], label: str = "Encryption") -> List[str]:
    lines = []
    for s in states:
        lines.append(
            f"{label} Round {s.round}: "
            f"Left Half = {s.left} (Binary: {format_binary(s.left, 32)}), "
            f"Right Half = {s.right} (Binary: {format_binary(s.right, 32)})"
        )
    return lines

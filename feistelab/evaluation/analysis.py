"""Single-sample avalanche, differential and linear-approximation tests.

Each test encrypts a block (and, for the first two, the same block with its
least significant bit flipped) and inspects the outputs bit by bit. These
are didactic heuristics, not statistically valid cryptanalysis; see
``feistelab.evaluation.avalanche`` for the multi-trial SAC measurement.

Research / education only. Do NOT use in production.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Union

from feistelab.cipher.bitops import MASK64
from feistelab.cipher.block import BLOCK_SIZE_BITS, FeistelCipher
from feistelab.cipher.codec import TextLike, format_hex, text_to_block

FLIP_DELTA = 0x0000000000000001

InputLike = Union[TextLike, int]


def _as_block(data: InputLike) -> int:
    if isinstance(data, int):
        if not 0 <= data <= MASK64:
            raise ValueError(f"Block must be a 64-bit unsigned value, got {data:#x}")
        return data
    return text_to_block(data)


def set_bit_positions(value: int) -> List[int]:
    """Positions of the set bits, ascending, bit 0 being the least significant."""
    return [i for i in range(BLOCK_SIZE_BITS) if (value >> i) & 1]


def parity(value: int) -> int:
    return value.bit_count() & 1


@dataclass
class AvalancheResult:
    input_block: int
    ciphertext: int
    flipped_ciphertext: int
    bit_diff_count: int
    percentage: float

    @property
    def integer_percentage(self) -> int:
        """Truncated percentage, as printed by the classic console tool."""
        return self.bit_diff_count * 100 // BLOCK_SIZE_BITS

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        d["integer_percentage"] = self.integer_percentage
        return d

    def summary(self) -> str:
        return (
            f"Avalanche Effect: {self.bit_diff_count}/{BLOCK_SIZE_BITS} bits changed "
            f"({self.integer_percentage}%)"
        )


@dataclass
class DifferentialResult:
    input_block: int
    input_delta: int
    xor_differential: int
    flipped_bit_positions: List[int] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def summary(self) -> str:
        positions = " ".join(str(p) for p in self.flipped_bit_positions)
        return (
            f"Differential Output: {format_hex(self.xor_differential)}; "
            f"Flipped Bit Positions: {positions}"
        )


@dataclass
class LinearResult:
    input_block: int
    ciphertext: int
    input_parity: int
    output_parity: int
    correlation_label: str      # "high" when the parities match, else "low"

    @property
    def parities_match(self) -> bool:
        return self.input_parity == self.output_parity

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def summary(self) -> str:
        return (
            f"Linear Correlation: XOR(InputBits) = {self.input_parity}, "
            f"XOR(OutputBits) = {self.output_parity} "
            f"({self.correlation_label.capitalize()} Correlation)"
        )


def avalanche_test(cipher: FeistelCipher, data: InputLike) -> AvalancheResult:
    original = _as_block(data)
    ct1 = cipher.encrypt(original)
    ct2 = cipher.encrypt(original ^ FLIP_DELTA)
    diff = (ct1 ^ ct2).bit_count()
    return AvalancheResult(
        input_block=original,
        ciphertext=ct1,
        flipped_ciphertext=ct2,
        bit_diff_count=diff,
        percentage=diff * 100 / BLOCK_SIZE_BITS,
    )


def differential_test(cipher: FeistelCipher, data: InputLike, delta: int = FLIP_DELTA) -> DifferentialResult:
    original = _as_block(data)
    if not 0 < delta <= MASK64:
        raise ValueError("delta must be a nonzero 64-bit value")
    xor_diff = cipher.encrypt(original) ^ cipher.encrypt(original ^ delta)
    return DifferentialResult(
        input_block=original,
        input_delta=delta,
        xor_differential=xor_diff,
        flipped_bit_positions=set_bit_positions(xor_diff),
    )


def linear_test(cipher: FeistelCipher, data: InputLike) -> LinearResult:
    original = _as_block(data)
    enc = cipher.encrypt(original)
    in_p = parity(original)
    out_p = parity(enc)
    return LinearResult(
        input_block=original,
        ciphertext=enc,
        input_parity=in_p,
        output_parity=out_p,
        correlation_label="high" if in_p == out_p else "low",
    )

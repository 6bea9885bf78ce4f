"""Strict Avalanche Criterion (SAC) calculator with a full bit-flip matrix.

Measures whether flipping each individual input bit causes each output bit
to flip with probability ~0.5. Entry (i, j) of the matrix is the observed
probability that output bit j flips when input bit i is flipped.

Research / education only. Do NOT use in production.
"""
from __future__ import annotations

import logging
import random
from dataclasses import asdict, dataclass, field
from typing import Any, Callable, Dict, List, Optional

import numpy as np

from feistelab.cipher.bitops import MASK64
from feistelab.cipher.block import BLOCK_SIZE_BITS, build_cipher

logger = logging.getLogger(__name__)

KEY_SIZE_BITS = 64


def block_bits(value: int) -> np.ndarray:
    """Bits of a 64-bit value as a uint8 vector, index 0 = least significant."""
    raw = np.frombuffer(value.to_bytes(8, "little"), dtype=np.uint8)
    return np.unpackbits(raw, bitorder="little")


@dataclass
class SACResult:
    """Strict Avalanche Criterion measurement for one input type."""
    input_type: str             # "plaintext" or "key"
    key_mixing: bool
    num_trials: int
    num_input_bits: int
    num_output_bits: int

    # Per-input-bit mean flip fraction (len = num_input_bits)
    per_input_bit_mean: List[float] = field(default_factory=list)
    # Flip probability matrix, num_input_bits x num_output_bits
    matrix: List[List[float]] = field(default_factory=list)

    global_mean: float = 0.0    # ~0.5 ideal
    global_std: float = 0.0     # Std dev of per-bit means
    min_bit_prob: float = 0.0
    max_bit_prob: float = 0.0
    sac_deviation: float = 0.0  # Mean |matrix - 0.5| (0.0 = perfect SAC)

    @property
    def passes_sac(self) -> bool:
        """Heuristic: SAC deviation < 0.05 and min_bit_prob > 0.35."""
        return self.sac_deviation < 0.05 and self.min_bit_prob > 0.35

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        d["passes_sac"] = self.passes_sac
        return d

    def summary(self) -> str:
        status = "PASS" if self.passes_sac else "FAIL"
        return (
            f"[{status}] SAC({self.input_type}): "
            f"mean={self.global_mean:.4f}, std={self.global_std:.4f}, "
            f"deviation={self.sac_deviation:.4f}, "
            f"min={self.min_bit_prob:.4f}, max={self.max_bit_prob:.4f}"
        )


def compute_sac(
    *,
    input_type: str = "plaintext",
    trials: int = 64,
    seed: int = 1337,
    key_mixing: bool = False,
    progress_callback: Optional[Callable[[int, int], None]] = None,
) -> SACResult:
    """Compute the SAC matrix over random (plaintext, key) pairs.

    For each trial a random plaintext and key are drawn, the reference
    ciphertext is computed, and each input bit (of the plaintext or of the
    key) is flipped in turn and re-encrypted.

    Args:
        input_type: "plaintext" or "key", which input to perturb.
        trials: Number of random (plaintext, key) pairs.
        seed: Random seed for reproducibility.
        key_mixing: Whether round keys enter the round function.
        progress_callback: Optional callback(current_trial, total_trials).

    Returns:
        SACResult with the matrix and aggregate statistics.
    """
    if input_type == "plaintext":
        num_input_bits = BLOCK_SIZE_BITS
    elif input_type == "key":
        num_input_bits = KEY_SIZE_BITS
    else:
        raise ValueError(f"input_type must be 'plaintext' or 'key', got '{input_type}'")
    if trials < 1:
        raise ValueError("trials must be >= 1")

    rng = random.Random(seed)
    counts = np.zeros((num_input_bits, BLOCK_SIZE_BITS), dtype=np.int64)

    for t in range(trials):
        if progress_callback:
            progress_callback(t, trials)

        pt = rng.getrandbits(BLOCK_SIZE_BITS)
        key = rng.getrandbits(KEY_SIZE_BITS)
        cipher = build_cipher(key, key_mixing=key_mixing)
        ct1 = cipher.encrypt(pt)

        for bit_i in range(num_input_bits):
            if input_type == "plaintext":
                ct2 = cipher.encrypt(pt ^ (1 << bit_i))
            else:
                flipped = build_cipher((key ^ (1 << bit_i)) & MASK64, key_mixing=key_mixing)
                ct2 = flipped.encrypt(pt)
            counts[bit_i] += block_bits(ct1 ^ ct2)

    matrix = counts / trials
    per_bit = matrix.mean(axis=1)
    logger.debug("SAC(%s) finished %d trials, mean=%.4f", input_type, trials, float(per_bit.mean()))

    return SACResult(
        input_type=input_type,
        key_mixing=key_mixing,
        num_trials=trials,
        num_input_bits=num_input_bits,
        num_output_bits=BLOCK_SIZE_BITS,
        per_input_bit_mean=[round(float(p), 6) for p in per_bit],
        matrix=np.round(matrix, 6).tolist(),
        global_mean=round(float(per_bit.mean()), 6),
        global_std=round(float(per_bit.std(ddof=1)), 6) if num_input_bits > 1 else 0.0,
        min_bit_prob=round(float(per_bit.min()), 6),
        max_bit_prob=round(float(per_bit.max()), 6),
        sac_deviation=round(float(np.abs(matrix - 0.5).mean()), 6),
    )

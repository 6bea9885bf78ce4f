"""Algebraic unit testing: roundtrip verification P = D(E(P, K), K).

Generates randomized (block, key) vectors and verifies that decryption
perfectly inverts encryption for every vector.

Research / education only. Do NOT use in production.
"""
from __future__ import annotations

import logging
import random
import time
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List

from feistelab.cipher.block import build_cipher
from feistelab.cipher.codec import format_hex

logger = logging.getLogger(__name__)


@dataclass
class RoundtripFailure:
    """Details of a single failed roundtrip test vector."""
    vector_index: int
    plaintext_hex: str
    key_hex: str
    ciphertext_hex: str
    decrypted_hex: str       # What decrypt returned (should equal plaintext)


@dataclass
class RoundtripResult:
    """Aggregate result of roundtrip testing."""
    key_mixing: bool
    total_vectors: int
    passed: int
    failed: int
    failures: List[RoundtripFailure] = field(default_factory=list)
    elapsed_seconds: float = 0.0
    seed: int = 1337

    @property
    def success_rate(self) -> float:
        return self.passed / self.total_vectors if self.total_vectors > 0 else 0.0

    @property
    def is_perfect(self) -> bool:
        return self.failed == 0

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def summary(self) -> str:
        status = "PASS" if self.is_perfect else "FAIL"
        mode = "key mixing" if self.key_mixing else "compatible"
        return (
            f"[{status}] roundtrip ({mode}): "
            f"{self.passed}/{self.total_vectors} vectors passed "
            f"({self.elapsed_seconds:.2f}s)"
        )


def run_roundtrip_tests(
    *,
    num_vectors: int = 1000,
    seed: int = 1337,
    key_mixing: bool = False,
    max_failures_recorded: int = 10,
) -> RoundtripResult:
    """Run roundtrip verification across ``num_vectors`` random (block, key) pairs.

    Args:
        num_vectors: Number of random vectors to test.
        seed: Random seed for deterministic reproducibility.
        key_mixing: Whether round keys enter the round function.
        max_failures_recorded: Maximum number of failure details to keep.

    Returns:
        RoundtripResult with pass/fail counts and failure details.
    """
    rng = random.Random(seed)
    passed = 0
    failed = 0
    failures: List[RoundtripFailure] = []

    start = time.perf_counter()

    for i in range(num_vectors):
        pt = rng.getrandbits(64)
        key = rng.getrandbits(64)

        cipher = build_cipher(key, key_mixing=key_mixing)
        ct = cipher.encrypt(pt)
        pt2 = cipher.decrypt(ct)

        if pt == pt2:
            passed += 1
        else:
            failed += 1
            if len(failures) < max_failures_recorded:
                failures.append(RoundtripFailure(
                    vector_index=i,
                    plaintext_hex=format_hex(pt),
                    key_hex=format_hex(key),
                    ciphertext_hex=format_hex(ct),
                    decrypted_hex=format_hex(pt2),
                ))

    elapsed = time.perf_counter() - start
    if failed:
        logger.warning("Roundtrip: %d/%d vectors failed", failed, num_vectors)

    return RoundtripResult(
        key_mixing=key_mixing,
        total_vectors=num_vectors,
        passed=passed,
        failed=failed,
        failures=failures,
        elapsed_seconds=round(elapsed, 4),
        seed=seed,
    )

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .bitops import MASK64, join_halves, split_block
from .key_schedule import ROUNDS, RoundKeySet, generate_round_keys
from .round import inverse_permutation_step, mix, permutation_step
from .sbox import SBoxSet, generate_sbox_set

BLOCK_SIZE_BITS = 64
BLOCK_SIZE_BYTES = BLOCK_SIZE_BITS // 8


@dataclass(frozen=True)
class RoundState:
    """Halves after one round; ``round`` is 1-based."""
    round: int
    left: int
    right: int

    @property
    def block(self) -> int:
        return join_halves(self.left, self.right)


class BlockCipher:
    def encrypt_block(self, plaintext_block: bytes) -> bytes:  # pragma: no cover
        raise NotImplementedError

    def decrypt_block(self, ciphertext_block: bytes) -> bytes:  # pragma: no cover
        raise NotImplementedError


@dataclass(frozen=True)
class FeistelCipher(BlockCipher):
    """32-round Feistel network over a 64-bit block.

    Round keys and S-boxes are immutable inputs fixed at construction, so a
    single instance can be shared between threads. Each call runs all
    rounds to completion.

    With ``key_mixing`` off (the default) the round keys are carried but do
    not enter the round function, so the ciphertext depends only on the
    round-indexed S-boxes.
    """
    round_keys: RoundKeySet
    sboxes: SBoxSet = field(default_factory=generate_sbox_set, repr=False)
    key_mixing: bool = False

    def __post_init__(self):
        if len(self.round_keys) != ROUNDS:
            raise ValueError(f"Expected {ROUNDS} round keys, got {len(self.round_keys)}")
        if len(self.sboxes) != ROUNDS:
            raise ValueError(f"Expected {ROUNDS} S-boxes, got {len(self.sboxes)}")

    @property
    def rounds(self) -> int:
        return len(self.round_keys)

    def _f(self, half: int, r: int) -> int:
        rk = self.round_keys[r] if self.key_mixing else 0
        return mix(half, r, self.sboxes, rk)

    def _run_encrypt(self, block: int, trace: Optional[List[RoundState]]) -> int:
        _check_block(block)
        left, right = split_block(block)
        for r in range(self.rounds):
            left, right = right, left ^ self._f(right, r)
            left, right = permutation_step(left, right)
            if trace is not None:
                trace.append(RoundState(r + 1, left, right))
        return join_halves(left, right)

    def _run_decrypt(self, block: int, trace: Optional[List[RoundState]]) -> int:
        _check_block(block)
        left, right = split_block(block)
        for r in reversed(range(self.rounds)):
            left, right = inverse_permutation_step(left, right)
            # Reverse of: L, R = R, L XOR F(R)
            left, right = right ^ self._f(left, r), left
            if trace is not None:
                trace.append(RoundState(r + 1, left, right))
        return join_halves(left, right)

    def encrypt(self, block: int) -> int:
        return self._run_encrypt(block, None)

    def decrypt(self, block: int) -> int:
        return self._run_decrypt(block, None)

    def encrypt_traced(self, block: int) -> Tuple[int, List[RoundState]]:
        trace: List[RoundState] = []
        return self._run_encrypt(block, trace), trace

    def decrypt_traced(self, block: int) -> Tuple[int, List[RoundState]]:
        trace: List[RoundState] = []
        return self._run_decrypt(block, trace), trace

    def encrypt_block(self, plaintext_block: bytes) -> bytes:
        if len(plaintext_block) != BLOCK_SIZE_BYTES:
            raise ValueError(f"Plaintext block must be {BLOCK_SIZE_BYTES} bytes")
        block = int.from_bytes(plaintext_block, "big")
        return self.encrypt(block).to_bytes(BLOCK_SIZE_BYTES, "big")

    def decrypt_block(self, ciphertext_block: bytes) -> bytes:
        if len(ciphertext_block) != BLOCK_SIZE_BYTES:
            raise ValueError(f"Ciphertext block must be {BLOCK_SIZE_BYTES} bytes")
        block = int.from_bytes(ciphertext_block, "big")
        return self.decrypt(block).to_bytes(BLOCK_SIZE_BYTES, "big")


def _check_block(block: int) -> None:
    if not 0 <= block <= MASK64:
        raise ValueError(f"Block must be a 64-bit unsigned value, got {block:#x}")


def build_cipher(key: int, *, key_mixing: bool = False) -> FeistelCipher:
    return FeistelCipher(
        round_keys=generate_round_keys(key),
        sboxes=generate_sbox_set(),
        key_mixing=key_mixing,
    )

"""Error kinds raised at the input boundary.

All of them derive from ValueError so callers that already guard the cipher
with ``except ValueError`` keep working.
"""
from __future__ import annotations


class FeistelabError(ValueError):
    """Base class for malformed input rejected before the cipher runs."""


class InvalidKeyFormat(FeistelabError):
    """Master key is not exactly 16 hexadecimal characters (64 bits)."""


class InvalidCiphertextFormat(FeistelabError):
    """Ciphertext is not exactly 16 hexadecimal characters."""


class InputTooLong(FeistelabError):
    """Plaintext exceeds the 8-byte block."""

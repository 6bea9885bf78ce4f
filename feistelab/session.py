"""Core-facing interface consumed by front-ends (CLI, Streamlit).

A session owns one master key and the cipher built from it. Input is
validated here, before anything reaches the cipher engine.

Research / education only. Do NOT use in production.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from feistelab.cipher.block import FeistelCipher, build_cipher
from feistelab.cipher.codec import (
    TextLike,
    block_to_text,
    decode_text,
    format_hex,
    pad_plaintext,
    parse_hex_block,
    parse_key,
    strip_padding,
    text_to_block,
)
from feistelab.cipher.key_schedule import RoundKeySet
from feistelab.cipher.sbox import SBoxSet
from feistelab.config import Settings, load_settings
from feistelab.evaluation.analysis import (
    AvalancheResult,
    DifferentialResult,
    LinearResult,
    avalanche_test,
    differential_test,
    linear_test,
)
from feistelab.formatting import format_round_trace

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CipherSession:
    master_key: int
    cipher: FeistelCipher

    @classmethod
    def set_key(cls, key_hex: str, *, key_mixing: bool = False) -> "CipherSession":
        """Start a session from a 16-character hex key.

        Raises:
            InvalidKeyFormat: if the key is not exactly 16 hex characters.
        """
        key = parse_key(key_hex)
        session = cls(master_key=key, cipher=build_cipher(key, key_mixing=key_mixing))
        logger.debug("Session key set: %s (key_mixing=%s)", format_hex(key), key_mixing)
        return session

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "CipherSession":
        settings = settings or load_settings()
        return cls.set_key(settings.default_key, key_mixing=settings.key_mixing)

    @property
    def round_keys(self) -> RoundKeySet:
        return self.cipher.round_keys

    @property
    def sboxes(self) -> SBoxSet:
        return self.cipher.sboxes

    @property
    def key_hex(self) -> str:
        return format_hex(self.master_key)

    def encrypt_block(self, plaintext: TextLike, *, trace: bool = False) -> Tuple[int, str]:
        """Encrypt up to 8 bytes, space padded to a full block.

        Returns:
            (ciphertext block, 16-character uppercase hex string)

        Raises:
            InputTooLong: if the plaintext exceeds 8 bytes.
        """
        block = text_to_block(pad_plaintext(plaintext))
        if trace:
            ct, states = self.cipher.encrypt_traced(block)
            for line in format_round_trace(states, "Encryption"):
                logger.debug(line)
        else:
            ct = self.cipher.encrypt(block)
        return ct, format_hex(ct)

    def decrypt_block(self, ciphertext_hex: str, *, trace: bool = False) -> Tuple[bytes, str]:
        """Decrypt a 16-character hex ciphertext.

        Returns:
            (8 plaintext bytes, text with the trailing space padding removed)

        Raises:
            InvalidCiphertextFormat: if the input is not 16 hex characters.
        """
        block = parse_hex_block(ciphertext_hex)
        if trace:
            pt, states = self.cipher.decrypt_traced(block)
            for line in format_round_trace(states, "Decryption"):
                logger.debug(line)
        else:
            pt = self.cipher.decrypt(block)
        raw = block_to_text(pt)
        return raw, decode_text(strip_padding(raw))

    def run_avalanche_test(self, data: TextLike) -> AvalancheResult:
        return avalanche_test(self.cipher, data)

    def run_differential_test(self, data: TextLike) -> DifferentialResult:
        return differential_test(self.cipher, data)

    def run_linear_test(self, data: TextLike) -> LinearResult:
        return linear_test(self.cipher, data)

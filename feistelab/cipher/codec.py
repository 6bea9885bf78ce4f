"""Conversions between external text/hex and the 64-bit block.

Bytes are placed most significant first. Inputs longer than one block are
rejected with InputTooLong rather than truncated.
"""
from __future__ import annotations

import re
from typing import Type, Union

from feistelab.errors import FeistelabError, InputTooLong, InvalidCiphertextFormat, InvalidKeyFormat

from .bitops import MASK64
from .block import BLOCK_SIZE_BYTES

HEX_DIGITS = BLOCK_SIZE_BYTES * 2
_HEX_RE = re.compile(r"[0-9A-Fa-f]{%d}" % HEX_DIGITS)

TextLike = Union[bytes, bytearray, str]


def to_bytes(data: TextLike) -> bytes:
    if isinstance(data, str):
        return data.encode("utf-8")
    return bytes(data)


def text_to_block(data: TextLike) -> int:
    """Pack up to 8 bytes into a block, zero-filling the low positions."""
    raw = to_bytes(data)
    if len(raw) > BLOCK_SIZE_BYTES:
        raise InputTooLong(f"Plaintext must be at most {BLOCK_SIZE_BYTES} bytes, got {len(raw)}")
    return int.from_bytes(raw.ljust(BLOCK_SIZE_BYTES, b"\x00"), "big")


def block_to_text(block: int) -> bytes:
    if not 0 <= block <= MASK64:
        raise ValueError(f"Block must be a 64-bit unsigned value, got {block:#x}")
    return block.to_bytes(BLOCK_SIZE_BYTES, "big")


def pad_plaintext(data: TextLike) -> bytes:
    """Right-pad with spaces to a full block."""
    raw = to_bytes(data)
    if len(raw) > BLOCK_SIZE_BYTES:
        raise InputTooLong(f"Plaintext must be at most {BLOCK_SIZE_BYTES} bytes, got {len(raw)}")
    return raw.ljust(BLOCK_SIZE_BYTES, b" ")


def strip_padding(data: bytes) -> bytes:
    return data.rstrip(b" ")


def decode_text(data: bytes) -> str:
    return data.decode("utf-8", errors="replace")


def parse_hex_block(text: str, error: Type[FeistelabError] = InvalidCiphertextFormat) -> int:
    """Parse exactly 16 hex characters (either case) into a block."""
    if not isinstance(text, str) or not _HEX_RE.fullmatch(text):
        raise error(f"Expected exactly {HEX_DIGITS} hexadecimal characters, got {text!r}")
    return int(text, 16)


def parse_key(text: str) -> int:
    return parse_hex_block(text, error=InvalidKeyFormat)


def format_hex(block: int) -> str:
    return f"{block & MASK64:016X}"

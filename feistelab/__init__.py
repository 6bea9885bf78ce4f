"""feistelab - didactic 64-bit, 32-round Feistel cipher with dynamic S-boxes.

Round keys come from a rotate/xor mixing hash of a 64-bit master key; each
round substitutes through a table of inverses modulo 257 and applies a
fixed bit permutation. The evaluation package measures avalanche,
differential and linear behaviour of the construction.

Research / education only. Do NOT use in production.
"""

from .errors import FeistelabError, InputTooLong, InvalidCiphertextFormat, InvalidKeyFormat
from .session import CipherSession

__version__ = "0.1.0"

__all__ = [
    "CipherSession",
    "FeistelabError",
    "InputTooLong",
    "InvalidCiphertextFormat",
    "InvalidKeyFormat",
]

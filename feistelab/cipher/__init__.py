"""Cipher engine: key schedule, S-boxes, round function, block cipher, codec.

Research / education only. Do NOT use in production.
"""

from .block import BLOCK_SIZE_BITS, BLOCK_SIZE_BYTES, BlockCipher, FeistelCipher, RoundState, build_cipher
from .codec import block_to_text, format_hex, parse_hex_block, parse_key, text_to_block
from .key_schedule import ROUNDS, RoundKeySet, generate_round_keys, mixing_hash
from .round import inverse_permutation_step, mix, permutation_step
from .sbox import SBoxSet, generate_sbox, generate_sbox_set, mod_inverse

__all__ = [
    "BLOCK_SIZE_BITS",
    "BLOCK_SIZE_BYTES",
    "BlockCipher",
    "FeistelCipher",
    "RoundState",
    "build_cipher",
    "block_to_text",
    "format_hex",
    "parse_hex_block",
    "parse_key",
    "text_to_block",
    "ROUNDS",
    "RoundKeySet",
    "generate_round_keys",
    "mixing_hash",
    "inverse_permutation_step",
    "mix",
    "permutation_step",
    "SBoxSet",
    "generate_sbox",
    "generate_sbox_set",
    "mod_inverse",
]

import random

import pytest

from feistelab.cipher.bitops import MASK32, rotate_left, rotate_right
from feistelab.cipher.key_schedule import ROUNDS, generate_round_keys, mixing_hash
from feistelab.cipher.round import inverse_permutation_step, mix, permutation_step
from feistelab.cipher.sbox import MODULUS, generate_sbox, generate_sbox_set, mod_inverse, sbox_input
from feistelab.errors import InvalidKeyFormat


# ---------------------------------------------------------------------------
# Bit helpers
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("r", [0, 1, 3, 7, 8, 16, 24, 31])
def test_rotations_invert_each_other(r):
    rng = random.Random(r)
    for _ in range(20):
        x = rng.getrandbits(32)
        assert rotate_right(rotate_left(x, r, 32), r, 32) == x


def test_rotate_left_known_values():
    assert rotate_left(0x80000000, 1, 32) == 1
    assert rotate_left(0x12345678, 16, 32) == 0x56781234
    assert rotate_right(0x12345678, 8, 32) == 0x78123456


# ---------------------------------------------------------------------------
# Key schedule
# ---------------------------------------------------------------------------

def test_round_keys_deterministic():
    key = 0x0123456789ABCDEF
    assert generate_round_keys(key) == generate_round_keys(key)


def test_round_keys_shape():
    keys = generate_round_keys(0xFFFFFFFFFFFFFFFF)
    assert isinstance(keys, tuple)
    assert len(keys) == ROUNDS
    assert all(0 <= k <= 0xFF for k in keys)


def test_round_key_is_selected_hash_byte():
    key = 0x0123456789ABCDEF
    keys = generate_round_keys(key)
    for i in (0, 5, 9, 31):
        assert keys[i] == (mixing_hash(key, i) >> (8 * (i % 8))) & 0xFF


@pytest.mark.parametrize("key,expected", [
    (0x0123456789ABCDEF, {0: 0xB6, 9: 0x12, 31: 0x47}),
    (0xFFFFFFFFFFFFFFFF, {0: 0x3E, 9: 0x80, 31: 0x72}),
])
def test_round_keys_known_values(key, expected):
    keys = generate_round_keys(key)
    for i, rk in expected.items():
        assert keys[i] == rk


def test_mixing_hash_is_64_bit():
    rng = random.Random(7)
    for _ in range(20):
        h = mixing_hash(rng.getrandbits(64), rng.randrange(ROUNDS))
        assert 0 <= h < (1 << 64)


@pytest.mark.parametrize("key", [-1, 1 << 64])
def test_round_keys_reject_out_of_range_key(key):
    with pytest.raises(InvalidKeyFormat):
        generate_round_keys(key)


# ---------------------------------------------------------------------------
# S-boxes
# ---------------------------------------------------------------------------

def test_mod_inverse_known_values():
    assert mod_inverse(1) == 1
    assert mod_inverse(2) == 129
    assert mod_inverse(95) == 46
    # 256 is its own inverse mod 257, which lies outside 1..255
    assert mod_inverse(256) == 0


def test_sbox_known_entries():
    table = generate_sbox(0)
    assert len(table) == 256
    assert table[0] == 46           # 0 ^ 0x5F = 95
    assert table[0x5F] == 1         # residue 0 is forced to 1
    assert table[0x5E] == 1         # residue 1
    assert table.count(1) == 2


@pytest.mark.parametrize("round_index", range(ROUNDS))
def test_sbox_entries_are_inverses(round_index):
    table = generate_sbox(round_index)
    for v, x in enumerate(table):
        assert x != 0
        assert (sbox_input(v, round_index) * x) % MODULUS == 1


def test_sbox_rounds_are_shifted_tables():
    # Round r reads the round-0 table offset by 17 * r
    base = generate_sbox(0)
    table = generate_sbox(3)
    for v in range(256):
        assert table[v] == base[(v + 3 * 17) % 256]


def test_sbox_set_is_cached_and_complete():
    sboxes = generate_sbox_set()
    assert sboxes is generate_sbox_set()
    assert len(sboxes) == ROUNDS
    assert sboxes[5] == generate_sbox(5)


# ---------------------------------------------------------------------------
# Round function and permutation layer
# ---------------------------------------------------------------------------

def test_permutation_step_inverse_random():
    rng = random.Random(1337)
    for _ in range(500):
        left, right = rng.getrandbits(32), rng.getrandbits(32)
        assert inverse_permutation_step(*permutation_step(left, right)) == (left, right)


@pytest.mark.parametrize("left,right", [
    (0, 0),
    (MASK32, MASK32),
    (1, 0),
    (0, 1),
    (0x80000000, 0x00000001),
    (0xDEADBEEF, 0x01234567),
])
def test_permutation_step_inverse_edges(left, right):
    out = permutation_step(left, right)
    assert all(0 <= h <= MASK32 for h in out)
    assert inverse_permutation_step(*out) == (left, right)


def test_permutation_step_known_value():
    # left ^= right >> 3 -> 0; right ^= 0 << 5 -> 8; rotations leave 0 and move 8
    assert permutation_step(1, 8) == (0, 0x08000000)


def test_mix_is_32_bit_and_deterministic():
    sboxes = generate_sbox_set()
    rng = random.Random(3)
    for _ in range(50):
        half = rng.getrandbits(32)
        r = rng.randrange(ROUNDS)
        out = mix(half, r, sboxes)
        assert 0 <= out <= MASK32
        assert out == mix(half, r, sboxes)


def test_mix_zero_round_key_is_default():
    sboxes = generate_sbox_set()
    assert mix(0x41424344, 7, sboxes, 0) == mix(0x41424344, 7, sboxes)


def test_mix_equal_bytes_cancel():
    # a == b and c == d makes the four lookups xor to zero
    sboxes = generate_sbox_set()
    assert mix(0x41414242, 0, sboxes) == 0


def test_mix_round_key_xors_every_byte():
    sboxes = generate_sbox_set()
    assert mix(0x00000000, 2, sboxes, 0x41) == mix(0x41414141, 2, sboxes)

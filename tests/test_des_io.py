"""Tests for des_io.py - DES part-block cipher."""
from xzzpcb.des_io import des_decrypt, des_encrypt
from xzzpcb.keys import DEFAULT_KEY

# FIPS 46 worked example.
REF_KEY = 0x133457799BBCDFF1
REF_PLAIN = bytes.fromhex("0123456789ABCDEF")
REF_CIPHER = bytes.fromhex("85E813540F0AB405")


class TestReferenceVectors:
    def test_decrypt(self):
        assert des_decrypt(REF_CIPHER, REF_KEY) == REF_PLAIN

    def test_encrypt(self):
        assert des_encrypt(REF_PLAIN, REF_KEY) == REF_CIPHER

    def test_blocks_are_independent(self):
        assert des_decrypt(REF_CIPHER * 3, REF_KEY) == REF_PLAIN * 3


class TestLengths:
    def test_empty(self):
        assert des_decrypt(b"", DEFAULT_KEY) == b""

    def test_output_length_matches_input(self):
        for size in (1, 7, 8, 9, 15, 16, 23):
            assert len(des_decrypt(bytes(range(size)), DEFAULT_KEY)) == size

    def test_partial_tail_keeps_whole_blocks(self):
        data = REF_CIPHER + b"\x01\x02\x03"
        out = des_decrypt(data, REF_KEY)
        assert out[:8] == REF_PLAIN
        assert len(out) == 11

    def test_aligned_round_trip(self):
        plaintext = bytes(range(64))
        assert des_decrypt(des_encrypt(plaintext, DEFAULT_KEY), DEFAULT_KEY) == plaintext

    def test_wrong_key_differs(self):
        plaintext = bytes(range(16))
        ciphertext = des_encrypt(plaintext, DEFAULT_KEY)
        assert des_decrypt(ciphertext, 0x8000000000000000) != plaintext

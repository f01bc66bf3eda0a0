from __future__ import annotations

from Crypto.Cipher import DES

BLOCK_SIZE = DES.block_size


def _cipher(key: int):
    return DES.new(key.to_bytes(BLOCK_SIZE, "big"), DES.MODE_ECB)


def _split_tail(data: bytes) -> tuple[bytes, bytes]:
    whole = len(data) - len(data) % BLOCK_SIZE
    return bytes(data[:whole]), bytes(data[whole:])


def des_decrypt(ciphertext: bytes, key: int) -> bytes:
    """
    Decrypt an XZZ part payload with single DES in ECB mode.

    The vendor loads each 8-byte group as a big-endian integer, runs the
    textbook DES rounds and stores the result big-endian again, which is
    plain byte-oriented DES. Part payloads are not padded to the block size:
    a short trailing group is zero-filled, decrypted, and cut back to its
    original length so the output is always as long as the input.
    """

    body, tail = _split_tail(ciphertext)
    cipher = _cipher(key)
    plaintext = cipher.decrypt(body) if body else b""
    if tail:
        plaintext += cipher.decrypt(tail.ljust(BLOCK_SIZE, b"\x00"))[: len(tail)]
    return plaintext


def des_encrypt(plaintext: bytes, key: int) -> bytes:
    body, tail = _split_tail(plaintext)
    cipher = _cipher(key)
    ciphertext = cipher.encrypt(body) if body else b""
    if tail:
        ciphertext += cipher.encrypt(tail.ljust(BLOCK_SIZE, b"\x00"))[: len(tail)]
    return ciphertext

from __future__ import annotations

import logging
from typing import Tuple

from .errors import InvalidKeyError

log = logging.getLogger("xzzpcb.keys")

# Expected complemented parity per key byte; index i is the byte at bit shift i * 8.
KEY_PARITY: Tuple[int, ...] = (1, 1, 1, 1, 1, 1, 1, 0)

DEFAULT_KEY = 0xDCFC12AC00000000

_KEY_MASK = (1 << 64) - 1


def _byte_parity(value: int) -> int:
    value ^= value >> 4
    value ^= value >> 2
    value ^= value >> 1
    return value & 1


def check_key(key: int) -> bool:
    if not 0 <= key <= _KEY_MASK:
        return False
    for idx, expected in enumerate(KEY_PARITY):
        byte = (key >> (idx * 8)) & 0xFF
        if (~_byte_parity(byte)) & 1 != expected:
            return False
    return True


def key_to_string(key: int) -> str:
    return f"0x{key & _KEY_MASK:016x}"


def resolve_key(candidate: int | None = None, *, default: int = DEFAULT_KEY) -> int:
    """
    Pick the DES key for a decode: the caller's key when it passes the parity
    check, otherwise the built-in key. Fails when neither is usable.
    """

    if candidate is not None and check_key(candidate):
        return candidate
    if not check_key(default):
        rejected = default if candidate is None else candidate
        raise InvalidKeyError(rejected, key_to_string(rejected))
    if candidate is not None:
        log.warning("Rejected XZZ key %s, falling back to the built-in key", key_to_string(candidate))
    return default

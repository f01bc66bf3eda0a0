from __future__ import annotations

import logging

import numpy as np

from .errors import TruncatedDataError

log = logging.getLogger("xzzpcb.scramble")

MAGIC = b"XZZPCB"
XOR_KEY_OFFSET = 0x10
# Start of the trailing diode-reading section, which is never XOR scrambled.
DIODE_MARKER = b"v6v6555v6v6"


def find_diode_marker(buf: bytes | bytearray) -> int:
    return buf.find(DIODE_MARKER)


def xor_key_of(buf: bytes | bytearray) -> int:
    if len(buf) <= XOR_KEY_OFFSET:
        return 0
    return buf[XOR_KEY_OFFSET]


def descramble(buf: bytearray) -> int:
    """
    Undo the single-byte XOR applied to the head of the file, in place.

    The key byte lives at 0x10; zero means the file is stored in clear (older
    exports). Everything before the diode marker is scrambled, or the whole
    buffer when the marker is missing. Returns the key that was applied.
    """

    if len(buf) < XOR_KEY_OFFSET:
        raise TruncatedDataError(0, XOR_KEY_OFFSET, len(buf), "file header")
    key = xor_key_of(buf)
    if key == 0:
        return 0
    end = find_diode_marker(buf)
    if end == -1:
        end = len(buf)
    if end:
        head = np.frombuffer(buf, dtype=np.uint8, count=end)
        head ^= np.uint8(key)
        del head
    log.debug("Descrambled %d byte(s) with XOR key 0x%02X", end, key)
    return key


def verify_format(buf: bytes | bytearray) -> bool:
    """Cheap probe for either the plain or the XOR scrambled variant."""

    if len(buf) < len(MAGIC):
        return False
    if bytes(buf[: len(MAGIC)]) == MAGIC:
        return True
    key = xor_key_of(buf)
    if key == 0:
        return False
    return bytes(b ^ key for b in buf[: len(MAGIC)]) == MAGIC

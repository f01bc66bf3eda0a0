from __future__ import annotations

import struct
from dataclasses import dataclass

from .errors import TruncatedDataError

_U32 = struct.Struct("<I")


@dataclass
class ByteCursor:
    """
    Read-only view over a buffer with a moving position.

    Every read is checked against the real buffer size before touching it,
    because all lengths and offsets inside an XZZ file come from the file
    itself. ``skip``/``seek`` may leave the cursor past the end; the next read
    is what fails.
    """

    buf: bytes | bytearray
    pos: int = 0

    def __len__(self) -> int:
        return len(self.buf)

    @property
    def remaining(self) -> int:
        return max(0, len(self.buf) - self.pos)

    def ensure(self, length: int, *, offset: int | None = None, what: str = "read") -> None:
        start = self.pos if offset is None else offset
        if start < 0 or length < 0 or start + length > len(self.buf):
            raise TruncatedDataError(start, length, len(self.buf), what)

    def read_u8(self) -> int:
        self.ensure(1)
        value = self.buf[self.pos]
        self.pos += 1
        return value

    def peek_u8(self) -> int:
        self.ensure(1)
        return self.buf[self.pos]

    def read_u32(self) -> int:
        self.ensure(4)
        (value,) = _U32.unpack_from(self.buf, self.pos)
        self.pos += 4
        return value

    def read_bytes(self, length: int, *, what: str = "read") -> bytes:
        self.ensure(length, what=what)
        data = bytes(self.buf[self.pos : self.pos + length])
        self.pos += length
        return data

    def read_sized_bytes(self, *, what: str = "string") -> bytes:
        """u32 length prefix followed by that many bytes."""

        length = self.read_u32()
        return self.read_bytes(length, what=what)

    def skip(self, count: int) -> None:
        self.pos += count

    def seek(self, pos: int) -> None:
        self.pos = pos


def read_u32_at(buf: bytes | bytearray, offset: int) -> int:
    return ByteCursor(buf, offset).read_u32()


def decode_text(raw: bytes) -> str:
    """Decode a name field, stopping at the first NUL like the vendor viewer does."""

    return raw.split(b"\x00", 1)[0].decode("utf-8", errors="replace")

from __future__ import annotations


class XZZPCBError(Exception):
    """Base class for every failure raised while decoding an XZZ board file."""


class TruncatedDataError(XZZPCBError):
    def __init__(self, offset: int, length: int, available: int, what: str = "read") -> None:
        self.offset = offset
        self.length = length
        self.available = available
        self.what = what
        super().__init__(
            f"Truncated data: {what} of {length} byte(s) at offset 0x{offset:X} "
            f"exceeds buffer size {available}"
        )


class MalformedBlockError(XZZPCBError):
    """A structural expectation of the container was not met."""


class InvalidKeyError(MalformedBlockError):
    def __init__(self, key: int, rendered: str) -> None:
        self.key = key
        super().__init__(f"Invalid XZZ PCB Key\nXZZ PCB key: {rendered}")

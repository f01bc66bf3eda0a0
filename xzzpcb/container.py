"""
Container layer of the XZZ board format.

After descrambling, the file header holds two u32 offsets, relative to 0x20,
pointing at the main-data and net-data regions. Each region opens with its own
u32 byte length. The main region is a run of blocks:

    uint8  block type
    uint32 payload length
    <payload bytes>

and the net region is a run of ``(u32 record length, u32 index, name)``
records where the length covers the two header words.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import IntEnum
from types import MappingProxyType
from typing import Dict, Iterator, Mapping

from .cursor import ByteCursor, decode_text, read_u32_at
from .errors import MalformedBlockError

log = logging.getLogger("xzzpcb.container")

HEADER_BASE = 0x20
MAIN_DATA_OFFSET_POS = 0x20
NET_DATA_OFFSET_POS = 0x28
NET_RECORD_HEADER = 8


class BlockType(IntEnum):
    ARC = 0x01
    VIA = 0x02
    LINE_SEGMENT = 0x05
    TEXT = 0x06
    PART = 0x07
    TEST_PAD = 0x09


def block_type(tag: int) -> BlockType | int:
    try:
        return BlockType(tag)
    except ValueError:
        return tag


@dataclass(frozen=True)
class ContainerHeader:
    main_data_start: int
    main_data_size: int
    net_data_start: int
    net_data_size: int


@dataclass(frozen=True)
class Block:
    offset: int
    tag: BlockType | int
    payload: bytes

    @property
    def known(self) -> bool:
        return isinstance(self.tag, BlockType)


def read_header(buf: bytes | bytearray) -> ContainerHeader:
    main_data_start = read_u32_at(buf, MAIN_DATA_OFFSET_POS) + HEADER_BASE
    net_data_start = read_u32_at(buf, NET_DATA_OFFSET_POS) + HEADER_BASE
    return ContainerHeader(
        main_data_start=main_data_start,
        main_data_size=read_u32_at(buf, main_data_start),
        net_data_start=net_data_start,
        net_data_size=read_u32_at(buf, net_data_start),
    )


def net_region(buf: bytes | bytearray, header: ContainerHeader) -> bytes:
    cursor = ByteCursor(buf, header.net_data_start + 4)
    return cursor.read_bytes(header.net_data_size, what="net data region")


def iter_blocks(buf: bytes | bytearray, header: ContainerHeader) -> Iterator[Block]:
    cursor = ByteCursor(buf, header.main_data_start + 4)
    cursor.ensure(header.main_data_size, what="main data region")
    end = cursor.pos + header.main_data_size
    while cursor.pos < end:
        offset = cursor.pos
        tag = cursor.read_u8()
        size = cursor.read_u32()
        payload = cursor.read_bytes(size, what=f"block 0x{tag:02X} payload")
        yield Block(offset=offset, tag=block_type(tag), payload=payload)


def parse_net_table(payload: bytes) -> Mapping[int, str]:
    nets: Dict[int, str] = {}
    cursor = ByteCursor(payload)
    while cursor.pos < len(payload):
        record_start = cursor.pos
        record_size = cursor.read_u32()
        net_index = cursor.read_u32()
        if record_size < NET_RECORD_HEADER:
            raise MalformedBlockError(
                f"Net record at 0x{record_start:X} declares {record_size} byte(s), "
                f"shorter than its {NET_RECORD_HEADER}-byte header"
            )
        name = cursor.read_bytes(record_size - NET_RECORD_HEADER, what="net name")
        nets[net_index] = decode_text(name)
    log.debug("Parsed %d net(s)", len(nets))
    return MappingProxyType(nets)

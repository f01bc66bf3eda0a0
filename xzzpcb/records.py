"""
Decoders for the typed blocks of the XZZ main-data region.

Layers seen so far:
    1..16   trace layers (in order, the last always uses 16)
    17      silkscreen
    18..27  unknown
    28      board edges
"""

from __future__ import annotations

import logging
from enum import IntEnum
from typing import List, Mapping, Tuple

from .cursor import ByteCursor, decode_text
from .des_io import des_decrypt
from .entities import OutlineSegment, Part, Pin
from .errors import MalformedBlockError
from .geometry import arc_to_segments

log = logging.getLogger("xzzpcb.records")

# On-disk integer units per display unit. Records carry their own scale field,
# but the vendor viewer ignores it and so do we.
XZZ_GLOBAL_SCALE = 10000
OUTLINE_LAYER = 28

UNCONNECTED_NET = "UNCONNECTED"
NO_CONNECT_NET = "NC"
# Part-name prefix the viewer uses to classify a part as a test pad.
TEST_PAD_PREFIX = "..."

PART_HEADER_RESERVED = 18
PART_LABEL_RESERVED = 31
PIN_RESERVED_BEFORE_NET = 32


class SubBlockType(IntEnum):
    PADDING = 0x00
    ARC = 0x01
    LINE_SEGMENT = 0x05
    LABEL = 0x06
    PIN = 0x09


_SKIPPED_SUB_BLOCKS = (SubBlockType.ARC, SubBlockType.LINE_SEGMENT, SubBlockType.LABEL)


def _read_fields(payload: bytes, count: int) -> List[int]:
    cursor = ByteCursor(payload)
    return [cursor.read_u32() for _ in range(count)]


def parse_arc_block(payload: bytes) -> List[OutlineSegment]:
    layer, x, y, radius, angle_start, angle_end, _scale = _read_fields(payload, 7)
    scale = XZZ_GLOBAL_SCALE
    if layer != OUTLINE_LAYER:
        return []
    center = (x // scale, y // scale)
    return arc_to_segments(angle_start // scale, angle_end // scale, radius // scale, center)


def parse_line_segment_block(payload: bytes) -> OutlineSegment | None:
    # A trailing trace net index follows; it is not needed for the outline.
    layer, x1, y1, x2, y2, _scale = _read_fields(payload, 6)
    scale = XZZ_GLOBAL_SCALE
    if layer != OUTLINE_LAYER:
        return None
    return OutlineSegment((x1 // scale, y1 // scale), (x2 // scale, y2 // scale))


def pin_net_name(nets: Mapping[int, str], net_index: int) -> str:
    """Net for a part pin: "NC" reads as unconnected, unknown indices as no net."""

    name = nets.get(net_index, "")
    if name == NO_CONNECT_NET:
        return UNCONNECTED_NET
    return name


def pad_net_name(nets: Mapping[int, str], net_index: int) -> str:
    # An empty net keeps the test-pad classification; "UNCONNECTED" would
    # turn the pad into a not-connected pin in the viewer.
    name = nets.get(net_index, "")
    if name in (UNCONNECTED_NET, NO_CONNECT_NET):
        return ""
    return name


def parse_pin_block(cursor: ByteCursor, nets: Mapping[int, str], part_index: int) -> Pin:
    block_start = cursor.pos
    block_size = cursor.read_u32()
    # Trailing fields are not understood; jump straight to the end when done.
    block_end = block_start + block_size + 4
    cursor.skip(4)
    x_origin = cursor.read_u32()
    y_origin = cursor.read_u32()
    cursor.skip(8)
    name = decode_text(cursor.read_sized_bytes(what="pin name"))
    cursor.skip(PIN_RESERVED_BEFORE_NET)
    net_index = cursor.read_u32()
    cursor.seek(block_end)

    return Pin(
        position=(x_origin // XZZ_GLOBAL_SCALE, y_origin // XZZ_GLOBAL_SCALE),
        name=name,
        number=name,
        net=pin_net_name(nets, net_index),
        part=part_index,
    )


def read_part_header(cursor: ByteCursor) -> Tuple[int, str]:
    """Read the declared part size and the part name from a decrypted part block."""

    part_size = cursor.read_u32()
    cursor.skip(PART_HEADER_RESERVED)
    cursor.skip(cursor.read_u32())  # group name

    # The label sub-block has always come first, and it carries the part name
    # that pins are attributed to.
    tag_pos = cursor.pos
    tag = cursor.peek_u8()
    if tag != SubBlockType.LABEL:
        raise MalformedBlockError(
            f"Part block: expected label sub-block 0x06 at 0x{tag_pos:X}, found 0x{tag:02X}"
        )
    cursor.skip(PART_LABEL_RESERVED)
    part_name = decode_text(cursor.read_sized_bytes(what="part name"))
    return part_size, part_name


def parse_part_block(
    encrypted: bytes,
    key: int,
    nets: Mapping[int, str],
    *,
    part_index: int,
    first_pin: int,
) -> Tuple[Part, List[Pin]]:
    """
    Decrypt and decode one component. ``part_index`` is the one-based index the
    part will get once appended; ``first_pin`` is the current pin count.
    """

    buf = des_decrypt(encrypted, key)
    cursor = ByteCursor(buf)
    part_size, part_name = read_part_header(cursor)

    end = part_size + 4
    cursor.ensure(end, offset=0, what=f"part {part_name!r}")
    pins: List[Pin] = []
    while cursor.pos < end:
        tag = cursor.read_u8()
        if tag in _SKIPPED_SUB_BLOCKS:
            cursor.skip(cursor.read_u32())
        elif tag == SubBlockType.PIN:
            pins.append(parse_pin_block(cursor, nets, part_index))
        elif tag != SubBlockType.PADDING:
            log.warning("Unknown sub block type: 0x%02X at %d in %s", tag, cursor.pos, part_name)

    part = Part(name=part_name, first_pin=first_pin, end_of_pins=first_pin + len(pins))
    return part, pins


def parse_test_pad_block(payload: bytes, nets: Mapping[int, str], *, part_index: int, first_pin: int) -> Tuple[Part, Pin]:
    cursor = ByteCursor(payload)
    cursor.skip(4)  # pad number
    x_origin = cursor.read_u32()
    y_origin = cursor.read_u32()
    cursor.skip(8)  # inner diameter + unknown
    name = decode_text(cursor.read_sized_bytes(what="test pad name"))
    cursor.seek(len(payload) - 4)
    net_index = cursor.read_u32()

    pin = Pin(
        position=(x_origin // XZZ_GLOBAL_SCALE, y_origin // XZZ_GLOBAL_SCALE),
        name="",
        number=name,
        net=pad_net_name(nets, net_index),
        part=part_index,
    )
    part = Part(name=TEST_PAD_PREFIX + name, first_pin=first_pin, end_of_pins=first_pin + 1)
    return part, pin

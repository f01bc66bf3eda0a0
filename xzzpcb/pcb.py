from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Mapping

from .container import Block, BlockType, iter_blocks, net_region, parse_net_table, read_header
from .entities import Board, OutlineSegment, Part, Pin
from .errors import XZZPCBError
from .geometry import normalize_board
from .keys import resolve_key
from .logging import BlockTraceLogger
from .records import parse_arc_block, parse_line_segment_block, parse_part_block, parse_test_pad_block
from .scramble import descramble, verify_format

log = logging.getLogger("xzzpcb.pcb")

# Present in the format but irrelevant to outline and connectivity.
IGNORED_BLOCKS = (BlockType.VIA, BlockType.TEXT)


class _BoardBuilder:
    def __init__(self, key: int, nets: Mapping[int, str]) -> None:
        self.key = key
        self.board = Board(nets=nets)

    def _add_part(self, part: Part, pins: List[Pin]) -> None:
        self.board.pins.extend(pins)
        self.board.parts.append(part)

    def process(self, block: Block) -> str | None:
        board = self.board
        tag = block.tag
        if tag == BlockType.ARC:
            segments = parse_arc_block(block.payload)
            board.outline_segments.extend(segments)
            return f"{len(segments)} outline segment(s)" if segments else None
        if tag == BlockType.LINE_SEGMENT:
            segment = parse_line_segment_block(block.payload)
            if segment is None:
                return None
            board.outline_segments.append(segment)
            return "outline segment"
        if tag == BlockType.PART:
            part, pins = parse_part_block(
                block.payload,
                self.key,
                board.nets,
                part_index=board.num_parts + 1,
                first_pin=board.num_pins,
            )
            self._add_part(part, pins)
            return f"part {part.name!r} with {len(pins)} pin(s)"
        if tag == BlockType.TEST_PAD:
            part, pin = parse_test_pad_block(
                block.payload,
                board.nets,
                part_index=board.num_parts + 1,
                first_pin=board.num_pins,
            )
            self._add_part(part, [pin])
            return f"test pad {pin.number!r}"
        if tag in IGNORED_BLOCKS:
            return None
        log.warning("Unhandled block type: 0x%02X", tag)
        return "unhandled"


def decode_pcb(
    data: bytes | bytearray,
    key: int | None = None,
    *,
    trace: BlockTraceLogger | None = None,
) -> Board:
    """
    Decode an XZZ ``.pcb`` image into a :class:`Board`.

    ``key`` overrides the built-in DES key used for part blocks. The input is
    copied before descrambling, so the caller's buffer is left untouched.
    Raises :class:`XZZPCBError` subclasses on the first problem encountered.
    """

    des_key = resolve_key(key)
    buf = bytearray(data)
    xor_key = descramble(buf)

    header = read_header(buf)
    if trace is not None:
        trace.header(xor_key, header)
    nets = parse_net_table(net_region(buf, header))

    builder = _BoardBuilder(des_key, nets)
    for seq, block in enumerate(iter_blocks(buf, header)):
        note = builder.process(block)
        if trace is not None:
            trace.record(seq, block, note=note)

    board = builder.board
    offset = normalize_board(board)
    log.info(
        "Decoded %d part(s), %d pin(s), %d outline segment(s); origin shift (%d, %d)",
        board.num_parts,
        board.num_pins,
        board.num_segments,
        offset[0],
        offset[1],
    )
    return board


def load_pcb(path: Path, key: int | None = None, *, trace: BlockTraceLogger | None = None) -> Board:
    return decode_pcb(Path(path).read_bytes(), key, trace=trace)


class XZZPCBFile:
    """
    Viewer-facing wrapper: never raises on bad input, reports through
    ``valid``/``error_msg`` instead.
    """

    def __init__(self, data: bytes | bytearray, key: int | None = None) -> None:
        self.valid = False
        self.error_msg = ""
        self.board = Board()
        try:
            self.board = decode_pcb(data, key)
        except XZZPCBError as exc:
            self.error_msg = str(exc)
            log.warning("XZZ decode failed: %s", exc)
            return
        self.valid = True

    @staticmethod
    def verify_format(data: bytes | bytearray) -> bool:
        return verify_format(data)

    @property
    def parts(self) -> List[Part]:
        return self.board.parts

    @property
    def pins(self) -> List[Pin]:
        return self.board.pins

    @property
    def outline_segments(self) -> List[OutlineSegment]:
        return self.board.outline_segments

    @property
    def num_parts(self) -> int:
        return self.board.num_parts

    @property
    def num_pins(self) -> int:
        return self.board.num_pins

    @property
    def num_segments(self) -> int:
        return self.board.num_segments

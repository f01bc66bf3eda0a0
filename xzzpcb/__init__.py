"""
Decoder for XZZ ``.pcb`` board-view files split into modules for reuse.
"""

from .container import Block, BlockType, ContainerHeader, iter_blocks, parse_net_table, read_header
from .des_io import des_decrypt, des_encrypt
from .entities import Board, MountingSide, OutlineSegment, Part, PartType, Pin, PinSide
from .errors import InvalidKeyError, MalformedBlockError, TruncatedDataError, XZZPCBError
from .export import board_to_dict, write_dxf, write_json
from .geometry import (
    ARC_SAMPLE_POINTS,
    arc_to_segments,
    board_bounds,
    find_xy_translation,
    normalize_board,
    translate_pins,
    translate_segments,
)
from .keys import DEFAULT_KEY, KEY_PARITY, check_key, key_to_string, resolve_key
from .logging import BlockTraceLogger
from .pcb import XZZPCBFile, decode_pcb, load_pcb
from .records import OUTLINE_LAYER, XZZ_GLOBAL_SCALE, SubBlockType
from .scramble import DIODE_MARKER, MAGIC, descramble, verify_format

__all__ = [
    "Block",
    "BlockType",
    "ContainerHeader",
    "iter_blocks",
    "parse_net_table",
    "read_header",
    "des_decrypt",
    "des_encrypt",
    "Board",
    "MountingSide",
    "OutlineSegment",
    "Part",
    "PartType",
    "Pin",
    "PinSide",
    "InvalidKeyError",
    "MalformedBlockError",
    "TruncatedDataError",
    "XZZPCBError",
    "board_to_dict",
    "write_dxf",
    "write_json",
    "ARC_SAMPLE_POINTS",
    "arc_to_segments",
    "board_bounds",
    "find_xy_translation",
    "normalize_board",
    "translate_pins",
    "translate_segments",
    "DEFAULT_KEY",
    "KEY_PARITY",
    "check_key",
    "key_to_string",
    "resolve_key",
    "BlockTraceLogger",
    "XZZPCBFile",
    "decode_pcb",
    "load_pcb",
    "OUTLINE_LAYER",
    "XZZ_GLOBAL_SCALE",
    "SubBlockType",
    "DIODE_MARKER",
    "MAGIC",
    "descramble",
    "verify_format",
]

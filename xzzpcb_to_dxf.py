#!/usr/bin/env python3
"""
Decode an XZZ .pcb board-view file and write its board outline and pin
locations to a DXF (and optionally a JSON dump of the whole board).

    python xzzpcb_to_dxf.py board.pcb -o board.dxf --json board.json
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Sequence

from xzzpcb import BlockTraceLogger, XZZPCBError, key_to_string, load_pcb, write_dxf, write_json
from xzzpcb.keys import DEFAULT_KEY


def parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Decode an XZZ .pcb file and spit out a DXF."
    )
    parser.add_argument("input", type=Path, help="Path to the source .pcb file")
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        help="Optional DXF destination (defaults to <input>.dxf)",
    )
    parser.add_argument(
        "--json",
        type=Path,
        help="Also write the decoded board (parts, pins, outline, nets) as JSON",
    )
    parser.add_argument(
        "--key",
        type=lambda x: int(x, 0),
        default=None,
        help=f"DES key for part blocks (default {key_to_string(DEFAULT_KEY)})",
    )
    parser.add_argument(
        "--pin-radius",
        type=float,
        default=2.0,
        help="Radius of the circle drawn for every pin (0 disables pin markers)",
    )
    parser.add_argument(
        "--trace-log",
        type=Path,
        help="Write one line per decoded container block to this path",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(sys.argv[1:] if argv is None else argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    trace = BlockTraceLogger(args.trace_log) if args.trace_log else None
    try:
        board = load_pcb(args.input, args.key, trace=trace)
    except XZZPCBError as exc:
        print(f"[error] {exc}", file=sys.stderr)
        return 1
    finally:
        if trace:
            trace.flush()

    print(
        f"[+] Decoded {board.num_parts} parts, {board.num_pins} pins "
        f"and {board.num_segments} outline segments from {args.input}"
    )
    if not board.outline_segments:
        print("[warn] No board-edge geometry found; pins are left untranslated")

    output_path = args.output or args.input.with_suffix(".dxf")
    write_dxf(board, output_path, pin_radius=args.pin_radius)
    print(f"[+] DXF written to {output_path}")
    if args.json:
        write_json(board, args.json)
        print(f"[+] JSON written to {args.json}")
    if trace:
        print(f"[i] Block trace written to {args.trace_log}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

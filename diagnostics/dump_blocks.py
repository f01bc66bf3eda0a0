#!/usr/bin/env python3
"""
Dump the container layout of an XZZ .pcb file: header offsets, net count and
one line per main-data block. Handy for spotting new block types.
"""

from __future__ import annotations

import argparse
import sys
from collections import Counter
from pathlib import Path
from typing import Sequence

# Ensure project root on sys.path
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from xzzpcb import XZZPCBError, descramble, iter_blocks, parse_net_table, read_header
from xzzpcb.container import Block, net_region
from xzzpcb.logging import describe_tag


def describe_block(block: Block, *, show_bytes: bool = False) -> str:
    parts = [
        f"off=0x{block.offset:08X}",
        f"type={describe_tag(block.tag)}",
        f"size={len(block.payload)}",
    ]
    if show_bytes and block.payload:
        sample = " ".join(f"{b:02X}" for b in block.payload[:16])
        if len(block.payload) > 16:
            sample += " …"
        parts.append(f"bytes={sample}")
    return " | ".join(parts)


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Dump the block layout of an XZZ .pcb file.")
    parser.add_argument("input", type=Path, help="Path to the .pcb file")
    parser.add_argument("--limit", type=int, default=None, help="Maximum number of blocks to print")
    parser.add_argument("--bytes", action="store_true", help="Include a short hex dump of each payload")
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    buf = bytearray(args.input.read_bytes())
    try:
        xor_key = descramble(buf)
        header = read_header(buf)
        nets = parse_net_table(net_region(buf, header))
        print(f"xor key: 0x{xor_key:02X}")
        print(f"main data: start=0x{header.main_data_start:X} size={header.main_data_size}")
        print(f"net data:  start=0x{header.net_data_start:X} size={header.net_data_size} nets={len(nets)}")

        counts: Counter[str] = Counter()
        blocks = iter_blocks(buf, header)
        for block in blocks:
            counts[describe_tag(block.tag)] += 1
            if args.limit is None or sum(counts.values()) <= args.limit:
                print(describe_block(block, show_bytes=args.bytes))
    except XZZPCBError as exc:
        print(f"[error] {exc}", file=sys.stderr)
        return 1

    for tag, count in sorted(counts.items()):
        print(f"  {tag}: {count}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

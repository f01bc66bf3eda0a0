#!/usr/bin/env python3
"""
Strip the obfuscation layers off an XZZ .pcb file for inspection.

    python xzzpcb_decrypt.py board.pcb -o board.decrypted.pcb
    python xzzpcb_decrypt.py board.pcb --extract-dir board_parts/

The first form writes a copy with the XOR scrambling removed and every part
block decrypted in place (block lengths are unchanged, so offsets still
line up with the original). The second writes each decrypted part block to
its own file named after the part.
"""

from __future__ import annotations

import argparse
import re
import sys
from pathlib import Path
from typing import Iterator, Sequence, Tuple

from xzzpcb import BlockType, XZZPCBError, des_decrypt, descramble, iter_blocks, read_header, resolve_key
from xzzpcb.cursor import ByteCursor
from xzzpcb.records import read_part_header

BLOCK_HEADER_SIZE = 5


def decrypt_buffer(data: bytes, key: int | None = None) -> bytearray:
    des_key = resolve_key(key)
    buf = bytearray(data)
    descramble(buf)
    header = read_header(buf)
    for block in iter_blocks(buf, header):
        if block.tag != BlockType.PART:
            continue
        start = block.offset + BLOCK_HEADER_SIZE
        buf[start : start + len(block.payload)] = des_decrypt(block.payload, des_key)
    return buf


def iter_part_blocks(data: bytes, key: int | None = None) -> Iterator[Tuple[int, str, bytes]]:
    """Yield ``(index, part name, plaintext)`` for every part block."""

    des_key = resolve_key(key)
    buf = bytearray(data)
    descramble(buf)
    header = read_header(buf)
    index = 0
    for block in iter_blocks(buf, header):
        if block.tag != BlockType.PART:
            continue
        plaintext = des_decrypt(block.payload, des_key)
        try:
            _, name = read_part_header(ByteCursor(plaintext))
        except XZZPCBError as exc:
            print(f"[warn] part block #{index} at 0x{block.offset:X}: {exc}", file=sys.stderr)
            name = "unnamed"
        yield index, name, plaintext
        index += 1


def _safe_name(name: str) -> str:
    return re.sub(r"[^A-Za-z0-9_.-]+", "_", name) or "unnamed"


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Descramble and decrypt an XZZ .pcb file.")
    parser.add_argument("input", type=Path, help="Path to the source .pcb file")
    parser.add_argument("-o", "--output", type=Path, help="Destination for the decrypted copy")
    parser.add_argument("--extract-dir", type=Path, help="Directory receiving one file per part block")
    parser.add_argument("--key", type=lambda x: int(x, 0), default=None, help="DES key override")
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    if not args.output and not args.extract_dir:
        args.output = args.input.with_name(args.input.stem + ".decrypted.pcb")

    data = args.input.read_bytes()
    try:
        if args.output:
            args.output.write_bytes(decrypt_buffer(data, args.key))
            print(f"[+] Decrypted copy written to {args.output}")
        if args.extract_dir:
            args.extract_dir.mkdir(parents=True, exist_ok=True)
            count = 0
            for index, name, plaintext in iter_part_blocks(data, args.key):
                target = args.extract_dir / f"{_safe_name(name)}_{args.input.stem}_block_{index}.decrypted.dat"
                target.write_bytes(plaintext)
                count += 1
            print(f"[+] Extracted {count} part blocks into {args.extract_dir}")
    except XZZPCBError as exc:
        print(f"[error] {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

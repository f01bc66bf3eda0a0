#!/usr/bin/env python3
"""
Report whether files look like XZZ .pcb boards, and which variant (plain or
XOR scrambled) they are. Read-only; prints a short report per file.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Sequence

# Ensure project root on sys.path
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from xzzpcb.scramble import MAGIC, find_diode_marker, verify_format, xor_key_of


def detect(path: Path) -> bool:
    blob = path.read_bytes()
    print(f"{path.name}: size={len(blob)} bytes")
    if not verify_format(blob):
        print("  heuristic: not an XZZ board")
        return False
    key = xor_key_of(blob)
    if blob[: len(MAGIC)] == MAGIC:
        print("  variant: plain")
    else:
        print(f"  variant: scrambled (xor key 0x{key:02X})")
    marker = find_diode_marker(blob)
    if marker == -1:
        print("  diode readings: none")
    else:
        print(f"  diode readings: marker at 0x{marker:X} ({len(blob) - marker} bytes)")
    return True


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Probe files for the XZZ .pcb format.")
    parser.add_argument("inputs", type=Path, nargs="+", help="Files to probe")
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    matched = 0
    for target in args.inputs:
        if not target.exists():
            print(f"{target} missing")
            continue
        matched += detect(target)
    return 0 if matched else 1


if __name__ == "__main__":
    raise SystemExit(main())

#!/usr/bin/env python3
"""
Render an XZZ .pcb board outline and its pins to PNG previews without a
board viewer.

The geometry comes from the same decoder the DXF exporter uses and is
rasterized with Pillow. Example:

    python render_board_png.py board.pcb \
        --preview board_thumb.png --preview-size 256 \
        --hires board_full.png --hires-size 2048
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Sequence, Tuple

from PIL import Image, ImageDraw

from xzzpcb import Board, XZZPCBError, board_bounds, load_pcb
from xzzpcb.records import UNCONNECTED_NET

PIN_COLOR = (200, 40, 40, 255)
UNCONNECTED_COLOR = (140, 140, 140, 255)


def _build_transform(
    bounds: Tuple[int, int, int, int],
    size_px: int,
    padding_ratio: float,
):
    min_x, min_y, max_x, max_y = bounds
    width = max(max_x - min_x, 1e-9)
    height = max(max_y - min_y, 1e-9)
    pad = max(width, height) * padding_ratio

    world_min_x = min_x - pad
    world_max_x = max_x + pad
    world_min_y = min_y - pad
    world_max_y = max_y + pad

    world_width = world_max_x - world_min_x
    world_height = world_max_y - world_min_y

    scale = min(size_px / world_width, size_px / world_height)
    offset_x = (size_px - world_width * scale) / 2.0
    offset_y = (size_px - world_height * scale) / 2.0

    def transform(point: Tuple[float, float]) -> Tuple[float, float]:
        x, y = point
        px = (x - world_min_x) * scale + offset_x
        py = size_px - ((y - world_min_y) * scale + offset_y)
        return px, py

    return transform, scale


def render_png(
    board: Board,
    destination: Path,
    size_px: int,
    *,
    padding_ratio: float = 0.05,
) -> None:
    transform, _scale = _build_transform(board_bounds(board), size_px, padding_ratio)

    image = Image.new("RGBA", (size_px, size_px), (255, 255, 255, 0))
    draw = ImageDraw.Draw(image)
    stroke = max(1, int(size_px / 256))
    dot = max(1, stroke)

    for segment in board.outline_segments:
        draw.line([transform(segment.start), transform(segment.end)], fill="black", width=stroke)

    for pin in board.pins:
        px, py = transform(pin.position)
        color = PIN_COLOR if pin.net and pin.net != UNCONNECTED_NET else UNCONNECTED_COLOR
        draw.ellipse([px - dot, py - dot, px + dot, py + dot], fill=color)

    destination.parent.mkdir(parents=True, exist_ok=True)
    image.save(destination)


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Render an XZZ .pcb board to PNG.")
    parser.add_argument("input", type=Path, help="Source .pcb file")
    parser.add_argument("--preview", type=Path, help="Path for the low-res preview PNG")
    parser.add_argument("--preview-size", type=int, default=256, help="Preview size in pixels (square)")
    parser.add_argument("--hires", type=Path, help="Path for the high-res PNG")
    parser.add_argument("--hires-size", type=int, default=2048, help="High-res size in pixels (square)")
    parser.add_argument("--key", type=lambda x: int(x, 0), default=None, help="DES key override")
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    if not args.preview and not args.hires:
        raise SystemExit("Specify --preview and/or --hires to render a PNG.")

    try:
        board = load_pcb(args.input, args.key)
    except XZZPCBError as exc:
        print(f"[error] {exc}", file=sys.stderr)
        return 1
    if not board.outline_segments and not board.pins:
        print("[error] Board has no outline or pins to render.", file=sys.stderr)
        return 1

    if args.preview:
        render_png(board, args.preview, args.preview_size)
        print(f"[+] Preview PNG written to {args.preview}")
    if args.hires:
        render_png(board, args.hires, args.hires_size)
        print(f"[+] High-res PNG written to {args.hires}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict

from .entities import Board

OUTLINE_LAYER_NAME = "XZZ_Outline"
PIN_LAYER_NAME = "XZZ_Pins"
PIN_MARKER_RADIUS = 2.0


def write_dxf(board: Board, destination: Path, *, pin_radius: float = PIN_MARKER_RADIUS) -> None:
    """
    Emit a bare-bones DXF: one LINE per outline segment and a small CIRCLE
    marking each pin. Z stays at 0.
    """

    def emit(code: str, value: str) -> str:
        return f"{code}\n{value}\n"

    chunks: list[str] = []
    chunks.append(emit("0", "SECTION"))
    chunks.append(emit("2", "ENTITIES"))

    for segment in board.outline_segments:
        chunks.append(emit("0", "LINE"))
        chunks.append(emit("8", OUTLINE_LAYER_NAME))
        chunks.append(emit("10", f"{segment.start[0]:.6f}"))
        chunks.append(emit("20", f"{segment.start[1]:.6f}"))
        chunks.append(emit("30", "0.0"))
        chunks.append(emit("11", f"{segment.end[0]:.6f}"))
        chunks.append(emit("21", f"{segment.end[1]:.6f}"))
        chunks.append(emit("31", "0.0"))

    if pin_radius > 0:
        for pin in board.pins:
            chunks.append(emit("0", "CIRCLE"))
            chunks.append(emit("8", PIN_LAYER_NAME))
            chunks.append(emit("10", f"{pin.position[0]:.6f}"))
            chunks.append(emit("20", f"{pin.position[1]:.6f}"))
            chunks.append(emit("40", f"{pin_radius:.6f}"))

    chunks.append(emit("0", "ENDSEC"))
    chunks.append(emit("0", "EOF"))
    destination.parent.mkdir(parents=True, exist_ok=True)
    destination.write_text("".join(chunks), encoding="ascii")


def board_to_dict(board: Board) -> Dict[str, Any]:
    return {
        "num_parts": board.num_parts,
        "num_pins": board.num_pins,
        "num_segments": board.num_segments,
        "parts": [
            {
                "name": part.name,
                "mounting_side": part.mounting_side.value,
                "part_type": part.part_type.value,
                "first_pin": part.first_pin,
                "end_of_pins": part.end_of_pins,
            }
            for part in board.parts
        ],
        "pins": [
            {
                "x": pin.position[0],
                "y": pin.position[1],
                "name": pin.name,
                "number": pin.number,
                "net": pin.net,
                "side": pin.side.value,
                "part": pin.part,
            }
            for pin in board.pins
        ],
        "outline": [[*segment.start, *segment.end] for segment in board.outline_segments],
        "nets": {str(index): name for index, name in sorted(board.nets.items())},
    }


def write_json(board: Board, destination: Path) -> None:
    destination.parent.mkdir(parents=True, exist_ok=True)
    destination.write_text(json.dumps(board_to_dict(board), indent=2) + "\n", encoding="utf-8")

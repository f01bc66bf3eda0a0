from __future__ import annotations

import math
from dataclasses import replace
from typing import Iterable, List, Sequence, Tuple

from .entities import Board, OutlineSegment, Pin, Point

ARC_SAMPLE_POINTS = 10


def arc_to_segments(start_angle: int, end_angle: int, radius: int, center: Point) -> List[OutlineSegment]:
    """
    Approximate a board-edge arc with a fixed number of chords.

    Angles are in degrees. When the two angles are more than half a turn apart
    the start is pushed one full turn forward so the shorter way round is
    drawn, matching what the vendor viewer renders.
    """

    if start_angle > end_angle:
        start_angle, end_angle = end_angle, start_angle
    if end_angle - start_angle > 180:
        start_angle += 360

    start = math.radians(start_angle)
    end = math.radians(end_angle)
    step = (end - start) / (ARC_SAMPLE_POINTS - 1)
    cx, cy = center

    def sample(angle: float) -> Point:
        return int(cx + radius * math.cos(angle)), int(cy + radius * math.sin(angle))

    segments: List[OutlineSegment] = []
    previous = sample(start)
    for idx in range(1, ARC_SAMPLE_POINTS):
        current = sample(start + idx * step)
        segments.append(OutlineSegment(previous, current))
        previous = current
    return segments


def find_xy_translation(segments: Sequence[OutlineSegment]) -> Point:
    # Assumes the outline encloses every part.
    if not segments:
        return 0, 0
    min_x, min_y = segments[0].start
    for segment in segments:
        min_x = min(min_x, segment.start[0], segment.end[0])
        min_y = min(min_y, segment.start[1], segment.end[1])
    return min_x, min_y


def _shift(point: Point, offset: Point) -> Point:
    return point[0] - offset[0], point[1] - offset[1]


def translate_segments(segments: Iterable[OutlineSegment], offset: Point) -> List[OutlineSegment]:
    return [OutlineSegment(_shift(seg.start, offset), _shift(seg.end, offset)) for seg in segments]


def translate_pins(pins: Iterable[Pin], offset: Point) -> List[Pin]:
    return [replace(pin, position=_shift(pin.position, offset)) for pin in pins]


def normalize_board(board: Board) -> Point:
    """Move the outline's lower-left corner to the origin; pins follow. Returns the shift."""

    offset = find_xy_translation(board.outline_segments)
    board.outline_segments = translate_segments(board.outline_segments, offset)
    board.pins = translate_pins(board.pins, offset)
    return offset


def board_bounds(board: Board) -> Tuple[int, int, int, int]:
    points: List[Point] = []
    for segment in board.outline_segments:
        points.append(segment.start)
        points.append(segment.end)
    points.extend(pin.position for pin in board.pins)
    if not points:
        raise ValueError("Board has no outline or pins to bound")
    xs = [pt[0] for pt in points]
    ys = [pt[1] for pt in points]
    return min(xs), min(ys), max(xs), max(ys)

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Mapping, Tuple

Point = Tuple[int, int]


class PinSide(Enum):
    TOP = "top"


class MountingSide(Enum):
    TOP = "top"


class PartType(Enum):
    SMD = "smd"


@dataclass(frozen=True)
class OutlineSegment:
    start: Point
    end: Point


@dataclass(frozen=True)
class Pin:
    position: Point
    name: str
    number: str
    net: str
    part: int
    side: PinSide = PinSide.TOP


@dataclass(frozen=True)
class Part:
    name: str
    first_pin: int
    end_of_pins: int
    mounting_side: MountingSide = MountingSide.TOP
    part_type: PartType = PartType.SMD


@dataclass
class Board:
    parts: List[Part] = field(default_factory=list)
    pins: List[Pin] = field(default_factory=list)
    outline_segments: List[OutlineSegment] = field(default_factory=list)
    nets: Mapping[int, str] = field(default_factory=dict)

    @property
    def num_parts(self) -> int:
        return len(self.parts)

    @property
    def num_pins(self) -> int:
        return len(self.pins)

    @property
    def num_segments(self) -> int:
        return len(self.outline_segments)

    @property
    def num_nets(self) -> int:
        return len(self.nets)

    def pins_of(self, part: Part) -> List[Pin]:
        return self.pins[part.first_pin : part.end_of_pins]

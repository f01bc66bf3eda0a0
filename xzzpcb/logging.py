from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List

from .container import Block, BlockType, ContainerHeader


def describe_tag(tag: BlockType | int) -> str:
    if isinstance(tag, BlockType):
        return f"0x{int(tag):02X}/{tag.name}"
    return f"0x{tag:02X}/UNKNOWN"


@dataclass
class BlockTraceLogger:
    """Collects one line per walked block and writes them out on ``flush``."""

    destination: Path | None = None

    def __post_init__(self) -> None:
        self._lines: List[str] = []

    @property
    def lines(self) -> List[str]:
        return list(self._lines)

    def header(self, xor_key: int, header: ContainerHeader) -> None:
        self._lines.append(
            f"xor_key=0x{xor_key:02X} main=0x{header.main_data_start:08X}/{header.main_data_size} "
            f"nets=0x{header.net_data_start:08X}/{header.net_data_size}"
        )

    def record(self, seq: int, block: Block, *, note: str | None = None) -> None:
        line = f"#{seq:05d} off=0x{block.offset:08X} type={describe_tag(block.tag):<18} size={len(block.payload)}"
        if note:
            line += f" | {note}"
        self._lines.append(line)

    def flush(self) -> None:
        if self.destination is None or not self._lines:
            return
        self.destination.parent.mkdir(parents=True, exist_ok=True)
        text = "\n".join(self._lines) + "\n"
        self.destination.write_text(text, encoding="utf-8")

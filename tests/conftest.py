"""Shared test fixtures for the XZZ decoder tests."""
import os
import sys

import pytest

# Make the builders module and the root-level tools importable.
_tests_dir = os.path.dirname(os.path.abspath(__file__))
_root_dir = os.path.dirname(_tests_dir)
for _path in (_tests_dir, _root_dir):
    if _path not in sys.path:
        sys.path.insert(0, _path)

from xzz_builders import (  # noqa: E402
    arc_payload,
    block,
    build_pcb,
    line_payload,
    nets_region,
    pad_payload,
    part_payload,
    pin_sub_block,
)


@pytest.fixture
def net_map():
    return {1: "GND", 2: "VCC", 3: "NC", 4: "UNCONNECTED"}


@pytest.fixture
def board_bytes(net_map):
    """A small but complete board: outline, one part with two pins, one test pad."""
    blocks = b"".join(
        [
            block(0x05, line_payload(28, (10, 20), (110, 20))),
            block(0x05, line_payload(28, (110, 20), (110, 80))),
            block(0x05, line_payload(3, (0, 0), (5, 5))),
            block(0x01, arc_payload(28, (60, 60), 20, 0, 90)),
            block(0x02, b"\x00" * 12),
            block(0x06, b"text"),
            block(0x42, b"\xff\xff"),
            block(
                0x07,
                part_payload(
                    "U1",
                    pin_sub_block((30, 40), "1", 1) + pin_sub_block((35, 40), "2", 3),
                ),
            ),
            block(0x09, pad_payload((15, 25), "TP1", 2)),
        ]
    )
    return build_pcb(blocks, nets_region(net_map))

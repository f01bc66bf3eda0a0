"""Tests for records.py - arc, line, part/pin and test-pad decoders."""
import logging

import pytest

from xzz_builders import (
    S,
    arc_payload,
    line_payload,
    pad_payload,
    part_payload,
    part_plaintext,
    pin_sub_block,
    skipped_sub_block,
    u32,
)
from xzzpcb.cursor import ByteCursor
from xzzpcb.des_io import des_encrypt
from xzzpcb.entities import MountingSide, OutlineSegment, PartType, PinSide
from xzzpcb.errors import MalformedBlockError, TruncatedDataError
from xzzpcb.keys import DEFAULT_KEY
from xzzpcb.records import (
    TEST_PAD_PREFIX,
    UNCONNECTED_NET,
    pad_net_name,
    parse_arc_block,
    parse_line_segment_block,
    parse_part_block,
    parse_pin_block,
    parse_test_pad_block,
    pin_net_name,
    read_part_header,
)

NETS = {1: "GND", 2: "VCC", 3: "NC", 4: "UNCONNECTED"}


class TestArcBlock:
    def test_outline_arc(self):
        segments = parse_arc_block(arc_payload(28, (0, 0), 100, 0, 180))
        assert len(segments) == 9
        assert segments[0].start == (100, 0)
        assert segments[-1].end == (-100, 0)

    def test_scale_field_ignored(self):
        a = parse_arc_block(arc_payload(28, (50, 50), 10, 0, 90, scale=1))
        b = parse_arc_block(arc_payload(28, (50, 50), 10, 0, 90, scale=S))
        assert a == b

    def test_other_layer_discarded(self):
        assert parse_arc_block(arc_payload(17, (0, 0), 100, 0, 180)) == []

    def test_truncated(self):
        with pytest.raises(TruncatedDataError):
            parse_arc_block(arc_payload(28, (0, 0), 100, 0, 180)[:20])


class TestLineSegmentBlock:
    def test_outline_line(self):
        segment = parse_line_segment_block(line_payload(28, (0, 0), (100, 50)))
        assert segment == OutlineSegment((0, 0), (100, 50))

    def test_coordinates_divided_by_global_scale(self):
        payload = u32(28) + u32(12345) + u32(99999) + u32(20000) + u32(5) + u32(1)
        assert parse_line_segment_block(payload) == OutlineSegment((1, 9), (2, 0))

    def test_other_layer_discarded(self):
        assert parse_line_segment_block(line_payload(1, (0, 0), (100, 50))) is None

    def test_net_index_not_required(self):
        payload = line_payload(28, (1, 2), (3, 4))[:24]
        assert parse_line_segment_block(payload) == OutlineSegment((1, 2), (3, 4))

    def test_truncated(self):
        with pytest.raises(TruncatedDataError):
            parse_line_segment_block(b"\x1c\x00\x00\x00")


class TestNetNames:
    def test_pin_named_net(self):
        assert pin_net_name(NETS, 1) == "GND"

    def test_pin_nc_is_unconnected(self):
        assert pin_net_name(NETS, 3) == UNCONNECTED_NET

    def test_pin_missing_index_is_empty(self):
        assert pin_net_name(NETS, 99) == ""

    def test_pad_named_net(self):
        assert pad_net_name(NETS, 2) == "VCC"

    @pytest.mark.parametrize("index", [3, 4, 99])
    def test_pad_unconnected_is_empty(self, index):
        assert pad_net_name(NETS, index) == ""

    def test_lookup_does_not_grow_table(self):
        nets = dict(NETS)
        pin_net_name(nets, 42)
        pad_net_name(nets, 43)
        assert nets == NETS


class TestPinBlock:
    def test_fields(self):
        data = pin_sub_block((12, 34), "A1", 2)
        cursor = ByteCursor(data, 1)
        pin = parse_pin_block(cursor, NETS, 5)
        assert pin.position == (12, 34)
        assert pin.name == "A1"
        assert pin.number == "A1"
        assert pin.net == "VCC"
        assert pin.part == 5
        assert pin.side is PinSide.TOP
        assert cursor.pos == len(data)

    def test_trailing_fields_skipped(self):
        data = pin_sub_block((1, 1), "7", 1, trailing=b"\xde\xad\xbe\xef" * 3) + b"\x55"
        cursor = ByteCursor(data, 1)
        parse_pin_block(cursor, NETS, 1)
        assert cursor.read_u8() == 0x55

    def test_name_overruns(self):
        data = b"\x09" + u32(40) + u32(0) + u32(0) + u32(0) + b"\x00" * 8 + u32(500) + b"x"
        with pytest.raises(TruncatedDataError):
            parse_pin_block(ByteCursor(data, 1), NETS, 1)


class TestPartBlock:
    def test_part_with_pins(self):
        subs = pin_sub_block((10, 20), "1", 1) + pin_sub_block((11, 20), "2", 3)
        part, pins = parse_part_block(part_payload("C42", subs), DEFAULT_KEY, NETS, part_index=3, first_pin=7)
        assert part.name == "C42"
        assert part.first_pin == 7
        assert part.end_of_pins == 9
        assert part.mounting_side is MountingSide.TOP
        assert part.part_type is PartType.SMD
        assert [p.name for p in pins] == ["1", "2"]
        assert [p.net for p in pins] == ["GND", UNCONNECTED_NET]
        assert all(p.part == 3 for p in pins)

    def test_skipped_sub_blocks(self):
        subs = (
            skipped_sub_block(0x01, b"\x09" * 10)
            + skipped_sub_block(0x05, b"\x09" * 28)
            + skipped_sub_block(0x06, b"label")
            + pin_sub_block((1, 2), "K", 2)
        )
        part, pins = parse_part_block(part_payload("D1", subs), DEFAULT_KEY, NETS, part_index=1, first_pin=0)
        assert len(pins) == 1
        assert pins[0].net == "VCC"

    def test_unknown_sub_block_warns(self, caplog):
        subs = b"\x42" + pin_sub_block((1, 2), "1", 1)
        with caplog.at_level(logging.WARNING, logger="xzzpcb.records"):
            _, pins = parse_part_block(part_payload("Q1", subs), DEFAULT_KEY, NETS, part_index=1, first_pin=0)
        assert len(pins) == 1
        assert "0x42" in caplog.text
        assert "Q1" in caplog.text

    def test_no_pins(self):
        part, pins = parse_part_block(part_payload("MH1"), DEFAULT_KEY, NETS, part_index=1, first_pin=4)
        assert pins == []
        assert (part.first_pin, part.end_of_pins) == (4, 4)

    def test_missing_label_sub_block(self):
        payload = part_payload("R1", label_tag=0x07)
        with pytest.raises(MalformedBlockError) as excinfo:
            parse_part_block(payload, DEFAULT_KEY, NETS, part_index=1, first_pin=0)
        assert "0x06" in str(excinfo.value)

    def test_declared_size_past_buffer(self):
        plaintext = bytearray(part_plaintext("R1"))
        plaintext[0:4] = u32(len(plaintext) + 100)
        payload = des_encrypt(bytes(plaintext), DEFAULT_KEY)
        with pytest.raises(TruncatedDataError):
            parse_part_block(payload, DEFAULT_KEY, NETS, part_index=1, first_pin=0)

    def test_truncated_payload(self):
        with pytest.raises(TruncatedDataError):
            parse_part_block(b"\x00" * 16, DEFAULT_KEY, NETS, part_index=1, first_pin=0)

    def test_read_part_header(self):
        plaintext = part_plaintext("U7", pin_sub_block((0, 0), "1", 1))
        size, name = read_part_header(ByteCursor(plaintext))
        assert name == "U7"
        assert size == len(plaintext) - 4


class TestTestPadBlock:
    def test_pad(self):
        part, pin = parse_test_pad_block(pad_payload((15, 25), "TP1", 1), NETS, part_index=4, first_pin=10)
        assert part.name == TEST_PAD_PREFIX + "TP1"
        assert (part.first_pin, part.end_of_pins) == (10, 11)
        assert pin.number == "TP1"
        assert pin.position == (15, 25)
        assert pin.net == "GND"
        assert pin.part == 4

    def test_net_read_from_payload_end(self):
        payload = pad_payload((1, 1), "TP2", 2, gap=b"\x01\x02\x03\x04\x05\x06")
        _, pin = parse_test_pad_block(payload, NETS, part_index=1, first_pin=0)
        assert pin.net == "VCC"

    @pytest.mark.parametrize("index", [3, 4, 77])
    def test_unconnected_pad_has_empty_net(self, index):
        _, pin = parse_test_pad_block(pad_payload((1, 1), "TP3", index), NETS, part_index=1, first_pin=0)
        assert pin.net == ""

    def test_truncated(self):
        with pytest.raises(TruncatedDataError):
            parse_test_pad_block(b"\x00" * 10, NETS, part_index=1, first_pin=0)

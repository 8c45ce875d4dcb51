"""Tests for decoding truncated data."""

from __future__ import annotations

import pytest

from bitexpr import Schema, decode, encode


class TestTruncatedPacket:
    """Test every prefix of a Match/array packet."""

    @pytest.mark.parametrize(
        ("data", "expected"),
        [
            (b"\x01\x03\x01\x02", {"opcode": "DATA", "len": 3, "payload": [1, 2]}),
            (b"\x01\x03\x01", {"opcode": "DATA", "len": 3, "payload": [1]}),
            (b"\x01\x03", {"opcode": "DATA", "len": 3}),
            (b"\x01", {"opcode": "DATA"}),
        ],
    )
    def test_partial_packet(self, packet_schema: Schema, data: bytes, expected: dict) -> None:
        """Test that the fields before the cut are returned."""
        assert decode(packet_schema, data, "Packet") == expected

    def test_empty_data(self, packet_schema: Schema) -> None:
        """Test that nothing decodes from no data."""
        assert decode(packet_schema, b"", "Packet") is None

    def test_complete_empty_array(self, packet_schema: Schema) -> None:
        """Test that a zero-length array is complete, not truncated."""
        assert decode(packet_schema, b"\x01\x00", "Packet") == {
            "opcode": "DATA",
            "len": 0,
            "payload": [],
        }


class TestTruncatedNesting:
    """Test truncation inside nested containers."""

    def test_partial_nested_struct(self, shapes_schema: Schema) -> None:
        """Test that a nested struct keeps the fields read before the cut."""
        data = bytes.fromhex("09fffe012c6f6b00")

        assert decode(shapes_schema, data[:4], "Frame") == {"id": 9, "origin": {"x": -2}}

    def test_nested_struct_with_no_fields_read(self, shapes_schema: Schema) -> None:
        """Test that an unread nested struct is omitted."""
        assert decode(shapes_schema, b"\x09\xff", "Frame") == {"id": 9}

    def test_unterminated_string(self, shapes_schema: Schema) -> None:
        """Test that a string without its terminator is omitted."""
        data = bytes.fromhex("09fffe012c6f6b")

        assert decode(shapes_schema, data, "Frame") == {"id": 9, "origin": {"x": -2, "y": 300}}

    def test_no_reads_after_truncation(self, shapes_schema: Schema) -> None:
        """Test that nothing past the first failed read is decoded."""
        value = {"flags": 5, "mode": "ACTIVE", "temperature": 1.5, "position": {"x": 1, "y": 2}}
        data = encode(shapes_schema, value, "Telemetry")

        # Cut inside the float: flags and mode fit in the first byte
        decoded = decode(shapes_schema, data[:2], "Telemetry")

        assert decoded == {"flags": 5, "mode": "ACTIVE"}

    def test_partial_static_array(self, shapes_schema: Schema) -> None:
        """Test that a static array keeps the elements read before the cut."""
        value = {"history": [1, 2, 3, 4]}
        data = encode(shapes_schema, value, "Telemetry")

        # 3 + 4 + 32 + 32 header bits, then 5 bits per element
        decoded = decode(shapes_schema, data[:10], "Telemetry")

        assert decoded is not None
        assert decoded["history"] == [1]
        assert "name" not in decoded

    def test_partial_match_struct(self, shapes_schema: Schema) -> None:
        """Test truncation inside a Match case."""
        decoded = decode(shapes_schema, b"\x3f", "Choice")

        assert decoded == {"tag": "CIRCLE"}

    def test_trailing_fields_ignored_when_truncated(self, shapes_schema: Schema) -> None:
        """Test that a truncated prefix never yields later fields."""
        data = encode(shapes_schema, {"id": 1, "origin": {"x": 2, "y": 3}, "name": "abc"}, "Frame")

        for cut in range(len(data)):
            decoded = decode(shapes_schema, data[:cut], "Frame")
            if decoded is not None:
                assert "name" not in decoded

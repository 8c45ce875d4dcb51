"""Tests for string character codecs."""

from __future__ import annotations

import pytest

from bitexpr import HebrewCodec, Schema, SchemaError, Utf8Codec, decode, encode, get_codec
from bitexpr.codec.charsets import HEBREW, UTF8


class TestHebrewCodec:
    """Test the single-byte Hebrew alphabet."""

    def test_letters(self) -> None:
        """Test the letter range."""
        assert HEBREW.encode("א") == b"\xd0"
        assert HEBREW.encode("ת") == b"\xea"
        assert HEBREW.encode("שלום") == b"\xe9\xdc\xd5\xdd"

    def test_punctuation(self) -> None:
        """Test the punctuation range."""
        assert HEBREW.encode(" ()'-\"") == b"\xf0\xf1\xf2\xf3\xf4\xf5"

    def test_unknown_char(self) -> None:
        """Test that unmapped characters become the sentinel byte."""
        assert HEBREW.encode("אxב") == b"\xd0\x3f\xd1"

    def test_unknown_byte(self) -> None:
        """Test that unmapped bytes become the sentinel character."""
        assert HEBREW.decode(b"\xd0\x41\xeb\xd1") == "א??ב"

    def test_lossy_round_trip(self) -> None:
        """Test that the sentinel survives a round trip."""
        assert HEBREW.decode(HEBREW.encode("אxב")) == "א?ב"

    def test_validity(self) -> None:
        """Test character and byte validity checks."""
        assert HEBREW.is_valid_char("ש")
        assert not HEBREW.is_valid_char("a")
        assert HEBREW.is_valid_byte(0xF5)
        assert not HEBREW.is_valid_byte(0x3F)

    def test_tables_are_inverse(self) -> None:
        """Test that both lookup tables describe the same mapping."""
        codec = HebrewCodec()

        assert len(codec.char_to_byte) == 33
        for char, byte in codec.char_to_byte.items():
            assert codec.byte_to_char[byte] == char


class TestUtf8Codec:
    """Test the UTF-8 codec."""

    def test_round_trip(self) -> None:
        """Test multi-byte text."""
        assert UTF8.decode(UTF8.encode("héllo ✓")) == "héllo ✓"

    def test_invalid_bytes(self) -> None:
        """Test that invalid sequences decode to the replacement character."""
        assert UTF8.decode(b"a\xffb") == "a�b"

    def test_validity(self) -> None:
        """Test character and byte validity checks."""
        codec = Utf8Codec()

        assert codec.is_valid_char("é")
        assert not codec.is_valid_char("\x00")
        assert not codec.is_valid_byte(0)
        assert not codec.is_valid_byte(0xFF)
        assert codec.is_valid_byte(ord("a"))


class TestCodecLookup:
    """Test codec selection by field kind."""

    def test_get_codec(self) -> None:
        """Test the registered kinds."""
        assert get_codec("CString") is UTF8
        assert get_codec("HebrewString") is HEBREW

    def test_unknown_kind(self) -> None:
        """Test a kind without a codec."""
        with pytest.raises(SchemaError, match="No character codec"):
            get_codec("Int")


class TestStringFields:
    """Test string fields end to end."""

    @pytest.fixture
    def names_schema(self) -> Schema:
        return Schema.from_payload(
            [
                {
                    "type": "Struct",
                    "name": "Names",
                    "fields": [
                        ["latin", {"kind": "CString"}],
                        ["hebrew", {"kind": "HebrewString"}],
                    ],
                }
            ]
        )

    def test_encoding(self, names_schema: Schema) -> None:
        """Test that each field uses its own codec."""
        data = encode(names_schema, {"latin": "שלום", "hebrew": "שלום"}, "Names")

        assert data == "שלום".encode() + b"\x00" + b"\xe9\xdc\xd5\xdd\x00"

    def test_hebrew_sentinel(self, names_schema: Schema) -> None:
        """Test unknown characters in a Hebrew field."""
        data = encode(names_schema, {"latin": "", "hebrew": "אxב"}, "Names")

        assert data == b"\x00\xd0\x3f\xd1\x00"
        assert decode(names_schema, data, "Names") == {"latin": "", "hebrew": "א?ב"}

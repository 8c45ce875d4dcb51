"""Character codecs for null-terminated string fields.

Each string kind in a schema streams its text through one of these codecs.
Codecs never raise: characters or bytes they cannot map are replaced by a
fixed sentinel, so a lossy round trip is always possible.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from types import MappingProxyType

from ..exceptions import SchemaError


class CharCodec(ABC):
    """Byte/character mapping used by string fields."""

    name: str = ""

    @abstractmethod
    def encode(self, text: str) -> bytes:
        """Encode text to bytes (without the trailing zero byte)."""

    @abstractmethod
    def decode(self, data: bytes) -> str:
        """Decode bytes (without the trailing zero byte) to text."""

    @abstractmethod
    def is_valid_char(self, char: str) -> bool:
        """Return True if ``char`` survives an encode/decode round trip."""

    @abstractmethod
    def is_valid_byte(self, byte: int) -> bool:
        """Return True if ``byte`` maps to a character."""


class Utf8Codec(CharCodec):
    """Standard UTF-8 text. Invalid byte sequences decode to U+FFFD."""

    name = "utf-8"

    def encode(self, text: str) -> bytes:
        return text.encode("utf-8", errors="replace")

    def decode(self, data: bytes) -> str:
        return data.decode("utf-8", errors="replace")

    def is_valid_char(self, char: str) -> bool:
        # Surrogates cannot be encoded and NUL would terminate the string early
        return len(char) == 1 and char != "\x00" and not 0xD800 <= ord(char) <= 0xDFFF

    def is_valid_byte(self, byte: int) -> bool:
        # 0xC0, 0xC1 and 0xF5..0xFF never appear in well-formed UTF-8
        return 0 < byte < 0xC0 or 0xC2 <= byte <= 0xF4


_HEBREW_TABLE: dict[str, int] = {
    "א": 0xD0, "ב": 0xD1, "ג": 0xD2, "ד": 0xD3, "ה": 0xD4,
    "ו": 0xD5, "ז": 0xD6, "ח": 0xD7, "ט": 0xD8, "י": 0xD9,
    "ך": 0xDA, "כ": 0xDB, "ל": 0xDC, "ם": 0xDD, "מ": 0xDE,
    "ן": 0xDF, "נ": 0xE0, "ס": 0xE1, "ע": 0xE2, "ף": 0xE3,
    "פ": 0xE4, "ץ": 0xE5, "צ": 0xE6, "ק": 0xE7, "ר": 0xE8,
    "ש": 0xE9, "ת": 0xEA, " ": 0xF0, "(": 0xF1, ")": 0xF2,
    "'": 0xF3, "-": 0xF4, '"': 0xF5,
}  # fmt: skip


class HebrewCodec(CharCodec):
    """Single-byte custom alphabet for Hebrew text.

    Letters occupy 0xD0..0xEA and a handful of punctuation marks 0xF0..0xF5.
    Anything else encodes to ``UNKNOWN_BYTE`` (0x3F) and any unmapped byte
    decodes to ``UNKNOWN_CHAR`` ("?").

    Example:
        >>> codec = HebrewCodec()
        >>> codec.encode("שלום!")
        b'\\xe9\\xdc\\xd5\\xdd?'
        >>> codec.decode(b"\\xe9\\x00\\x3f")
        'ש??'
    """

    name = "hebrew-custom"

    UNKNOWN_BYTE = 0x3F
    UNKNOWN_CHAR = "?"

    char_to_byte = MappingProxyType(_HEBREW_TABLE)
    byte_to_char = MappingProxyType({code: char for char, code in _HEBREW_TABLE.items()})

    def encode(self, text: str) -> bytes:
        return bytes(self.char_to_byte.get(char, self.UNKNOWN_BYTE) for char in text)

    def decode(self, data: bytes) -> str:
        return "".join(self.byte_to_char.get(byte, self.UNKNOWN_CHAR) for byte in data)

    def is_valid_char(self, char: str) -> bool:
        return char in self.char_to_byte

    def is_valid_byte(self, byte: int) -> bool:
        return byte in self.byte_to_char


UTF8 = Utf8Codec()
HEBREW = HebrewCodec()

CODECS: MappingProxyType[str, CharCodec] = MappingProxyType(
    {
        "CString": UTF8,
        "HebrewString": HEBREW,
    }
)


def get_codec(kind: str) -> CharCodec:
    """Return the codec used by a string field kind.

    Args:
        kind: Field kind (``"CString"`` or ``"HebrewString"``)

    Returns:
        Shared codec instance

    Raises:
        SchemaError: If the kind has no codec
    """
    try:
        return CODECS[kind]
    except KeyError:
        raise SchemaError(f"No character codec for field kind '{kind}'") from None

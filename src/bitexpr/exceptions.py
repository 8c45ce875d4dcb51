"""Exception hierarchy for bitexpr.

This module defines all custom exceptions used throughout the package.
All exceptions inherit from BitexprError for easy catching of any bitexpr-specific error.

Truncated input and characters outside a codec's alphabet are never errors:
the decoder returns partial values and the codecs substitute a sentinel.
"""

from __future__ import annotations


class BitexprError(Exception):
    """Base exception for all bitexpr errors.

    Attributes:
        path: Dotted field path of the offending node (e.g. ``Packet.payload[2]``),
            or None when the error is not tied to a field.
    """

    def __init__(self, message: str, path: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.path = path

    def __str__(self) -> str:
        if self.path:
            return f"{self.path}: {self.message}"
        return self.message


class SchemaError(BitexprError):
    """Raised when a schema is invalid or does not fit the value.

    Examples:
        - Unknown struct or enum name
        - Enum label not defined by the enum
        - No Match case for a resolved discriminant
        - Malformed definition payload
    """

    pass


class ResolutionError(BitexprError):
    """Raised when a Match discriminant or dynamic array length cannot be resolved.

    Examples:
        - Discriminant field absent from the already-resolved siblings
        - Dynamic length field missing or not an integer
    """

    pass


class EncodeError(BitexprError):
    """Raised when encoding a value fails.

    Examples:
        - Field value has the wrong shape (e.g. a list where a struct is expected)
        - Array length mismatch in strict mode
        - Encoded buffer exceeds the configured max_bytes
    """

    pass


class DecodeError(BitexprError):
    """Raised when decoding binary data fails.

    Examples:
        - Enum code with no matching label
    """

    pass

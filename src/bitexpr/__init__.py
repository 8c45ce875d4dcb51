"""bitexpr: schema-driven bit-packed binary codec

A Python library for describing arbitrary binary wire formats as a schema and
encoding/decoding values against it at bit granularity. Schemas are built
from the JSON definition payload emitted by the schema compiler.

Key Features:
- Integers of any width from 1 to 64 bits, signed or unsigned
- IEEE-754 floats, null-terminated strings with pluggable character codecs
- Enums with explicit codes, static and dynamic-length arrays
- Discriminated unions (Match) resolved from an earlier sibling field
- Truncation-tolerant decoding and min/max/default size estimation

Quick Start:
    >>> from bitexpr import Schema, encode, decode
    >>>
    >>> schema = Schema.from_payload([
    ...     {"type": "Enum", "name": "Opcode", "entries": [["PING", 0], ["DATA", 1]]},
    ...     {"type": "Struct", "name": "Packet", "fields": [
    ...         ["opcode", {"kind": "Enum", "name": "Opcode", "width": 8}],
    ...         ["len", {"kind": "Int", "signed": False, "width": 8}],
    ...         ["payload", {"kind": "Match", "discriminant": "opcode",
    ...                      "enumTypeName": "Opcode", "cases": {
    ...             "PING": {"kind": "Struct", "name": "Empty"},
    ...             "DATA": {"kind": "Array",
    ...                      "elementType": {"kind": "Int", "signed": True, "width": 8},
    ...                      "length": {"kind": "Dynamic", "field": "len"}},
    ...         }}],
    ...     ]},
    ...     {"type": "Struct", "name": "Empty", "fields": []},
    ... ])
    >>> data = encode(schema, {"opcode": "DATA", "len": 3, "payload": [1, 2, 3]}, "Packet")
    >>> decode(schema, data, "Packet")
    {'opcode': 'DATA', 'len': 3, 'payload': [1, 2, 3]}
"""

from __future__ import annotations

from .codec import (
    Schema,
    check_schema,
    decode,
    default_value,
    encode,
    value_matches_type,
)
from .codec.charsets import CharCodec, HebrewCodec, Utf8Codec, get_codec
from .config import CodecConfig
from .exceptions import (
    BitexprError,
    DecodeError,
    EncodeError,
    ResolutionError,
    SchemaError,
)
from .models import (
    ArrayOf,
    CString,
    EnumDefinition,
    EnumRef,
    FieldType,
    Float32,
    Float64,
    HebrewString,
    Int,
    MatchOn,
    StructDefinition,
    StructRef,
)
from .utils import (
    SizeMode,
    default_size_of,
    encoded_bits,
    encoded_size,
    field_sizes,
    max_size_of,
    min_size_of,
    size_of_bits,
)

__version__ = "0.1.0"

__all__ = [
    # Core API
    "Schema",
    "encode",
    "decode",
    "size_of_bits",
    "default_value",
    "value_matches_type",
    "check_schema",
    "CodecConfig",
    # Schema building
    "StructDefinition",
    "EnumDefinition",
    "FieldType",
    "Int",
    "Float32",
    "Float64",
    "CString",
    "HebrewString",
    "EnumRef",
    "StructRef",
    "ArrayOf",
    "MatchOn",
    # Character codecs
    "CharCodec",
    "Utf8Codec",
    "HebrewCodec",
    "get_codec",
    # Exceptions
    "BitexprError",
    "SchemaError",
    "ResolutionError",
    "EncodeError",
    "DecodeError",
    # Sizing
    "SizeMode",
    "min_size_of",
    "max_size_of",
    "default_size_of",
    "encoded_size",
    "encoded_bits",
    "field_sizes",
    # Version
    "__version__",
]

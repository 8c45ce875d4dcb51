"""Compact binary encoder for schema-described values.

This module provides the encode() function that walks a value tree against
a schema and packs it bit by bit. Fields are written in struct declaration
order, never in mapping key order.
"""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING, Any, Mapping

from ..config import DEFAULT_CONFIG, CodecConfig
from ..exceptions import BitexprError, EncodeError, ResolutionError, SchemaError
from ..models.fields import (
    ArrayType,
    CStringType,
    EnumType,
    FieldType,
    Float32Type,
    Float64Type,
    HebrewStringType,
    IntType,
    MatchType,
    StaticLength,
    StructType,
)
from .bitpack import BitPacker
from .charsets import get_codec
from .context import child_path, index_path, resolved_count, resolved_label
from .defaults import default_value
from .validate import value_matches_type

if TYPE_CHECKING:
    from .schema import Schema

logger = logging.getLogger(__name__)


def encode(
    schema: Schema, value: Mapping[str, Any], root: str, config: CodecConfig | None = None
) -> bytes:
    """Encode a value tree as the struct ``root``.

    Fields missing from ``value`` (or set to None) are filled with defaults
    computed from the fields written before them, so a partially filled value
    always encodes.

    Args:
        schema: Schema to encode against
        value: Field mapping for the root struct
        root: Name of the root struct
        config: Codec options, CodecConfig() if None

    Returns:
        Bit-packed bytes; a trailing partial byte is zero-padded

    Raises:
        SchemaError: Unknown struct/enum, unknown enum label, or no Match case
            for the resolved discriminant
        ResolutionError: A Match discriminant or dynamic array length is not
            available from the sibling fields
        EncodeError: A value has the wrong shape, or the result exceeds max_bytes

    Examples:
        ```python
        from bitexpr import Schema, encode

        schema = Schema.from_payload(payload)
        data = encode(schema, {"opcode": "DATA", "len": 3, "payload": [1, 2, 3]}, "Packet")
        assert data == b"\\x01\\x03\\x01\\x02\\x03"
        ```
    """
    config = config or DEFAULT_CONFIG
    root_type = StructType(name=root)

    if config.validate_values and not value_matches_type(schema, value, root_type):
        raise EncodeError(f"Value does not match struct '{root}'", path=root)

    packer = BitPacker(initial_bytes=config.initial_buffer_bytes)
    _StructEncoder(schema, packer, config).write(value, root_type, None, root)
    encoded = packer.to_bytes()

    if config.max_bytes is not None and len(encoded) > config.max_bytes:
        raise EncodeError(
            f"Encoded message size ({len(encoded)} bytes) exceeds max_bytes={config.max_bytes}",
            path=root,
        )

    logger.debug("Encoded %s into %d bits", root, packer.bit_length())
    return encoded


class _StructEncoder:
    """Recursive writer for one encode call."""

    def __init__(self, schema: Schema, packer: BitPacker, config: CodecConfig) -> None:
        self.schema = schema
        self.packer = packer
        self.config = config

    def write(
        self,
        value: Any,
        field_type: FieldType,
        parent_fields: Mapping[str, Any] | None,
        path: str,
    ) -> None:
        """Write one value.

        Args:
            value: Value to write
            field_type: Schema type of the value
            parent_fields: Sibling values already written in the enclosing struct
            path: Field path used in error messages

        Raises:
            BitexprError: Any codec error, with ``path`` filled in
        """
        try:
            self._write(value, field_type, parent_fields, path)
        except BitexprError as e:
            if e.path is None:
                e.path = path
            raise

    def _write(
        self,
        value: Any,
        field_type: FieldType,
        parent_fields: Mapping[str, Any] | None,
        path: str,
    ) -> None:
        packer = self.packer

        if isinstance(field_type, IntType):
            if isinstance(value, bool) or not isinstance(value, int):
                raise EncodeError(f"expected int, got {type(value).__name__}")
            if field_type.signed:
                packer.write_int(value, field_type.width)
            else:
                packer.write_uint(value, field_type.width)
            return

        if isinstance(field_type, (Float32Type, Float64Type)):
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise EncodeError(f"expected float, got {type(value).__name__}")
            try:
                number = float(value)
            except OverflowError:
                # Integers beyond float range saturate like out-of-range floats
                number = math.inf if value > 0 else -math.inf
            if isinstance(field_type, Float32Type):
                packer.write_float32(number)
            else:
                packer.write_float64(number)
            return

        if isinstance(field_type, (CStringType, HebrewStringType)):
            if not isinstance(value, str):
                raise EncodeError(
                    f"expected string for {field_type.kind}, got {type(value).__name__}"
                )
            packer.write_cstring(value, get_codec(field_type.kind))
            return

        if isinstance(field_type, EnumType):
            enum_def = self.schema.get_enum(field_type.name)
            code = enum_def.code_of(value) if isinstance(value, str) else None
            if code is None:
                raise SchemaError(f"Enum variant '{value}' not found in enum '{field_type.name}'")
            packer.write_bits64(code, field_type.width)
            return

        if isinstance(field_type, StructType):
            self._write_struct(value, field_type, path)
            return

        if isinstance(field_type, ArrayType):
            self._write_array(value, field_type, parent_fields, path)
            return

        if isinstance(field_type, MatchType):
            label = resolved_label(parent_fields, field_type.discriminant)
            if label is None:
                raise ResolutionError(
                    f"Discriminant '{field_type.discriminant}' is not resolved before this field"
                )
            case_type = field_type.cases.get(label)
            if case_type is None:
                raise SchemaError(
                    f"Variant '{label}' not found in cases for enum '{field_type.enum_type_name}'"
                )
            self._write(value, case_type, parent_fields, path)
            return

        raise EncodeError(f"unsupported field type {type(field_type).__name__}")

    def _write_struct(self, value: Any, field_type: StructType, path: str) -> None:
        struct = self.schema.get_struct(field_type.name)
        if not isinstance(value, Mapping):
            raise EncodeError(
                f"expected mapping for struct '{field_type.name}', got {type(value).__name__}"
            )

        # Siblings as written, defaults included, for Match and Dynamic lookups
        written: dict[str, Any] = {}
        for name, member_type in struct.fields:
            member = value.get(name)
            if member is None:
                member = default_value(self.schema, member_type, written)
            self.write(member, member_type, written, child_path(path, name))
            written[name] = member

    def _write_array(
        self,
        value: Any,
        field_type: ArrayType,
        parent_fields: Mapping[str, Any] | None,
        path: str,
    ) -> None:
        if isinstance(field_type.length, StaticLength):
            length = field_type.length.value
        else:
            resolved = resolved_count(parent_fields, field_type.length.field)
            if resolved is None:
                raise ResolutionError(
                    f"Dynamic array length field '{field_type.length.field}' "
                    "missing or not an integer"
                )
            length = resolved

        if not isinstance(value, (list, tuple)):
            raise EncodeError(f"expected array, got {type(value).__name__}")

        if len(value) != length:
            if self.config.strict_arrays:
                raise EncodeError(f"Array length mismatch: expected {length}, got {len(value)}")
            if len(value) > length:
                logger.warning(
                    "%s: dropping %d array elements beyond length %d",
                    path,
                    len(value) - length,
                    length,
                )

        for i in range(length):
            element = value[i] if i < len(value) else None
            if element is None:
                element = default_value(self.schema, field_type.element_type, parent_fields)
            self.write(element, field_type.element_type, parent_fields, index_path(path, i))

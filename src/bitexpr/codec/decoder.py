"""Compact binary decoder for schema-described values.

This module provides the decode() function that converts bit-packed data
back into a value tree. Decoding is tolerant of truncated input: when the
buffer runs out partway through a struct, the fields read so far are
returned instead of raising, so a viewer can always show something.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Mapping

from ..config import DEFAULT_CONFIG, CodecConfig
from ..exceptions import BitexprError, DecodeError, ResolutionError, SchemaError
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
from .bitpack import BitUnpacker
from .charsets import get_codec
from .context import child_path, index_path, resolved_count, resolved_label

if TYPE_CHECKING:
    from .schema import Schema

logger = logging.getLogger(__name__)


def decode(
    schema: Schema, data: bytes, root: str, config: CodecConfig | None = None
) -> dict[str, Any] | None:
    """Decode bit-packed data as the struct ``root``.

    Args:
        schema: Schema to decode against
        data: Binary data to decode (may be truncated)
        root: Name of the root struct
        config: Codec options, CodecConfig() if None

    Returns:
        Field mapping of the root struct. If the data ends early the mapping
        holds only the fields read before the end (nested structs and arrays
        may be partial too). None if not a single field could be read.

    Raises:
        SchemaError: Unknown struct/enum, or no Match case for a decoded label
        ResolutionError: A Match discriminant or dynamic array length is not
            among the fields decoded before it
        DecodeError: An enum code has no label

    Examples:
        ```python
        from bitexpr import Schema, decode

        schema = Schema.from_payload(payload)
        decode(schema, b"\\x01\\x03\\x01\\x02\\x03", "Packet")
        # {'opcode': 'DATA', 'len': 3, 'payload': [1, 2, 3]}
        decode(schema, b"\\x01\\x03\\x01", "Packet")
        # {'opcode': 'DATA', 'len': 3, 'payload': [1]}
        ```
    """
    config = config or DEFAULT_CONFIG
    unpacker = BitUnpacker(data)
    reader = _StructDecoder(schema, unpacker)

    value = reader.read(StructType(name=root), None, root)

    if reader.truncated:
        logger.debug("Data for %s truncated after %d bits", root, unpacker.position())
    elif config.warn_trailing_bytes and unpacker.bits_remaining() >= 8:
        logger.warning(
            "Buffer length mismatch: read %d bytes but buffer has %d bytes",
            (unpacker.position() + 7) // 8,
            len(data),
        )

    return value


class _StructDecoder:
    """Recursive reader for one decode call.

    Every read returns None when the data runs out. From then on ``truncated``
    is set and every container stops reading, so nothing is decoded from past
    the truncation point.
    """

    def __init__(self, schema: Schema, unpacker: BitUnpacker) -> None:
        self.schema = schema
        self.unpacker = unpacker
        self.truncated = False

    def read(
        self,
        field_type: FieldType,
        parent_fields: Mapping[str, Any] | None,
        path: str,
    ) -> Any:
        """Read one value, or None if the data ran out first.

        Raises:
            BitexprError: Any codec error, with ``path`` filled in
        """
        try:
            value = self._read(field_type, parent_fields, path)
        except BitexprError as e:
            if e.path is None:
                e.path = path
            raise
        if value is None:
            self.truncated = True
        return value

    def _read(
        self,
        field_type: FieldType,
        parent_fields: Mapping[str, Any] | None,
        path: str,
    ) -> Any:
        unpacker = self.unpacker

        if isinstance(field_type, IntType):
            if field_type.signed:
                return unpacker.read_int(field_type.width)
            return unpacker.read_uint(field_type.width)

        if isinstance(field_type, Float32Type):
            return unpacker.read_float32()

        if isinstance(field_type, Float64Type):
            return unpacker.read_float64()

        if isinstance(field_type, (CStringType, HebrewStringType)):
            return unpacker.read_cstring(get_codec(field_type.kind))

        if isinstance(field_type, EnumType):
            enum_def = self.schema.get_enum(field_type.name)
            if field_type.signed:
                code = unpacker.read_int(field_type.width)
            else:
                code = unpacker.read_uint(field_type.width)
            if code is None:
                return None
            label = enum_def.label_of(code)
            if label is None:
                raise DecodeError(f"Unknown enum value '{code}' for enum '{field_type.name}'")
            return label

        if isinstance(field_type, StructType):
            return self._read_struct(field_type, path)

        if isinstance(field_type, ArrayType):
            return self._read_array(field_type, parent_fields, path)

        if isinstance(field_type, MatchType):
            label = resolved_label(parent_fields, field_type.discriminant)
            if label is None:
                raise ResolutionError(
                    f"Discriminant '{field_type.discriminant}' not available or not a label"
                )
            case_type = field_type.cases.get(label)
            if case_type is None:
                raise SchemaError(f"No match case for '{label}'")
            return self._read(case_type, parent_fields, path)

        raise DecodeError(f"unsupported field type {type(field_type).__name__}")

    def _read_struct(self, field_type: StructType, path: str) -> dict[str, Any] | None:
        struct = self.schema.get_struct(field_type.name)

        fields: dict[str, Any] = {}
        for name, member_type in struct.fields:
            member = self.read(member_type, fields, child_path(path, name))
            if member is not None:
                fields[name] = member
            if self.truncated:
                return fields or None
        return fields

    def _read_array(
        self,
        field_type: ArrayType,
        parent_fields: Mapping[str, Any] | None,
        path: str,
    ) -> list[Any] | None:
        if isinstance(field_type.length, StaticLength):
            length = field_type.length.value
        else:
            resolved = resolved_count(parent_fields, field_type.length.field)
            if resolved is None:
                raise ResolutionError(
                    f"Dynamic array length field '{field_type.length.field}' missing or invalid"
                )
            length = resolved

        values: list[Any] = []
        for i in range(length):
            element = self.read(field_type.element_type, parent_fields, index_path(path, i))
            if element is not None:
                values.append(element)
            if self.truncated:
                logger.debug(
                    "%s: array truncated after %d of %d elements", path, len(values), length
                )
                return values or None
        return values

"""Message size calculation utilities.

This module computes how many bits a type occupies on the wire without
encoding anything. Strings, dynamic arrays and Match fields have
data-dependent sizes, so sizes are computed in one of three modes:

- ``default``: the size of the value as currently known, filling gaps with
  declared defaults (a live "current size" for a half-filled form)
- ``min``: a lower bound over every value the unknown parts could take
- ``max``: an upper bound, ``math.inf`` when a string or dynamic array is
  unconstrained
"""

from __future__ import annotations

import enum
import math
from typing import TYPE_CHECKING, Any, Iterator, Mapping, Union

from ..codec.charsets import get_codec
from ..codec.context import resolved_count, resolved_label
from ..exceptions import SchemaError
from ..models.definitions import StructDefinition
from ..models.fields import (
    FIXED_WIDTH_TYPES,
    STRING_TYPES,
    ArrayType,
    EnumType,
    FieldType,
    IntType,
    MatchType,
    StaticLength,
    StructType,
)

if TYPE_CHECKING:
    from ..codec.schema import Schema

# An exact bit count, or math.inf for an unbounded maximum
Bits = Union[int, float]


class SizeMode(str, enum.Enum):
    MIN = "min"
    MAX = "max"
    DEFAULT = "default"


def size_of_bits(
    schema: Schema,
    field_type: FieldType,
    mode: SizeMode | str,
    value: Any = None,
    parent_fields: Mapping[str, Any] | None = None,
) -> Bits:
    """Calculate the encoded size of ``field_type`` in bits.

    Args:
        schema: Schema to resolve references against
        field_type: Type to measure
        mode: ``"min"``, ``"max"`` or ``"default"``
        value: Concrete (possibly partial) value, if known
        parent_fields: Sibling values, used to resolve Match discriminants
            and dynamic array lengths

    Returns:
        Size in bits, or ``math.inf`` for an unbounded maximum. A struct that
        contains itself through a Match case is unbounded on that branch, so
        ``min`` picks the other cases and ``max`` is ``math.inf``.

    Raises:
        SchemaError: If a reference is unknown or a resolved discriminant has no case
        ValueError: If mode is not a valid SizeMode

    Example:
        >>> size_of_bits(schema, StructRef("Packet"), "max")
        inf
        >>> size_of_bits(schema, StructRef("Packet"), "default", {"opcode": "PING"})
        16
    """
    return _size_of(schema, field_type, SizeMode(mode), value, parent_fields, frozenset())


def _size_of(
    schema: Schema,
    field_type: FieldType,
    mode: SizeMode,
    value: Any,
    parent_fields: Mapping[str, Any] | None,
    visiting: frozenset[str],
) -> Bits:
    if isinstance(field_type, FIXED_WIDTH_TYPES):
        if isinstance(field_type, EnumType):
            schema.get_enum(field_type.name)
        return field_type.width

    if isinstance(field_type, STRING_TYPES):
        text = value if isinstance(value, str) else None
        if text is None and mode is SizeMode.DEFAULT:
            text = field_type.default
        if text is not None:
            # Encoded bytes plus the zero terminator
            return (len(get_codec(field_type.kind).encode(text)) + 1) * 8
        return math.inf if mode is SizeMode.MAX else 8

    if isinstance(field_type, StructType):
        struct = schema.get_struct(field_type.name)
        if not isinstance(value, Mapping):
            # Without a value nothing bounds the depth of a self-reference
            if field_type.name in visiting:
                return math.inf
            visiting = visiting | {field_type.name}
        total: Bits = 0
        for _, bits in _member_sizes(schema, struct, mode, value, visiting):
            total += bits
        return total

    if isinstance(field_type, ArrayType):
        return _size_of_array(schema, field_type, mode, value, parent_fields, visiting)

    if isinstance(field_type, MatchType):
        return _size_of_match(schema, field_type, mode, value, parent_fields, visiting)

    raise SchemaError(f"Unsupported field type {type(field_type).__name__}")


def _member_sizes(
    schema: Schema,
    struct: StructDefinition,
    mode: SizeMode,
    value: Any,
    visiting: frozenset[str],
) -> Iterator[tuple[str, Bits]]:
    """Yield (field name, bits) for each field of ``struct``.

    In default mode a missing Int or Enum field takes its default, as the
    encoder would write it, so later Match and dynamic-array fields resolve
    against the same sibling values.
    """
    context: dict[str, Any] = dict(value) if isinstance(value, Mapping) else {}
    for name, member_type in struct.fields:
        member = context.get(name)
        if member is None and mode is SizeMode.DEFAULT:
            member = _context_default(schema, member_type)
            if member is not None:
                context[name] = member
            yield name, _size_of(schema, member_type, mode, None, context, visiting)
            continue
        yield name, _size_of(schema, member_type, mode, member, context, visiting)


def _context_default(schema: Schema, field_type: FieldType) -> Any:
    if isinstance(field_type, IntType):
        return field_type.default if field_type.default is not None else 0
    if isinstance(field_type, EnumType):
        if field_type.default is not None:
            return field_type.default
        return schema.get_enum(field_type.name).first_label()
    return None


def _size_of_array(
    schema: Schema,
    field_type: ArrayType,
    mode: SizeMode,
    value: Any,
    parent_fields: Mapping[str, Any] | None,
    visiting: frozenset[str],
) -> Bits:
    if isinstance(field_type.length, StaticLength):
        count = field_type.length.value
    else:
        resolved = resolved_count(parent_fields, field_type.length.field)
        if resolved is not None:
            count = resolved
        elif mode is SizeMode.MAX:
            return math.inf
        else:
            count = 0

    if count == 0:
        return 0

    elements = value if isinstance(value, (list, tuple)) else ()
    if not elements:
        element_bits = _size_of(
            schema, field_type.element_type, mode, None, parent_fields, visiting
        )
        return count * element_bits

    total: Bits = 0
    for i in range(count):
        element = elements[i] if i < len(elements) else None
        total += _size_of(schema, field_type.element_type, mode, element, parent_fields, visiting)
    return total


def _size_of_match(
    schema: Schema,
    field_type: MatchType,
    mode: SizeMode,
    value: Any,
    parent_fields: Mapping[str, Any] | None,
    visiting: frozenset[str],
) -> Bits:
    label = resolved_label(parent_fields, field_type.discriminant)
    if label is not None:
        case_type = field_type.cases.get(label)
        if case_type is None:
            raise SchemaError(f"No case in match for enum value '{label}'")
        return _size_of(schema, case_type, mode, value, parent_fields, visiting)

    if mode is SizeMode.DEFAULT:
        label = schema.get_enum(field_type.enum_type_name).first_label()
        case_type = field_type.cases.get(label) if label is not None else None
        if case_type is None:
            return 0
        return _size_of(schema, case_type, mode, None, parent_fields, visiting)

    sizes = [
        _size_of(schema, case_type, mode, None, parent_fields, visiting)
        for case_type in field_type.cases.values()
    ]
    if not sizes:
        return 0
    return max(sizes) if mode is SizeMode.MAX else min(sizes)


def min_size_of(
    schema: Schema,
    field_type: FieldType,
    value: Any = None,
    parent_fields: Mapping[str, Any] | None = None,
) -> Bits:
    return size_of_bits(schema, field_type, SizeMode.MIN, value, parent_fields)


def max_size_of(
    schema: Schema,
    field_type: FieldType,
    value: Any = None,
    parent_fields: Mapping[str, Any] | None = None,
) -> Bits:
    return size_of_bits(schema, field_type, SizeMode.MAX, value, parent_fields)


def default_size_of(
    schema: Schema,
    field_type: FieldType,
    value: Any = None,
    parent_fields: Mapping[str, Any] | None = None,
) -> Bits:
    return size_of_bits(schema, field_type, SizeMode.DEFAULT, value, parent_fields)


def encoded_bits(
    schema: Schema, root: str, value: Any = None, mode: SizeMode | str = SizeMode.DEFAULT
) -> Bits:
    """Calculate the size of the root struct ``root`` in bits.

    Args:
        schema: Schema to resolve references against
        root: Name of the root struct
        value: Concrete (possibly partial) value, if known
        mode: Size mode, ``"default"`` unless given

    Returns:
        Size in bits

    Example:
        >>> encoded_bits(schema, "Packet", {"opcode": "DATA", "len": 3, "payload": [1, 2, 3]})
        40
    """
    return size_of_bits(schema, StructType(name=root), mode, value)


def encoded_size(
    schema: Schema, root: str, value: Any = None, mode: SizeMode | str = SizeMode.DEFAULT
) -> Bits:
    """Calculate the size of the root struct ``root`` in bytes (rounded up).

    Returns:
        Size in bytes, or ``math.inf`` for an unbounded maximum
    """
    bits = encoded_bits(schema, root, value, mode)
    if math.isinf(bits):
        return bits
    return (int(bits) + 7) // 8  # Round up to nearest byte


def field_sizes(
    schema: Schema, root: str, value: Any = None, mode: SizeMode | str = SizeMode.DEFAULT
) -> dict[str, Bits]:
    """Get the size in bits of each field of the struct ``root``.

    Returns:
        Dictionary mapping field names to their size in bits

    Example:
        >>> field_sizes(schema, "Packet", {"opcode": "DATA", "len": 3})
        {'opcode': 8, 'len': 8, 'payload': 24}
    """
    struct = schema.get_struct(root)
    return dict(_member_sizes(schema, struct, SizeMode(mode), value, frozenset({root})))

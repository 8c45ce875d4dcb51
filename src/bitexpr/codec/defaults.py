"""Default value generation.

The encoder fills every field the caller left out with a value from this
module, and the presentation layer seeds new forms with it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Mapping

from ..exceptions import SchemaError
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
from .context import resolved_count, resolved_label

if TYPE_CHECKING:
    from .schema import Schema


def default_value(
    schema: Schema, field_type: FieldType, parent_fields: Mapping[str, Any] | None = None
) -> Any:
    """Build a fresh default value for ``field_type``.

    Args:
        schema: Schema to resolve struct and enum references against
        field_type: Type to build a value for
        parent_fields: Already-resolved sibling values, used by Match
            discriminants and dynamic array lengths

    Returns:
        Declared default or zero for numbers, declared default or "" for
        strings, declared default or first label for enums, a fully defaulted
        mapping for structs, a resolved-length list for arrays, and the
        default of the selected case for Match fields

    Raises:
        SchemaError: If a referenced struct or enum is missing, an enum is
            empty, the selected Match case does not exist, or the defaults
            select a case that contains the struct being built
    """
    return _default_value(schema, field_type, parent_fields, frozenset())


def _default_value(
    schema: Schema,
    field_type: FieldType,
    parent_fields: Mapping[str, Any] | None,
    building: frozenset[str],
) -> Any:
    if isinstance(field_type, IntType):
        return field_type.default if field_type.default is not None else 0

    if isinstance(field_type, (Float32Type, Float64Type)):
        return float(field_type.default) if field_type.default is not None else 0.0

    if isinstance(field_type, (CStringType, HebrewStringType)):
        return field_type.default if field_type.default is not None else ""

    if isinstance(field_type, EnumType):
        enum_def = schema.get_enum(field_type.name)
        if field_type.default is not None:
            return field_type.default
        first = enum_def.first_label()
        if first is None:
            raise SchemaError(f"Enum '{field_type.name}' has no entries")
        return first

    if isinstance(field_type, StructType):
        struct = schema.get_struct(field_type.name)
        if field_type.name in building:
            raise SchemaError(f"Struct '{field_type.name}' has no finite default value")
        building = building | {field_type.name}
        fields: dict[str, Any] = {}
        for name, member_type in struct.fields:
            fields[name] = _default_value(schema, member_type, fields, building)
        return fields

    if isinstance(field_type, ArrayType):
        if isinstance(field_type.length, StaticLength):
            count = field_type.length.value
        else:
            count = resolved_count(parent_fields, field_type.length.field) or 0
        return [
            _default_value(schema, field_type.element_type, parent_fields, building)
            for _ in range(count)
        ]

    if isinstance(field_type, MatchType):
        label = resolved_label(parent_fields, field_type.discriminant)
        if label is None:
            label = schema.get_enum(field_type.enum_type_name).first_label()
        case_type = field_type.cases.get(label) if label is not None else None
        if case_type is None:
            raise SchemaError(
                f"No variant in match '{field_type.discriminant}' for enum value '{label}'"
            )
        return _default_value(schema, case_type, parent_fields, building)

    raise SchemaError(f"Unsupported field type {type(field_type).__name__}")

"""Context-dependent value shape validation.

Whether a value fits a Match or dynamic-length Array depends on the sibling
values around it, so validity is checked against a parent field mapping
rather than the type alone.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Mapping

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


def value_matches_type(
    schema: Schema,
    value: Any,
    field_type: FieldType,
    parent_fields: Mapping[str, Any] | None = None,
) -> bool:
    """Check that ``value`` has the shape ``field_type`` expects.

    Args:
        schema: Schema to resolve references against
        value: Value tree to check
        field_type: Expected type
        parent_fields: Sibling values of ``value``, needed for Match and
            dynamic Array types

    Returns:
        True if the value can be encoded as-is. Struct mappings must hold
        exactly the declared fields, arrays must have the resolved length and
        Match values must fit the case chosen by the parent's discriminant.
        An unresolvable discriminant or length makes the value invalid.

    Raises:
        SchemaError: If the type references an unknown struct or enum
    """
    if isinstance(field_type, IntType):
        return isinstance(value, int) and not isinstance(value, bool)

    if isinstance(field_type, (Float32Type, Float64Type)):
        return isinstance(value, (int, float)) and not isinstance(value, bool)

    if isinstance(field_type, (CStringType, HebrewStringType)):
        return isinstance(value, str)

    if isinstance(field_type, EnumType):
        enum_def = schema.get_enum(field_type.name)
        return isinstance(value, str) and enum_def.code_of(value) is not None

    if isinstance(field_type, StructType):
        struct = schema.get_struct(field_type.name)
        if not isinstance(value, Mapping):
            return False
        if set(value) != set(struct.field_names()):
            return False
        return all(
            value_matches_type(schema, value[name], member_type, value)
            for name, member_type in struct.fields
        )

    if isinstance(field_type, ArrayType):
        if not isinstance(value, (list, tuple)):
            return False
        if isinstance(field_type.length, StaticLength):
            expected = field_type.length.value
        else:
            expected = resolved_count(parent_fields, field_type.length.field)
            if expected is None:
                return False
        if len(value) != expected:
            return False
        return all(
            value_matches_type(schema, element, field_type.element_type, parent_fields)
            for element in value
        )

    if isinstance(field_type, MatchType):
        label = resolved_label(parent_fields, field_type.discriminant)
        if label is None or label not in field_type.cases:
            return False
        return value_matches_type(schema, value, field_type.cases[label], parent_fields)

    return False

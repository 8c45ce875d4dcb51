"""Consistency checks over a loaded schema.

The codec resolves references lazily, so an inconsistent schema only fails
when a value reaches the broken part. check_schema() finds those problems
up front: dangling references, recursive structs, duplicate names, and
Match or dynamic-length fields whose sibling is missing or declared too late.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterator

from ..models.fields import (
    ArrayType,
    DynamicLength,
    EnumType,
    FieldType,
    IntType,
    MatchType,
    StructType,
)

if TYPE_CHECKING:
    from ..models.definitions import StructDefinition
    from .schema import Schema


def check_schema(schema: Schema) -> list[str]:
    """Return a description of every consistency problem in ``schema``.

    Args:
        schema: Schema to check

    Returns:
        Problem descriptions, empty if the schema is consistent
    """
    problems: list[str] = []

    for enum_def in schema.enums.values():
        labels: set[str] = set()
        codes: set[int] = set()
        for label, code in enum_def.entries:
            if label in labels:
                problems.append(f"Enum '{enum_def.name}': duplicate variant '{label}'")
            if code in codes:
                problems.append(f"Enum '{enum_def.name}': duplicate code {code}")
            labels.add(label)
            codes.add(code)
        if not enum_def.entries:
            problems.append(f"Enum '{enum_def.name}': no variants")

    for struct in schema.structs.values():
        problems.extend(_check_struct(schema, struct))

    problems.extend(_check_recursion(schema))
    return problems


def _check_struct(schema: Schema, struct: StructDefinition) -> Iterator[str]:
    seen: dict[str, FieldType] = {}
    for name, field_type in struct.fields:
        where = f"{struct.name}.{name}"
        if name in seen:
            yield f"{where}: duplicate field '{name}' in struct"
        yield from _check_field(schema, field_type, seen, where)
        seen[name] = field_type


def _check_field(
    schema: Schema, field_type: FieldType, earlier: dict[str, FieldType], where: str
) -> Iterator[str]:
    if isinstance(field_type, StructType):
        if field_type.name not in schema.structs:
            yield f"{where}: undefined struct type '{field_type.name}'"

    elif isinstance(field_type, EnumType):
        enum_def = schema.enums.get(field_type.name)
        if enum_def is None:
            yield f"{where}: undefined enum type '{field_type.name}'"
            return
        for label, code in enum_def.entries:
            if not _fits(code, field_type.width, field_type.signed):
                yield f"{where}: code {code} of '{label}' does not fit in {field_type.width} bits"
        if field_type.default is not None and enum_def.code_of(field_type.default) is None:
            yield f"{where}: default '{field_type.default}' is not a variant of '{field_type.name}'"

    elif isinstance(field_type, ArrayType):
        if isinstance(field_type.length, DynamicLength):
            length_type = earlier.get(field_type.length.field)
            if not isinstance(length_type, IntType):
                yield (
                    f"{where}: length field '{field_type.length.field}' must be an integer "
                    f"field declared before the array"
                )
        yield from _check_field(schema, field_type.element_type, earlier, f"{where}[]")

    elif isinstance(field_type, MatchType):
        enum_def = schema.enums.get(field_type.enum_type_name)
        if enum_def is None:
            yield f"{where}: undefined enum type '{field_type.enum_type_name}'"
            return
        discriminant_type = earlier.get(field_type.discriminant)
        if not (
            isinstance(discriminant_type, EnumType)
            and discriminant_type.name == field_type.enum_type_name
        ):
            yield (
                f"{where}: discriminant '{field_type.discriminant}' must be a "
                f"'{field_type.enum_type_name}' field declared before the match"
            )
        labels = enum_def.labels()
        for label, case_type in field_type.cases.items():
            if label not in labels:
                yield f"{where}: unknown variant '{label}' of enum '{enum_def.name}'"
            yield from _check_field(schema, case_type, earlier, f"{where}<{label}>")
        missing = [label for label in labels if label not in field_type.cases]
        if missing:
            yield f"{where}: missing match cases {', '.join(missing)}"


def _fits(code: int, width: int, signed: bool) -> bool:
    if signed:
        return -(1 << (width - 1)) <= code < (1 << (width - 1))
    return 0 <= code < (1 << width)


def _check_recursion(schema: Schema) -> list[str]:
    problems: list[str] = []
    visited: set[str] = set()

    def dfs(name: str, stack: list[str]) -> None:
        if name in stack:
            cycle = stack[stack.index(name) :] + [name]
            problems.append(f"Recursive struct definition detected: {' -> '.join(cycle)}")
            return
        if name in visited:
            return
        visited.add(name)
        struct = schema.structs.get(name)
        if struct is None:
            return
        stack.append(name)
        for _, field_type in struct.fields:
            for referenced in _direct_structs(field_type):
                dfs(referenced, stack)
        stack.pop()

    for name in schema.structs:
        dfs(name, [])
    return problems


def _direct_structs(field_type: FieldType) -> Iterator[str]:
    """Yield struct names embedded unconditionally in a field.

    Match cases and dynamic arrays can end the recursion at runtime, so only
    direct struct fields and static arrays of length > 0 count.
    """
    if isinstance(field_type, StructType):
        yield field_type.name
    elif isinstance(field_type, ArrayType) and not isinstance(field_type.length, DynamicLength):
        if field_type.length.value > 0:
            yield from _direct_structs(field_type.element_type)

"""Field type models and helper constructors.

A FieldType is a closed tagged union discriminated on ``kind``. Every codec
component dispatches on the concrete model class, so adding a kind means
touching each of them.
"""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import Field

from .base import SchemaModel


class IntType(SchemaModel):
    """Integer of 1-64 bits, two's complement when signed."""

    kind: Literal["Int"] = "Int"
    signed: bool = False
    width: int = Field(ge=1, le=64)
    default: int | None = None


class Float32Type(SchemaModel):
    """IEEE-754 single precision, 32 bits."""

    kind: Literal["f32"] = "f32"
    default: float | None = None

    @property
    def width(self) -> int:
        return 32


class Float64Type(SchemaModel):
    """IEEE-754 double precision, 64 bits."""

    kind: Literal["f64"] = "f64"
    default: float | None = None

    @property
    def width(self) -> int:
        return 64


class CStringType(SchemaModel):
    """Null-terminated UTF-8 string."""

    kind: Literal["CString"] = "CString"
    default: str | None = None


class HebrewStringType(SchemaModel):
    """Null-terminated string in the single-byte Hebrew alphabet."""

    kind: Literal["HebrewString"] = "HebrewString"
    default: str | None = None


class EnumType(SchemaModel):
    """Reference to a named enum, serialized as a ``width``-bit code."""

    kind: Literal["Enum"] = "Enum"
    name: str
    signed: bool = False
    width: int = Field(ge=1, le=64)
    default: str | None = None


class StructType(SchemaModel):
    """Reference to a named struct."""

    kind: Literal["Struct"] = "Struct"
    name: str


class StaticLength(SchemaModel):
    kind: Literal["Static"] = "Static"
    value: int = Field(ge=0)


class DynamicLength(SchemaModel):
    """Element count read from an earlier sibling field."""

    kind: Literal["Dynamic"] = "Dynamic"
    field: str


ArrayLength = Annotated[Union[StaticLength, DynamicLength], Field(discriminator="kind")]


class ArrayType(SchemaModel):
    """Sequence of ``element_type`` with a static or sibling-driven length."""

    kind: Literal["Array"] = "Array"
    element_type: FieldType = Field(alias="elementType")
    length: ArrayLength


class MatchType(SchemaModel):
    """Discriminated union keyed on the label held by a sibling enum field."""

    kind: Literal["Match"] = "Match"
    discriminant: str
    enum_type_name: str = Field(alias="enumTypeName")
    cases: dict[str, FieldType]


FieldType = Annotated[
    Union[
        IntType,
        Float32Type,
        Float64Type,
        CStringType,
        HebrewStringType,
        EnumType,
        StructType,
        ArrayType,
        MatchType,
    ],
    Field(discriminator="kind"),
]

# Types with a width that does not depend on the value
FIXED_WIDTH_TYPES = (IntType, Float32Type, Float64Type, EnumType)
STRING_TYPES = (CStringType, HebrewStringType)

ArrayType.model_rebuild()
MatchType.model_rebuild()


def Int(width: int, *, signed: bool = False, default: int | None = None) -> IntType:
    """Create an integer field type.

    Example:
        >>> Int(12, signed=True)
        IntType(kind='Int', signed=True, width=12, default=None)
    """
    return IntType(width=width, signed=signed, default=default)


def Float32(default: float | None = None) -> Float32Type:
    return Float32Type(default=default)


def Float64(default: float | None = None) -> Float64Type:
    return Float64Type(default=default)


def CString(default: str | None = None) -> CStringType:
    return CStringType(default=default)


def HebrewString(default: str | None = None) -> HebrewStringType:
    return HebrewStringType(default=default)


def EnumRef(
    name: str, width: int, *, signed: bool = False, default: str | None = None
) -> EnumType:
    """Create a field type referencing the enum ``name``."""
    return EnumType(name=name, width=width, signed=signed, default=default)


def StructRef(name: str) -> StructType:
    return StructType(name=name)


def ArrayOf(element_type: FieldType, length: int | str) -> ArrayType:
    """Create an array field type.

    Args:
        element_type: Type of each element
        length: Element count (static) or name of the sibling field holding it (dynamic)

    Example:
        >>> ArrayOf(Int(8), 4)           # four bytes
        >>> ArrayOf(Int(8), "count")     # as many bytes as the "count" field says
    """
    if isinstance(length, str):
        return ArrayType(element_type=element_type, length=DynamicLength(field=length))
    return ArrayType(element_type=element_type, length=StaticLength(value=length))


def MatchOn(
    discriminant: str, enum_type_name: str, cases: dict[str, FieldType]
) -> MatchType:
    """Create a discriminated union keyed on the sibling field ``discriminant``."""
    return MatchType(discriminant=discriminant, enum_type_name=enum_type_name, cases=cases)

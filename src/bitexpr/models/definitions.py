"""Top-level definitions of a schema payload: named structs and enums."""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import Field

from .base import SchemaModel
from .fields import FieldType


class StructDefinition(SchemaModel):
    """A named struct: ordered (field name, field type) pairs.

    Field order is wire order.
    """

    type: Literal["Struct"] = "Struct"
    name: str
    fields: tuple[tuple[str, FieldType], ...] = ()

    def field_names(self) -> list[str]:
        return [name for name, _ in self.fields]

    def field_types(self) -> dict[str, FieldType]:
        return dict(self.fields)


class EnumDefinition(SchemaModel):
    """A named enum: ordered (label, code) pairs.

    Codes need not be ordinal positions; the first label is the fallback
    default wherever an enum value has to be invented.
    """

    type: Literal["Enum"] = "Enum"
    name: str
    entries: tuple[tuple[str, int], ...] = ()

    def labels(self) -> list[str]:
        return [label for label, _ in self.entries]

    def code_of(self, label: str) -> int | None:
        for entry_label, code in self.entries:
            if entry_label == label:
                return code
        return None

    def label_of(self, code: int) -> str | None:
        for label, entry_code in self.entries:
            if entry_code == code:
                return label
        return None

    def first_label(self) -> str | None:
        return self.entries[0][0] if self.entries else None


Definition = Annotated[Union[StructDefinition, EnumDefinition], Field(discriminator="type")]

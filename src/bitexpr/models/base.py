"""Base model and shared Pydantic configuration for schema payloads.

Every node of a schema definition payload (field types, array lengths,
struct and enum definitions) is a frozen Pydantic model built on SchemaModel.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class SchemaModel(BaseModel):
    """Base class for all schema payload models.

    Payloads arrive as JSON produced by the schema compiler, which uses
    camelCase keys (``elementType``, ``enumTypeName``). Models declare those as
    aliases and accept the snake_case attribute names too.

    Example:
        >>> from bitexpr.models import ArrayType
        >>> ArrayType.model_validate(
        ...     {"elementType": {"kind": "f32"}, "length": {"kind": "Static", "value": 4}}
        ... )
    """

    model_config = ConfigDict(
        # A schema is immutable once loaded
        frozen=True,
        # Unknown keys are payload errors
        extra="forbid",
        # Accept both "elementType" and "element_type"
        populate_by_name=True,
    )

    def to_payload(self) -> dict:
        """Dump the model back to the compiler's JSON shape."""
        return self.model_dump(by_alias=True, exclude_none=True)

"""Schema registry built from a definition payload.

This module provides the Schema class: the immutable registry of named
structs and enums that every codec component resolves references against.
"""

from __future__ import annotations

import json
import logging
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Iterable, Mapping

from pydantic import TypeAdapter, ValidationError

from ..exceptions import SchemaError
from ..models.definitions import Definition, EnumDefinition, StructDefinition

if TYPE_CHECKING:
    from ..config import CodecConfig
    from ..models.fields import FieldType
    from ..utils.sizing import Bits, SizeMode

logger = logging.getLogger(__name__)

_PAYLOAD_ADAPTER: TypeAdapter[list[Definition]] = TypeAdapter(list[Definition])


class Schema:
    """Immutable registry of struct and enum definitions.

    The schema is built once and never changes; encode, decode, sizing and
    default generation only read from it, so one instance can be shared
    between calls. Refreshing a schema means building a new instance.

    Example:
        >>> schema = Schema.from_payload([
        ...     {"type": "Enum", "name": "Op", "entries": [["PING", 0], ["DATA", 1]]},
        ...     {"type": "Struct", "name": "Packet", "fields": [
        ...         ["opcode", {"kind": "Enum", "name": "Op", "width": 8}],
        ...     ]},
        ... ])
        >>> schema.encode({"opcode": "DATA"}, "Packet")
        b'\\x01'
    """

    def __init__(self, definitions: Iterable[StructDefinition | EnumDefinition]) -> None:
        """Initialize the registry from validated definitions.

        Args:
            definitions: Struct and enum definitions

        Raises:
            SchemaError: If two definitions share a name
        """
        structs: dict[str, StructDefinition] = {}
        enums: dict[str, EnumDefinition] = {}

        for definition in definitions:
            if definition.name in structs or definition.name in enums:
                raise SchemaError(f"Duplicate definition name '{definition.name}'")
            if isinstance(definition, StructDefinition):
                structs[definition.name] = definition
            else:
                enums[definition.name] = definition

        self.structs: Mapping[str, StructDefinition] = MappingProxyType(structs)
        self.enums: Mapping[str, EnumDefinition] = MappingProxyType(enums)
        logger.debug("Loaded schema with %d structs, %d enums", len(structs), len(enums))

    @classmethod
    def from_payload(cls, payload: str | bytes | Iterable[Any], check: bool = False) -> Schema:
        """Create a schema from the compiler's definition payload.

        Args:
            payload: JSON text, or the already-parsed list of definitions
            check: If True, run check_schema() and reject inconsistent schemas

        Returns:
            Schema instance

        Raises:
            SchemaError: If the payload is malformed or (with check=True) inconsistent
        """
        try:
            if isinstance(payload, (str, bytes)):
                definitions = _PAYLOAD_ADAPTER.validate_json(payload)
            else:
                definitions = _PAYLOAD_ADAPTER.validate_python(list(payload))
        except ValidationError as e:
            raise SchemaError(f"Invalid schema payload: {e}") from e

        schema = cls(definitions)

        if check:
            from .checks import check_schema

            problems = check_schema(schema)
            if problems:
                raise SchemaError("Inconsistent schema:\n  " + "\n  ".join(problems))

        return schema

    def to_payload(self) -> list[dict[str, Any]]:
        """Dump the schema back to its definition payload."""
        definitions: list[StructDefinition | EnumDefinition] = [
            *self.enums.values(),
            *self.structs.values(),
        ]
        return [definition.to_payload() for definition in definitions]

    def to_json(self) -> str:
        return json.dumps(self.to_payload(), ensure_ascii=False)

    def get_struct(self, name: str) -> StructDefinition:
        """Return the struct named ``name``.

        Raises:
            SchemaError: If no such struct exists
        """
        struct = self.structs.get(name)
        if struct is None:
            raise SchemaError(f"Unknown struct '{name}'")
        return struct

    def get_enum(self, name: str) -> EnumDefinition:
        """Return the enum named ``name``.

        Raises:
            SchemaError: If no such enum exists
        """
        enum_def = self.enums.get(name)
        if enum_def is None:
            raise SchemaError(f"Unknown enum '{name}'")
        return enum_def

    def __contains__(self, name: object) -> bool:
        return name in self.structs or name in self.enums

    def __repr__(self) -> str:
        return f"Schema(structs={list(self.structs)}, enums={list(self.enums)})"

    # Entry points used by the presentation layer

    def encode(self, value: Any, root: str, config: CodecConfig | None = None) -> bytes:
        from .encoder import encode

        return encode(self, value, root, config=config)

    def decode(self, data: bytes, root: str, config: CodecConfig | None = None) -> Any:
        from .decoder import decode

        return decode(self, data, root, config=config)

    def size_of(
        self,
        field_type: FieldType,
        mode: SizeMode | str,
        value: Any = None,
        parent_fields: Mapping[str, Any] | None = None,
    ) -> Bits:
        from ..utils.sizing import size_of_bits

        return size_of_bits(self, field_type, mode, value=value, parent_fields=parent_fields)

    def default_value(
        self, field_type: FieldType, parent_fields: Mapping[str, Any] | None = None
    ) -> Any:
        from .defaults import default_value

        return default_value(self, field_type, parent_fields)

    def value_matches_type(
        self,
        value: Any,
        field_type: FieldType,
        parent_fields: Mapping[str, Any] | None = None,
    ) -> bool:
        from .validate import value_matches_type

        return value_matches_type(self, value, field_type, parent_fields)

"""Schema analysis and one-shot encode/decode CLI commands."""

from __future__ import annotations

import json
import math
from pathlib import Path
from typing import Any

from ..codec.checks import check_schema
from ..codec.schema import Schema
from ..models.fields import StructType
from ..utils.sizing import Bits, SizeMode, field_sizes, size_of_bits


def load_schema(file_path: Path) -> Schema:
    """Load a schema from a JSON definition payload file.

    Args:
        file_path: Path to the JSON payload

    Returns:
        Schema instance

    Raises:
        SchemaError: If the payload is malformed
    """
    return Schema.from_payload(file_path.read_bytes())


_COLUMNS = (SizeMode.MIN, SizeMode.DEFAULT, SizeMode.MAX)


def _format_bits(bits: Bits) -> str:
    return "inf" if math.isinf(bits) else str(int(bits))


def analyze_schema(schema: Schema, root: str | None = None) -> None:
    """Print a size breakdown of each struct (or only ``root``).

    Args:
        schema: Schema to analyze
        root: Name of the only struct to analyze, or None for all structs
    """
    names = [root] if root is not None else list(schema.structs)

    print("|" * 7, "bitexpr: bit-packed schema codec", "|" * 7)
    print(f"{len(names)} struct{'s' if len(names) != 1 else ''} loaded.")
    print("Field sizes are in bits unless otherwise noted.")
    print()

    for name in names:
        analyze_struct(schema, name)


def analyze_struct(schema: Schema, name: str) -> None:
    """Print min/default/max sizes of one struct and each of its fields.

    Args:
        schema: Schema containing the struct
        name: Struct name
    """
    print(f"{'=' * 19} {name} {'=' * 19}")

    per_mode = {mode: field_sizes(schema, name, mode=mode) for mode in _COLUMNS}
    struct = schema.get_struct(name)

    name_width = max([len(field_name) for field_name in struct.field_names()] + [5])
    print(f"  {'field':<{name_width}}  {'min':>8}  {'default':>8}  {'max':>8}")
    for field_name in struct.field_names():
        row = [_format_bits(per_mode[mode][field_name]) for mode in _COLUMNS]
        print(f"  {field_name:<{name_width}}  {row[0]:>8}  {row[1]:>8}  {row[2]:>8}")

    totals = [
        _format_bits(size_of_bits(schema, StructType(name=name), mode)) for mode in _COLUMNS
    ]
    print(f"  {'total':<{name_width}}  {totals[0]:>8}  {totals[1]:>8}  {totals[2]:>8}")
    print()


def report_problems(schema: Schema) -> int:
    """Print consistency problems of ``schema``.

    Returns:
        Number of problems found
    """
    problems = check_schema(schema)
    for problem in problems:
        print(f"  - {problem}")
    if not problems:
        print("Schema is consistent.")
    return len(problems)


def encode_to_hex(schema: Schema, value_json: str, root: str) -> str:
    """Encode a JSON value as ``root`` and return the bytes as hex."""
    value: Any = json.loads(value_json)
    return schema.encode(value, root).hex()


def decode_from_hex(schema: Schema, hex_data: str, root: str) -> str:
    """Decode hex bytes as ``root`` and return the value as JSON."""
    data = bytes.fromhex(hex_data.replace(" ", ""))
    return json.dumps(schema.decode(data, root), ensure_ascii=False)

"""Bit-packed codec for schema-described values.

This module provides encoding, decoding, default generation and shape
validation for values described by a Schema.
"""

from __future__ import annotations

from .checks import check_schema
from .decoder import decode
from .defaults import default_value
from .encoder import encode
from .schema import Schema
from .validate import value_matches_type

__all__ = [
    "encode",
    "decode",
    "default_value",
    "value_matches_type",
    "check_schema",
    "Schema",
]

"""Pydantic models for schema definition payloads.

This module provides the FieldType tagged union, the struct and enum
definition models, and helper constructors for building schemas in code.
"""

from __future__ import annotations

from .base import SchemaModel
from .definitions import Definition, EnumDefinition, StructDefinition
from .fields import (
    ArrayLength,
    ArrayOf,
    ArrayType,
    CString,
    CStringType,
    DynamicLength,
    EnumRef,
    EnumType,
    FieldType,
    Float32,
    Float32Type,
    Float64,
    Float64Type,
    HebrewString,
    HebrewStringType,
    Int,
    IntType,
    MatchOn,
    MatchType,
    StaticLength,
    StructRef,
    StructType,
)

__all__ = [
    "SchemaModel",
    # Definitions
    "Definition",
    "StructDefinition",
    "EnumDefinition",
    # Field types
    "FieldType",
    "IntType",
    "Float32Type",
    "Float64Type",
    "CStringType",
    "HebrewStringType",
    "EnumType",
    "StructType",
    "ArrayType",
    "ArrayLength",
    "StaticLength",
    "DynamicLength",
    "MatchType",
    # Helpers
    "Int",
    "Float32",
    "Float64",
    "CString",
    "HebrewString",
    "EnumRef",
    "StructRef",
    "ArrayOf",
    "MatchOn",
]

"""Utility functions for bitexpr.

This module provides size calculation in min, max and default modes.
"""

from __future__ import annotations

from .sizing import (
    Bits,
    SizeMode,
    default_size_of,
    encoded_bits,
    encoded_size,
    field_sizes,
    max_size_of,
    min_size_of,
    size_of_bits,
)

__all__ = [
    "Bits",
    "SizeMode",
    "size_of_bits",
    "min_size_of",
    "max_size_of",
    "default_size_of",
    "encoded_size",
    "encoded_bits",
    "field_sizes",
]

"""Sibling-context lookups shared by the codec components.

A Match field or a dynamic-length array depends on a sibling field that was
resolved earlier in the same struct. Each component threads the mapping of
already-resolved siblings into the next field and uses these helpers to read
from it.
"""

from __future__ import annotations

from typing import Any, Mapping


def resolved_label(parent_fields: Mapping[str, Any] | None, field_name: str) -> str | None:
    """Return the enum label held by sibling ``field_name``, or None if unresolved."""
    if not parent_fields:
        return None
    value = parent_fields.get(field_name)
    if isinstance(value, str) and value:
        return value
    return None


def resolved_count(parent_fields: Mapping[str, Any] | None, field_name: str) -> int | None:
    """Return the element count held by sibling ``field_name``, clamped to >= 0.

    Returns None if the sibling is absent or not an integer.
    """
    if not parent_fields:
        return None
    value = parent_fields.get(field_name)
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return max(0, value)


def child_path(path: str, name: str) -> str:
    return f"{path}.{name}" if path else name


def index_path(path: str, index: int) -> str:
    return f"{path}[{index}]"

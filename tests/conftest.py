"""Pytest configuration and shared fixtures."""

from __future__ import annotations

from typing import Any

import pytest

from bitexpr import Schema

PACKET_PAYLOAD: list[dict[str, Any]] = [
    {"type": "Enum", "name": "Opcode", "entries": [["PING", 0], ["DATA", 1]]},
    {"type": "Struct", "name": "Empty", "fields": []},
    {
        "type": "Struct",
        "name": "Packet",
        "fields": [
            ["opcode", {"kind": "Enum", "name": "Opcode", "signed": False, "width": 8}],
            ["len", {"kind": "Int", "signed": False, "width": 8}],
            [
                "payload",
                {
                    "kind": "Match",
                    "discriminant": "opcode",
                    "enumTypeName": "Opcode",
                    "cases": {
                        "PING": {"kind": "Struct", "name": "Empty"},
                        "DATA": {
                            "kind": "Array",
                            "elementType": {"kind": "Int", "signed": True, "width": 8},
                            "length": {"kind": "Dynamic", "field": "len"},
                        },
                    },
                },
            ],
        ],
    },
]

SHAPES_PAYLOAD: list[dict[str, Any]] = [
    {"type": "Enum", "name": "Shape", "entries": [["CIRCLE", 0], ["SQUARE", 1], ["LINE", 2]]},
    # Codes deliberately not ordinal
    {"type": "Enum", "name": "Mode", "entries": [["IDLE", 3], ["ACTIVE", 7], ["FAULT", 12]]},
    {"type": "Struct", "name": "Empty", "fields": []},
    {
        "type": "Struct",
        "name": "Point",
        "fields": [
            ["x", {"kind": "Int", "signed": True, "width": 16}],
            ["y", {"kind": "Int", "signed": True, "width": 16}],
        ],
    },
    {
        "type": "Struct",
        "name": "Frame",
        "fields": [
            ["id", {"kind": "Int", "signed": False, "width": 8}],
            ["origin", {"kind": "Struct", "name": "Point"}],
            ["name", {"kind": "CString"}],
        ],
    },
    {
        "type": "Struct",
        "name": "Bits",
        "fields": [
            ["a", {"kind": "Int", "signed": False, "width": 3}],
            ["b", {"kind": "Int", "signed": True, "width": 5}],
            ["c", {"kind": "Int", "signed": False, "width": 1}],
        ],
    },
    {
        "type": "Struct",
        "name": "Choice",
        "fields": [
            ["tag", {"kind": "Enum", "name": "Shape", "width": 2, "default": "SQUARE"}],
            [
                "body",
                {
                    "kind": "Match",
                    "discriminant": "tag",
                    "enumTypeName": "Shape",
                    "cases": {
                        "CIRCLE": {"kind": "Int", "signed": False, "width": 8},
                        "SQUARE": {"kind": "Int", "signed": False, "width": 16},
                        "LINE": {"kind": "Struct", "name": "Empty"},
                    },
                },
            ],
        ],
    },
    {
        "type": "Struct",
        "name": "Counted",
        "fields": [
            ["n", {"kind": "Int", "signed": False, "width": 8, "default": 2}],
            [
                "items",
                {
                    "kind": "Array",
                    "elementType": {"kind": "Int", "signed": False, "width": 16},
                    "length": {"kind": "Dynamic", "field": "n"},
                },
            ],
        ],
    },
    {
        "type": "Struct",
        "name": "Telemetry",
        "fields": [
            ["flags", {"kind": "Int", "signed": False, "width": 3}],
            ["mode", {"kind": "Enum", "name": "Mode", "width": 4}],
            ["temperature", {"kind": "f32"}],
            ["position", {"kind": "Struct", "name": "Point"}],
            [
                "history",
                {
                    "kind": "Array",
                    "elementType": {"kind": "Int", "signed": False, "width": 5},
                    "length": {"kind": "Static", "value": 4},
                },
            ],
            ["name", {"kind": "CString", "default": "sonar"}],
            ["label", {"kind": "HebrewString"}],
            ["altitude", {"kind": "f64"}],
        ],
    },
]


@pytest.fixture
def packet_schema() -> Schema:
    """Opcode/len/payload packet with a Match over a dynamic array."""
    return Schema.from_payload(PACKET_PAYLOAD)


@pytest.fixture
def shapes_schema() -> Schema:
    """Assorted structs covering every field kind."""
    return Schema.from_payload(SHAPES_PAYLOAD)


@pytest.fixture
def data_packet() -> dict[str, Any]:
    """DATA packet carrying three bytes."""
    return {"opcode": "DATA", "len": 3, "payload": [1, 2, 3]}

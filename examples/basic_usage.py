#!/usr/bin/env python3
"""Basic usage example for bitexpr.

This example demonstrates:
1. Loading a schema from the compiler's JSON payload
2. Encoding a value tree to bit-packed bytes
3. Decoding it back, including from truncated data
4. Calculating message sizes in min/default/max modes
"""

from __future__ import annotations

from pathlib import Path

from bitexpr import Schema, decode, encode, encoded_bits, encoded_size, field_sizes

SCHEMA_PATH = Path(__file__).with_name("packet_schema.json")


def main() -> None:
    """Run the basic usage example."""
    print("=" * 60)
    print("bitexpr Basic Usage Example")
    print("=" * 60)
    print()

    # Load the schema
    print("1. Loading the schema...")
    schema = Schema.from_payload(SCHEMA_PATH.read_text(encoding="utf-8"), check=True)
    print(f"   {schema!r}")
    print()

    # Build a value and analyze its field sizes
    print("2. Analyzing field sizes...")
    packet = {"opcode": "DATA", "len": 4, "payload": [10, -20, 30, -40]}
    for field_name, bits in field_sizes(schema, "Packet", packet).items():
        print(f"   {field_name}: {bits} bits")
    print(f"   Total: {encoded_bits(schema, 'Packet', packet)} bits")
    print(f"   Bounds: {encoded_bits(schema, 'Packet', mode='min')} bits min, "
          f"{encoded_size(schema, 'Packet', mode='max')} bytes max")
    print()

    # Encode the packet
    print("3. Encoding to compact binary format...")
    encoded_data = encode(schema, packet, "Packet")

    print(f"   Encoded size: {len(encoded_data)} bytes")
    print(f"   Hex: {encoded_data.hex()}")
    print(f"   Binary: {' '.join(format(b, '08b') for b in encoded_data)}")
    print()

    # Decode the packet
    print("4. Decoding from binary...")
    decoded = decode(schema, encoded_data, "Packet")
    print(f"   {decoded}")
    print()

    # Verify round-trip
    print("5. Verifying round-trip...")
    if decoded == packet:
        print("   ✓ Round-trip successful!")
    else:
        print("   ✗ Round-trip failed!")
    print()

    # Truncated data still decodes
    print("6. Decoding truncated data...")
    for cut in range(len(encoded_data), 0, -2):
        print(f"   {cut} bytes: {decode(schema, encoded_data[:cut], 'Packet')}")
    print()

    # Status packets use both string codecs
    print("7. Encoding a status packet...")
    status = {"opcode": "STATUS", "payload": {"health": "DEGRADED", "voltage": 11.5}}
    status_data = encode(schema, status, "Packet")
    print(f"   Hex: {status_data.hex()}")
    print(f"   Decoded: {decode(schema, status_data, 'Packet')}")
    print()

    print("=" * 60)
    print("Example complete!")
    print("=" * 60)


if __name__ == "__main__":
    main()

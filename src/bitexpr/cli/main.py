"""Main CLI entry point for bitexpr."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .. import __version__
from ..exceptions import BitexprError
from .analyze import analyze_schema, decode_from_hex, encode_to_hex, load_schema, report_problems


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the bitexpr CLI.

    Args:
        argv: Command line arguments, sys.argv[1:] if None

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    parser = argparse.ArgumentParser(
        description="bitexpr: bit-packed schema codec",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  bitexpr schema.json --analyze                     Show field sizes of every struct
  bitexpr schema.json --analyze --root Packet       Show field sizes of one struct
  bitexpr schema.json --check                       Report schema inconsistencies
  bitexpr schema.json --root Packet --encode '{"opcode": "PING"}'
  bitexpr schema.json --root Packet --decode 0103010203
        """,
    )

    parser.add_argument("schema", metavar="SCHEMA", help="JSON schema definition payload")
    parser.add_argument("--root", metavar="NAME", help="Root struct name")

    action = parser.add_mutually_exclusive_group()
    action.add_argument("--analyze", action="store_true", help="Show min/default/max field sizes")
    action.add_argument("--check", action="store_true", help="Check schema consistency")
    action.add_argument("--encode", metavar="JSON", help="Encode a JSON value, print hex")
    action.add_argument("--decode", metavar="HEX", help="Decode hex bytes, print JSON")

    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument("--version", action="version", version=f"bitexpr {__version__}")

    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG, format="%(asctime)s - %(levelname)s - %(name)s - %(message)s"
        )

    file_path = Path(args.schema)
    if not file_path.exists():
        print(f"Error: File not found: {file_path}", file=sys.stderr)
        return 1

    if (args.encode is not None or args.decode is not None) and not args.root:
        print("Error: --encode and --decode require --root", file=sys.stderr)
        return 2

    try:
        schema = load_schema(file_path)

        if args.check:
            return 1 if report_problems(schema) else 0
        if args.encode is not None:
            print(encode_to_hex(schema, args.encode, args.root))
            return 0
        if args.decode is not None:
            print(decode_from_hex(schema, args.decode, args.root))
            return 0

        analyze_schema(schema, args.root)
        return 0
    except (BitexprError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())

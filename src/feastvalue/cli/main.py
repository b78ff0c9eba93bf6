"""Main CLI entry point for feastvalue."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from ..cli.inspect import inspect_bytes
from ..exceptions import DecodeError

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the feastvalue CLI.

    Args:
        argv: Command line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    parser = argparse.ArgumentParser(
        description="feastvalue: Feature Value Codec",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  feastvalue --inspect value.bin          Decode a Value stored in a file
  feastvalue --hex 182a                   Decode a hex-encoded Value
  feastvalue --hex 0a02182a --repeated    Decode a RepeatedValue
  feastvalue --version                    Show version
        """,
    )

    source = parser.add_mutually_exclusive_group()
    source.add_argument(
        "--inspect",
        metavar="FILE",
        type=str,
        help="Decode the binary contents of FILE and show its fields",
    )
    source.add_argument(
        "--hex",
        metavar="HEX",
        type=str,
        help="Decode a hex string (whitespace ignored) and show its fields",
    )

    parser.add_argument(
        "--repeated",
        action="store_true",
        help="Treat the input as a RepeatedValue instead of a single Value",
    )

    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log diagnostics to stderr",
    )

    parser.add_argument(
        "--version",
        action="version",
        version="feastvalue 0.1.0",
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    data: bytes | None = None

    # Handle --inspect
    if args.inspect:
        file_path = Path(args.inspect)
        if not file_path.exists():
            print(f"Error: File not found: {file_path}", file=sys.stderr)
            return 1
        data = file_path.read_bytes()
        logger.debug("Read %d bytes from %s", len(data), file_path)

    # Handle --hex
    if args.hex is not None:
        try:
            data = bytes.fromhex("".join(args.hex.split()))
        except ValueError as e:
            print(f"Error: Invalid hex input: {e}", file=sys.stderr)
            return 1

    if data is not None:
        try:
            inspect_bytes(data, repeated=args.repeated)
            return 0
        except DecodeError as e:
            print(f"Error decoding input: {e}", file=sys.stderr)
            return 1

    # If no command specified, show help
    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())

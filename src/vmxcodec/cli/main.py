"""Main CLI entry point for vmxcodec."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from ..cli.analyze import analyze_file
from ..exceptions import VmxError


def main() -> int:
    """Main entry point for the vmxcodec CLI.

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    parser = argparse.ArgumentParser(
        description="vmxcodec: VMX Configuration Codec",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  vmxcodec --analyze records.py          Show the VMX keys of each record
  vmxcodec --version                     Show version
        """,
    )

    parser.add_argument(
        "--analyze",
        metavar="FILE",
        type=str,
        help="Analyze record classes and show their VMX key layout",
    )

    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    parser.add_argument(
        "--version",
        action="version",
        version="vmxcodec 0.1.0",
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="[%(levelname)s] %(name)s: %(message)s",
        stream=sys.stderr,
    )

    # Handle --analyze
    if args.analyze:
        file_path = Path(args.analyze)
        if not file_path.exists():
            print(f"Error: File not found: {file_path}", file=sys.stderr)
            return 1

        try:
            analyze_file(file_path)
            return 0
        except VmxError as e:
            print(f"Error: invalid record layout: {e}", file=sys.stderr)
            return 1
        except Exception as e:
            print(f"Error analyzing file: {e}", file=sys.stderr)
            return 1

    # If no command specified, show help
    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())

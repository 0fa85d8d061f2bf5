#!/usr/bin/env python3

import argparse
import logging
from collections.abc import Sequence

from finsync.runtime.config import DEFAULT_PORT
from finsync.runtime.logging import set_log_level


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(
        description="FinSync receipt OCR utilities",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Commands:
  scan <image> [--json]      Extract receipt data from an image
  status                     Show configured OCR backends
  serve [--host] [--port]    Start receipt OCR upload server

Environment:
  FINSYNC_VISION_API_KEY     Enables Google Vision OCR (simulation otherwise)
  FINSYNC_LOG_LEVEL          DEBUG, INFO, WARNING or ERROR
""",
    )

    parser.add_argument("--debug", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # scan command
    scan_parser = subparsers.add_parser("scan", help="Extract receipt data from an image")
    scan_parser.add_argument("image", help="Path to receipt image")
    scan_parser.add_argument("--json", action="store_true", help="Print the OCR result as JSON")
    scan_parser.add_argument(
        "--no-simulation",
        action="store_true",
        help="Fail instead of falling back to the simulated backend",
    )

    # status command
    subparsers.add_parser("status", help="Show configured OCR backends")

    # serve command
    serve_parser = subparsers.add_parser("serve", help="Start receipt OCR upload server")
    serve_parser.add_argument("--host", default="0.0.0.0", help="Host to bind to (default: 0.0.0.0)")
    serve_parser.add_argument(
        "--port", type=int, default=DEFAULT_PORT, help=f"Port to bind to (default: {DEFAULT_PORT})"
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    if args.debug:
        set_log_level(logging.DEBUG)

    from finsync.cli.receipt import cmd_scan, cmd_serve, cmd_status

    if args.command == "scan":
        return cmd_scan(args)
    if args.command == "status":
        return cmd_status(args)
    if args.command == "serve":
        return cmd_serve(args)

    return 1


if __name__ == "__main__":
    raise SystemExit(main())

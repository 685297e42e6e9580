"""Composition root for the zigunit command-line tool.

This module wires configuration, core services and concrete adapters
together for the ``zigunit`` console script.

Commands:
- list: show the zig tests discovered for a module manifest
- rewrite: print or write the source with test blocks turned into functions
- run: run the tests headlessly against the compiled library
"""

import argparse
import json
import logging
import sys

from zigunit.adapters.cli.commands import CLICommandHandler, format_text
from zigunit.config import load_settings
from zigunit.unit import build_discovery


def configure_logging(log_level: str, log_format: str) -> None:
    """Configure application logging.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_format: Log format (json, text).
    """
    level = getattr(logging, log_level, logging.INFO)

    if log_format == "json":
        format_str = '{"time": "%(asctime)s", "level": "%(levelname)s", "message": "%(message)s"}'
    else:
        format_str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    logging.basicConfig(
        level=level,
        format=format_str,
        handlers=[
            logging.StreamHandler(sys.stderr),
        ],
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="zigunit",
        description="Discover and run zig test blocks of compiled native modules.",
    )
    parser.add_argument("--env-file", help="Load settings from this .env file")
    parser.add_argument(
        "--format", choices=["json", "text"], help="Output format (default from settings)"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    list_parser = subparsers.add_parser("list", help="List discovered tests")
    list_parser.add_argument("manifest", help="Module manifest file")

    rewrite_parser = subparsers.add_parser("rewrite", help="Rewrite test blocks into functions")
    rewrite_parser.add_argument("manifest", help="Module manifest file")
    rewrite_parser.add_argument("--output", help="Directory to write rewritten files to")

    run_parser = subparsers.add_parser("run", help="Run tests headlessly")
    run_parser.add_argument("manifest", help="Module manifest file")

    return parser


def main(argv: list[str] | None = None) -> int:
    """Application entry point.

    Exit codes:
        0: Success
        1: Discovery error, failing tests or any other fatal error
        130: Interrupted by user (SIGINT/KeyboardInterrupt)
    """
    args = build_parser().parse_args(argv)
    settings = load_settings(args.env_file)
    configure_logging(settings.log_level, settings.log_format)
    logger = logging.getLogger(__name__)

    handler = CLICommandHandler(build_discovery(settings))
    output_format = args.format or settings.output_format

    try:
        if args.command == "list":
            result = handler.list_tests(args.manifest)
        elif args.command == "rewrite":
            result = handler.rewrite_source(args.manifest, args.output)
        elif args.command == "run":
            result = handler.run_tests(args.manifest)
        else:
            logger.error(f"Unknown command: {args.command}")
            return 1
    except KeyboardInterrupt:
        logger.warning("Interrupted by user (SIGINT)")
        return 130
    except Exception as e:
        logger.error(f"Fatal error: {e}", exc_info=True)
        return 1

    if output_format == "json":
        print(json.dumps(result, indent=2, default=str))
    else:
        print(format_text(result))

    return 0 if result["status"] == "success" else 1


if __name__ == "__main__":
    sys.exit(main())

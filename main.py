"""Entry point module for the PNGCHAT application."""

from __future__ import annotations

import argparse
import sys
from typing import Iterable, Optional

from cli import PngChatCLI
from config import APP_DESCRIPTION, APP_NAME, APP_VERSION, LOGGING_SETTINGS
from utils.logger import set_global_level, setup_logger

logger = setup_logger(__name__)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def build_parser() -> argparse.ArgumentParser:
    """Return the argument parser for the ``pngchat`` command."""

    parser = argparse.ArgumentParser(
        prog="pngchat",
        description=f"{APP_DESCRIPTION} v{APP_VERSION}",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument("--version", action="version", version=f"{APP_NAME} v{APP_VERSION}")
    parser.add_argument(
        "--log-level",
        choices=LOG_LEVELS,
        default=LOGGING_SETTINGS.get("level", "INFO"),
        help="Logging verbosity",
    )

    subparsers = parser.add_subparsers(dest="command", metavar="command")

    # ------------------------------------------------------------------
    # Encode command
    # ------------------------------------------------------------------
    encode = subparsers.add_parser(
        "encode",
        help="Encode a message into a PNG file under the given chunk type",
    )
    encode.add_argument("file_path", help="Input PNG file path")
    encode.add_argument("chunk_type", help="4-letter chunk type, e.g. ruSt")
    encode.add_argument("message", help="Message to hide")
    encode.add_argument(
        "output_file",
        nargs="?",
        help="Where to save the result (defaults to overwriting the input)",
    )

    # ------------------------------------------------------------------
    # Decode command
    # ------------------------------------------------------------------
    decode = subparsers.add_parser(
        "decode",
        help="Print the message stored under the given chunk type",
    )
    decode.add_argument("file_path", help="Input PNG file path")
    decode.add_argument("chunk_type", help="4-letter chunk type to look for")

    # ------------------------------------------------------------------
    # Remove command
    # ------------------------------------------------------------------
    remove = subparsers.add_parser(
        "remove",
        help="Remove the first chunk of the given type",
    )
    remove.add_argument("file_path", help="Input PNG file path")
    remove.add_argument("chunk_type", help="4-letter chunk type to remove")

    # ------------------------------------------------------------------
    # Print command
    # ------------------------------------------------------------------
    print_cmd = subparsers.add_parser(
        "print",
        help="List the chunks of a PNG file",
    )
    print_cmd.add_argument("file_path", help="Input PNG file path")

    return parser


def parse_arguments(argv: Optional[Iterable[str]] = None):
    """Return parsed command line arguments."""

    parser = build_parser()
    return parser.parse_args(args=list(argv) if argv is not None else None)


def run_cli(args) -> int:
    """Execute a CLI command and return the process exit status."""

    cli = PngChatCLI(args)
    return 0 if cli.run() else 1


def main(argv: Optional[Iterable[str]] = None) -> None:
    """Main entry point used by ``python -m`` and the ``pngchat`` script."""

    args = parse_arguments(argv)
    set_global_level(args.log_level)

    if getattr(args, "command", None) is None:
        build_parser().print_help()
        sys.exit(1)

    logger.debug("Running command %s", args.command)
    sys.exit(run_cli(args))


if __name__ == "__main__":  # pragma: no cover - script entry point
    main()

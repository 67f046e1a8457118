"""Command line interface for PNGCHAT.

This module implements the command dispatcher used by :mod:`main`. Each
sub-command loads the PNG through :mod:`png_chunks.files`, applies one chunk
operation and, where the file changes, writes it back.
"""

from __future__ import annotations

from pathlib import Path
from typing import List

from config import APP_NAME, APP_VERSION
from png_chunks import Chunk, ChunkNotFound, Png, PngChatError, read_png, write_png
from utils.logger import log_operation, setup_logger

logger = setup_logger(__name__)


class CLIError(RuntimeError):
    """Custom error raised for recoverable CLI failures."""


def _ensure_exists(path: Path, description: str) -> Path:
    if not path.exists():
        raise CLIError(f"{description} not found: {path}")
    return path


def format_chunk_listing(path: Path, png: Png) -> List[str]:
    """Return the lines printed by the ``print`` command."""

    lines = [f"File: {path}, Size: {png.byte_length()}"]
    for index, chunk in enumerate(png.chunks()):
        lines.append(
            f"  chunk#{index}{{ chunk_type: {chunk.chunk_type()}, "
            f"data_length: {chunk.length()}}}"
        )
    return lines


class PngChatCLI:
    """CLI dispatcher for PNGCHAT."""

    def __init__(self, args) -> None:
        self.args = args
        self.command = getattr(args, "command", None)

    # ------------------------------------------------------------------
    # Entry point
    # ------------------------------------------------------------------
    def run(self) -> bool:
        try:
            if self.command == "encode":
                self._handle_encode()
            elif self.command == "decode":
                self._handle_decode()
            elif self.command == "remove":
                self._handle_remove()
            elif self.command == "print":
                self._handle_print()
            else:
                raise CLIError("No command specified. Use --help for usage information.")
        except (CLIError, PngChatError) as exc:
            logger.error("CLI error: %s", exc)
            print(f"Error: {exc}")
            return False
        except KeyboardInterrupt:
            print("Operation cancelled by user.")
            return False

        return True

    # ------------------------------------------------------------------
    # Encode command
    # ------------------------------------------------------------------
    @log_operation("Encode")
    def _handle_encode(self) -> None:
        args = self.args
        file_path = _ensure_exists(Path(args.file_path), "PNG file")

        png = read_png(file_path)
        chunk = Chunk.from_strings(args.chunk_type, args.message)
        if not chunk.chunk_type().is_valid():
            logger.warning(
                "Chunk type %s is public or has the reserved bit set", chunk.chunk_type()
            )
        png.append_chunk(chunk)

        output_path = Path(args.output_file) if args.output_file else file_path
        write_png(png, output_path)

        print(f"{APP_NAME} v{APP_VERSION} - Encode")
        print(f"Input  : {file_path}")
        print(f"Output : {output_path}")
        print(f"Chunk  : {chunk.chunk_type()} ({chunk.length()} bytes)")

    # ------------------------------------------------------------------
    # Decode command
    # ------------------------------------------------------------------
    @log_operation("Decode")
    def _handle_decode(self) -> None:
        args = self.args
        file_path = _ensure_exists(Path(args.file_path), "PNG file")

        png = read_png(file_path)
        chunk = png.chunk_by_type(args.chunk_type)
        if chunk is None:
            raise ChunkNotFound(args.chunk_type)

        print(f"msg: {chunk.data_as_string()}")

    # ------------------------------------------------------------------
    # Remove command
    # ------------------------------------------------------------------
    @log_operation("Remove")
    def _handle_remove(self) -> None:
        args = self.args
        file_path = _ensure_exists(Path(args.file_path), "PNG file")

        png = read_png(file_path)
        removed = png.remove_chunk(args.chunk_type)
        write_png(png, file_path)

        print(f"Removed chunk {removed.chunk_type()} ({removed.length()} bytes) from {file_path}")

    # ------------------------------------------------------------------
    # Print command
    # ------------------------------------------------------------------
    def _handle_print(self) -> None:
        file_path = _ensure_exists(Path(self.args.file_path), "PNG file")

        png = read_png(file_path)
        for line in format_chunk_listing(file_path, png):
            print(line)

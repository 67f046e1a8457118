"""Exceptions raised by the PNG chunk codec."""

from __future__ import annotations

__all__ = [
    "PngChatError",
    "ParseError",
    "InvalidTypeCode",
    "MalformedChunk",
    "ChecksumMismatch",
    "BadSignature",
    "ChunkNotFound",
    "TextDecodeError",
    "PngIOError",
]


class PngChatError(Exception):
    """Base class for every error raised by :mod:`png_chunks`."""


class ParseError(PngChatError, ValueError):
    """Raised when bytes cannot be decoded into a chunk or a PNG."""


class InvalidTypeCode(ParseError):
    """Raised when a chunk type code is not exactly 4 ASCII letters."""


class MalformedChunk(ParseError):
    """Raised when a chunk's length field disagrees with the available bytes."""


class ChecksumMismatch(ParseError):
    """Raised when the stored CRC of a chunk does not match its contents."""

    def __init__(self, expected: int, actual: int) -> None:
        super().__init__(
            f"CRC checksum fails (stored 0x{expected:08x}, computed 0x{actual:08x})"
        )
        self.expected = expected
        self.actual = actual


class BadSignature(ParseError):
    """Raised when the buffer does not start with the PNG signature."""


class ChunkNotFound(PngChatError, LookupError):
    """Raised when no chunk of the requested type exists."""

    def __init__(self, chunk_type: str) -> None:
        super().__init__(f"This file does not contain a chunk of type {chunk_type}")
        self.chunk_type = chunk_type


class TextDecodeError(PngChatError, ValueError):
    """Raised when chunk data is not valid UTF-8."""


class PngIOError(PngChatError, OSError):
    """Raised when a PNG file cannot be read or written."""

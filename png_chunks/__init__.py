"""PNGCHAT chunk codec.

Reads a PNG file as a sequence of chunks so that a private chunk carrying a
message can be appended, found or removed without touching the rest of the
file.
"""

from __future__ import annotations

from .chunk import Chunk, checksum_32
from .chunk_type import CHUNK_SIZE, ChunkType
from .errors import (
    BadSignature,
    ChecksumMismatch,
    ChunkNotFound,
    InvalidTypeCode,
    MalformedChunk,
    ParseError,
    PngChatError,
    PngIOError,
    TextDecodeError,
)
from .files import read_png, write_png
from .png import PNG_SIGNATURE, Png

__all__ = [
    "CHUNK_SIZE",
    "PNG_SIGNATURE",
    "BadSignature",
    "ChecksumMismatch",
    "Chunk",
    "ChunkNotFound",
    "ChunkType",
    "InvalidTypeCode",
    "MalformedChunk",
    "ParseError",
    "Png",
    "PngChatError",
    "PngIOError",
    "TextDecodeError",
    "checksum_32",
    "read_png",
    "write_png",
]

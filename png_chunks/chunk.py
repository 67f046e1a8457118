"""A single PNG chunk.

Each chunk is laid out as::

    [length:4][chunk type:4][chunk data:length][crc:4]

All integers are big-endian. The CRC covers the chunk type and the chunk data
but not the length field.
"""

from __future__ import annotations

import struct
import zlib
from typing import Union

from .chunk_type import CHUNK_SIZE, ChunkType
from .errors import ChecksumMismatch, MalformedChunk, TextDecodeError

__all__ = ["Chunk", "checksum_32"]

_U32 = struct.Struct(">I")
# length + chunk type + crc
_OVERHEAD = 3 * CHUNK_SIZE

BytesLike = Union[bytes, bytearray, memoryview]


def checksum_32(data: BytesLike) -> int:
    """CRC-32/ISO-HDLC of *data*, as used by zlib and PNG."""

    return zlib.crc32(data) & 0xFFFFFFFF


def _u8_4_from_slice(view: memoryview) -> bytes:
    assert len(view) == CHUNK_SIZE, "Invalid slice length"
    return bytes(view)


class Chunk:
    """One length-prefixed, checksummed PNG record."""

    __slots__ = ("_chunk_type", "_data", "_crc")

    def __init__(self, chunk_type: ChunkType, data: BytesLike) -> None:
        self._chunk_type = chunk_type
        self._data = bytes(data)
        self._crc = checksum_32(chunk_type.bytes() + self._data)

    @classmethod
    def from_strings(cls, chunk_type: str, data: str) -> "Chunk":
        return cls(ChunkType.from_str(chunk_type), data.encode("utf-8"))

    @classmethod
    def from_bytes(cls, data: BytesLike) -> "Chunk":
        """Decode exactly one chunk from *data*.

        Raises:
            MalformedChunk: the length field does not match ``len(data)``.
            InvalidTypeCode: the chunk type is not 4 ASCII letters.
            ChecksumMismatch: the stored CRC does not match the contents.
        """

        view = memoryview(data)
        if len(view) < _OVERHEAD:
            raise MalformedChunk(
                f"Chunk needs at least {_OVERHEAD} bytes, got {len(view)}"
            )

        (length,) = _U32.unpack(_u8_4_from_slice(view[:CHUNK_SIZE]))
        if len(view) != length + _OVERHEAD:
            raise MalformedChunk("Chunk contains incorrect length information")

        chunk_type = ChunkType(_u8_4_from_slice(view[CHUNK_SIZE : 2 * CHUNK_SIZE]))
        payload = bytes(view[2 * CHUNK_SIZE : len(view) - CHUNK_SIZE])
        (stored_crc,) = _U32.unpack(_u8_4_from_slice(view[len(view) - CHUNK_SIZE :]))

        chunk = cls(chunk_type, payload)
        if chunk.crc() != stored_crc:
            raise ChecksumMismatch(stored_crc, chunk.crc())
        return chunk

    def length(self) -> int:
        return len(self._data)

    def chunk_type(self) -> ChunkType:
        return self._chunk_type

    def data(self) -> bytes:
        return self._data

    def crc(self) -> int:
        return self._crc

    def data_as_string(self) -> str:
        try:
            return self._data.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise TextDecodeError(f"Chunk data is not valid UTF-8: {exc}") from exc

    def as_bytes(self) -> bytes:
        return (
            _U32.pack(self.length())
            + self._chunk_type.bytes()
            + self._data
            + _U32.pack(self._crc)
        )

    def __bytes__(self) -> bytes:
        return self.as_bytes()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Chunk):
            return NotImplemented
        return (
            self._chunk_type == other._chunk_type
            and self._data == other._data
            and self._crc == other._crc
        )

    def __hash__(self) -> int:
        return hash((self._chunk_type, self._data, self._crc))

    def __repr__(self) -> str:
        return (
            f"Chunk(chunk_type={str(self._chunk_type)!r}, "
            f"length={self.length()}, crc={self._crc})"
        )

    def __str__(self) -> str:
        return (
            "Chunk\n{\n"
            f"\tlength: {self.length()}, chunk_type: {self._chunk_type}\n"
            f"\tdata: {list(self._data)}\n"
            f"\tcrc: {self._crc}\n"
            "}"
        )

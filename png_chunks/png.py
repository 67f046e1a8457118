"""Whole-file PNG container: the signature followed by a list of chunks."""

from __future__ import annotations

import struct
from typing import Iterable, List, Optional, Tuple, Union

from utils.logger import setup_logger

from .chunk import Chunk
from .chunk_type import CHUNK_SIZE
from .errors import BadSignature, ChunkNotFound, MalformedChunk

__all__ = ["PNG_SIGNATURE", "Png"]

logger = setup_logger(__name__)

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"
_LENGTH_STRUCT = struct.Struct(">I")
_CHUNK_OVERHEAD = 3 * CHUNK_SIZE


class Png:
    """An ordered, mutable sequence of chunks behind the PNG signature."""

    def __init__(self, chunks: Optional[Iterable[Chunk]] = None) -> None:
        self._chunks: List[Chunk] = list(chunks) if chunks is not None else []

    @classmethod
    def from_chunks(cls, chunks: Iterable[Chunk]) -> "Png":
        return cls(chunks)

    @classmethod
    def from_bytes(cls, data: Union[bytes, bytearray, memoryview]) -> "Png":
        """Parse a complete PNG byte buffer.

        Any invalid chunk aborts the whole parse; no partial result is
        returned.
        """

        view = memoryview(data)
        signature_len = len(PNG_SIGNATURE)
        if bytes(view[:signature_len]) != PNG_SIGNATURE:
            raise BadSignature("File does not start with the PNG signature")

        chunks: List[Chunk] = []
        offset = signature_len
        total = len(view)
        while offset < total:
            if offset + _CHUNK_OVERHEAD > total:
                raise MalformedChunk(
                    f"Truncated chunk at offset {offset}: "
                    f"{total - offset} trailing bytes"
                )
            (length,) = _LENGTH_STRUCT.unpack_from(view, offset)
            chunk_end = offset + length + _CHUNK_OVERHEAD
            if chunk_end > total:
                raise MalformedChunk(
                    f"Chunk at offset {offset} declares {length} data bytes "
                    f"but only {total - offset - _CHUNK_OVERHEAD} remain"
                )
            chunks.append(Chunk.from_bytes(view[offset:chunk_end]))
            offset = chunk_end

        logger.debug("Parsed %d chunks from %d bytes", len(chunks), total)
        return cls(chunks)

    def header(self) -> bytes:
        return PNG_SIGNATURE

    def chunks(self) -> Tuple[Chunk, ...]:
        return tuple(self._chunks)

    def append_chunk(self, chunk: Chunk) -> None:
        self._chunks.append(chunk)

    def chunk_by_type(self, chunk_type: str) -> Optional[Chunk]:
        """Return the first chunk whose type code is *chunk_type*, if any."""

        for chunk in self._chunks:
            if str(chunk.chunk_type()) == chunk_type:
                return chunk
        return None

    def remove_chunk(self, chunk_type: str) -> Chunk:
        """Remove and return the first chunk whose type code is *chunk_type*."""

        for index, chunk in enumerate(self._chunks):
            if str(chunk.chunk_type()) == chunk_type:
                return self._chunks.pop(index)
        raise ChunkNotFound(chunk_type)

    def byte_length(self) -> int:
        return len(PNG_SIGNATURE) + sum(
            chunk.length() + _CHUNK_OVERHEAD for chunk in self._chunks
        )

    def as_bytes(self) -> bytes:
        return PNG_SIGNATURE + b"".join(chunk.as_bytes() for chunk in self._chunks)

    def __bytes__(self) -> bytes:
        return self.as_bytes()

    def __len__(self) -> int:
        return len(self._chunks)

    def __iter__(self):
        return iter(tuple(self._chunks))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Png):
            return NotImplemented
        return self._chunks == other._chunks

    def __repr__(self) -> str:
        return f"Png(chunks={len(self._chunks)}, bytes={self.byte_length()})"

    def __str__(self) -> str:
        lines = ["Png {"]
        lines.extend(f"\t{chunk!r}" for chunk in self._chunks)
        lines.append("}")
        return "\n".join(lines)

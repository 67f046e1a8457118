"""4-byte PNG chunk type codes.

Type codes are restricted to upper and lower case ASCII letters, but they are
handled as fixed binary values rather than text. The case of each letter
carries one property bit:

* byte 0 upper case: the chunk is critical
* byte 1 upper case: the chunk is public
* byte 2 upper case: the reserved bit is valid
* byte 3 lower case: the chunk is safe to copy
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from .errors import InvalidTypeCode

__all__ = ["CHUNK_SIZE", "ChunkType"]

CHUNK_SIZE = 4


def _is_ascii_letter(value: int) -> bool:
    return 65 <= value <= 90 or 97 <= value <= 122


def _is_upper(value: int) -> bool:
    return 65 <= value <= 90


def _is_lower(value: int) -> bool:
    return 97 <= value <= 122


@dataclass(frozen=True)
class ChunkType:
    """A validated 4-byte chunk type code."""

    raw: bytes

    def __post_init__(self) -> None:
        if not isinstance(self.raw, (bytes, bytearray, memoryview)):
            raise TypeError("chunk type must be a bytes-like object")
        raw = bytes(self.raw)
        if len(raw) != CHUNK_SIZE:
            raise InvalidTypeCode(f"Invalid length of chunk type: {len(raw)} bytes")
        if not all(_is_ascii_letter(c) for c in raw):
            raise InvalidTypeCode("Invalid ascii character, must be alphabetic")
        object.__setattr__(self, "raw", raw)

    @classmethod
    def from_bytes(cls, raw: Union[bytes, bytearray, memoryview]) -> "ChunkType":
        return cls(bytes(raw))

    @classmethod
    def from_str(cls, text: str) -> "ChunkType":
        """Parse a type code such as ``"RuSt"``."""

        encoded = text.encode("utf-8")
        if len(encoded) != CHUNK_SIZE:
            raise InvalidTypeCode(f"Invalid length of chunk type: {text!r}")
        return cls(encoded)

    def bytes(self) -> bytes:
        return self.raw

    def is_critical(self) -> bool:
        return _is_upper(self.raw[0])

    def is_public(self) -> bool:
        return _is_upper(self.raw[1])

    def is_reserved_bit_valid(self) -> bool:
        """Return ``True`` when the reserved bit (case of byte 2) is clear."""

        return _is_upper(self.raw[2])

    def is_safe_to_copy(self) -> bool:
        return _is_lower(self.raw[3])

    def is_valid(self) -> bool:
        """Private type codes with a valid reserved bit are accepted."""

        return not self.is_public() and self.is_reserved_bit_valid()

    def __str__(self) -> str:
        return self.raw.decode("ascii")

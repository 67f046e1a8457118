from io import BytesIO
from pathlib import Path
import struct
import sys
import zlib

import pytest
from PIL import Image

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from png_chunks.chunk import Chunk
from png_chunks.chunk_type import ChunkType
from png_chunks.errors import (
    BadSignature,
    ChecksumMismatch,
    ChunkNotFound,
    InvalidTypeCode,
    MalformedChunk,
)
from png_chunks.png import PNG_SIGNATURE, Png


def _chunk_from_strings(chunk_type: str, data: str) -> Chunk:
    return Chunk(ChunkType.from_str(chunk_type), data.encode("utf-8"))


def _testing_chunks():
    return [
        _chunk_from_strings("FrSt", "I am the first chunk"),
        _chunk_from_strings("miDl", "I am another chunk"),
        _chunk_from_strings("LASt", "I am the last chunk"),
    ]


def _testing_png() -> Png:
    return Png.from_chunks(_testing_chunks())


def _minimal_png_bytes() -> bytes:
    ihdr_data = struct.pack(">IIBBBBB", 1, 1, 8, 2, 0, 0, 0)
    ihdr = (
        struct.pack(">I", len(ihdr_data))
        + b"IHDR"
        + ihdr_data
        + struct.pack(">I", zlib.crc32(b"IHDR" + ihdr_data) & 0xFFFFFFFF)
    )

    idat_data = zlib.compress(b"\x00\xff\x00\x00")
    idat = (
        struct.pack(">I", len(idat_data))
        + b"IDAT"
        + idat_data
        + struct.pack(">I", zlib.crc32(b"IDAT" + idat_data) & 0xFFFFFFFF)
    )

    iend = struct.pack(">I", 0) + b"IEND" + struct.pack(">I", zlib.crc32(b"IEND") & 0xFFFFFFFF)
    return PNG_SIGNATURE + ihdr + idat + iend


def _pillow_png_bytes() -> bytes:
    buffer = BytesIO()
    Image.new("RGB", (4, 3), (200, 30, 90)).save(buffer, format="PNG")
    return buffer.getvalue()


def test_from_chunks() -> None:
    png = Png.from_chunks(_testing_chunks())
    assert len(png.chunks()) == 3


def test_valid_from_bytes() -> None:
    raw = PNG_SIGNATURE + b"".join(chunk.as_bytes() for chunk in _testing_chunks())
    png = Png.from_bytes(raw)
    assert png.chunks() == tuple(_testing_chunks())


def test_signature_only_is_empty_png() -> None:
    png = Png.from_bytes(PNG_SIGNATURE)
    assert png.chunks() == ()
    assert png.as_bytes() == PNG_SIGNATURE
    assert png.byte_length() == 8


def test_invalid_header() -> None:
    raw = bytes([13, 80, 78, 71, 13, 10, 26, 10]) + b"".join(
        chunk.as_bytes() for chunk in _testing_chunks()
    )
    with pytest.raises(BadSignature):
        Png.from_bytes(raw)


def test_short_buffer_has_bad_signature() -> None:
    with pytest.raises(BadSignature):
        Png.from_bytes(PNG_SIGNATURE[:5])


def test_invalid_chunk_aborts_parse() -> None:
    chunks = b"".join(chunk.as_bytes() for chunk in _testing_chunks())
    bad = struct.pack(">I", 4) + b"ruSt" + b"data" + struct.pack(">I", 1)
    with pytest.raises(ChecksumMismatch):
        Png.from_bytes(PNG_SIGNATURE + chunks + bad)


def test_bad_type_code_aborts_parse() -> None:
    bad = struct.pack(">I", 0) + b"ru5t" + struct.pack(">I", zlib.crc32(b"ru5t"))
    with pytest.raises(InvalidTypeCode):
        Png.from_bytes(PNG_SIGNATURE + bad)


def test_truncated_trailing_chunk() -> None:
    raw = _testing_png().as_bytes()
    with pytest.raises(MalformedChunk):
        Png.from_bytes(raw[:-3])


def test_trailing_garbage_shorter_than_header() -> None:
    raw = _testing_png().as_bytes() + b"\x00\x00"
    with pytest.raises(MalformedChunk):
        Png.from_bytes(raw)


def test_declared_length_past_end() -> None:
    chunk = _chunk_from_strings("ruSt", "abc").as_bytes()
    inflated = struct.pack(">I", 500) + chunk[4:]
    with pytest.raises(MalformedChunk):
        Png.from_bytes(PNG_SIGNATURE + inflated)


def test_list_chunks() -> None:
    assert len(_testing_png().chunks()) == 3


def test_chunk_by_type() -> None:
    chunk = _testing_png().chunk_by_type("FrSt")
    assert chunk is not None
    assert str(chunk.chunk_type()) == "FrSt"
    assert chunk.data_as_string() == "I am the first chunk"


def test_chunk_by_type_missing() -> None:
    assert _testing_png().chunk_by_type("NoNe") is None


def test_append_chunk() -> None:
    png = _testing_png()
    png.append_chunk(_chunk_from_strings("TeSt", "Message"))
    chunk = png.chunk_by_type("TeSt")
    assert chunk is not None
    assert chunk.data_as_string() == "Message"
    assert png.chunks()[-1] is chunk


def test_remove_chunk() -> None:
    png = _testing_png()
    png.append_chunk(_chunk_from_strings("TeSt", "Message"))
    removed = png.remove_chunk("TeSt")
    assert removed.data_as_string() == "Message"
    assert png.chunk_by_type("TeSt") is None


def test_remove_missing_chunk_leaves_png_unchanged() -> None:
    png = _testing_png()
    before = png.as_bytes()
    with pytest.raises(ChunkNotFound) as excinfo:
        png.remove_chunk("NoNe")
    assert excinfo.value.chunk_type == "NoNe"
    assert png.as_bytes() == before


def test_remove_only_first_duplicate() -> None:
    first = _chunk_from_strings("ruSt", "one")
    second = _chunk_from_strings("ruSt", "two")
    png = Png.from_chunks([first, _chunk_from_strings("miDl", "x"), second])

    png.remove_chunk("ruSt")

    assert png.chunks() == (_chunk_from_strings("miDl", "x"), second)
    assert png.chunk_by_type("ruSt").data_as_string() == "two"


def test_duplicates_are_allowed() -> None:
    png = _testing_png()
    png.append_chunk(_chunk_from_strings("FrSt", "again"))
    assert len(png) == 4
    assert png.chunk_by_type("FrSt").data_as_string() == "I am the first chunk"


def test_chunks_view_is_read_only() -> None:
    png = _testing_png()
    view = png.chunks()
    assert isinstance(view, tuple)
    png.append_chunk(_chunk_from_strings("TeSt", "Message"))
    assert len(view) == 3


def test_png_as_bytes_round_trip() -> None:
    png = _testing_png()
    raw = png.as_bytes()
    reparsed = Png.from_bytes(raw)
    assert reparsed == png
    assert reparsed.as_bytes() == raw
    assert bytes(reparsed) == raw


def test_byte_length_matches_serialization() -> None:
    png = _testing_png()
    assert png.byte_length() == len(png.as_bytes())


def test_minimal_png_round_trip() -> None:
    raw = _minimal_png_bytes()
    png = Png.from_bytes(raw)
    assert [str(c.chunk_type()) for c in png.chunks()] == ["IHDR", "IDAT", "IEND"]
    assert png.as_bytes() == raw


def test_pillow_png_round_trip() -> None:
    raw = _pillow_png_bytes()
    png = Png.from_bytes(raw)

    types = [str(c.chunk_type()) for c in png.chunks()]
    assert types[0] == "IHDR"
    assert types[-1] == "IEND"
    assert png.as_bytes() == raw


def test_message_chunk_keeps_pillow_png_readable() -> None:
    png = Png.from_bytes(_pillow_png_bytes())
    png.append_chunk(_chunk_from_strings("ruSt", "hidden"))

    image = Image.open(BytesIO(png.as_bytes()))
    image.load()
    assert image.size == (4, 3)

    reparsed = Png.from_bytes(png.as_bytes())
    assert reparsed.chunk_by_type("ruSt").data_as_string() == "hidden"


def test_png_display() -> None:
    text = str(_testing_png())
    assert text.startswith("Png {")
    assert "FrSt" in text and "LASt" in text


def test_header_and_iteration() -> None:
    png = _testing_png()
    assert png.header() == PNG_SIGNATURE
    assert [str(c.chunk_type()) for c in png] == ["FrSt", "miDl", "LASt"]

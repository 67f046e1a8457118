"""Reading and writing PNG files on disk."""

from __future__ import annotations

from pathlib import Path
from typing import Union

from utils.logger import setup_logger

from .errors import PngIOError
from .png import Png

__all__ = ["read_png", "write_png"]

logger = setup_logger(__name__)


def _ensure_path(path: Union[str, Path]) -> Path:
    if isinstance(path, Path):
        return path
    return Path(path)


def read_png(path: Union[str, Path]) -> Png:
    """Load and parse the PNG at *path*."""

    png_path = _ensure_path(path)
    try:
        data = png_path.read_bytes()
    except OSError as exc:
        raise PngIOError(f"Cannot read {png_path}: {exc.strerror or exc}") from exc

    logger.debug("Read %d bytes from %s", len(data), png_path)
    return Png.from_bytes(data)


def write_png(png: Png, path: Union[str, Path]) -> Path:
    """Serialize *png* to *path* and return the written path."""

    png_path = _ensure_path(path)
    data = png.as_bytes()
    try:
        png_path.write_bytes(data)
    except OSError as exc:
        raise PngIOError(f"Cannot write {png_path}: {exc.strerror or exc}") from exc

    logger.debug("Wrote %d bytes to %s", len(data), png_path)
    return png_path

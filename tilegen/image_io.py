# tilegen/image_io.py
from __future__ import annotations

import io
import os
import tempfile
from pathlib import Path

import numpy as np
from PIL import Image

from .constants import OUTPUT_SUFFIX
from .core_types import PathLike, U8RGBA, assert_u8_image_rgba

"""
PNG I/O helpers (8-bit RGBA), output naming, and all-or-nothing file writes.
"""


def load_png_rgba(path: PathLike) -> U8RGBA:
    """Decode a PNG file into a uint8 (H,W,4) array. Non-PNG input is rejected by Pillow."""
    with Image.open(path, formats=["PNG"]) as im:
        im.load()
        arr = np.array(im.convert("RGBA"), dtype=np.uint8)
    return arr


def encode_png_rgba(image: U8RGBA) -> bytes:
    """Encode a uint8 (H,W,4) array as PNG bytes."""
    arr = np.ascontiguousarray(assert_u8_image_rgba(image))
    buf = io.BytesIO()
    Image.fromarray(arr).save(buf, format="PNG")
    return buf.getvalue()


def write_bytes_atomic(path: PathLike, data: bytes) -> Path:
    """
    Write data to path via a temporary sibling file and os.replace.

    Either the complete file ends up at path or path is left untouched.
    """
    dst = Path(path)
    fd, tmp_name = tempfile.mkstemp(
        prefix=f".{dst.name}.", suffix=".tmp", dir=dst.parent
    )
    try:
        with os.fdopen(fd, "wb") as fh:
            fh.write(data)
        os.replace(tmp_name, dst)
    except BaseException:
        try:
            os.unlink(tmp_name)
        except FileNotFoundError:
            pass
        raise
    return dst


def file_prefix(path: PathLike) -> str:
    """
    File name up to the first '.', ignoring leading dots.

    'grass.v2.png' -> 'grass', '.hidden.png' -> '.hidden'
    """
    name = Path(path).name
    stripped = name.lstrip(".")
    lead = name[: len(name) - len(stripped)]
    if not stripped:
        return name
    return lead + stripped.split(".", 1)[0]


def output_path_for(path: PathLike) -> Path:
    """Atlas path written next to the input: <prefix>-tiled.png."""
    src = Path(path)
    return src.with_name(f"{file_prefix(src)}{OUTPUT_SUFFIX}")


def save_png_rgba(path: PathLike, image: U8RGBA) -> Path:
    """Encode fully in memory, then write atomically."""
    return write_bytes_atomic(path, encode_png_rgba(image))


__all__ = [
    "load_png_rgba",
    "encode_png_rgba",
    "write_bytes_atomic",
    "file_prefix",
    "output_path_for",
    "save_png_rgba",
]

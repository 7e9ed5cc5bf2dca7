# tilegen/core_types.py
from __future__ import annotations

"""
Core type aliases, small value objects, and lightweight helpers.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Tuple, Union

import numpy as np
from numpy.typing import NDArray

from .constants import ATLAS_COLUMNS, ATLAS_ROWS

# Basic aliases

RGBATuple = Tuple[int, int, int, int]
ColourKey = int  # r<<24 | g<<16 | b<<8 | a
Offset = Tuple[int, int]  # (x, y) in source pixels
HexStr = str

U8RGBA = NDArray[np.uint8]  # (H, W, 4)
KeyGrid = NDArray[np.uint32]  # (H, W) packed colour keys

PaletteMap = Dict[ColourKey, Offset]  # layout colour -> source shape offset
PathLike = Union[str, Path]

# Value objects


@dataclass(frozen=True)
class AtlasGeometry:
    """Size of one source cell plus its pad border, and the atlas it implies."""

    cell_size: int
    pad: int = 0

    @property
    def padded_size(self) -> int:
        return self.cell_size + 2 * self.pad

    @property
    def width(self) -> int:
        return self.padded_size * ATLAS_COLUMNS

    @property
    def height(self) -> int:
        return self.padded_size * ATLAS_ROWS

    @property
    def shape(self) -> Tuple[int, int, int]:
        """numpy shape of the RGBA atlas array."""
        return (self.height, self.width, 4)


@dataclass(frozen=True)
class FileFailure:
    """A file that failed somewhere in its pipeline, with the error raised."""

    path: Path
    error: BaseException

    def describe(self) -> str:
        return f"Error processing file '{self.path}': {self.error}"


# Small helpers


def pack_rgba(rgba: RGBATuple) -> ColourKey:
    """Pack an (r, g, b, a) tuple into a single 32-bit key."""
    r, g, b, a = (int(v) & 0xFF for v in rgba)
    return (r << 24) | (g << 16) | (b << 8) | a


def unpack_rgba(key: ColourKey) -> RGBATuple:
    """Inverse of pack_rgba."""
    k = int(key)
    return ((k >> 24) & 0xFF, (k >> 16) & 0xFF, (k >> 8) & 0xFF, k & 0xFF)


def pack_rgba_array(image: U8RGBA) -> KeyGrid:
    """Pack a uint8 (H,W,4) image into a (H,W) uint32 key grid, same packing as pack_rgba."""
    img = assert_u8_image_rgba(image).astype(np.uint32)
    return (
        (img[..., 0] << 24) | (img[..., 1] << 16) | (img[..., 2] << 8) | img[..., 3]
    ).astype(np.uint32, copy=False)


def rgba_to_hex(rgba: RGBATuple) -> HexStr:
    """RGBA tuple to lowercase hex string '#rrggbbaa'."""
    return f"#{rgba[0]:02x}{rgba[1]:02x}{rgba[2]:02x}{rgba[3]:02x}"


def assert_u8_image_rgba(image: np.ndarray) -> U8RGBA:
    """Validate a uint8 (H,W,4) image and return it typed as U8RGBA."""
    if image.dtype != np.uint8 or image.ndim != 3 or image.shape[-1] != 4:
        raise TypeError("expected uint8 (H,W,4) image")
    return image  # type: ignore[return-value]


__all__ = [
    # aliases / types
    "RGBATuple",
    "ColourKey",
    "Offset",
    "HexStr",
    "U8RGBA",
    "KeyGrid",
    "PaletteMap",
    "PathLike",
    # value objects
    "AtlasGeometry",
    "FileFailure",
    # helpers
    "pack_rgba",
    "unpack_rgba",
    "pack_rgba_array",
    "rgba_to_hex",
    "assert_u8_image_rgba",
]

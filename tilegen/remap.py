# tilegen/remap.py
from __future__ import annotations

"""
Cell remapper.

Resamples a square 4x4 shape sheet into the 12x4 atlas. Every atlas pixel
samples the reference layout by truncating integer scaling; the colour found
there picks the source shape, and the pixel is copied from the same position
inside that shape. Colours missing from the palette leave the pixel at zero.
"""

import numpy as np

from .constants import ATLAS_COLUMNS, ATLAS_ROWS, SHAPE_GRID
from .core_types import AtlasGeometry, PaletteMap, U8RGBA, assert_u8_image_rgba
from .errors import IndivisibleBy4Error, NotSquareError
from .layout import ReferenceLayout


def validate_source_dimensions(width: int, height: int) -> int:
    """Return the cell size of a width x height sheet, or raise a DimensionError."""
    if width % SHAPE_GRID != 0 or height % SHAPE_GRID != 0:
        raise IndivisibleBy4Error(width, height)
    if width != height:
        raise NotSquareError(width, height)
    return width // SHAPE_GRID


def remap_cells(
    source: U8RGBA,
    palette: PaletteMap,
    layout: ReferenceLayout,
    pad: int = 0,
) -> U8RGBA:
    """
    Build the padded atlas interior from source.

    Args:
      source  : uint8 [S,S,4], S divisible by 4
      palette : layout colour key -> (sx, sy) shape offset in source
      layout  : reference layout sampled per atlas pixel
      pad     : border pixels reserved around each cell (left zero)

    Returns:
      uint8 [(S/4 + 2*pad)*4, (S/4 + 2*pad)*12, 4]
    """
    src = assert_u8_image_rgba(source)
    height, width = int(src.shape[0]), int(src.shape[1])
    cell_size = validate_source_dimensions(width, height)
    geom = AtlasGeometry(cell_size=cell_size, pad=int(pad))

    out = np.zeros(geom.shape, dtype=np.uint8)
    if cell_size == 0:
        return out

    ox = np.arange(ATLAS_COLUMNS * cell_size, dtype=np.int64)
    oy = np.arange(ATLAS_ROWS * cell_size, dtype=np.int64)

    # nearest-neighbour layout sample; truncation is intentional
    lx = ox * layout.width // (ATLAS_COLUMNS * cell_size)
    ly = oy * layout.height // (ATLAS_ROWS * cell_size)
    sampled = layout.keys[ly[:, None], lx[None, :]]

    rx = ox % cell_size
    ry = oy % cell_size

    gathered = np.zeros((oy.size, ox.size, 4), dtype=np.uint8)
    for key, (sx, sy) in palette.items():
        ys, xs = np.nonzero(sampled == np.uint32(key))
        if ys.size == 0:
            continue
        gathered[ys, xs] = src[sy + ry[ys], sx + rx[xs]]

    dst_x = (ox // cell_size) * geom.padded_size + geom.pad + rx
    dst_y = (oy // cell_size) * geom.padded_size + geom.pad + ry
    out[np.ix_(dst_y, dst_x)] = gathered
    return out


__all__ = ["validate_source_dimensions", "remap_cells"]

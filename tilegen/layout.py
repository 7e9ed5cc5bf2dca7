# tilegen/layout.py
from __future__ import annotations

"""
Reference layout: which source shape fills each pixel of the 12x4 atlas.

Exports:
  ReferenceLayout        : frozen (pixels, keys) pair, read-only arrays
  build_reference_layout : built-in layout generated from BITMASK_TO_CELL
  load_reference_layout  : replacement layout from a PNG file
  representative_masks   : one neighbour bitmask per atlas cell (or None)

The built-in layout follows the usual 16-shape sheet:

  TL  T   TR  Vt
  L   C   R   Vm
  BL  B   BR  Vb
  Hl  Hm  Hr  Iso

(V*: vertical strip, H*: horizontal strip, Iso: isolated shape)

Atlas columns 0-3 hold the 16 shapes unchanged. Every other cell is built per
quadrant from the 3x3 block: a quadrant with neither edge connected uses the
outer corner, one edge uses the matching edge shape, both edges plus the
diagonal uses the interior. Both edges without the diagonal is an inner
corner: interior, except for a notch at the cell corner that is split along
the diagonal between the two edge shapes.
"""

from dataclasses import dataclass
from typing import List, Optional, Tuple

import numpy as np
from PIL import Image

from .constants import (
    ATLAS_CELLS,
    ATLAS_COLUMNS,
    BITMASK_TO_CELL,
    LAYOUT_CELL_SIZE,
    LAYOUT_HEIGHT,
    LAYOUT_NOTCH_SIZE,
    LAYOUT_QUADRANT_SIZE,
    LAYOUT_WIDTH,
    NB_E,
    NB_N,
    NB_NE,
    NB_NW,
    NB_S,
    NB_SE,
    NB_SW,
    NB_W,
    SHAPE_COLOURS,
    SHAPE_GRID,
    UNMAPPED_COLOUR,
)
from .core_types import ColourKey, KeyGrid, PathLike, U8RGBA, pack_rgba_array
from .errors import LayoutError
from .image_io import load_png_rgba


@dataclass(frozen=True, eq=False)
class ReferenceLayout:
    """Layout pixels plus their packed colour keys. Both arrays are read-only."""

    pixels: U8RGBA  # (LAYOUT_HEIGHT, LAYOUT_WIDTH, 4)
    keys: KeyGrid  # (LAYOUT_HEIGHT, LAYOUT_WIDTH)

    @classmethod
    def from_pixels(cls, pixels: np.ndarray) -> "ReferenceLayout":
        if pixels.dtype != np.uint8 or pixels.ndim != 3 or pixels.shape[-1] != 4:
            raise LayoutError("reference layout must be a uint8 RGBA image")
        height, width = int(pixels.shape[0]), int(pixels.shape[1])
        if (width, height) != (LAYOUT_WIDTH, LAYOUT_HEIGHT):
            raise LayoutError(
                f"reference layout must be {LAYOUT_WIDTH}x{LAYOUT_HEIGHT}, "
                f"got {width}x{height}"
            )
        px = np.array(pixels, dtype=np.uint8, copy=True)
        keys = pack_rgba_array(px)
        px.setflags(write=False)
        keys.setflags(write=False)
        return cls(pixels=px, keys=keys)

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])

    def colour_at(self, x: int, y: int) -> ColourKey:
        """Packed colour key at layout pixel (x, y)."""
        return int(self.keys[y, x])


# Built-in layout

# (vertical bit, horizontal bit, diagonal bit) per quadrant (qx, qy)
_QUADRANT_BITS = {
    (0, 0): (NB_N, NB_W, NB_NW),
    (1, 0): (NB_N, NB_E, NB_NE),
    (0, 1): (NB_S, NB_W, NB_SW),
    (1, 1): (NB_S, NB_E, NB_SE),
}


def representative_masks() -> List[Optional[int]]:
    """Lowest neighbour bitmask mapped to each atlas cell, None for unused cells."""
    reps: List[Optional[int]] = [None] * ATLAS_CELLS
    for mask, cell in enumerate(BITMASK_TO_CELL):
        if reps[cell] is None:
            reps[cell] = mask
    return reps


def _shape_index(col: int, row: int) -> int:
    return row * SHAPE_GRID + col


def _quadrant_plan(mask: int, qx: int, qy: int) -> Tuple[int, Optional[Tuple[int, int]]]:
    """
    Shape for one quadrant of a composed cell.

    Returns (shape, notch). notch is (horizontal_edge_shape, vertical_edge_shape)
    for an inner corner, else None.
    """
    v_bit, h_bit, d_bit = _QUADRANT_BITS[(qx, qy)]
    outer_col = 0 if qx == 0 else 2
    outer_row = 0 if qy == 0 else 2
    h = bool(mask & h_bit)
    v = bool(mask & v_bit)
    col = 1 if h else outer_col
    row = 1 if v else outer_row
    shape = _shape_index(col, row)
    if h and v and not (mask & d_bit):
        return shape, (_shape_index(1, outer_row), _shape_index(outer_col, 1))
    return shape, None


def _paint_notch(
    pixels: np.ndarray,
    x0: int,
    y0: int,
    qx: int,
    qy: int,
    horizontal_shape: int,
    vertical_shape: int,
) -> None:
    n = LAYOUT_NOTCH_SIZE
    nx0 = x0 + (0 if qx == 0 else LAYOUT_CELL_SIZE - n)
    ny0 = y0 + (0 if qy == 0 else LAYOUT_CELL_SIZE - n)
    steps = np.arange(n)
    # distance from the cell corner along each axis
    dx = steps if qx == 0 else steps[::-1]
    dy = steps if qy == 0 else steps[::-1]
    use_vertical = dx[None, :] <= dy[:, None]
    block = np.where(
        use_vertical[..., None],
        np.array(SHAPE_COLOURS[vertical_shape], dtype=np.uint8),
        np.array(SHAPE_COLOURS[horizontal_shape], dtype=np.uint8),
    )
    pixels[ny0 : ny0 + n, nx0 : nx0 + n] = block


def build_reference_layout() -> ReferenceLayout:
    """Generate the built-in 384x128 layout from BITMASK_TO_CELL."""
    pixels = np.zeros((LAYOUT_HEIGHT, LAYOUT_WIDTH, 4), dtype=np.uint8)
    pixels[...] = np.array(UNMAPPED_COLOUR, dtype=np.uint8)
    q = LAYOUT_QUADRANT_SIZE

    for cell, mask in enumerate(representative_masks()):
        if mask is None:
            continue
        col, row = cell % ATLAS_COLUMNS, cell // ATLAS_COLUMNS
        x0, y0 = col * LAYOUT_CELL_SIZE, row * LAYOUT_CELL_SIZE

        if col < SHAPE_GRID:
            pixels[y0 : y0 + LAYOUT_CELL_SIZE, x0 : x0 + LAYOUT_CELL_SIZE] = (
                SHAPE_COLOURS[_shape_index(col, row)]
            )
            continue

        for qy in (0, 1):
            for qx in (0, 1):
                shape, notch = _quadrant_plan(mask, qx, qy)
                qx0, qy0 = x0 + qx * q, y0 + qy * q
                pixels[qy0 : qy0 + q, qx0 : qx0 + q] = SHAPE_COLOURS[shape]
                if notch is not None:
                    _paint_notch(pixels, x0, y0, qx, qy, *notch)

    return ReferenceLayout.from_pixels(pixels)


def load_reference_layout(path: PathLike) -> ReferenceLayout:
    """Load a replacement layout PNG. Any decode or size problem is a LayoutError."""
    try:
        pixels = load_png_rgba(path)
    except (OSError, SyntaxError, ValueError, Image.DecompressionBombError) as e:
        raise LayoutError(f"cannot load reference layout '{path}': {e}") from e
    return ReferenceLayout.from_pixels(pixels)


__all__ = [
    "ReferenceLayout",
    "build_reference_layout",
    "load_reference_layout",
    "representative_masks",
]

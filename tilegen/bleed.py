# tilegen/bleed.py
from __future__ import annotations

"""
Edge bleeder.

Fills the pad border of every atlas cell by repeating its outermost pixels,
one ring at a time from the inside out. Each ring copies from the ring just
written, so after a full bleed the border corners repeat the cell's corner
pixel. Works on all 48 cells at once through a (rows, y, cols, x, 4) view.
"""

import numpy as np

from .constants import ATLAS_COLUMNS, ATLAS_ROWS
from .core_types import AtlasGeometry, U8RGBA, assert_u8_image_rgba
from .errors import BleedExceedsPadError, NegativeAmountError


def check_bleed(pad: int, bleed: int) -> None:
    """Raise a PaddingError unless 0 <= bleed <= pad."""
    if pad < 0 or bleed < 0:
        raise NegativeAmountError(pad, bleed)
    if bleed > pad:
        raise BleedExceedsPadError(pad, bleed)


def bleed_edges(atlas: U8RGBA, geometry: AtlasGeometry, bleed: int) -> U8RGBA:
    """Bleed `bleed` rings into each cell's border. Mutates and returns atlas."""
    check_bleed(geometry.pad, bleed)
    out = assert_u8_image_rgba(atlas)
    if out.shape != geometry.shape:
        raise ValueError(
            f"atlas shape {out.shape} does not match geometry {geometry.shape}"
        )
    if not out.flags.c_contiguous:
        raise ValueError("atlas must be C-contiguous")
    if bleed == 0:
        return out

    size = geometry.padded_size
    pad = geometry.pad
    # view, not a copy: writes land in out
    cells = out.reshape(ATLAS_ROWS, size, ATLAS_COLUMNS, size, 4)

    for b in range(bleed):
        lo = pad - b  # first filled row/column of this ring's span
        hi = size - pad + b  # one past the last filled row/column
        span = slice(lo, hi)

        # top / bottom
        cells[:, lo - 1, :, span] = cells[:, lo, :, span]
        cells[:, hi, :, span] = cells[:, hi - 1, :, span]

        # left / right
        cells[:, span, :, lo - 1] = cells[:, span, :, lo]
        cells[:, span, :, hi] = cells[:, span, :, hi - 1]

        # corners, from the diagonal neighbour one ring in
        cells[:, lo - 1, :, lo - 1] = cells[:, lo, :, lo]
        cells[:, lo - 1, :, hi] = cells[:, lo, :, hi - 1]
        cells[:, hi, :, hi] = cells[:, hi - 1, :, hi - 1]
        cells[:, hi, :, lo - 1] = cells[:, hi - 1, :, lo]

    return out


__all__ = ["check_bleed", "bleed_edges"]

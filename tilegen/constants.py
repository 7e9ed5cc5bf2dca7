# tilegen/constants.py
"""
Fixed geometry and tables shared across the project.

- Reference layout geometry (LAYOUT_*)
- Atlas and source grid sizes
- Neighbour bit order used by BITMASK_TO_CELL
- Shape colours painted into the built-in layout
"""
from __future__ import annotations

from typing import List, Tuple

# =========================
# Reference layout geometry
# =========================
LAYOUT_WIDTH: int = 384
LAYOUT_HEIGHT: int = 128

ATLAS_COLUMNS: int = 12
ATLAS_ROWS: int = 4
ATLAS_CELLS: int = ATLAS_COLUMNS * ATLAS_ROWS

LAYOUT_CELL_SIZE: int = LAYOUT_WIDTH // ATLAS_COLUMNS  # 32
LAYOUT_QUADRANT_SIZE: int = LAYOUT_CELL_SIZE // 2  # 16
LAYOUT_NOTCH_SIZE: int = LAYOUT_QUADRANT_SIZE // 2  # 8

# Source sheet is SHAPE_GRID x SHAPE_GRID shapes
SHAPE_GRID: int = 4
SHAPE_COUNT: int = SHAPE_GRID * SHAPE_GRID

# =========================
# Neighbour bits
# =========================
NB_E: int = 1 << 0
NB_NE: int = 1 << 1
NB_N: int = 1 << 2
NB_NW: int = 1 << 3
NB_W: int = 1 << 4
NB_SW: int = 1 << 5
NB_S: int = 1 << 6
NB_SE: int = 1 << 7

# bitmask -> atlas cell index (row-major over the 12x4 atlas).
# Rows are the high nibble, columns the low nibble.
BITMASK_TO_CELL: Tuple[int, ...] = (
    39, 36, 39, 36, 27, 16, 27, 24, 39, 36, 39, 36, 27, 16, 27, 24,
    38, 37, 38, 37, 17, 41, 17, 43, 38, 37, 38, 37, 26, 21, 26, 25,
    39, 36, 39, 36, 27, 16, 27, 24, 39, 36, 39, 36, 27, 16, 27, 24,
    38, 37, 38, 37, 17, 41, 17, 43, 38, 37, 38, 37, 26, 21, 26, 25,
     3,  4,  3,  4, 15, 40, 15, 20,  3,  4,  3,  4, 15, 40, 15, 20,
     5, 28,  5, 28, 29, 10, 29, 23,  5, 28,  5, 28, 31, 11, 31, 32,
     3,  4,  3,  4, 15, 40, 15, 20,  3,  4,  3,  4, 15, 40, 15, 20,
     2, 30,  2, 30,  9, 46,  9, 22,  2, 30,  2, 30, 14, 44, 14,  6,
    39, 36, 39, 36, 27, 16, 27, 24, 39, 36, 39, 36, 27, 16, 27, 24,
    38, 37, 38, 37, 17, 41, 17, 43, 38, 37, 38, 37, 26, 21, 26, 25,
    39, 36, 39, 36, 27, 16, 27, 24, 39, 36, 39, 36, 27, 16, 27, 24,
    38, 37, 38, 37, 17, 41, 17, 43, 38, 37, 38, 37, 26, 21, 26, 25,
     3,  0,  3,  0, 15, 42, 15, 12,  3,  0,  3,  0, 15, 42, 15, 12,
     5,  8,  5,  8, 29, 35, 29, 33,  5,  8,  5,  8, 31, 34, 31,  7,
     3,  0,  3,  0, 15, 42, 15, 12,  3,  0,  3,  0, 15, 42, 15, 12,
     2,  1,  2,  1,  9, 45,  9, 19,  2,  1,  2,  1, 14, 18, 14, 13,
)  # fmt: skip

# =========================
# Built-in layout colours
# =========================
# One opaque RGBA colour per shape, indexed by shape_y * SHAPE_GRID + shape_x.
SHAPE_COLOURS: List[Tuple[int, int, int, int]] = [
    (32 + 64 * (i % SHAPE_GRID), 32 + 64 * (i // SHAPE_GRID), 160, 255)
    for i in range(SHAPE_COUNT)
]

# Unused mask cells are painted with this (never a palette key)
UNMAPPED_COLOUR: Tuple[int, int, int, int] = (0, 0, 0, 0)

# =========================
# Output
# =========================
OUTPUT_SUFFIX: str = "-tiled.png"

__all__ = [
    "LAYOUT_WIDTH",
    "LAYOUT_HEIGHT",
    "ATLAS_COLUMNS",
    "ATLAS_ROWS",
    "ATLAS_CELLS",
    "LAYOUT_CELL_SIZE",
    "LAYOUT_QUADRANT_SIZE",
    "LAYOUT_NOTCH_SIZE",
    "SHAPE_GRID",
    "SHAPE_COUNT",
    "NB_E",
    "NB_NE",
    "NB_N",
    "NB_NW",
    "NB_W",
    "NB_SW",
    "NB_S",
    "NB_SE",
    "BITMASK_TO_CELL",
    "SHAPE_COLOURS",
    "UNMAPPED_COLOUR",
    "OUTPUT_SUFFIX",
]

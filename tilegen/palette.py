# tilegen/palette.py
from __future__ import annotations

"""
Palette builder.

Exports:
  build_palette(layout, cell_size) -> PaletteMap
  probe_points(layout)             -> [((shape_x, shape_y), (lx, ly)), ...]
  palette_collisions(layout)       -> {colour_key: [(shape_x, shape_y), ...]}
"""

from typing import Dict, List, Tuple

from .constants import ATLAS_COLUMNS, ATLAS_ROWS, SHAPE_GRID
from .core_types import ColourKey, PaletteMap
from .layout import ReferenceLayout

ShapeCoord = Tuple[int, int]


def probe_points(layout: ReferenceLayout) -> List[Tuple[ShapeCoord, Tuple[int, int]]]:
    """Layout pixel sampled for each shape, in palette insertion order (x outer, y inner)."""
    points: List[Tuple[ShapeCoord, Tuple[int, int]]] = []
    for shape_x in range(SHAPE_GRID):
        for shape_y in range(SHAPE_GRID):
            lx = shape_x * layout.width // ATLAS_COLUMNS
            ly = shape_y * layout.height // ATLAS_ROWS
            points.append(((shape_x, shape_y), (lx, ly)))
    return points


def build_palette(layout: ReferenceLayout, cell_size: int) -> PaletteMap:
    """
    Map each shape's probe colour to that shape's (x, y) offset in the source image.

    A colour shared by two probes keeps the offset written last.
    """
    palette: PaletteMap = {}
    for (shape_x, shape_y), (lx, ly) in probe_points(layout):
        palette[layout.colour_at(lx, ly)] = (shape_x * cell_size, shape_y * cell_size)
    return palette


def palette_collisions(layout: ReferenceLayout) -> Dict[ColourKey, List[ShapeCoord]]:
    """Probe colours used by more than one shape; empty for a well-formed layout."""
    seen: Dict[ColourKey, List[ShapeCoord]] = {}
    for shape, (lx, ly) in probe_points(layout):
        seen.setdefault(layout.colour_at(lx, ly), []).append(shape)
    return {key: shapes for key, shapes in seen.items() if len(shapes) > 1}


__all__ = ["probe_points", "build_palette", "palette_collisions"]

# tilegen/mapping.py
from __future__ import annotations

"""
Neighbour bitmask -> atlas cell lookup, for engines that place the tiles.

Bit order: E=1, NE=2, N=4, NW=8, W=16, SW=32, S=64, SE=128.
"""

from .constants import BITMASK_TO_CELL


def cell_for_bitmask(mask: int) -> int:
    """Atlas cell index (row-major, 12 columns) for an 8-neighbour bitmask."""
    if not 0 <= mask <= 0xFF:
        raise ValueError(f"bitmask out of range: {mask}")
    return BITMASK_TO_CELL[mask]


def format_mapping_table() -> str:
    """The 16x16 table as printed by `tilegen mapping`; row = high nibble."""
    rows = []
    for r in range(16):
        values = BITMASK_TO_CELL[r * 16 : (r + 1) * 16]
        rows.append(", ".join(f"{v:2d}" for v in values) + ",")
    return "\n".join(rows)


__all__ = ["cell_for_bitmask", "format_mapping_table"]

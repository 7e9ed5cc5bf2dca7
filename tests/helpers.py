from __future__ import annotations

from pathlib import Path
from typing import Tuple

import numpy as np
from PIL import Image

from tilegen.constants import SHAPE_GRID


def shape_colour(shape_x: int, shape_y: int) -> Tuple[int, int, int, int]:
    """Distinct opaque colour per source shape, never (0, 0, 0, 0)."""
    return (10 + 60 * shape_x, 10 + 60 * shape_y, 200, 255)


def make_sheet(side: int) -> np.ndarray:
    """Square RGBA sheet where every shape is filled with shape_colour."""
    cell = side // SHAPE_GRID
    sheet = np.zeros((side, side, 4), dtype=np.uint8)
    for sy in range(SHAPE_GRID):
        for sx in range(SHAPE_GRID):
            sheet[sy * cell : (sy + 1) * cell, sx * cell : (sx + 1) * cell] = (
                shape_colour(sx, sy)
            )
    return sheet


def make_noise(height: int, width: int, seed: int = 0) -> np.ndarray:
    """Random opaque RGBA image."""
    rng = np.random.default_rng(seed)
    img = rng.integers(0, 256, size=(height, width, 4), dtype=np.uint8)
    img[..., 3] = 255
    return img


def write_png(path: Path, image: np.ndarray) -> Path:
    Image.fromarray(np.ascontiguousarray(image)).save(path, format="PNG")
    return path

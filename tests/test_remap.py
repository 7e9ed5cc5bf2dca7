from __future__ import annotations

import numpy as np
import pytest

from tests.helpers import make_noise, make_sheet
from tilegen.core_types import AtlasGeometry
from tilegen.errors import DimensionError, IndivisibleBy4Error, NotSquareError
from tilegen.palette import build_palette
from tilegen.remap import remap_cells, validate_source_dimensions


def _reference_remap(source, palette, layout, pad):
    """Pixel-by-pixel transcription of the remap formulas."""
    cs = source.shape[1] // 4
    geom = AtlasGeometry(cs, pad)
    out = np.zeros(geom.shape, dtype=np.uint8)
    for cx in range(12):
        for cy in range(4):
            for rx in range(cs):
                for ry in range(cs):
                    lx = (cx * cs + rx) * layout.width // (12 * cs)
                    ly = (cy * cs + ry) * layout.height // (4 * cs)
                    hit = palette.get(layout.colour_at(lx, ly))
                    if hit is None:
                        continue
                    sx, sy = hit
                    out[
                        pad + cy * geom.padded_size + ry,
                        pad + cx * geom.padded_size + rx,
                    ] = source[sy + ry, sx + rx]
    return out


def _atlas_cell(atlas, index, geom):
    col, row = index % 12, index // 12
    y0 = row * geom.padded_size + geom.pad
    x0 = col * geom.padded_size + geom.pad
    return atlas[y0 : y0 + geom.cell_size, x0 : x0 + geom.cell_size]


@pytest.mark.parametrize(
    "width,height,exc,text",
    [
        (14, 14, IndivisibleBy4Error, "(14, 14) is indivisible by 4"),
        (16, 18, IndivisibleBy4Error, "(16, 18) is indivisible by 4"),
        (18, 20, IndivisibleBy4Error, "indivisible by 4"),
        (16, 20, NotSquareError, "(16, 20) is not square"),
    ],
)
def test_validate_rejects(width, height, exc, text):
    with pytest.raises(exc) as info:
        validate_source_dimensions(width, height)
    assert text in str(info.value)
    assert isinstance(info.value, DimensionError)
    assert isinstance(info.value, ValueError)
    assert (info.value.width, info.value.height) == (width, height)


def test_validate_returns_cell_size():
    assert validate_source_dimensions(12, 12) == 3
    assert validate_source_dimensions(64, 64) == 16


@pytest.mark.parametrize("side", [4, 8, 16, 36])
@pytest.mark.parametrize("pad", [0, 1, 3])
def test_output_dimensions(layout, side, pad):
    src = make_noise(side, side)
    atlas = remap_cells(src, build_palette(layout, side // 4), layout, pad)
    cs = side // 4
    assert atlas.shape == ((cs + 2 * pad) * 4, (cs + 2 * pad) * 12, 4)
    assert atlas.dtype == np.uint8
    if pad == 0:
        assert atlas.shape[:2] == (side, cs * 12)


def test_remap_rejects_non_square(layout):
    with pytest.raises(NotSquareError):
        remap_cells(make_noise(20, 16), build_palette(layout, 4), layout)


def test_all_black_sheet(layout):
    src = np.zeros((16, 16, 4), dtype=np.uint8)
    src[..., 3] = 255
    atlas = remap_cells(src, build_palette(layout, 4), layout, 0)
    assert atlas.shape == (16, 48, 4)
    geom = AtlasGeometry(4, 0)
    for index in range(48):
        cell = _atlas_cell(atlas, index, geom)
        if index == 47:
            assert not cell.any()
        else:
            assert (cell == (0, 0, 0, 255)).all()


def test_identity_cells_copy_source_shapes(layout):
    src = make_noise(32, 32, seed=3)
    geom = AtlasGeometry(8, 2)
    atlas = remap_cells(src, build_palette(layout, 8), layout, geom.pad)
    for row in range(4):
        for col in range(4):
            cell = _atlas_cell(atlas, row * 12 + col, geom)
            shape = src[row * 8 : (row + 1) * 8, col * 8 : (col + 1) * 8]
            assert np.array_equal(cell, shape)


def test_padding_border_left_empty(layout):
    src = make_sheet(16)
    geom = AtlasGeometry(4, 2)
    atlas = remap_cells(src, build_palette(layout, 4), layout, geom.pad)
    border = np.ones(geom.shape[:2], dtype=bool)
    for index in range(48):
        col, row = index % 12, index // 12
        y0 = row * geom.padded_size + geom.pad
        x0 = col * geom.padded_size + geom.pad
        border[y0 : y0 + 4, x0 : x0 + 4] = False
    assert not atlas[border].any()


def test_unmapped_colours_stay_default(layout):
    atlas = remap_cells(make_noise(16, 16), {}, layout, 1)
    assert not atlas.any()


def test_cells_only_use_mapped_shapes(layout):
    src = make_sheet(16)
    atlas = remap_cells(src, build_palette(layout, 4), layout, 0)
    allowed = {tuple(int(v) for v in px) for px in src.reshape(-1, 4)}
    allowed.add((0, 0, 0, 0))
    used = {tuple(int(v) for v in px) for px in np.unique(atlas.reshape(-1, 4), axis=0)}
    assert used <= allowed


@pytest.mark.parametrize("side,pad", [(12, 0), (12, 1), (20, 2), (32, 0)])
def test_matches_pixelwise_reference(layout, side, pad):
    src = make_noise(side, side, seed=side + pad)
    palette = build_palette(layout, side // 4)
    assert np.array_equal(
        remap_cells(src, palette, layout, pad),
        _reference_remap(src, palette, layout, pad),
    )

from __future__ import annotations

import numpy as np

from tilegen.constants import SHAPE_COLOURS
from tilegen.core_types import pack_rgba
from tilegen.layout import ReferenceLayout
from tilegen.palette import build_palette, palette_collisions, probe_points


def test_probe_points_are_top_left_of_first_four_columns(layout):
    points = probe_points(layout)
    assert len(points) == 16
    assert points[0] == ((0, 0), (0, 0))
    assert points[1] == ((0, 1), (0, 32))
    assert points[-1] == ((3, 3), (96, 96))


def test_builtin_palette_maps_every_shape(layout):
    palette = build_palette(layout, 8)
    assert len(palette) == 16
    for sy in range(4):
        for sx in range(4):
            key = pack_rgba(SHAPE_COLOURS[sy * 4 + sx])
            assert palette[key] == (sx * 8, sy * 8)
    assert palette_collisions(layout) == {}


def test_build_palette_is_idempotent(layout):
    assert build_palette(layout, 5) == build_palette(layout, 5)


def test_colliding_probes_keep_last_write():
    px = np.zeros((128, 384, 4), dtype=np.uint8)
    px[..., :] = (9, 9, 9, 255)
    lay = ReferenceLayout.from_pixels(px)
    key = pack_rgba((9, 9, 9, 255))

    palette = build_palette(lay, 4)
    assert palette == {key: (12, 12)}

    collisions = palette_collisions(lay)
    assert list(collisions) == [key]
    assert collisions[key][-1] == (3, 3)
    assert len(collisions[key]) == 16


def test_partial_collision_last_write_wins():
    px = np.zeros((128, 384, 4), dtype=np.uint8)
    for sx in range(4):
        for sy in range(4):
            px[sy * 32, sx * 32] = (sx, sy, 1, 255)
    # shapes (0, 2) and (1, 0) share a colour; (1, 0) is written later
    px[0, 32] = (0, 2, 1, 255)
    palette = build_palette(ReferenceLayout.from_pixels(px), 10)
    assert len(palette) == 15
    assert palette[pack_rgba((0, 2, 1, 255))] == (10, 0)

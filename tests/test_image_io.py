from __future__ import annotations

from pathlib import Path

import numpy as np
import pytest
from PIL import Image

from tests.helpers import make_noise, write_png
from tilegen.image_io import (
    encode_png_rgba,
    file_prefix,
    load_png_rgba,
    output_path_for,
    save_png_rgba,
    write_bytes_atomic,
)


@pytest.mark.parametrize(
    "name,prefix",
    [
        ("grass.png", "grass"),
        ("grass.v2.png", "grass"),
        ("grass", "grass"),
        (".hidden.png", ".hidden"),
        (".hidden", ".hidden"),
    ],
)
def test_file_prefix(name, prefix):
    assert file_prefix(Path("some/dir") / name) == prefix


def test_output_path_is_next_to_input():
    assert output_path_for("art/dirt.old.png") == Path("art/dirt-tiled.png")


def test_load_converts_to_rgba(tmp_path):
    rgb = np.full((8, 8, 3), 40, dtype=np.uint8)
    path = tmp_path / "rgb.png"
    Image.fromarray(rgb).save(path)
    arr = load_png_rgba(path)
    assert arr.shape == (8, 8, 4)
    assert (arr[..., 3] == 255).all()
    assert (arr[..., :3] == 40).all()


def test_load_rejects_non_png(tmp_path):
    path = tmp_path / "sheet.bmp"
    Image.fromarray(make_noise(8, 8)[..., :3]).save(path, format="BMP")
    with pytest.raises(OSError):
        load_png_rgba(path)


def test_encoded_bytes_load_back(tmp_path):
    img = make_noise(6, 10)
    img[0, 0] = (1, 2, 3, 0)
    path = write_bytes_atomic(tmp_path / "e.png", encode_png_rgba(img))
    assert np.array_equal(load_png_rgba(path), img)


def test_encode_rejects_non_rgba():
    with pytest.raises(TypeError):
        encode_png_rgba(np.zeros((4, 4, 3), dtype=np.uint8))


def test_save_is_atomic(tmp_path):
    img = make_noise(4, 4)
    out = save_png_rgba(tmp_path / "a-tiled.png", img)
    assert out == tmp_path / "a-tiled.png"
    assert np.array_equal(load_png_rgba(out), img)
    assert sorted(p.name for p in tmp_path.iterdir()) == ["a-tiled.png"]


def test_failed_write_leaves_nothing(tmp_path):
    target = tmp_path / "missing-dir" / "x.png"
    with pytest.raises(OSError):
        write_bytes_atomic(target, b"data")
    assert not target.exists()


def test_write_replaces_existing(tmp_path):
    path = write_png(tmp_path / "x.png", make_noise(4, 4))
    write_bytes_atomic(path, b"new")
    assert path.read_bytes() == b"new"
    assert [p.name for p in tmp_path.iterdir()] == ["x.png"]

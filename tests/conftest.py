"""Shared test fixtures."""

from __future__ import annotations

import numpy as np
import pytest
from PIL import Image

from sdf_forge.core import Bitmap


def make_bitmap(rows: list[str]) -> Bitmap:
    """Build a bitmap from strings, '#' = on, '.' = off."""
    return Bitmap.from_grid([[c == '#' for c in row] for row in rows])


# 5x5, everything on except the centre pixel
HOLE_ROWS = [
    "#####",
    "#####",
    "##.##",
    "#####",
    "#####",
]

# 8x1, left half on
SPLIT_ROWS = ["####...."]


@pytest.fixture
def hole_bitmap() -> Bitmap:
    return make_bitmap(HOLE_ROWS)


@pytest.fixture
def split_bitmap() -> Bitmap:
    return make_bitmap(SPLIT_ROWS)


@pytest.fixture
def random_bitmap() -> Bitmap:
    rng = np.random.default_rng(1234)
    return Bitmap.from_grid(rng.random((11, 17)) > 0.6)


@pytest.fixture
def glyph_png(tmp_path):
    """12x10 RGB image: black background with a white 4x6 block."""
    arr = np.zeros((10, 12, 3), dtype=np.uint8)
    arr[2:8, 4:8] = 255
    path = tmp_path / "glyph.png"
    Image.fromarray(arr, 'RGB').save(path)
    return path


@pytest.fixture(autouse=True)
def no_user_config(tmp_path, monkeypatch):
    """Keep ~/.sdf-forge/config.yaml out of every test."""
    monkeypatch.setattr(
        "sdf_forge.core.config.DEFAULT_CONFIG_PATH",
        tmp_path / "no-such-dir" / "config.yaml",
    )


@pytest.fixture
def bitmap_from_rows():
    return make_bitmap

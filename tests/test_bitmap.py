"""Tests for thresholding images into occupancy bitmaps."""

from __future__ import annotations

import numpy as np
import pytest

from sdf_forge.core import Bitmap, ImageParser, extract_bitmap, is_on
from sdf_forge.core.parser import rgb_to_luma


class TestIsOn:
    def test_default_cutoff_is_strict(self):
        assert not is_on(250)
        assert is_on(251)
        assert is_on(255)
        assert not is_on(0)

    def test_custom_threshold(self):
        assert is_on(129, threshold=128)
        assert not is_on(128, threshold=128)


class TestExtractBitmap:
    def test_length_and_shape(self):
        image = ImageParser.from_array(np.zeros((3, 7), dtype=np.uint8))
        bitmap = extract_bitmap(image)
        assert len(bitmap) == 21
        assert bitmap.width == 7
        assert bitmap.height == 3
        assert bitmap.grid().shape == (3, 7)

    def test_near_white_only(self):
        luma = np.array([[0, 128, 250, 251, 255]], dtype=np.uint8)
        bitmap = extract_bitmap(ImageParser.from_array(luma))
        assert list(bitmap.cells) == [False, False, False, True, True]

    def test_row_major_order(self):
        luma = np.zeros((2, 3), dtype=np.uint8)
        luma[1, 0] = 255  # x=0, y=1 -> index 3
        bitmap = extract_bitmap(ImageParser.from_array(luma))
        assert bitmap.count_on() == 1
        assert bitmap[3]
        assert bitmap.at(0, 1)
        assert not bitmap.at(1, 0)

    def test_matches_pixel_enumeration(self):
        rng = np.random.default_rng(7)
        image = ImageParser.from_array(rng.integers(240, 255, size=(6, 9), endpoint=True, dtype=np.uint8))
        bitmap = extract_bitmap(image)
        expected = [is_on(luma) for _, _, luma in image.pixels()]
        assert list(bitmap.cells) == expected

    def test_explicit_threshold(self):
        luma = np.array([[10, 100, 200]], dtype=np.uint8)
        bitmap = extract_bitmap(ImageParser.from_array(luma), threshold=99)
        assert list(bitmap.cells) == [False, True, True]

    def test_rgb_uses_luma(self):
        rgb = np.array([[[255, 255, 255], [255, 0, 0], [250, 250, 250]]], dtype=np.uint8)
        bitmap = extract_bitmap(ImageParser.from_array(rgb))
        assert list(bitmap.cells) == [True, False, False]

    def test_alpha_is_ignored(self):
        rgba = np.array([[[255, 255, 255, 0], [0, 0, 0, 255]]], dtype=np.uint8)
        bitmap = extract_bitmap(ImageParser.from_array(rgba))
        assert list(bitmap.cells) == [True, False]

    def test_source_not_modified(self):
        luma = np.full((4, 4), 255, dtype=np.uint8)
        image = ImageParser.from_array(luma)
        before = image.luma.copy()
        extract_bitmap(image)
        np.testing.assert_array_equal(image.luma, before)

    def test_bitmap_is_read_only(self):
        bitmap = extract_bitmap(ImageParser.from_array(np.zeros((2, 2), dtype=np.uint8)))
        with pytest.raises(ValueError):
            bitmap.cells[0] = True

    def test_threshold_out_of_range(self):
        image = ImageParser.from_array(np.zeros((2, 2), dtype=np.uint8))
        with pytest.raises(ValueError):
            extract_bitmap(image, threshold=256)


class TestBitmap:
    def test_from_grid(self, bitmap_from_rows):
        bitmap = bitmap_from_rows(["#.", "..", ".#"])
        assert (bitmap.width, bitmap.height) == (2, 3)
        assert bitmap.at(0, 0)
        assert bitmap.at(1, 2)
        assert bitmap.count_on() == 2

    def test_cell_count_mismatch(self):
        with pytest.raises(ValueError):
            Bitmap(width=3, height=3, cells=np.zeros(8, dtype=bool))


class TestLuma:
    def test_srgb_weights_truncated(self):
        # 0.2125*255 + 0.7154*255 + 0.0721*210 = 251.76
        image = ImageParser.from_array(np.array([[[255, 255, 210]]], dtype=np.uint8))
        assert image.luma[0, 0] == 251
        assert list(extract_bitmap(image).cells) == [True]

    def test_single_channels(self):
        rgb = np.array([[[255, 0, 0], [0, 255, 0], [0, 0, 255]]], dtype=np.uint8)
        assert ImageParser.from_array(rgb).luma.tolist() == [[54, 182, 18]]

    def test_gray_passes_through(self):
        luma = np.array([[0, 250, 251]], dtype=np.uint8)
        np.testing.assert_array_equal(ImageParser.from_array(luma).luma, luma)

    def test_rgb_to_luma_dtype(self):
        out = rgb_to_luma(np.zeros((2, 3, 3), dtype=np.uint8))
        assert out.dtype == np.uint8
        assert out.shape == (2, 3)


class TestThresholdValidation:
    @pytest.mark.parametrize("threshold", [True, False, "250", 2.5, -1])
    def test_rejects_non_u8(self, threshold):
        image = ImageParser.from_array(np.zeros((2, 2), dtype=np.uint8))
        with pytest.raises(ValueError):
            extract_bitmap(image, threshold=threshold)

# Copyright (c) 2026 Swatchglow
# SPDX-License-Identifier: MIT

"""Tests for image normalization, downscaling and pixel sampling."""

import numpy as np
import pytest
from PIL import Image

from swatchglow.extract.sampling import downscale, sample_pixels, to_rgba_image


def _rgba(r, g, b, a=255, height=8, width=8):
    """Create a solid RGBA pixel array."""
    return np.full((height, width, 4), [r, g, b, a], dtype=np.uint8)


class TestToRGBAImage:

    def test_rgb_array_gets_opaque_alpha(self):
        img = to_rgba_image(np.full((4, 6, 3), 10, dtype=np.uint8))
        assert img.mode == "RGBA"
        assert img.size == (6, 4)
        assert np.all(np.asarray(img)[..., 3] == 255)

    def test_rgba_array_keeps_alpha(self):
        img = to_rgba_image(_rgba(1, 2, 3, a=40))
        assert np.all(np.asarray(img)[..., 3] == 40)

    def test_grayscale_array(self):
        img = to_rgba_image(np.full((3, 3), 77, dtype=np.uint8))
        assert tuple(np.asarray(img)[0, 0]) == (77, 77, 77, 255)

    def test_pil_mode_conversion(self):
        img = to_rgba_image(Image.new("L", (5, 5), 90))
        assert img.mode == "RGBA"
        assert img.getpixel((0, 0)) == (90, 90, 90, 255)

    def test_invalid_dtype_raises(self):
        with pytest.raises(ValueError, match="Expected uint8"):
            to_rgba_image(np.zeros((4, 4, 3), dtype=np.float32))

    def test_invalid_shape_raises(self):
        with pytest.raises(ValueError, match="Expected"):
            to_rgba_image(np.zeros((4, 4, 2), dtype=np.uint8))

    def test_invalid_type_raises(self):
        with pytest.raises(TypeError, match="Expected PIL image or numpy"):
            to_rgba_image("image.png")


class TestDownscale:

    def test_wide_image(self):
        img = Image.new("RGBA", (400, 100))
        assert downscale(img, 200).size == (200, 50)

    def test_tall_image(self):
        img = Image.new("RGBA", (400, 800))
        assert downscale(img, 200).size == (100, 200)

    def test_small_image_untouched(self):
        img = Image.new("RGBA", (120, 80))
        assert downscale(img, 200) is img

    def test_never_collapses_to_zero(self):
        img = Image.new("RGBA", (1000, 3))
        assert downscale(img, 200).size == (200, 1)


class TestSamplePixels:

    def test_stride_grid_and_center_weight(self):
        # 8x8, stride 4 -> (0,0) (4,0) (0,4) (4,4); center is (4,4), radius 2.4
        rgb, weights = sample_pixels(_rgba(10, 20, 30))
        assert rgb.shape == (4, 3)
        np.testing.assert_array_equal(weights, [1.0, 1.0, 1.0, 2.0])
        np.testing.assert_array_equal(rgb[0], [10, 20, 30])

    def test_row_major_order(self):
        rgba = _rgba(0, 0, 0)
        rgba[0, 4] = [1, 1, 1, 255]
        rgba[4, 0] = [2, 2, 2, 255]
        rgb, _ = sample_pixels(rgba)
        assert list(rgb[:, 0]) == [0, 1, 2, 0]

    def test_alpha_threshold(self):
        rgba = _rgba(50, 50, 50)
        rgba[0, 0, 3] = 127
        rgba[0, 4, 3] = 128
        rgb, _ = sample_pixels(rgba)
        assert len(rgb) == 3

    def test_fully_transparent(self):
        rgb, weights = sample_pixels(_rgba(255, 0, 0, a=0))
        assert rgb.shape == (0, 3)
        assert weights.shape == (0,)

    def test_only_every_fourth_pixel_is_read(self):
        rgba = _rgba(0, 0, 0, height=12, width=12)
        rgba[1:4, :] = [255, 255, 255, 255]  # rows between sampled rows
        rgb, _ = sample_pixels(rgba)
        assert len(rgb) == 9
        assert np.all(rgb == 0)

    def test_center_disc_weighting(self):
        rgb, weights = sample_pixels(_rgba(0, 0, 0, height=100, width=100))
        # radius 30 around (50, 50): strictly inside counts double
        ys, xs = np.meshgrid(np.arange(0, 100, 4), np.arange(0, 100, 4), indexing="ij")
        inside = np.sqrt((xs - 50) ** 2 + (ys - 50) ** 2) < 30
        assert weights.sum() == pytest.approx(inside.size + inside.sum())

    def test_custom_center_weight(self):
        _, weights = sample_pixels(_rgba(0, 0, 0), center_weight=5)
        assert weights.max() == 5.0

    def test_invalid_shape_raises(self):
        with pytest.raises(ValueError, match="H, W, 4"):
            sample_pixels(np.zeros((8, 8, 3), dtype=np.uint8))

    def test_invalid_stride_raises(self):
        with pytest.raises(ValueError, match="stride"):
            sample_pixels(_rgba(0, 0, 0), stride=0)

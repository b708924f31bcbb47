# Copyright (c) 2026 Swatchglow
# SPDX-License-Identifier: MIT

"""Tests for color conversions and formatting."""

import numpy as np
import pytest

from swatchglow.extract.colorspace import (
    centroids_to_css,
    css_to_rgb,
    fallback_colors,
    luminance,
    rgb_to_css,
    sort_by_luminance,
)
from swatchglow.schema import FALLBACK_GRAY, PENDING_GRAY


class TestLuminance:

    def test_white(self):
        assert float(luminance(np.array([255, 255, 255]))) == pytest.approx(255.0)

    def test_black(self):
        assert float(luminance(np.array([0, 0, 0]))) == 0.0

    def test_weights(self):
        lum = luminance(np.array([[100, 0, 0], [0, 100, 0], [0, 0, 100]]))
        np.testing.assert_allclose(lum, [29.9, 58.7, 11.4])

    def test_batch_shape(self):
        assert luminance(np.zeros((4, 5, 3))).shape == (4, 5)


class TestSortByLuminance:

    def test_brightest_first(self):
        rgb = np.array([[0, 0, 255], [255, 255, 255], [0, 255, 0]], dtype=np.float64)
        ordered = sort_by_luminance(rgb)
        np.testing.assert_array_equal(
            ordered, [[255, 255, 255], [0, 255, 0], [0, 0, 255]]
        )

    def test_stable_for_equal_luminance(self):
        rgb = np.array([[10, 10, 10], [10, 10, 10.0]])
        np.testing.assert_array_equal(sort_by_luminance(rgb), rgb)

    def test_empty(self):
        assert sort_by_luminance(np.empty((0, 3))).shape == (0, 3)


class TestCSSFormatting:

    def test_integer_values(self):
        assert rgb_to_css(1, 2, 3) == "rgb(1, 2, 3)"

    def test_rounds_half_up(self):
        assert rgb_to_css(12.5, 0.4, 254.6) == "rgb(13, 0, 255)"

    def test_clamps(self):
        assert rgb_to_css(300, -5, 128) == "rgb(255, 0, 128)"

    def test_parse_css(self):
        assert css_to_rgb("rgb(37, 99, 235)") == (37, 99, 235)

    def test_parse_hex(self):
        assert css_to_rgb("#2563EB") == (37, 99, 235)

    def test_centroids_to_css(self):
        centroids = np.array([[250.2, 250.7, 249.5], [37.0, 99.4, 235.0]])
        assert centroids_to_css(centroids) == [
            "rgb(250, 251, 250)",
            "rgb(37, 99, 235)",
        ]


class TestFallbackColors:

    @pytest.mark.parametrize("count", [1, 2, 5])
    def test_count(self, count):
        assert fallback_colors(count, FALLBACK_GRAY) == ["rgb(150, 150, 150)"] * count

    def test_pending_gray(self):
        assert fallback_colors(2, PENDING_GRAY) == ["rgb(200, 200, 200)"] * 2

    @pytest.mark.parametrize("count", [0, -3])
    def test_non_positive_count_is_empty(self, count):
        assert fallback_colors(count, FALLBACK_GRAY) == []

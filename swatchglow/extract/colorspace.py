# Copyright (c) 2026 Swatchglow
# SPDX-License-Identifier: MIT

"""
Color conversions and formatting.

Everything here works on 8-bit sRGB. Centroids come out of clustering as
float64 averages and are rounded only at formatting time.

All conversions are pure NumPy.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

from swatchglow.schema import RGBColor


# Rec. 601 luma weights
_LUMA = np.array([0.299, 0.587, 0.114], dtype=np.float64)


def luminance(rgb: NDArray[np.float64]) -> NDArray[np.float64]:
    """
    Perceptual brightness of RGB values.

    Args:
        rgb: Array of shape (..., 3) with RGB values [0, 255]

    Returns:
        Array of shape (...) with 0.299R + 0.587G + 0.114B
    """
    rgb = np.asarray(rgb, dtype=np.float64)
    return rgb @ _LUMA


def sort_by_luminance(rgb: NDArray[np.float64]) -> NDArray[np.float64]:
    """Return rows of an (N, 3) array ordered brightest first (stable)."""
    rgb = np.asarray(rgb, dtype=np.float64)
    if len(rgb) == 0:
        return rgb.reshape(0, 3)
    order = np.argsort(-luminance(rgb), kind="stable")
    return rgb[order]


def rgb_to_css(r: float, g: float, b: float) -> str:
    """
    Format a (possibly fractional) RGB triple as ``rgb(r, g, b)``.

    Channels are rounded half away from zero and clamped to 0-255.
    """
    channels = [int(np.floor(float(v) + 0.5)) for v in (r, g, b)]
    channels = [min(255, max(0, v)) for v in channels]
    return RGBColor(*channels).css


def css_to_rgb(s: str) -> tuple[int, int, int]:
    """Parse ``rgb(r, g, b)`` or ``#RRGGBB`` into an (r, g, b) tuple."""
    color = RGBColor.from_css(s)
    return color.r, color.g, color.b


def centroids_to_css(centroids: NDArray[np.float64]) -> list[str]:
    """Format each row of an (N, 3) centroid array as a CSS color."""
    return [rgb_to_css(r, g, b) for r, g, b in np.asarray(centroids, dtype=np.float64)]


def fallback_colors(count: int, gray: RGBColor) -> list[str]:
    """
    ``count`` copies of a gray CSS color.

    Non-positive counts give an empty list rather than an error.
    """
    return [gray.css] * max(0, count)

# Copyright (c) 2026 Swatchglow
# SPDX-License-Identifier: MIT

"""
Pixel sampling with center weighting.

The image is shrunk so neither side exceeds ``max_dimension``, then every
``stride``-th pixel along both axes is read. Mostly transparent pixels are
dropped. Pixels inside a disc around the image center count double,
since product photos put the subject in the middle.
"""

from __future__ import annotations

from typing import Union

import numpy as np
from numpy.typing import NDArray
from PIL import Image


def to_rgba_image(image: Union[Image.Image, NDArray[np.uint8]]) -> Image.Image:
    """
    Normalize an in-memory image to a Pillow RGBA image.

    Args:
        image: One of:
            - Pillow image in any mode convertible to RGBA
            - NumPy array (H, W) grayscale, (H, W, 3) RGB or (H, W, 4) RGBA,
              dtype uint8. Missing alpha is treated as fully opaque.

    Returns:
        Pillow image in RGBA mode
    """
    if isinstance(image, Image.Image):
        if image.mode != "RGBA":
            image = image.convert("RGBA")
        return image

    if isinstance(image, np.ndarray):
        if image.dtype != np.uint8:
            raise ValueError(f"Expected uint8 array, got {image.dtype}")

        if image.ndim == 2:
            image = np.stack([image] * 3, axis=-1)

        if image.ndim != 3 or image.shape[2] not in (3, 4):
            raise ValueError(
                f"Expected (H, W), (H, W, 3) or (H, W, 4) array, got shape {image.shape}"
            )

        if image.shape[2] == 3:
            alpha = np.full(image.shape[:2] + (1,), 255, dtype=np.uint8)
            image = np.concatenate([image, alpha], axis=-1)

        return Image.fromarray(np.ascontiguousarray(image))

    raise TypeError(f"Expected PIL image or numpy array, got {type(image)}")


def downscale(image: Image.Image, max_dimension: int = 200) -> Image.Image:
    """
    Shrink an image so neither side exceeds ``max_dimension``.

    Aspect ratio is preserved and images are never enlarged. Target sides
    are truncated to whole pixels, with a floor of 1.
    """
    width, height = image.size
    if width == 0 or height == 0:
        return image

    scale = min(max_dimension / width, max_dimension / height, 1.0)
    if scale >= 1.0:
        return image

    new_width = max(1, int(width * scale))
    new_height = max(1, int(height * scale))
    return image.resize((new_width, new_height), Image.Resampling.LANCZOS)


def sample_pixels(
    rgba: NDArray[np.uint8],
    stride: int = 4,
    alpha_threshold: int = 128,
    center_radius_ratio: float = 0.3,
    center_weight: float = 2.0,
) -> tuple[NDArray[np.float64], NDArray[np.float64]]:
    """
    Collect weighted color samples from an RGBA pixel array.

    Args:
        rgba: Array of shape (H, W, 4) uint8
        stride: Step between sampled pixels along x and y (starting at 0)
        alpha_threshold: Pixels with alpha below this are skipped
        center_radius_ratio: Radius of the heavy center disc as a fraction
            of the smaller image side
        center_weight: Weight for pixels strictly inside the disc (others get 1)

    Returns:
        (rgb, weights) where rgb has shape (N, 3) float64 and weights (N,),
        in row-major scan order
    """
    if rgba.ndim != 3 or rgba.shape[2] != 4:
        raise ValueError(f"Expected (H, W, 4) array, got shape {rgba.shape}")
    if stride < 1:
        raise ValueError(f"stride must be >= 1, got {stride}")

    height, width = rgba.shape[:2]
    grid = rgba[::stride, ::stride]

    ys = np.arange(0, height, stride, dtype=np.float64)
    xs = np.arange(0, width, stride, dtype=np.float64)
    yy, xx = np.meshgrid(ys, xs, indexing="ij")

    center_x = width // 2
    center_y = height // 2
    radius = min(width, height) * center_radius_ratio
    distance = np.sqrt((xx - center_x) ** 2 + (yy - center_y) ** 2)

    keep = grid[..., 3] >= alpha_threshold
    weights = np.where(distance < radius, float(center_weight), 1.0)

    rgb = grid[..., :3][keep].astype(np.float64)
    return rgb, weights[keep]

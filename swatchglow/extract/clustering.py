# Copyright (c) 2026 Swatchglow
# SPDX-License-Identifier: MIT

"""
Weighted k-means over color samples.

A deliberately small k-means: centroids are seeded from uniformly random
samples (or by deterministic farthest-point traversal), refined for a
fixed number of iterations, and returned ordered by luminance (brightest
first) rather than by cluster size.
"""

from __future__ import annotations

from typing import Optional

import numpy as np
from numpy.typing import NDArray

from swatchglow.extract.colorspace import sort_by_luminance
from swatchglow.schema import FALLBACK_GRAY

_SEEDINGS = frozenset({"random", "farthest"})


def cluster_colors(
    rgb: NDArray[np.float64],
    weights: NDArray[np.float64],
    k: int,
    iterations: int = 5,
    rng: Optional[np.random.Generator] = None,
    seeding: str = "random",
) -> NDArray[np.float64]:
    """
    Group weighted color samples into ``k`` representative colors.

    Args:
        rgb: Array of shape (N, 3) with RGB sample values [0, 255]
        weights: Array of shape (N,) with positive sample weights
        k: Number of centroids to return
        iterations: Fixed number of assign/update rounds
        rng: Random generator for seeding (None for an unseeded generator)
        seeding: "random" picks k samples uniformly at random.
            "farthest" is deterministic: the heaviest sample first, then
            repeatedly the sample farthest from every chosen seed.

    Returns:
        Array of shape (k, 3) with float centroids, brightest first.
        With no samples, every centroid is the fallback gray.
        With k <= 0, an empty (0, 3) array.
    """
    if seeding not in _SEEDINGS:
        raise ValueError(f"Unknown seeding {seeding!r}, expected one of {sorted(_SEEDINGS)}")

    if k <= 0:
        return np.empty((0, 3), dtype=np.float64)

    rgb = np.asarray(rgb, dtype=np.float64).reshape(-1, 3)
    weights = np.asarray(weights, dtype=np.float64).reshape(-1)

    if len(rgb) != len(weights):
        raise ValueError(
            f"Got {len(rgb)} samples but {len(weights)} weights"
        )

    if len(rgb) == 0:
        gray = [FALLBACK_GRAY.r, FALLBACK_GRAY.g, FALLBACK_GRAY.b]
        return np.tile(np.array(gray, dtype=np.float64), (k, 1))

    if seeding == "random":
        if rng is None:
            rng = np.random.default_rng()
        # Seeds may repeat; a duplicate centroid loses every tie and stays put
        seeds = rng.integers(len(rgb), size=k)
    else:
        seeds = _farthest_point_seeds(rgb, weights, k)

    centroids = rgb[seeds].copy()

    for _ in range(iterations):
        labels = _assign(rgb, weights, centroids)

        for j in range(k):
            mask = labels == j
            if not np.any(mask):
                continue
            w = weights[mask]
            centroids[j] = (rgb[mask] * w[:, np.newaxis]).sum(axis=0) / w.sum()

    return sort_by_luminance(centroids)


def cluster_shares(
    rgb: NDArray[np.float64],
    weights: NDArray[np.float64],
    centroids: NDArray[np.float64],
) -> NDArray[np.float64]:
    """
    Fraction of total sample weight owned by each centroid.

    Samples are assigned with the same rule as ``cluster_colors``.

    Returns:
        Array of shape (len(centroids),) summing to 1.0, or all zeros when
        there are no samples.
    """
    centroids = np.asarray(centroids, dtype=np.float64).reshape(-1, 3)
    rgb = np.asarray(rgb, dtype=np.float64).reshape(-1, 3)
    weights = np.asarray(weights, dtype=np.float64).reshape(-1)

    shares = np.zeros(len(centroids), dtype=np.float64)
    total = weights.sum()
    if len(rgb) == 0 or len(centroids) == 0 or total == 0:
        return shares

    labels = _assign(rgb, weights, centroids)
    np.add.at(shares, labels, weights)
    return shares / total


def _farthest_point_seeds(
    rgb: NDArray[np.float64],
    weights: NDArray[np.float64],
    k: int,
) -> NDArray[np.int64]:
    """Indices of k seed samples by farthest-point traversal (first index wins ties)."""
    seeds = np.empty(k, dtype=np.int64)
    seeds[0] = int(np.argmax(weights))
    nearest = np.sqrt(np.sum((rgb - rgb[seeds[0]]) ** 2, axis=1))

    for i in range(1, k):
        seeds[i] = int(np.argmax(nearest))
        dist = np.sqrt(np.sum((rgb - rgb[seeds[i]]) ** 2, axis=1))
        nearest = np.minimum(nearest, dist)

    return seeds


def _assign(
    rgb: NDArray[np.float64],
    weights: NDArray[np.float64],
    centroids: NDArray[np.float64],
) -> NDArray[np.int64]:
    """
    Nearest centroid per sample by RGB distance scaled down by sample weight.

    Ties go to the lowest centroid index.
    """
    # (N, k) distances via broadcasting
    dists = np.sqrt(
        np.sum((rgb[:, np.newaxis, :] - centroids[np.newaxis, :, :]) ** 2, axis=2)
    )
    dists = dists / weights[:, np.newaxis]
    return np.argmin(dists, axis=1)

# Copyright (c) 2026 Swatchglow
# SPDX-License-Identifier: MIT

"""
Main extraction API.

This is the primary entry point for Swatchglow. Given an image URL it
produces ``color_count`` CSS colors, brightest first, suitable for a glow
or background gradient behind the image.

Failures never propagate: they yield fallback gray colors with a tagged
error attached to the result.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Generator, Optional, Union

import httpx
import numpy as np
from numpy.typing import NDArray
from PIL import Image

from swatchglow.schema import (
    FALLBACK_GRAY,
    PENDING_GRAY,
    ColorResult,
    ExtractionError,
    ExtractionFailure,
)
from swatchglow.extract.cache import ColorCache
from swatchglow.extract.clustering import cluster_colors
from swatchglow.extract.colorspace import centroids_to_css, fallback_colors
from swatchglow.extract.loader import DEFAULT_PLACEHOLDERS, fetch_image, is_placeholder
from swatchglow.extract.sampling import downscale, sample_pixels, to_rgba_image

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExtractorConfig:
    """Configuration for color extraction."""

    # Longest side after downscaling, in pixels
    max_dimension: int = 200

    # Sample every Nth pixel along x and y
    stride: int = 4

    # Pixels with alpha below this (out of 255) are ignored
    alpha_threshold: int = 128

    # Center disc radius as a fraction of the smaller side
    center_radius_ratio: float = 0.3

    # Weight of samples inside the center disc (others weigh 1)
    center_weight: float = 2.0

    # Fixed k-means refinement rounds
    iterations: int = 5

    # Centroid seeding: "random" or deterministic "farthest"
    seeding: str = "random"

    # Seconds allowed for fetch + decode; None waits forever
    timeout: Optional[float] = 8.0

    # URLs treated as "no image" without fetching
    placeholder_urls: frozenset[str] = DEFAULT_PLACEHOLDERS


class ColorRequest:
    """
    Handle for one in-flight extraction.

    ``result`` always holds something renderable: the pending gray while
    the background task runs, then the final result. Awaiting the request
    returns the final ColorResult.
    """

    def __init__(
        self,
        url: Optional[str],
        color_count: int,
        result: ColorResult,
        task: Optional[asyncio.Task] = None,
    ) -> None:
        self.url = url
        self.color_count = color_count
        self._result = result
        self._task = task
        if task is not None:
            task.add_done_callback(self._on_done)

    @property
    def result(self) -> ColorResult:
        """Latest snapshot of the result."""
        return self._result

    @property
    def done(self) -> bool:
        """True once the final result is available."""
        return self._task is None or self._task.done()

    async def wait(self) -> ColorResult:
        """Wait for the background extraction and return its result."""
        if self._task is not None:
            await asyncio.wait({self._task})
            self._settle(self._task)
        return self._result

    def __await__(self) -> Generator[object, None, ColorResult]:
        return self.wait().__await__()

    def _on_done(self, task: asyncio.Task) -> None:
        self._settle(task)

    def _settle(self, task: asyncio.Task) -> None:
        # Runs from the done callback and from wait(); first caller wins
        if not self._result.loading:
            return
        if task.cancelled():
            error = ExtractionError(
                ExtractionFailure.LOAD, "Extraction cancelled", url=self.url
            )
            self._result = _failure_result(error, self.color_count)
            return
        exc = task.exception()
        if exc is not None:
            logger.error("Color extraction for %s crashed", self.url, exc_info=exc)
            error = ExtractionError(
                ExtractionFailure.LOAD, f"Extraction crashed: {exc}", url=self.url
            )
            self._result = _failure_result(error, self.color_count)
            return
        self._result = task.result()


class ColorExtractor:
    """
    Dominant color extractor with a per-URL result cache.

    Args:
        config: Extraction settings (uses defaults if None)
        cache: Result cache; a fresh unbounded cache when None. Share one
            cache between extractors to share results.
        client: httpx client for http(s) URLs. A short-lived client is
            created per fetch when None.
        seed: Seed for centroid initialization (None for nondeterministic)

    Example:
        >>> extractor = ColorExtractor(seed=7)
        >>> result = extractor.extract_sync("https://example.com/shoe.jpg")
        >>> result.colors
        ('rgb(243, 244, 246)', 'rgb(37, 99, 235)')
    """

    def __init__(
        self,
        config: Optional[ExtractorConfig] = None,
        *,
        cache: Optional[ColorCache] = None,
        client: Optional[httpx.AsyncClient] = None,
        seed: Optional[int] = None,
    ) -> None:
        self.config = config or ExtractorConfig()
        self.cache = cache if cache is not None else ColorCache()
        self._client = client
        self._rng = np.random.default_rng(seed)
        # Strong references so background tasks are not garbage collected
        self._tasks: set[asyncio.Task] = set()

    def extract_colors(self, image_url: Optional[str], color_count: int = 2) -> ColorRequest:
        """
        Start an extraction and return immediately.

        Placeholders and cache hits come back already settled. Otherwise
        the request starts out as the pending gray with ``loading=True``
        and a background task on the running event loop replaces it.

        Raises:
            RuntimeError: If a fetch is needed and no event loop is running
        """
        settled = self._settled_result(image_url, color_count)
        if settled is not None:
            return ColorRequest(image_url, color_count, settled)

        task = asyncio.get_running_loop().create_task(
            self._extract_uncached(image_url, color_count)
        )
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

        pending = ColorResult(
            colors=tuple(fallback_colors(color_count, PENDING_GRAY)),
            loading=True,
        )
        return ColorRequest(image_url, color_count, pending, task)

    async def extract(self, image_url: Optional[str], color_count: int = 2) -> ColorResult:
        """Run the whole extraction and return the settled result."""
        settled = self._settled_result(image_url, color_count)
        if settled is not None:
            return settled
        return await self._extract_uncached(image_url, color_count)

    def extract_sync(self, image_url: Optional[str], color_count: int = 2) -> ColorResult:
        """Blocking wrapper around ``extract`` for code without an event loop."""
        return asyncio.run(self.extract(image_url, color_count))

    def colors_from_image(
        self,
        image: Union[Image.Image, NDArray[np.uint8]],
        color_count: int = 2,
    ) -> list[str]:
        """
        Extract colors from an in-memory image. No caching.

        Args:
            image: Pillow image or uint8 array (see ``to_rgba_image``)
            color_count: Number of colors to return

        Returns:
            ``color_count`` CSS colors, brightest first

        Raises:
            ExtractionError: EMPTY_SAMPLES if no pixel is opaque enough
        """
        cfg = self.config
        rgba = np.asarray(downscale(to_rgba_image(image), cfg.max_dimension))

        rgb, weights = sample_pixels(
            rgba,
            stride=cfg.stride,
            alpha_threshold=cfg.alpha_threshold,
            center_radius_ratio=cfg.center_radius_ratio,
            center_weight=cfg.center_weight,
        )
        if len(rgb) == 0:
            raise ExtractionError(
                ExtractionFailure.EMPTY_SAMPLES, "No opaque pixels to sample"
            )

        centroids = cluster_colors(
            rgb,
            weights,
            color_count,
            iterations=cfg.iterations,
            rng=self._rng,
            seeding=cfg.seeding,
        )
        return centroids_to_css(centroids)

    def _settled_result(
        self, image_url: Optional[str], color_count: int
    ) -> Optional[ColorResult]:
        """Result available without fetching, or None."""
        if is_placeholder(image_url, self.config.placeholder_urls):
            logger.debug("Placeholder image %r, using neutral colors", image_url)
            return ColorResult(colors=tuple(fallback_colors(color_count, PENDING_GRAY)))

        cached = self.cache.get(image_url, color_count)
        if cached is not None:
            logger.debug("Cache hit for %s", image_url)
            return ColorResult(colors=cached)

        return None

    async def _extract_uncached(self, image_url: str, color_count: int) -> ColorResult:
        try:
            image = await asyncio.wait_for(
                fetch_image(image_url, self._client), timeout=self.config.timeout
            )
            colors = self.colors_from_image(image, color_count)
        except asyncio.TimeoutError:
            error = ExtractionError(
                ExtractionFailure.TIMEOUT,
                f"Image did not load within {self.config.timeout}s",
                url=image_url,
            )
            return self._fallback(error, color_count)
        except ExtractionError as e:
            if e.url is None:
                e.url = image_url
            return self._fallback(e, color_count)
        except Exception as e:
            logger.exception("Unexpected error extracting colors from %r", image_url)
            error = ExtractionError(
                ExtractionFailure.LOAD, f"Failed to load image: {e}", url=image_url
            )
            return _failure_result(error, color_count)

        self.cache.put(image_url, color_count, colors)
        return ColorResult(colors=tuple(colors))

    def _fallback(self, error: ExtractionError, color_count: int) -> ColorResult:
        logger.warning(
            "Error extracting colors from %s [%s]: %s",
            error.url, error.failure.value, error,
        )
        return _failure_result(error, color_count)


def _failure_result(error: ExtractionError, color_count: int) -> ColorResult:
    """Settled fallback result carrying ``error``."""
    return ColorResult(
        colors=tuple(fallback_colors(color_count, FALLBACK_GRAY)),
        loading=False,
        error=error,
    )


def extract_colors(
    image_url: Optional[str],
    color_count: int = 2,
    *,
    config: Optional[ExtractorConfig] = None,
    seed: Optional[int] = None,
) -> ColorResult:
    """
    One-shot blocking extraction with a throwaway cache.

    Example:
        >>> from swatchglow import extract_colors
        >>> extract_colors("").colors
        ('rgb(200, 200, 200)', 'rgb(200, 200, 200)')
    """
    return ColorExtractor(config, seed=seed).extract_sync(image_url, color_count)

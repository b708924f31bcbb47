# Copyright (c) 2026 Swatchglow
# SPDX-License-Identifier: MIT

"""
Swatchglow -- Dominant color extraction for product card glows.

Samples an image (center-weighted), clusters the samples into a few
representative colors and returns them brightest first as CSS strings.

Quick start::

    from swatchglow import ColorExtractor

    extractor = ColorExtractor()
    result = extractor.extract_sync("https://example.com/shoe.jpg")
    result.colors   # ('rgb(243, 244, 246)', 'rgb(37, 99, 235)')
    result.error    # None, or an ExtractionError when the colors are a fallback
"""

from __future__ import annotations

__version__ = "1.0.0"

from swatchglow.extract import (
    ColorCache,
    ColorExtractor,
    ColorRequest,
    ExtractorConfig,
    extract_colors,
)
from swatchglow.schema import (
    FALLBACK_GRAY,
    PENDING_GRAY,
    ColorResult,
    ExtractionError,
    ExtractionFailure,
    RGBColor,
)

__all__ = [
    # Core API
    "extract_colors",
    "ColorExtractor",
    "ColorRequest",
    "ExtractorConfig",
    "ColorCache",
    # Types
    "ColorResult",
    "RGBColor",
    "ExtractionError",
    "ExtractionFailure",
    "PENDING_GRAY",
    "FALLBACK_GRAY",
    # Version
    "__version__",
]

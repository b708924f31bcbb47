# Copyright (c) 2026 Swatchglow
# SPDX-License-Identifier: MIT

"""
Extraction core for Swatchglow.

Fetches an image, samples it with center weighting and clusters the
samples into a few representative colors.
"""

from swatchglow.extract.cache import ColorCache
from swatchglow.extract.extractor import (
    ColorExtractor,
    ColorRequest,
    ExtractorConfig,
    extract_colors,
)

__all__ = [
    "extract_colors",
    "ColorExtractor",
    "ColorRequest",
    "ExtractorConfig",
    "ColorCache",
]

# Copyright (c) 2026 Swatchglow
# SPDX-License-Identifier: MIT

"""
Schema definitions for extraction results.

All types in this module are immutable (frozen dataclasses).
"""

from swatchglow.schema.color_result import (
    FALLBACK_GRAY,
    PENDING_GRAY,
    ColorResult,
    ExtractionError,
    ExtractionFailure,
    RGBColor,
)

__all__ = [
    # Core types
    "RGBColor",
    "ColorResult",
    # Failures
    "ExtractionFailure",
    "ExtractionError",
    # Fixed grays
    "PENDING_GRAY",
    "FALLBACK_GRAY",
]

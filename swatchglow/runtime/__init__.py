# Copyright (c) 2026 Swatchglow
# SPDX-License-Identifier: MIT

"""
Delivery runtime for Swatchglow.

Serializes ColorResult values into CSS for presentation code.
"""

from swatchglow.runtime.styles import to_glow_gradient, to_glow_shadow, to_style

__all__ = [
    "to_glow_gradient",
    "to_glow_shadow",
    "to_style",
]

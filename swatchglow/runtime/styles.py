# Copyright (c) 2026 Swatchglow
# SPDX-License-Identifier: MIT

"""
CSS style serializers for product card glows.

Turns a ColorResult into CSS values a template or component can drop into
a ``style`` attribute. The serializers never change the colors themselves.
"""

from __future__ import annotations

from typing import Optional

from swatchglow.schema import ColorResult, RGBColor


def _css_color(color: RGBColor, alpha: Optional[float]) -> str:
    if alpha is None:
        return color.css
    return f"rgba({color.r}, {color.g}, {color.b}, {_format_alpha(alpha)})"


def _format_alpha(alpha: float) -> str:
    if not 0.0 <= alpha <= 1.0:
        raise ValueError(f"alpha must be 0-1, got {alpha}")
    return f"{alpha:g}"


def to_glow_gradient(
    result: ColorResult,
    *,
    angle: int = 135,
    alpha: Optional[float] = None,
) -> str:
    """
    Serialize a result as a CSS ``linear-gradient``.

    Colors are laid out in result order (brightest first) at even stops.
    A single color becomes a flat two-stop gradient; no colors give ``none``.

    Args:
        result: Extraction result
        angle: Gradient direction in degrees
        alpha: If set, emit ``rgba()`` colors with this opacity

    Example:
        >>> to_glow_gradient(ColorResult(("rgb(250, 250, 250)", "rgb(30, 60, 200)")))
        'linear-gradient(135deg, rgb(250, 250, 250) 0%, rgb(30, 60, 200) 100%)'
    """
    colors = result.rgb
    if not colors:
        return "none"
    if len(colors) == 1:
        colors = colors * 2

    last = len(colors) - 1
    stops = ", ".join(
        f"{_css_color(c, alpha)} {round(100 * i / last)}%"
        for i, c in enumerate(colors)
    )
    return f"linear-gradient({angle}deg, {stops})"


def to_glow_shadow(
    result: ColorResult,
    *,
    blur: int = 40,
    spread: int = 0,
    alpha: float = 0.5,
) -> str:
    """Serialize the brightest color as a centered CSS ``box-shadow``."""
    colors = result.rgb
    if not colors:
        return "none"
    return f"0 0 {blur}px {spread}px {_css_color(colors[0], alpha)}"


def to_style(result: ColorResult, *, angle: int = 135) -> dict[str, str]:
    """
    Background and shadow declarations for a glowing card.

    Keys use the camelCase names component frameworks expect.
    """
    return {
        "background": to_glow_gradient(result, angle=angle),
        "boxShadow": to_glow_shadow(result),
    }

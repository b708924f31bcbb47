# Copyright (c) 2026 Swatchglow
# SPDX-License-Identifier: MIT

"""
ColorResult -- the value handed back to presentation code.

Design principles:
- Immutable: All types are frozen dataclasses
- Always renderable: A result always carries colors, even on failure
- Diagnosable: Failures keep a tagged cause next to the fallback colors

Colors are CSS ``rgb(r, g, b)`` strings ordered by luminance, brightest
first. Luminance uses the Rec. 601 weights::

    Y = 0.299 R + 0.587 G + 0.114 B
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional


# =============================================================================
# Parsing Helpers
# =============================================================================

_CSS_RGB_RE = re.compile(
    r"^\s*rgba?\(\s*(\d{1,3})\s*,\s*(\d{1,3})\s*,\s*(\d{1,3})\s*(?:,\s*[\d.]+\s*)?\)\s*$"
)
_HEX_RE = re.compile(r"^\s*#?([0-9a-fA-F]{6})\s*$")


def _parse_color_string(s: str) -> tuple[int, int, int]:
    """Parse ``rgb(r, g, b)`` or ``#RRGGBB`` into an (r, g, b) tuple."""
    m = _CSS_RGB_RE.match(s)
    if m:
        return int(m.group(1)), int(m.group(2)), int(m.group(3))
    m = _HEX_RE.match(s)
    if m:
        h = m.group(1)
        return int(h[0:2], 16), int(h[2:4], 16), int(h[4:6], 16)
    raise ValueError(f"Unrecognized color string: {s!r}")


# =============================================================================
# Core Color Type
# =============================================================================


@dataclass(frozen=True, slots=True)
class RGBColor:
    """
    A single 8-bit sRGB color.

    Attributes:
        r: Red channel (0-255)
        g: Green channel (0-255)
        b: Blue channel (0-255)
    """
    r: int
    g: int
    b: int

    def __post_init__(self) -> None:
        """Validate channels are 8-bit."""
        for name in ("r", "g", "b"):
            value = getattr(self, name)
            if not 0 <= value <= 255:
                raise ValueError(f"Channel {name} must be 0-255, got {value}")

    @property
    def css(self) -> str:
        """CSS functional notation, e.g. ``rgb(12, 34, 56)``."""
        return f"rgb({self.r}, {self.g}, {self.b})"

    @property
    def hex(self) -> str:
        """Hex string like ``#0C2238``."""
        return f"#{self.r:02X}{self.g:02X}{self.b:02X}"

    @property
    def luminance(self) -> float:
        """Perceptual brightness (0-255 scale)."""
        return 0.299 * self.r + 0.587 * self.g + 0.114 * self.b

    def to_dict(self) -> dict:
        """Serialize to dictionary."""
        return {"r": self.r, "g": self.g, "b": self.b}

    @classmethod
    def from_dict(cls, data: dict) -> RGBColor:
        """Deserialize from dictionary."""
        return cls(r=data["r"], g=data["g"], b=data["b"])

    @classmethod
    def from_css(cls, s: str) -> RGBColor:
        """Parse ``rgb(r, g, b)`` (spaces optional) or ``#RRGGBB``."""
        r, g, b = _parse_color_string(s)
        return cls(r=r, g=g, b=b)


# Shown while a result is still pending and for placeholder images
PENDING_GRAY = RGBColor(200, 200, 200)

# Shown when extraction fails for any reason
FALLBACK_GRAY = RGBColor(150, 150, 150)


# =============================================================================
# Failure Types
# =============================================================================


class ExtractionFailure(Enum):
    """
    Why an extraction fell back to gray.

    All causes produce the same caller-facing shape; the tag exists for
    logs and tests.
    """
    LOAD = "load"              # fetch or decode failed
    ACCESS = "access"          # host refused access to the pixels
    EMPTY_SAMPLES = "empty"    # nothing opaque to sample
    TIMEOUT = "timeout"        # fetch/decode did not finish in time


class ExtractionError(Exception):
    """
    Error marker attached to a fallback ColorResult.

    Attributes:
        failure: Tagged cause
        url: Image URL the extraction was for (may be None for in-memory images)
    """

    def __init__(
        self,
        failure: ExtractionFailure,
        message: str = "",
        url: Optional[str] = None,
    ) -> None:
        super().__init__(message or failure.value)
        self.failure = failure
        self.url = url

    def __repr__(self) -> str:
        return f"ExtractionError({self.failure.name}, {str(self)!r})"


# =============================================================================
# Top-Level Result
# =============================================================================


@dataclass(frozen=True, slots=True)
class ColorResult:
    """
    Outcome of one color extraction.

    Attributes:
        colors: CSS color strings, brightest first
        loading: True while the background extraction is still running
        error: Set when the colors are a fallback caused by a failure
    """
    colors: tuple[str, ...]
    loading: bool = False
    error: Optional[ExtractionError] = None

    @property
    def failure(self) -> Optional[ExtractionFailure]:
        """Tagged failure cause, or None."""
        return self.error.failure if self.error is not None else None

    @property
    def ok(self) -> bool:
        """True for a settled result without an error."""
        return not self.loading and self.error is None

    @property
    def rgb(self) -> tuple[RGBColor, ...]:
        """Colors parsed back into RGBColor values."""
        return tuple(RGBColor.from_css(c) for c in self.colors)

    def to_dict(self) -> dict:
        """Serialize to dictionary."""
        d: dict = {"colors": list(self.colors), "loading": self.loading, "error": None}
        if self.error is not None:
            d["error"] = {"failure": self.error.failure.value, "message": str(self.error)}
        return d

    def to_json(self, indent: Optional[int] = None) -> str:
        """Serialize to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)

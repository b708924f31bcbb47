# Copyright (c) 2026 Swatchglow
# SPDX-License-Identifier: MIT

"""
Image loading from URLs.

Supported sources:
- ``http://`` / ``https://`` fetched with httpx
- ``data:`` URIs decoded in-process
- ``file://`` URLs and bare filesystem paths

Every failure is raised as an ExtractionError tagged LOAD or ACCESS so the
extractor can fall back without inspecting library-specific exceptions.
"""

from __future__ import annotations

import base64
import binascii
import io
import logging
from pathlib import Path
from typing import Iterable, Optional
from urllib.parse import unquote, unquote_to_bytes, urlparse

import httpx
from PIL import Image, ImageCms

from swatchglow.schema import ExtractionError, ExtractionFailure

logger = logging.getLogger(__name__)

# Stock placeholder images used by the storefront when a product has no photo
DEFAULT_PLACEHOLDERS = frozenset({
    "https://via.placeholder.com/300",
    "https://via.placeholder.com/200",
})

# Status codes meaning "the pixels exist but you may not read them"
_ACCESS_DENIED = frozenset({401, 403, 407})


def is_placeholder(
    url: Optional[str],
    placeholders: Iterable[str] = DEFAULT_PLACEHOLDERS,
) -> bool:
    """True for empty URLs and known placeholder images."""
    return not url or url in placeholders


async def fetch_image(
    url: str,
    client: Optional[httpx.AsyncClient] = None,
) -> Image.Image:
    """
    Fetch and decode an image into an RGBA Pillow image.

    Args:
        url: http(s) URL, data URI, file URL or filesystem path
        client: Client used for http(s) URLs. A short-lived client is
            created when None.

    Returns:
        Fully loaded Pillow image in RGBA mode, converted to sRGB when it
        carries an embedded ICC profile

    Raises:
        ExtractionError: LOAD for fetch/decode failures, ACCESS when the
            server refuses access
    """
    if url.startswith("data:"):
        data = _decode_data_uri(url)
    elif url.startswith(("http://", "https://")):
        if client is None:
            async with httpx.AsyncClient(follow_redirects=True) as owned:
                data = await _fetch_bytes(url, owned)
        else:
            data = await _fetch_bytes(url, client)
    else:
        data = _read_file(url)

    return decode_image(data, url=url)


def decode_image(data: bytes, url: Optional[str] = None) -> Image.Image:
    """
    Decode raw image bytes into a fully loaded RGBA image.

    Pixel data is forced to load here so truncated files fail as LOAD
    rather than later during sampling.
    """
    try:
        img = Image.open(io.BytesIO(data))
        img.load()
        img = _to_srgb(img)
        if img.mode != "RGBA":
            img = img.convert("RGBA")
    except Image.DecompressionBombError as e:
        raise ExtractionError(
            ExtractionFailure.LOAD, f"Image too large to decode: {e}", url=url
        ) from e
    except (OSError, ValueError) as e:
        raise ExtractionError(
            ExtractionFailure.LOAD, f"Failed to decode image: {e}", url=url
        ) from e
    return img


async def _fetch_bytes(url: str, client: httpx.AsyncClient) -> bytes:
    """GET a URL and return the body, mapping failures to ExtractionError."""
    try:
        response = await client.get(url)
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        raise ExtractionError(
            ExtractionFailure.LOAD, f"Failed to load image: {e}", url=url
        ) from e

    if response.status_code in _ACCESS_DENIED:
        raise ExtractionError(
            ExtractionFailure.ACCESS,
            f"Access to image data denied (HTTP {response.status_code})",
            url=url,
        )

    if not response.is_success:
        raise ExtractionError(
            ExtractionFailure.LOAD,
            f"Failed to load image (HTTP {response.status_code})",
            url=url,
        )

    return response.content


def _decode_data_uri(url: str) -> bytes:
    """Payload of a ``data:[<mediatype>][;base64],<data>`` URI."""
    header, sep, payload = url[len("data:"):].partition(",")
    if not sep:
        raise ExtractionError(
            ExtractionFailure.LOAD, "Malformed data URI: missing ','", url=url
        )

    if header.endswith(";base64"):
        try:
            return base64.b64decode(unquote(payload), validate=False)
        except (binascii.Error, ValueError) as e:
            raise ExtractionError(
                ExtractionFailure.LOAD, f"Malformed base64 data URI: {e}", url=url
            ) from e

    return unquote_to_bytes(payload)


def _read_file(url: str) -> bytes:
    """Read a ``file://`` URL or bare path from disk."""
    path = Path(unquote(urlparse(url).path)) if url.startswith("file://") else Path(url)
    try:
        return path.read_bytes()
    except (OSError, ValueError) as e:
        raise ExtractionError(
            ExtractionFailure.LOAD, f"Failed to read image file: {e}", url=url
        ) from e


def _to_srgb(img: Image.Image) -> Image.Image:
    """
    Apply an embedded ICC profile so pixels match what a browser shows.

    Images without a profile, or whose profile cannot be applied, are
    returned unchanged.
    """
    icc = img.info.get("icc_profile")
    if not icc or img.mode not in ("RGB", "RGBA"):
        return img

    try:
        embedded_profile = ImageCms.ImageCmsProfile(io.BytesIO(icc))
        srgb_profile = ImageCms.createProfile("sRGB")
        return ImageCms.profileToProfile(
            img, embedded_profile, srgb_profile, outputMode=img.mode
        )
    except (ImageCms.PyCMSError, OSError) as e:
        logger.debug("Ignoring unusable ICC profile: %s", e)
        return img

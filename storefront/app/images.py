"""Image transform URLs.

Cosmic serves every media file through imgix, so a base URL accepts
``w``/``h``/``fit``/``auto`` query parameters. Each place an image is shown
uses one of the fixed presets below.
"""

from __future__ import annotations

from typing import NamedTuple
from urllib.parse import urlencode


class ImageSize(NamedTuple):
    width: int
    height: int


PRESETS = {
    "card": ImageSize(600, 400),
    "hero": ImageSize(1200, 400),
    "detail": ImageSize(800, 800),
    "thumbnail": ImageSize(200, 200),
}


def transform_url(base_url: str | None, preset: str) -> str | None:
    """Return ``base_url`` with the preset's transform parameters, or None."""
    if not base_url:
        return None
    size = PRESETS[preset]
    query = urlencode(
        {"w": size.width, "h": size.height, "fit": "crop", "auto": "format,compress"},
        safe=",",
    )
    sep = "&" if "?" in base_url else "?"
    return f"{base_url}{sep}{query}"

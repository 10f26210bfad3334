"""PNG to SVG packaging.

The "conversion" wraps the raster image as a base64 data URI inside a fixed
100x100 SVG document. No tracing is performed; the source pixel size is not
inspected.
"""

from __future__ import annotations

import base64
from pathlib import Path
from xml.sax.saxutils import quoteattr

PNG_MEDIA_TYPE = "image/png"
SVG_MEDIA_TYPE = "image/svg+xml"
PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"
PNG_SUFFIX = ".png"
SVG_SUFFIX = ".svg"
DEFAULT_BASENAME = "image.png"

SVG_TEMPLATE = """<?xml version="1.0" encoding="UTF-8"?>
<svg xmlns="http://www.w3.org/2000/svg" xmlns:xlink="http://www.w3.org/1999/xlink" viewBox="0 0 100 100">
  <image href={data_uri} x="0" y="0" width="100" height="100" />
</svg>"""


def encode_data_uri(data: bytes, media_type: str = PNG_MEDIA_TYPE) -> str:
    """Encode *data* as a base64 ``data:`` URI."""
    encoded = base64.b64encode(data).decode("ascii")
    return f"data:{media_type};base64,{encoded}"


def render_svg(data_uri: str) -> str:
    """Substitute *data_uri* into the fixed SVG wrapper document."""
    return SVG_TEMPLATE.format(data_uri=quoteattr(data_uri))


def package_png(data: bytes) -> str:
    """Return SVG text embedding the PNG *data*."""
    return render_svg(encode_data_uri(data, PNG_MEDIA_TYPE))


def is_png_signature(data: bytes) -> bool:
    """Check whether *data* starts with the PNG file signature."""
    return data.startswith(PNG_SIGNATURE)


def safe_basename(filename: str, default: str = DEFAULT_BASENAME) -> str:
    """Return the last path component of a client-supplied filename."""
    raw = filename.strip()
    if not raw:
        return default
    # Normalize Windows-style separators before basename extraction.
    candidate = Path(raw.replace("\\", "/")).name
    if candidate in {"", ".", ".."}:
        return default
    return candidate


def svg_filename(filename: str) -> str:
    """Derive the download filename for a converted PNG.

    A trailing ``.png`` (any case) becomes ``.svg``; any other name gets
    ``.svg`` appended.

    Examples
    --------
    >>> svg_filename("photo.png")
    'photo.svg'
    >>> svg_filename("archive.v2.png")
    'archive.v2.svg'
    """
    name = safe_basename(filename)
    if name.lower().endswith(PNG_SUFFIX) and len(name) > len(PNG_SUFFIX):
        return name[: -len(PNG_SUFFIX)] + SVG_SUFFIX
    return name + SVG_SUFFIX

"""Shared stateless conversion utilities for the CLI and HTTP daemon."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from hashlib import sha256
from pathlib import Path

from png_vectorizer.errors import ConversionError, UnsupportedMediaTypeError
from png_vectorizer.svg import (
    PNG_MEDIA_TYPE,
    is_png_signature,
    package_png,
    safe_basename,
    svg_filename,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ConversionRequest:
    """Normalized conversion request.

    Parameters
    ----------
    filename : str
        Original upload filename.
    media_type : str
        Declared MIME type of the upload.
    expected_sha256 : str | None, default=None
        Optional expected SHA-256 digest of the input bytes.
    """

    filename: str
    media_type: str
    expected_sha256: str | None = None


@dataclass(frozen=True)
class ConversionOutcome:
    """Conversion output metadata."""

    output_bytes: bytes
    output_filename: str
    output_sha256: str
    output_size_bytes: int


def digest_bytes(data: bytes) -> str:
    """Compute SHA-256 digest for byte payload."""
    return sha256(data).hexdigest()


def normalize_sha256(value: str | None) -> str | None:
    """Normalize and validate SHA-256 string if provided."""
    if value is None:
        return None
    normalized = value.strip().lower()
    if not normalized:
        return None
    if len(normalized) != 64 or any(ch not in "0123456789abcdef" for ch in normalized):
        raise ValueError("expected_sha256 must be a 64-character hex digest")
    return normalized


def safe_filename(filename: str | None) -> str:
    """Return a header-safe upload filename."""
    name = safe_basename(filename or "")
    return name.replace('"', "").replace("\r", "").replace("\n", "")


def convert_png_bytes(
    data: bytes,
    request: ConversionRequest,
) -> tuple[str, ConversionOutcome]:
    """Package PNG bytes into SVG and return input/output integrity metadata.

    Raises
    ------
    UnsupportedMediaTypeError
        If the declared media type is not PNG.
    ValueError
        If the input digest does not match ``expected_sha256``.
    """
    if request.media_type != PNG_MEDIA_TYPE:
        raise UnsupportedMediaTypeError(
            f"expected {PNG_MEDIA_TYPE}, got {request.media_type or 'no media type'}"
        )
    expected_sha = normalize_sha256(request.expected_sha256)
    input_sha = digest_bytes(data)
    if expected_sha is not None and input_sha != expected_sha:
        raise ValueError("input SHA-256 mismatch")

    output_bytes = package_png(data).encode("utf-8")
    outcome = ConversionOutcome(
        output_bytes=output_bytes,
        output_filename=svg_filename(safe_filename(request.filename)),
        output_sha256=digest_bytes(output_bytes),
        output_size_bytes=len(output_bytes),
    )
    return input_sha, outcome


def convert_png_file(input_path: Path, output_path: Path | None = None) -> Path:
    """Convert a PNG file on disk and return the written SVG path.

    Raises
    ------
    UnsupportedMediaTypeError
        If the file does not carry the PNG signature.
    ConversionError
        If the input cannot be read or the output cannot be written.
    """
    try:
        data = input_path.read_bytes()
    except OSError as exc:
        raise ConversionError(f"cannot read {input_path}: {exc}") from exc
    if not is_png_signature(data):
        raise UnsupportedMediaTypeError(f"{input_path} is not a PNG file")

    _, outcome = convert_png_bytes(
        data, ConversionRequest(filename=input_path.name, media_type=PNG_MEDIA_TYPE)
    )
    target = output_path or input_path.with_name(outcome.output_filename)
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(outcome.output_bytes)
    except OSError as exc:
        raise ConversionError(f"cannot write {target}: {exc}") from exc
    logger.info("wrote %s (%d bytes)", target, outcome.output_size_bytes)
    return target

"""Top-level API for PNG to SVG pseudo-vectorization."""

from __future__ import annotations

from pathlib import Path

__version__ = "0.1.0"


def convert_png_to_svg(data: bytes) -> str:
    """Wrap PNG bytes into SVG text.

    Parameters
    ----------
    data : bytes
        PNG file content.

    Returns
    -------
    str
        SVG document embedding *data* as a base64 data URI.
    """
    from png_vectorizer.svg import package_png

    return package_png(data)


def convert_png_file_to_svg(
    input_path: str | Path,
    output_path: str | Path | None = None,
) -> Path:
    """Convert a PNG file and write the SVG next to it or to *output_path*.

    Parameters
    ----------
    input_path : str | Path
        PNG file to convert.
    output_path : str | Path, optional
        Destination; defaults to the input name with ``.svg``.

    Returns
    -------
    Path
        Path of the written SVG.
    """
    from png_vectorizer.converter.core import convert_png_file

    return convert_png_file(
        Path(input_path),
        Path(output_path) if output_path is not None else None,
    )


__all__ = ["__version__", "convert_png_file_to_svg", "convert_png_to_svg"]

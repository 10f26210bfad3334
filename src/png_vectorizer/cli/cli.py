#!/usr/bin/env python3
"""
png_vectorizer.cli.cli

Typer-based CLI for wrapping PNG images into SVG documents and for running
the vectorizer web UI.

Examples
--------
Convert one file next to the original:

    png-vectorizer convert square.png

Serve the drag-and-drop page:

    png-vectorizer serve --port 8090
"""

from __future__ import annotations

import logging
import traceback
from pathlib import Path

import typer

from png_vectorizer.errors import ConfigurationError, VectorizerError

app = typer.Typer(
    name="png-vectorizer",
    help="Wrap PNG images into SVG documents.",
    no_args_is_help=True,
)


def _print_error(exc: Exception, debug: bool) -> int:
    """Print a user-friendly error.

    Parameters
    ----------
    exc : Exception
        Exception raised by a command.
    debug : bool
        Whether to include traceback details.

    Returns
    -------
    int
        Process exit code.
    """
    typer.echo(f"✗ {type(exc).__name__}: {exc}", err=True)
    if debug:
        typer.echo("\nTraceback:", err=True)
        typer.echo("".join(traceback.format_exception(type(exc), exc, exc.__traceback__)), err=True)
    code = getattr(exc, "exit_code", None)
    if isinstance(code, int) and code > 0:
        return code
    return 1


# -----------------------------
# Global options
# -----------------------------
@app.callback()
def _main(
    ctx: typer.Context,
    debug: bool = typer.Option(False, "--debug", help="Show full tracebacks on error."),
) -> None:
    """Initialize shared CLI state."""
    ctx.obj = {"debug": debug}
    logging.basicConfig(level=logging.DEBUG if debug else logging.WARNING)


# -----------------------------
# Commands
# -----------------------------
@app.command("convert")
def convert_cmd(
    ctx: typer.Context,
    input_path: Path = typer.Argument(
        ...,
        exists=True,
        dir_okay=False,
        readable=True,
        help="Path to a .png image.",
    ),
    output_path: Path | None = typer.Option(
        None,
        "--output",
        "-o",
        help="Where to write the .svg file (defaults to the input name with .svg).",
    ),
) -> None:
    """Wrap a PNG image into an SVG document.

    Notes
    -----
    - The image is embedded as a base64 data URI in a fixed 100x100 viewBox;
      no tracing is performed.
    """
    debug: bool = bool(ctx.obj.get("debug", False))

    try:
        from png_vectorizer.converter.core import convert_png_file

        out = convert_png_file(input_path, output_path)
        typer.echo(f"✓ Saved: {out}")
    except VectorizerError as exc:
        raise typer.Exit(code=_print_error(exc, debug))
    except Exception as exc:
        raise typer.Exit(code=_print_error(exc, debug))


@app.command("serve")
def serve_cmd(
    ctx: typer.Context,
    host: str | None = typer.Option(
        None, "--host", help="Bind address (default: VECTORIZER_HTTP_HOST or 0.0.0.0)."
    ),
    port: int | None = typer.Option(
        None, "--port", help="Bind port (default: VECTORIZER_HTTP_PORT or 8090)."
    ),
) -> None:
    """Run the drag-and-drop web UI."""
    debug: bool = bool(ctx.obj.get("debug", False))

    from png_vectorizer.schemas import ServerConfig

    try:
        config = ServerConfig.from_env()
    except ConfigurationError as exc:
        raise typer.Exit(code=_print_error(exc, debug))

    import uvicorn

    from png_vectorizer.converter.http_server import APP_REF

    uvicorn.run(
        APP_REF,
        host=host or config.host,
        port=port or config.port,
        log_level=config.log_level.lower(),
        reload=False,
    )


if __name__ == "__main__":
    app()

#!/usr/bin/env python3
"""Architecture boundary checks."""

from __future__ import annotations

from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
PACKAGE = ROOT / "src/png_vectorizer"


def _read(path: Path) -> str:
    return path.read_text(encoding="utf-8")


def _assert_no_imports(path: Path, banned: list[str]) -> None:
    text = _read(path)
    for token in banned:
        if token in text:
            raise SystemExit(f"Architecture violation in {path}: found '{token}'")


def main() -> None:
    """Run repository architecture boundary checks."""
    framework_imports = [
        "import fastapi",
        "from fastapi",
        "import typer",
        "from typer",
        "import uvicorn",
    ]
    for layer in ("application", "adapters"):
        for path in (PACKAGE / layer).glob("*.py"):
            _assert_no_imports(path, framework_imports)

    for name in ("svg.py", "errors.py", "types.py"):
        _assert_no_imports(PACKAGE / name, framework_imports + ["from pydantic"])

    print("Architecture checks passed.")


if __name__ == "__main__":
    main()

"""Concrete adapters for application ports."""

from __future__ import annotations

from png_vectorizer.adapters.readers import Base64DataUriReader

__all__ = ["Base64DataUriReader"]

"""Exception hierarchy shared by the vectorizer library, CLI and HTTP daemon."""

from __future__ import annotations


class VectorizerError(Exception):
    """Base error for all vectorizer failures."""

    exit_code: int = 1


class ConversionError(VectorizerError):
    """Raised when a PNG cannot be packaged into an SVG document."""


class UnsupportedMediaTypeError(ConversionError):
    """Raised when the input is not a PNG image."""

    exit_code = 2


class FileReadError(ConversionError):
    """Raised when the selected file content cannot be read or encoded."""


class SessionNotFoundError(VectorizerError):
    """Raised when a page session id is unknown or was evicted."""


class ConfigurationError(VectorizerError):
    """Raised when runtime configuration is invalid."""

    exit_code = 3

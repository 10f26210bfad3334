"""Application ports for clean architecture boundaries."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from png_vectorizer.application.state import SelectedFile


class DataUriReader(Protocol):
    """Read a selected file into a base64 data URI."""

    async def read_data_uri(self, file: SelectedFile) -> str:
        """Return the data URI for *file*; raise ``FileReadError`` on failure."""

"""File reader adapters producing base64 data URIs."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

from png_vectorizer.errors import FileReadError
from png_vectorizer.svg import encode_data_uri

if TYPE_CHECKING:
    from png_vectorizer.application.state import SelectedFile


class Base64DataUriReader:
    """Encode selected file content off the event loop."""

    async def read_data_uri(self, file: SelectedFile) -> str:
        """Return ``data:<media_type>;base64,...`` for *file*.

        Raises
        ------
        FileReadError
            If the content cannot be read or encoded.
        """
        try:
            return await asyncio.to_thread(encode_data_uri, file.content, file.media_type)
        except Exception as exc:
            raise FileReadError(f"failed to read {file.name!r}: {exc}") from exc

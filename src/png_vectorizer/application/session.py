"""Stateful page component driving intake, conversion and download."""

from __future__ import annotations

import asyncio
import contextlib
import itertools
import logging
import uuid
from dataclasses import dataclass
from functools import partial

from png_vectorizer.adapters.readers import Base64DataUriReader
from png_vectorizer.application.ports import DataUriReader
from png_vectorizer.application.progress import ProgressSchedule, simulate_progress
from png_vectorizer.application.state import (
    ConversionResult,
    PageState,
    SelectedFile,
    advance_progress,
    begin_conversion,
    complete_conversion,
    fail_conversion,
    is_current,
    phase,
    select_file,
)
from png_vectorizer.errors import FileReadError
from png_vectorizer.svg import SVG_MEDIA_TYPE, render_svg, svg_filename
from png_vectorizer.types import HandleFactory, PagePhase

logger = logging.getLogger(__name__)


def _new_handle() -> str:
    return uuid.uuid4().hex


@dataclass(frozen=True)
class DownloadArtifact:
    """File offered to the user for download."""

    filename: str
    content: bytes
    media_type: str = SVG_MEDIA_TYPE


class VectorizerSession:
    """One page worth of vectorizer state.

    Parameters
    ----------
    reader : DataUriReader, optional
        Asynchronous file reader; defaults to :class:`Base64DataUriReader`.
    schedule : ProgressSchedule, optional
        Cadence of the simulated progress timer.
    handle_factory : callable, optional
        Produces download handles for new results.
    """

    def __init__(
        self,
        reader: DataUriReader | None = None,
        schedule: ProgressSchedule | None = None,
        handle_factory: HandleFactory | None = None,
    ) -> None:
        self._reader = reader or Base64DataUriReader()
        self._schedule = schedule or ProgressSchedule()
        self._handle_factory = handle_factory or _new_handle
        self._selection_ids = itertools.count(1)
        self._state = PageState()

    @property
    def state(self) -> PageState:
        """Current page state."""
        return self._state

    @property
    def phase(self) -> PagePhase:
        """Current page phase."""
        return phase(self._state)

    def select_file(self, name: str, media_type: str, content: bytes) -> PageState:
        """Accept a dropped or picked file; non-PNG files are ignored."""
        candidate = SelectedFile(
            name=name,
            media_type=media_type,
            content=content,
            selection_id=next(self._selection_ids),
        )
        updated = select_file(self._state, candidate)
        if updated is self._state:
            logger.debug("ignoring %r with media type %r", name, media_type)
        self._state = updated
        return updated

    def _tick(self, selection_id: int) -> bool:
        self._state = advance_progress(self._state, selection_id, self._schedule)
        return (
            self._state.converting
            and is_current(self._state, selection_id)
            and self._state.progress < self._schedule.ceiling
        )

    async def convert(self) -> PageState:
        """Package the selected file while the progress timer runs.

        A no-op unless the page is in ``file_selected``. Read failures are
        logged and leave the page in ``file_selected`` with zero progress.
        A completion for a file that was replaced meanwhile is discarded.
        """
        started = begin_conversion(self._state)
        selected = started.selected
        if started is self._state or selected is None:
            return self._state
        self._state = started
        selection_id = selected.selection_id

        timer = asyncio.create_task(
            simulate_progress(self._schedule, partial(self._tick, selection_id))
        )
        try:
            data_uri = await self._reader.read_data_uri(selected)
        except FileReadError:
            logger.exception("conversion of %r failed", selected.name)
            self._state = fail_conversion(self._state, selection_id)
        except Exception:
            self._state = fail_conversion(self._state, selection_id)
            raise
        else:
            result = ConversionResult(
                svg_text=render_svg(data_uri),
                handle=self._handle_factory(),
                selection_id=selection_id,
            )
            self._state = complete_conversion(self._state, result)
            if self._state.result is result:
                logger.info("converted %r", selected.name)
            else:
                logger.info("discarding stale conversion of %r", selected.name)
        finally:
            timer.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await timer
        return self._state

    def download(self, handle: str | None = None) -> DownloadArtifact | None:
        """Return the converted SVG, or None when nothing is downloadable.

        When *handle* is given it must match the current result; handles of
        replaced results are revoked.
        """
        state = self._state
        if state.result is None or state.selected is None:
            return None
        if handle is not None and handle != state.result.handle:
            return None
        return DownloadArtifact(
            filename=svg_filename(state.selected.name),
            content=state.result.svg_text.encode("utf-8"),
        )

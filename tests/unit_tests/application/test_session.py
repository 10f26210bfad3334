"""Unit tests for the stateful vectorizer session."""

from __future__ import annotations

import asyncio
import logging

import pytest

from png_vectorizer.application.progress import ProgressSchedule
from png_vectorizer.application.session import VectorizerSession
from png_vectorizer.application.state import SelectedFile
from png_vectorizer.errors import FileReadError
from png_vectorizer.svg import package_png

FAST = ProgressSchedule(interval=0.001)


class _FailingReader:
    async def read_data_uri(self, file: SelectedFile) -> str:
        raise FileReadError(f"cannot read {file.name}")


class _BrokenReader:
    async def read_data_uri(self, file: SelectedFile) -> str:
        raise RuntimeError("boom")


class _GatedReader:
    """Reader that blocks until released and records progress seen meanwhile."""

    def __init__(self, session_ref: list[VectorizerSession]) -> None:
        self.started = asyncio.Event()
        self.release = asyncio.Event()
        self.progress_seen: list[int] = []
        self._session_ref = session_ref

    async def read_data_uri(self, file: SelectedFile) -> str:
        self.started.set()
        await self.release.wait()
        self.progress_seen.append(self._session_ref[0].state.progress)
        return "data:image/png;base64," + file.content.hex()


def test_select_file_accepts_png(red_square_png: bytes) -> None:
    """Store accepted PNGs and enter file_selected."""
    session = VectorizerSession()
    state = session.select_file("square.png", "image/png", red_square_png)
    assert session.phase == "file_selected"
    assert state.selected is not None
    assert state.selected.content == red_square_png


def test_select_file_ignores_other_types(caplog: pytest.LogCaptureFixture) -> None:
    """Leave state untouched for non-PNG uploads and only log at debug."""
    session = VectorizerSession()
    before = session.state
    with caplog.at_level(logging.DEBUG, logger="png_vectorizer.application.session"):
        session.select_file("cat.jpg", "image/jpeg", b"jpeg")
    assert session.state is before
    assert session.phase == "idle"
    assert "ignoring 'cat.jpg'" in caplog.text


@pytest.mark.asyncio
async def test_convert_produces_result_and_download(red_square_png: bytes) -> None:
    """Package the selection and expose it for download."""
    session = VectorizerSession(schedule=FAST, handle_factory=lambda: "handle-1")
    session.select_file("square.png", "image/png", red_square_png)

    state = await session.convert()

    assert session.phase == "converted"
    assert state.progress == 100
    assert state.result is not None
    assert state.result.handle == "handle-1"
    assert state.result.svg_text == package_png(red_square_png)

    artifact = session.download()
    assert artifact is not None
    assert artifact.filename == "square.svg"
    assert artifact.media_type == "image/svg+xml"
    assert artifact.content == package_png(red_square_png).encode("utf-8")


@pytest.mark.asyncio
async def test_convert_without_file_is_noop() -> None:
    """Do nothing when no file was selected."""
    session = VectorizerSession()
    state = await session.convert()
    assert state is session.state
    assert session.phase == "idle"


@pytest.mark.asyncio
async def test_convert_twice_is_noop_once_converted(red_square_png: bytes) -> None:
    """Keep the existing result when already converted."""
    session = VectorizerSession(schedule=FAST)
    session.select_file("a.png", "image/png", red_square_png)
    first = await session.convert()
    second = await session.convert()
    assert second is first


@pytest.mark.asyncio
async def test_read_failure_resets_and_logs(caplog: pytest.LogCaptureFixture) -> None:
    """Log read failures and fall back to file_selected with zero progress."""
    session = VectorizerSession(reader=_FailingReader(), schedule=FAST)
    session.select_file("a.png", "image/png", b"\x89PNG")

    with caplog.at_level(logging.ERROR, logger="png_vectorizer.application.session"):
        state = await session.convert()

    assert session.phase == "file_selected"
    assert state.progress == 0
    assert state.result is None
    assert session.download() is None
    assert "conversion of 'a.png' failed" in caplog.text


@pytest.mark.asyncio
async def test_unexpected_reader_error_resets_and_propagates() -> None:
    """Reset state before re-raising unexpected reader errors."""
    session = VectorizerSession(reader=_BrokenReader(), schedule=FAST)
    session.select_file("a.png", "image/png", b"\x89PNG")

    with pytest.raises(RuntimeError, match="boom"):
        await session.convert()

    assert session.phase == "file_selected"
    assert session.state.progress == 0


@pytest.mark.asyncio
async def test_progress_holds_at_ninety_until_read_completes() -> None:
    """Advance the cosmetic timer to ninety while the read is pending."""
    ref: list[VectorizerSession] = []
    reader = _GatedReader(ref)
    session = VectorizerSession(reader=reader, schedule=FAST)
    ref.append(session)
    session.select_file("a.png", "image/png", b"\x01")

    task = asyncio.create_task(session.convert())
    await reader.started.wait()
    for _ in range(200):
        if session.state.progress >= 90:
            break
        await asyncio.sleep(0.005)
    reader.release.set()
    await task

    assert reader.progress_seen == [90]
    assert session.state.progress == 100


@pytest.mark.asyncio
async def test_reselection_during_conversion_discards_stale_result(
    red_square_png: bytes, blue_square_png: bytes
) -> None:
    """Ignore the completion of a read whose file was replaced."""
    ref: list[VectorizerSession] = []
    reader = _GatedReader(ref)
    session = VectorizerSession(reader=reader, schedule=FAST)
    ref.append(session)
    session.select_file("old.png", "image/png", red_square_png)

    task = asyncio.create_task(session.convert())
    await reader.started.wait()
    session.select_file("new.png", "image/png", blue_square_png)
    reader.release.set()
    await task

    assert session.phase == "file_selected"
    assert session.state.result is None
    assert session.state.progress == 0
    assert session.state.selected is not None
    assert session.state.selected.name == "new.png"


@pytest.mark.asyncio
async def test_reselection_revokes_download_handle(
    red_square_png: bytes, blue_square_png: bytes
) -> None:
    """Reject the handle of a result that was replaced."""
    handles = iter(["first", "second"])
    session = VectorizerSession(schedule=FAST, handle_factory=lambda: next(handles))
    session.select_file("a.png", "image/png", red_square_png)
    await session.convert()
    assert session.download("first") is not None

    session.select_file("b.png", "image/png", blue_square_png)
    assert session.download("first") is None
    assert session.download() is None

    await session.convert()
    assert session.download("first") is None
    artifact = session.download("second")
    assert artifact is not None
    assert artifact.filename == "b.svg"

"""Page state object and pure transitions between page phases.

The page moves through ``idle -> file_selected -> converting -> converted``.
Every transition takes a :class:`PageState` and returns a new one; invalid
or stale transitions return the input state unchanged.
"""

from __future__ import annotations

from dataclasses import dataclass, replace

from png_vectorizer.application.progress import ProgressSchedule
from png_vectorizer.svg import PNG_MEDIA_TYPE
from png_vectorizer.types import PagePhase

COMPLETE = 100


@dataclass(frozen=True)
class SelectedFile:
    """User-chosen file held in memory.

    Parameters
    ----------
    name : str
        Client-supplied filename.
    media_type : str
        Declared MIME type.
    content : bytes
        Full file content.
    selection_id : int
        Identity of this selection; used to discard stale completions.
    """

    name: str
    media_type: str
    content: bytes
    selection_id: int


@dataclass(frozen=True)
class ConversionResult:
    """Packaged SVG text plus its revocable download handle."""

    svg_text: str
    handle: str
    selection_id: int


@dataclass(frozen=True)
class PageState:
    """Complete state of one page."""

    selected: SelectedFile | None = None
    converting: bool = False
    progress: int = 0
    result: ConversionResult | None = None


def phase(state: PageState) -> PagePhase:
    """Derive the page phase from the state fields."""
    if state.selected is None:
        return "idle"
    if state.converting:
        return "converting"
    if state.result is not None:
        return "converted"
    return "file_selected"


def is_current(state: PageState, selection_id: int) -> bool:
    """Check whether *selection_id* is the current selection."""
    return state.selected is not None and state.selected.selection_id == selection_id


def select_file(state: PageState, candidate: SelectedFile) -> PageState:
    """Accept *candidate* if it is a PNG, discarding any previous result."""
    if candidate.media_type != PNG_MEDIA_TYPE:
        return state
    return PageState(selected=candidate, converting=False, progress=0, result=None)


def begin_conversion(state: PageState) -> PageState:
    """Enter ``converting`` from ``file_selected``."""
    if phase(state) != "file_selected":
        return state
    return replace(state, converting=True, progress=0)


def advance_progress(
    state: PageState, selection_id: int, schedule: ProgressSchedule
) -> PageState:
    """Apply one timer tick to the running conversion."""
    if not state.converting or not is_current(state, selection_id):
        return state
    return replace(state, progress=schedule.next_value(state.progress))


def complete_conversion(state: PageState, result: ConversionResult) -> PageState:
    """Publish *result* and snap progress to 100."""
    if not state.converting or not is_current(state, result.selection_id):
        return state
    return replace(state, converting=False, progress=COMPLETE, result=result)


def fail_conversion(state: PageState, selection_id: int) -> PageState:
    """Reset a failed run back to ``file_selected`` with no progress."""
    if not state.converting or not is_current(state, selection_id):
        return state
    return replace(state, converting=False, progress=0)

"""Application layer: page state machine, progress timer and session."""

from __future__ import annotations

from png_vectorizer.application.progress import ProgressSchedule, simulate_progress
from png_vectorizer.application.session import DownloadArtifact, VectorizerSession
from png_vectorizer.application.state import (
    ConversionResult,
    PageState,
    SelectedFile,
    advance_progress,
    begin_conversion,
    complete_conversion,
    fail_conversion,
    phase,
    select_file,
)

__all__ = [
    "ConversionResult",
    "DownloadArtifact",
    "PageState",
    "ProgressSchedule",
    "SelectedFile",
    "VectorizerSession",
    "advance_progress",
    "begin_conversion",
    "complete_conversion",
    "fail_conversion",
    "phase",
    "select_file",
    "simulate_progress",
]

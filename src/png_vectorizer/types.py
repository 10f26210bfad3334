"""Shared type aliases for vectorizer modules."""

from __future__ import annotations

from collections.abc import Callable
from typing import Literal

type PagePhase = Literal["idle", "file_selected", "converting", "converted"]

type HandleFactory = Callable[[], str]

type ProgressTick = Callable[[], bool]

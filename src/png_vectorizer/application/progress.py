"""Cosmetic progress timer run alongside a conversion."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass

from png_vectorizer.types import ProgressTick


@dataclass(frozen=True)
class ProgressSchedule:
    """Timer cadence for simulated progress.

    Parameters
    ----------
    interval : float, default=0.2
        Seconds between ticks.
    step : int, default=10
        Percentage added per tick.
    ceiling : int, default=90
        Value held until the conversion completes.
    """

    interval: float = 0.2
    step: int = 10
    ceiling: int = 90

    def next_value(self, current: int) -> int:
        """Return the progress after one tick from *current*."""
        if current >= self.ceiling:
            return current
        return min(current + self.step, self.ceiling)


async def simulate_progress(schedule: ProgressSchedule, tick: ProgressTick) -> None:
    """Call *tick* every ``schedule.interval`` seconds until it returns False."""
    while True:
        await asyncio.sleep(schedule.interval)
        if not tick():
            return

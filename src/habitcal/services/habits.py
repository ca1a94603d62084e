"""Streak calculations over habit checks."""

from __future__ import annotations

from datetime import date
from typing import Iterable

from ..models.habit_check import HabitCheck, to_epoch_day


def compute_streaks(checks: Iterable[HabitCheck], *, today: date | None = None) -> tuple[int, int]:
    """Return (current_streak, longest_streak) in days.

    Any check counts as done regardless of its emoji. The current streak ends
    today; a day without a check today yields 0.
    """

    today_day = to_epoch_day(today or date.today())
    days = {check.date for check in checks}

    # Current streak: walk backwards from today until a gap.
    current = 0
    cursor = today_day
    while cursor in days:
        current += 1
        cursor -= 1

    # Longest streak: sweep sorted days counting consecutive runs.
    longest = 0
    run = 0
    last_day: int | None = None
    for day in sorted(days):
        if last_day is not None and day == last_day + 1:
            run += 1
        else:
            run = 1
        longest = max(longest, run)
        last_day = day

    return current, longest


__all__ = ["compute_streaks"]

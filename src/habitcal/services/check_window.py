"""In-memory window of habit checks around the visible calendar week.

Calendar swipes are frequent, so checks are loaded for five weeks at a time
(two weeks back, the visible week, two weeks ahead) and only re-read from the
store when the requested window is no longer covered.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Callable, Optional

from ..domain.repositories import HabitCheckRepository, HabitRepository
from ..infra.live import Unsubscribe
from ..logging_config import get_logger
from ..models.habit_check import HabitCheck, to_epoch_day

WEEKS_BEHIND = 2
WEEKS_AHEAD = 2
DAYS_PER_WEEK = 7

logger = get_logger("check_window")

ChecksByHabit = dict[int, list[HabitCheck]]


@dataclass(frozen=True)
class DateRange:
    """Inclusive calendar interval."""

    start: date
    end: date

    def contains(self, other: "DateRange") -> bool:
        return self.start <= other.start and other.end <= self.end

    def __contains__(self, day: date) -> bool:
        return self.start <= day <= self.end

    @classmethod
    def week_of(cls, week_start: date) -> "DateRange":
        return cls(week_start, week_start + timedelta(days=DAYS_PER_WEEK - 1))

    @classmethod
    def window_around(cls, week_start: date) -> "DateRange":
        """Five-week window centred on the week starting at ``week_start``."""
        return cls(
            week_start - timedelta(weeks=WEEKS_BEHIND),
            week_start + timedelta(weeks=WEEKS_AHEAD, days=DAYS_PER_WEEK - 1),
        )


class CheckWindow:
    """Per-list cache mapping habit id to its checks inside ``loaded_range``.

    A habit that was loaded but has no checks maps to an empty list, which is
    distinct from a habit missing from the mapping (not loaded yet).
    """

    def __init__(
        self,
        list_id: int,
        habit_repo: HabitRepository,
        check_repo: HabitCheckRepository,
    ) -> None:
        self.list_id = list_id
        self.habit_repo = habit_repo
        self.check_repo = check_repo
        self.loaded_range: Optional[DateRange] = None
        self.focus_week_start: Optional[date] = None
        self.checks_by_habit: ChecksByHabit = {}
        self._listeners: list[Callable[[ChecksByHabit], None]] = []

    def subscribe(self, callback: Callable[[ChecksByHabit], None]) -> Unsubscribe:
        """Call ``callback`` with the mapping now and after each change."""
        self._listeners.append(callback)
        callback(dict(self.checks_by_habit))

        def unsubscribe() -> None:
            if callback in self._listeners:
                self._listeners.remove(callback)

        return unsubscribe

    def _publish(self, checks_by_habit: ChecksByHabit) -> None:
        self.checks_by_habit = checks_by_habit
        for callback in list(self._listeners):
            callback(dict(checks_by_habit))

    def load_for_week(self, display_week_start: date) -> bool:
        """Make sure the window around ``display_week_start`` is resident.

        Returns True when the store was queried, False for a no-op.
        """
        desired = DateRange.window_around(display_week_start)
        needs_reload = self.loaded_range is None or not self.loaded_range.contains(desired)

        if not needs_reload and display_week_start == self.focus_week_start:
            return False

        self.focus_week_start = display_week_start
        if not needs_reload:
            return False

        habits = self.habit_repo.get_habits_by_list_id(self.list_id).first()
        checks_by_habit: ChecksByHabit = {}
        for habit in habits:
            checks_by_habit[habit.id] = self._fetch(habit.id, desired)  # type: ignore[index]

        self.loaded_range = desired
        self._publish(checks_by_habit)
        logger.debug(
            "Loaded check window",
            extra={
                "list_id": self.list_id,
                "start": desired.start.isoformat(),
                "end": desired.end.isoformat(),
                "habits": len(checks_by_habit),
            },
        )
        return True

    def _fetch(self, habit_id: int, window: DateRange) -> list[HabitCheck]:
        """Read one habit's checks; a failure yields an empty list."""
        try:
            return self.check_repo.get_habit_checks_by_date_range(habit_id, window.start, window.end).first()
        except Exception:
            logger.warning(
                "Failed to load checks for habit %s", habit_id, exc_info=True, extra={"list_id": self.list_id}
            )
            return []

    def refresh_habit(self, habit_id: int) -> bool:
        """Re-read one habit's checks for the focused week only.

        ``loaded_range`` is left alone, so a mutation inside the window but
        outside the focused week stays stale until the next full reload.
        """
        if self.focus_week_start is None:
            return False
        week = DateRange.week_of(self.focus_week_start)
        checks = self._fetch(habit_id, week)
        updated = dict(self.checks_by_habit)
        updated[habit_id] = checks
        self._publish(updated)
        return True

    def forget_habit(self, habit_id: int) -> None:
        """Drop a deleted habit's entry."""
        if habit_id in self.checks_by_habit:
            updated = dict(self.checks_by_habit)
            del updated[habit_id]
            self._publish(updated)

    def checks_for(self, habit_id: int) -> Optional[list[HabitCheck]]:
        """Cached checks for a habit, or None when it was never loaded."""
        return self.checks_by_habit.get(habit_id)

    def check_on(self, habit_id: int, day: date) -> Optional[HabitCheck]:
        epoch_day = to_epoch_day(day)
        for check in self.checks_by_habit.get(habit_id, ()):
            if check.date == epoch_day:
                return check
        return None


__all__ = ["CheckWindow", "DateRange", "WEEKS_AHEAD", "WEEKS_BEHIND"]

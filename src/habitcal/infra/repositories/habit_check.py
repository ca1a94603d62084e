"""SQLModel implementation of the habit check repository."""

from __future__ import annotations

from datetime import date
from typing import Callable, Optional

from ...domain.results import Result
from ...logging_config import get_logger
from ...models.habit_check import DEFAULT_EMOJI, HabitCheck, to_epoch_day
from ...models.timestamps import now_millis
from ...services.habits import compute_streaks
from ..live import LiveQuery
from ..store import HabitCheckStore
from .base import attempt, require_rows

logger = get_logger("repositories.habit_check")


class SQLModelHabitCheckRepository:
    """Daily checks keyed by ``(habit_id, epoch day)``.

    ``create_or_update_habit_check`` is the only path that creates rows, which
    keeps a single check per habit and day.
    """

    def __init__(self, store: HabitCheckStore, clock: Callable[[], int] = now_millis):
        self.store = store
        self.clock = clock

    def create_or_update_habit_check(
        self,
        habit_id: int,
        day: date,
        emoji: str = DEFAULT_EMOJI,
        note: Optional[str] = None,
    ) -> Result[int]:
        """Upsert the check for ``habit_id`` on ``day`` and return its id."""
        epoch_day = to_epoch_day(day)

        def upsert() -> int:
            now = self.clock()
            existing = self.store.by_date(habit_id, epoch_day)
            if existing is not None:
                existing.emoji = emoji
                existing.note = note
                existing.updated_at = now
                self.store.update(existing)
                return existing.id  # type: ignore[return-value]
            check = HabitCheck(
                habit_id=habit_id,
                date=epoch_day,
                emoji=emoji,
                note=note,
                created_at=now,
                updated_at=now,
            )
            return self.store.insert(check)

        result = attempt("create_or_update_habit_check", upsert, habit_id=habit_id, day=epoch_day)
        if result.is_success:
            logger.debug("Saved habit check", extra={"habit_id": habit_id, "day": epoch_day, "check_id": result.value})
        return result

    def delete_habit_check(self, habit_check: HabitCheck) -> Result[int]:
        result = attempt("delete_habit_check", lambda: self.store.delete(habit_check), check_id=habit_check.id)
        return require_rows(result, "HabitCheck", habit_check.id)

    def delete_all_checks_for_habit(self, habit_id: int) -> Result[int]:
        """Clear one habit's history; other habits keep theirs. 0 rows is not an error."""
        return attempt("delete_all_checks_for_habit", lambda: self.store.delete_all_for_habit(habit_id), habit_id=habit_id)

    def get_habit_check_by_id(self, check_id: int) -> LiveQuery[Optional[HabitCheck]]:
        return self.store.watch(check_id)

    def get_habit_checks_by_habit_id(self, habit_id: int) -> LiveQuery[list[HabitCheck]]:
        return self.store.watch_by_habit(habit_id)

    def get_habit_checks_by_date_range(
        self, habit_id: int, start: date, end: date
    ) -> LiveQuery[list[HabitCheck]]:
        query = self.store.watch_by_date_range(habit_id, to_epoch_day(start), to_epoch_day(end))
        return query.map(lambda checks: [c for c in checks if c.habit_id == habit_id])

    def get_habit_check_by_date(self, habit_id: int, day: date) -> Optional[HabitCheck]:
        return self.store.by_date(habit_id, to_epoch_day(day))

    def get_current_streak(self, habit_id: int, *, today: Optional[date] = None) -> int:
        current, _ = compute_streaks(self.store.by_habit(habit_id), today=today)
        return current

    def get_longest_streak(self, habit_id: int) -> int:
        _, longest = compute_streaks(self.store.by_habit(habit_id))
        return longest


__all__ = ["SQLModelHabitCheckRepository"]

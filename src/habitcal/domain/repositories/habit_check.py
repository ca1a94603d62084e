"""Habit check repository protocol."""

from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING, Optional, Protocol

from ...models.habit_check import HabitCheck
from ..results import Result

if TYPE_CHECKING:
    from ...infra.live import LiveQuery


class HabitCheckRepository(Protocol):
    """Repository for daily checks; the only write path that creates them."""

    def create_or_update_habit_check(
        self, habit_id: int, day: date, emoji: str = ..., note: Optional[str] = None
    ) -> Result[int]:
        """Upsert the check of ``habit_id`` on ``day`` and return its id."""
        ...

    def delete_habit_check(self, habit_check: HabitCheck) -> Result[int]:
        ...

    def delete_all_checks_for_habit(self, habit_id: int) -> Result[int]:
        ...

    def get_habit_check_by_id(self, check_id: int) -> LiveQuery[Optional[HabitCheck]]:
        ...

    def get_habit_checks_by_habit_id(self, habit_id: int) -> LiveQuery[list[HabitCheck]]:
        ...

    def get_habit_checks_by_date_range(
        self, habit_id: int, start: date, end: date
    ) -> LiveQuery[list[HabitCheck]]:
        ...

    def get_habit_check_by_date(self, habit_id: int, day: date) -> Optional[HabitCheck]:
        """One-shot reads (this and the streaks) raise ``StoreError`` on failure."""
        ...

    def get_current_streak(self, habit_id: int, *, today: Optional[date] = None) -> int:
        ...

    def get_longest_streak(self, habit_id: int) -> int:
        ...

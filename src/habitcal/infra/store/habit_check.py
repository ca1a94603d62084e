"""Habit check table store, including the date-range query."""

from __future__ import annotations

from typing import ClassVar, Optional

from sqlalchemy import delete
from sqlmodel import select

from ...logging_config import get_logger
from ...models.habit_check import HabitCheck
from ..live import LiveQuery
from .base import SQLModelStore

logger = get_logger("store.habit_check")


class HabitCheckStore(SQLModelStore[HabitCheck]):
    model = HabitCheck
    table: ClassVar[str] = "habit_checks"

    def by_habit(self, habit_id: int) -> list[HabitCheck]:
        """Full history of one habit, newest day first."""
        statement = (
            select(HabitCheck)
            .where(HabitCheck.habit_id == habit_id)
            .order_by(HabitCheck.date.desc())  # type: ignore[attr-defined]
        )
        return self._all(statement)

    def watch_by_habit(self, habit_id: int) -> LiveQuery[list[HabitCheck]]:
        return self._live(lambda: self.by_habit(habit_id))

    def by_date_range(self, habit_id: int, start_day: int, end_day: int) -> list[HabitCheck]:
        """Checks of ``habit_id`` with ``start_day <= date <= end_day``, ascending."""
        statement = (
            select(HabitCheck)
            .where(HabitCheck.habit_id == habit_id)
            .where(HabitCheck.date >= start_day)
            .where(HabitCheck.date <= end_day)
            .order_by(HabitCheck.date)  # type: ignore[arg-type]
        )
        return self._all(statement)

    def watch_by_date_range(
        self, habit_id: int, start_day: int, end_day: int
    ) -> LiveQuery[list[HabitCheck]]:
        return self._live(lambda: self.by_date_range(habit_id, start_day, end_day))

    def by_date(self, habit_id: int, day: int) -> Optional[HabitCheck]:
        statement = (
            select(HabitCheck)
            .where(HabitCheck.habit_id == habit_id)
            .where(HabitCheck.date == day)
            .limit(1)
        )
        return self._first(statement)

    def delete_all_for_habit(self, habit_id: int) -> int:
        """Remove every check of one habit in a single transaction."""
        with self._transaction("delete_all") as session:
            result = session.exec(delete(HabitCheck).where(HabitCheck.habit_id == habit_id))  # type: ignore[call-overload]
            rows = result.rowcount
        logger.info("Cleared habit history", extra={"habit_id": habit_id, "rows": rows})
        self.notifier.publish(self.table)
        return rows

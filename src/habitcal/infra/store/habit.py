"""Habit table store."""

from __future__ import annotations

from typing import ClassVar

from sqlmodel import select

from ...models.habit import Habit
from ..live import LiveQuery
from .base import SQLModelStore


class HabitStore(SQLModelStore[Habit]):
    model = Habit
    table: ClassVar[str] = "habits"
    cascade_tables = ("habit_checks",)

    def by_list(self, list_id: int) -> list[Habit]:
        """Habits of one list in creation order."""
        statement = (
            select(Habit)
            .where(Habit.list_id == list_id)
            .order_by(Habit.created_at, Habit.id)  # type: ignore[arg-type]
        )
        return self._all(statement)

    def watch_by_list(self, list_id: int) -> LiveQuery[list[Habit]]:
        return self._live(lambda: self.by_list(list_id))

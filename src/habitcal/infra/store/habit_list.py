"""Habit list table store."""

from __future__ import annotations

from typing import ClassVar

from sqlmodel import select

from ...models.habit_list import HabitList
from ..live import LiveQuery
from .base import SQLModelStore


class HabitListStore(SQLModelStore[HabitList]):
    model = HabitList
    table: ClassVar[str] = "habit_lists"
    cascade_tables = ("habits", "habit_checks")

    def by_user(self, user_id: str) -> list[HabitList]:
        """Lists owned by ``user_id``, most recently updated first."""
        statement = (
            select(HabitList)
            .where(HabitList.user_id == user_id)
            .order_by(HabitList.updated_at.desc(), HabitList.id.desc())  # type: ignore[union-attr]
        )
        return self._all(statement)

    def watch_by_user(self, user_id: str) -> LiveQuery[list[HabitList]]:
        return self._live(lambda: self.by_user(user_id))

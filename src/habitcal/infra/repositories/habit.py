"""SQLModel implementation of the habit repository."""

from __future__ import annotations

from typing import Callable, Optional

from ...domain.results import Result
from ...logging_config import get_logger
from ...models.habit import Habit
from ...models.timestamps import now_millis
from ..live import LiveQuery
from ..store import HabitStore
from .base import attempt, require_rows

logger = get_logger("repositories.habit")


class SQLModelHabitRepository:
    """Habits of a list; deleting one removes its checks as well."""

    def __init__(self, store: HabitStore, clock: Callable[[], int] = now_millis):
        self.store = store
        self.clock = clock

    def create_habit(self, list_id: int, name: str) -> Result[int]:
        now = self.clock()
        habit = Habit(list_id=list_id, name=name, created_at=now, updated_at=now)
        result = attempt("create_habit", lambda: self.store.insert(habit), list_id=list_id)
        if result.is_success:
            logger.info("Created habit", extra={"habit_id": result.value, "list_id": list_id})
        return result

    def update_habit(self, habit: Habit) -> Result[int]:
        updated = Habit(**{**habit.model_dump(), "updated_at": self.clock()})
        result = attempt("update_habit", lambda: self.store.update(updated), habit_id=habit.id)
        return require_rows(result, "Habit", habit.id)

    def delete_habit(self, habit: Habit) -> Result[int]:
        result = attempt("delete_habit", lambda: self.store.delete(habit), habit_id=habit.id)
        return require_rows(result, "Habit", habit.id)

    def get_habit_by_id(self, habit_id: int) -> LiveQuery[Optional[Habit]]:
        return self.store.watch(habit_id)

    def get_habits_by_list_id(self, list_id: int) -> LiveQuery[list[Habit]]:
        return self.store.watch_by_list(list_id)


__all__ = ["SQLModelHabitRepository"]

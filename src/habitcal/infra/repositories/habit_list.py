"""SQLModel implementation of the habit list repository."""

from __future__ import annotations

from typing import Callable, Optional

from ...domain.results import Result
from ...logging_config import get_logger
from ...models.habit_list import HabitList
from ...models.timestamps import now_millis
from ..live import LiveQuery
from ..store import HabitListStore
from .base import attempt, require_rows

logger = get_logger("repositories.habit_list")


class SQLModelHabitListRepository:
    """Habit lists with created/updated bookkeeping."""

    def __init__(self, store: HabitListStore, clock: Callable[[], int] = now_millis):
        self.store = store
        self.clock = clock

    def create_habit_list(self, user_id: str, name: str) -> Result[int]:
        now = self.clock()
        habit_list = HabitList(user_id=user_id, name=name, created_at=now, updated_at=now)
        result = attempt("create_habit_list", lambda: self.store.insert(habit_list), user_id=user_id)
        if result.is_success:
            logger.info("Created habit list", extra={"list_id": result.value, "user_id": user_id})
        return result

    def update_habit_list(self, habit_list: HabitList) -> Result[int]:
        """Persist ``habit_list``; ``updated_at`` is always moved to now."""
        updated = HabitList(**{**habit_list.model_dump(), "updated_at": self.clock()})
        result = attempt("update_habit_list", lambda: self.store.update(updated), list_id=habit_list.id)
        return require_rows(result, "HabitList", habit_list.id)

    def delete_habit_list(self, habit_list: HabitList) -> Result[int]:
        result = attempt("delete_habit_list", lambda: self.store.delete(habit_list), list_id=habit_list.id)
        if result.is_success and result.value:
            logger.info("Deleted habit list", extra={"list_id": habit_list.id})
        return require_rows(result, "HabitList", habit_list.id)

    def get_habit_list_by_id(self, list_id: int) -> LiveQuery[Optional[HabitList]]:
        return self.store.watch(list_id)

    def get_habit_lists_by_user_id(self, user_id: str) -> LiveQuery[list[HabitList]]:
        return self.store.watch_by_user(user_id)


__all__ = ["SQLModelHabitListRepository"]

"""Habit repository protocol."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Protocol

from ...models.habit import Habit
from ..results import Result

if TYPE_CHECKING:
    from ...infra.live import LiveQuery


class HabitRepository(Protocol):
    """Repository for managing habit entities."""

    def create_habit(self, list_id: int, name: str) -> Result[int]:
        ...

    def update_habit(self, habit: Habit) -> Result[int]:
        ...

    def delete_habit(self, habit: Habit) -> Result[int]:
        ...

    def get_habit_by_id(self, habit_id: int) -> LiveQuery[Optional[Habit]]:
        ...

    def get_habits_by_list_id(self, list_id: int) -> LiveQuery[list[Habit]]:
        """Habits of a list in creation order."""
        ...

"""Habit list repository protocol."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Protocol

from ...models.habit_list import HabitList
from ..results import Result

if TYPE_CHECKING:
    from ...infra.live import LiveQuery


class HabitListRepository(Protocol):
    """Repository for managing habit lists."""

    def create_habit_list(self, user_id: str, name: str) -> Result[int]:
        """Create a list for ``user_id`` and return its id."""
        ...

    def update_habit_list(self, habit_list: HabitList) -> Result[int]:
        """Persist changes and refresh ``updated_at``."""
        ...

    def delete_habit_list(self, habit_list: HabitList) -> Result[int]:
        ...

    def get_habit_list_by_id(self, list_id: int) -> LiveQuery[Optional[HabitList]]:
        ...

    def get_habit_lists_by_user_id(self, user_id: str) -> LiveQuery[list[HabitList]]:
        """Lists of a user, most recently updated first."""
        ...

"""Screen-level controllers for the list overview and a single habit list."""

from __future__ import annotations

from datetime import date
from typing import Optional

from ..domain.errors import NotFound, StoreError, ValidationError
from ..domain.repositories import HabitCheckRepository, HabitListRepository, HabitRepository
from ..domain.results import Result
from ..infra.live import LiveQuery
from ..logging_config import get_logger
from ..models.habit import Habit
from ..models.habit_check import DEFAULT_EMOJI
from ..models.habit_list import HabitList
from .check_window import CheckWindow

logger = get_logger("boards")


def _require_name(field: str, value: str, label: str) -> Optional[ValidationError]:
    if not value or not value.strip():
        return ValidationError(field, f"{label} cannot be empty")
    return None


class HabitListBoard:
    """Habit lists of one signed-in user."""

    def __init__(self, user_id: str, list_repo: HabitListRepository):
        self.user_id = user_id
        self.list_repo = list_repo

    @property
    def habit_lists(self) -> LiveQuery[list[HabitList]]:
        return self.list_repo.get_habit_lists_by_user_id(self.user_id)

    def create_habit_list(self, name: str) -> Result[int]:
        error = _require_name("name", name, "List name")
        if error:
            return Result.fail(error)
        return self.list_repo.create_habit_list(self.user_id, name)

    def rename_habit_list(self, habit_list: HabitList, name: str) -> Result[int]:
        error = _require_name("name", name, "List name")
        if error:
            return Result.fail(error)
        renamed = HabitList(**{**habit_list.model_dump(), "name": name})
        return self.list_repo.update_habit_list(renamed)

    def delete_habit_list(self, habit_list: HabitList) -> Result[int]:
        return self.list_repo.delete_habit_list(habit_list)


class HabitBoard:
    """One habit list: its habits, their checks and the calendar window."""

    def __init__(
        self,
        list_id: int,
        list_repo: HabitListRepository,
        habit_repo: HabitRepository,
        check_repo: HabitCheckRepository,
    ) -> None:
        self.list_id = list_id
        self.list_repo = list_repo
        self.habit_repo = habit_repo
        self.check_repo = check_repo
        self.window = CheckWindow(list_id, habit_repo, check_repo)

    @property
    def habit_list(self) -> LiveQuery[Optional[HabitList]]:
        return self.list_repo.get_habit_list_by_id(self.list_id)

    @property
    def habits(self) -> LiveQuery[list[Habit]]:
        return self.habit_repo.get_habits_by_list_id(self.list_id)

    def load_week(self, week_start: date) -> bool:
        return self.window.load_for_week(week_start)

    # Habits

    def create_habit(self, name: str) -> Result[int]:
        error = _require_name("name", name, "Habit name")
        if error:
            return Result.fail(error)
        return self.habit_repo.create_habit(self.list_id, name)

    def rename_habit(self, habit_id: int, name: str) -> Result[int]:
        error = _require_name("name", name, "Habit name")
        if error:
            return Result.fail(error)
        habit = self.habit_repo.get_habit_by_id(habit_id).first()
        if habit is None:
            return Result.fail(NotFound("Habit", habit_id))
        return self.habit_repo.update_habit(Habit(**{**habit.model_dump(), "name": name}))

    def delete_habit(self, habit_id: int) -> Result[int]:
        habit = self.habit_repo.get_habit_by_id(habit_id).first()
        if habit is None:
            return Result.fail(NotFound("Habit", habit_id))
        result = self.habit_repo.delete_habit(habit)
        if result.is_success:
            self.window.forget_habit(habit_id)
        return result

    def rename_list(self, name: str) -> Result[int]:
        error = _require_name("name", name, "List name")
        if error:
            return Result.fail(error)
        current = self.habit_list.first()
        if current is None:
            return Result.fail(NotFound("HabitList", self.list_id))
        return self.list_repo.update_habit_list(HabitList(**{**current.model_dump(), "name": name}))

    # Checks

    def set_check(
        self, habit_id: int, day: date, emoji: str = DEFAULT_EMOJI, note: Optional[str] = None
    ) -> Result[int]:
        result = self.check_repo.create_or_update_habit_check(habit_id, day, emoji, note)
        if result.is_success:
            self.window.refresh_habit(habit_id)
        return result

    def delete_check(self, habit_id: int, day: date) -> Result[int]:
        try:
            check = self.check_repo.get_habit_check_by_date(habit_id, day)
        except StoreError as exc:
            return Result.fail(exc)
        if check is None:
            return Result.fail(NotFound("HabitCheck", (habit_id, day.isoformat())))
        result = self.check_repo.delete_habit_check(check)
        if result.is_success:
            self.window.refresh_habit(habit_id)
        return result

    def clear_checks(self, habit_id: int) -> Result[int]:
        result = self.check_repo.delete_all_checks_for_habit(habit_id)
        if result.is_success:
            logger.info("Cleared checks", extra={"habit_id": habit_id, "rows": result.value})
            self.window.refresh_habit(habit_id)
        return result


__all__ = ["HabitBoard", "HabitListBoard"]

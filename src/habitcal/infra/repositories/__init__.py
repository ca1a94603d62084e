"""Concrete repository implementations using SQLModel."""

from .habit import SQLModelHabitRepository
from .habit_check import SQLModelHabitCheckRepository
from .habit_list import SQLModelHabitListRepository
from .settings import SQLModelSettingsRepository
from .user import SQLModelUserRepository

__all__ = [
    "SQLModelHabitCheckRepository",
    "SQLModelHabitListRepository",
    "SQLModelHabitRepository",
    "SQLModelSettingsRepository",
    "SQLModelUserRepository",
]

"""Repository protocol definitions for domain layer."""

from .habit import HabitRepository
from .habit_check import HabitCheckRepository
from .habit_list import HabitListRepository
from .user import UserRepository

__all__ = [
    "HabitCheckRepository",
    "HabitListRepository",
    "HabitRepository",
    "UserRepository",
]

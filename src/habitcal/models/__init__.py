"""SQLModel table exports."""

from .habit import Habit
from .habit_check import DEFAULT_EMOJI, HabitCheck, from_epoch_day, to_epoch_day
from .habit_list import HabitList
from .settings import AppSetting
from .timestamps import now_millis
from .user import User

__all__ = [
    "AppSetting",
    "DEFAULT_EMOJI",
    "Habit",
    "HabitCheck",
    "HabitList",
    "User",
    "from_epoch_day",
    "now_millis",
    "to_epoch_day",
]

"""SQLModel table exports."""

from .habit import Habit, HabitEntry
from .module import Module, UserSetting
from .user import User

__all__ = [
    "Habit",
    "HabitEntry",
    "Module",
    "User",
    "UserSetting",
]

"""Repository protocol definitions for domain layer."""

from .habit import HabitRepository
from .module import ModuleRepository
from .user_settings import UserSettingsRepository

__all__ = [
    "HabitRepository",
    "ModuleRepository",
    "UserSettingsRepository",
]

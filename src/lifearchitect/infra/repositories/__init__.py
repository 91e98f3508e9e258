"""Concrete repository implementations using SQLModel."""

from .habit import SQLModelHabitRepository
from .module import SQLModelModuleRepository
from .user_settings import SQLModelUserSettingsRepository

__all__ = [
    "SQLModelHabitRepository",
    "SQLModelModuleRepository",
    "SQLModelUserSettingsRepository",
]

"""Habit form definitions."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import Field, field_validator

from ...schemas import CamelModel


class HabitFrequency(str, Enum):
    """Suggested frequencies; other strings are accepted as-is."""

    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"


class HabitForm(CamelModel):
    """Form model for creating a habit."""

    title: str = Field(max_length=120, description="Short label for the habit")
    description: Optional[str] = Field(default=None, max_length=500)
    frequency: str = Field(default=HabitFrequency.DAILY.value, min_length=1, max_length=32)
    time_of_day: Optional[str] = Field(default=None, max_length=32)
    streak: int = Field(default=0, ge=0)
    best_streak: int = Field(default=0, ge=0)

    @field_validator("title")
    @classmethod
    def validate_title(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("Please provide a habit title.")
        return value

    @field_validator("frequency")
    @classmethod
    def normalize_frequency(cls, value: str) -> str:
        return value.lower()


class HabitUpdateForm(CamelModel):
    """Partial edit; only fields present in the payload are applied."""

    title: Optional[str] = Field(default=None, min_length=1, max_length=120)
    description: Optional[str] = Field(default=None, max_length=500)
    frequency: Optional[str] = Field(default=None, min_length=1, max_length=32)
    time_of_day: Optional[str] = Field(default=None, max_length=32)
    streak: Optional[int] = Field(default=None, ge=0)
    best_streak: Optional[int] = Field(default=None, ge=0)

    def changes(self) -> dict:
        changes = self.model_dump(exclude_unset=True)
        for required in ("title", "frequency", "streak", "best_streak"):
            if changes.get(required) is None:
                changes.pop(required, None)
        if "frequency" in changes:
            changes["frequency"] = changes["frequency"].lower()
        return changes


class HabitEntryForm(CamelModel):
    """Payload for recording a completion."""

    habit_id: int = Field(ge=1)
    notes: Optional[str] = Field(default=None, max_length=1000)
    completed_at: Optional[datetime] = None


__all__ = ["HabitEntryForm", "HabitForm", "HabitFrequency", "HabitUpdateForm"]

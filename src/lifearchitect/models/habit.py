"""Habits tracking data structures."""

from __future__ import annotations

from datetime import datetime
from typing import ClassVar, Optional

from sqlmodel import Field, SQLModel

from .common import naive_utc_column, utcnow


class Habit(SQLModel, table=True):
    """A user-defined recurring task with an incrementally kept streak."""

    __tablename__: ClassVar[str] = "habit"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="user.id", ondelete="CASCADE", nullable=False, index=True)
    title: str = Field(nullable=False, max_length=120)
    description: Optional[str] = Field(default=None, max_length=500)
    frequency: str = Field(default="daily", nullable=False, max_length=32)
    time_of_day: Optional[str] = Field(default=None, max_length=32)
    streak: int = Field(default=0, nullable=False)
    best_streak: int = Field(default=0, nullable=False)
    created_at: datetime = Field(default_factory=utcnow, sa_column=naive_utc_column())


class HabitEntry(SQLModel, table=True):
    """A single completion record; several per habit per day are allowed."""

    __tablename__: ClassVar[str] = "habit_entry"

    id: Optional[int] = Field(default=None, primary_key=True)
    habit_id: int = Field(foreign_key="habit.id", ondelete="CASCADE", nullable=False, index=True)
    user_id: int = Field(foreign_key="user.id", ondelete="CASCADE", nullable=False, index=True)
    completed: bool = Field(default=True, nullable=False)
    completed_at: datetime = Field(default_factory=utcnow, sa_column=naive_utc_column(index=True))
    notes: Optional[str] = Field(default=None, max_length=1000)

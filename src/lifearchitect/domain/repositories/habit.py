"""Habit repository protocol."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional, Protocol

from ...models.habit import Habit, HabitEntry


class HabitRepository(Protocol):
    """Repository for habits and their completion entries."""

    def get_by_id(self, habit_id: int, *, user_id: int) -> Optional[Habit]:
        """Retrieve a habit owned by ``user_id``."""
        ...

    def list_all(self, *, user_id: int) -> list[Habit]:
        """List the user's habits, newest first."""
        ...

    def create(self, habit: Habit, *, user_id: int) -> Habit:
        ...

    def update(self, habit_id: int, changes: dict[str, Any], *, user_id: int) -> Optional[Habit]:
        ...

    def delete(self, habit_id: int, *, user_id: int) -> bool:
        ...

    # Habit entry operations
    def get_entry(self, entry_id: int, *, user_id: int) -> Optional[HabitEntry]:
        ...

    def list_entries(
        self,
        *,
        user_id: int,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> list[HabitEntry]:
        """List the user's entries, optionally within an inclusive UTC window."""
        ...

    def list_entries_for_habit(self, habit_id: int, *, user_id: int) -> list[HabitEntry]:
        ...

    def record_completion(
        self,
        habit_id: int,
        *,
        user_id: int,
        completed_at: datetime,
        notes: Optional[str] = None,
    ) -> HabitEntry:
        """Insert an entry and bump the habit's streak in one transaction."""
        ...

    def remove_entry(self, entry_id: int, *, user_id: int) -> bool:
        """Delete an entry and decrement the habit's streak in one transaction."""
        ...

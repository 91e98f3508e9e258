"""SQLModel implementation of Habit repository."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from sqlalchemy import case, update
from sqlmodel import select

from ...models.habit import Habit, HabitEntry
from ..database import SessionFactory

EDITABLE_FIELDS = frozenset(
    {"title", "description", "frequency", "time_of_day", "streak", "best_streak"}
)


def _increment_streak(habit_id: int, user_id: int):
    """UPDATE raising streak by one and best_streak to at least the new streak.

    Right-hand expressions see the pre-update row, so both columns are derived
    from the same old ``streak`` value.
    """

    bumped = Habit.streak + 1
    return (
        update(Habit)
        .where(Habit.id == habit_id, Habit.user_id == user_id)
        .values(
            streak=bumped,
            best_streak=case((Habit.best_streak < bumped, bumped), else_=Habit.best_streak),
        )
        .execution_options(synchronize_session=False)
    )


def _decrement_streak(habit_id: int):
    return (
        update(Habit)
        .where(Habit.id == habit_id, Habit.streak > 0)
        .values(streak=Habit.streak - 1)
        .execution_options(synchronize_session=False)
    )


class SQLModelHabitRepository:
    """SQLModel-based habit repository implementation."""

    def __init__(self, session_factory: SessionFactory):
        """Initialize with a session factory."""
        self.session_factory = session_factory

    def get_by_id(self, habit_id: int, *, user_id: int) -> Optional[Habit]:
        """Retrieve a habit by ID."""
        with self.session_factory() as session:
            obj = session.exec(
                select(Habit).where(Habit.id == habit_id, Habit.user_id == user_id)
            ).first()
            if obj:
                session.expunge(obj)
            return obj

    def list_all(self, *, user_id: int) -> list[Habit]:
        """List habits, newest first."""
        with self.session_factory() as session:
            statement = (
                select(Habit)
                .where(Habit.user_id == user_id)
                .order_by(Habit.created_at.desc(), Habit.id.desc())  # type: ignore[union-attr]
            )
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def create(self, habit: Habit, *, user_id: int) -> Habit:
        """Create a new habit."""
        with self.session_factory() as session:
            habit.user_id = user_id
            session.add(habit)
            session.commit()
            session.refresh(habit)
            session.expunge(habit)
            return habit

    def update(self, habit_id: int, changes: dict[str, Any], *, user_id: int) -> Optional[Habit]:
        """Apply whitelisted field changes to an owned habit."""
        with self.session_factory() as session:
            habit = session.exec(
                select(Habit).where(Habit.id == habit_id, Habit.user_id == user_id)
            ).first()
            if habit is None:
                return None
            for key, value in changes.items():
                if key in EDITABLE_FIELDS:
                    setattr(habit, key, value)
            session.add(habit)
            session.commit()
            session.refresh(habit)
            session.expunge(habit)
            return habit

    def delete(self, habit_id: int, *, user_id: int) -> bool:
        """Delete a habit; its entries go with it via ON DELETE CASCADE."""
        with self.session_factory() as session:
            habit = session.exec(
                select(Habit).where(Habit.id == habit_id, Habit.user_id == user_id)
            ).first()
            if habit is None:
                return False
            session.delete(habit)
            session.commit()
            return True

    # Habit entry operations
    def get_entry(self, entry_id: int, *, user_id: int) -> Optional[HabitEntry]:
        with self.session_factory() as session:
            obj = session.exec(
                select(HabitEntry).where(HabitEntry.id == entry_id, HabitEntry.user_id == user_id)
            ).first()
            if obj:
                session.expunge(obj)
            return obj

    def list_entries(
        self,
        *,
        user_id: int,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> list[HabitEntry]:
        with self.session_factory() as session:
            statement = select(HabitEntry).where(HabitEntry.user_id == user_id)
            if start is not None:
                statement = statement.where(HabitEntry.completed_at >= start)
            if end is not None:
                statement = statement.where(HabitEntry.completed_at <= end)
            statement = statement.order_by(HabitEntry.completed_at, HabitEntry.id)  # type: ignore[arg-type]
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def list_entries_for_habit(self, habit_id: int, *, user_id: int) -> list[HabitEntry]:
        """Entries for one habit, most recent first."""
        with self.session_factory() as session:
            statement = (
                select(HabitEntry)
                .where(HabitEntry.user_id == user_id, HabitEntry.habit_id == habit_id)
                .order_by(HabitEntry.completed_at.desc(), HabitEntry.id.desc())  # type: ignore[union-attr]
            )
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def record_completion(
        self,
        habit_id: int,
        *,
        user_id: int,
        completed_at: datetime,
        notes: Optional[str] = None,
    ) -> HabitEntry:
        """Insert a completed entry and bump the streak in one transaction."""
        with self.session_factory() as session:
            entry = HabitEntry(
                habit_id=habit_id,
                user_id=user_id,
                completed=True,
                completed_at=completed_at,
                notes=notes,
            )
            session.add(entry)
            session.flush()
            session.exec(_increment_streak(habit_id, user_id))  # type: ignore[call-overload]
            session.commit()
            session.refresh(entry)
            session.expunge(entry)
            return entry

    def remove_entry(self, entry_id: int, *, user_id: int) -> bool:
        """Delete an entry and decrement its habit's streak (floor 0)."""
        with self.session_factory() as session:
            entry = session.exec(
                select(HabitEntry).where(HabitEntry.id == entry_id, HabitEntry.user_id == user_id)
            ).first()
            if entry is None:
                return False
            habit_id = entry.habit_id
            session.delete(entry)
            session.flush()
            session.exec(_decrement_streak(habit_id))  # type: ignore[call-overload]
            session.commit()
            return True


__all__ = ["SQLModelHabitRepository"]

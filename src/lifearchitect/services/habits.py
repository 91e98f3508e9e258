"""Habit ledger: habits, completion entries and incremental streak counters.

Streaks are counters driven by two events. Completing a habit adds one and
lifts ``best_streak`` when the new streak passes it. Removing an entry takes
one away, never below zero, whichever entry was removed. Missed days are not
detected, so a streak only falls through explicit removals.
"""

from __future__ import annotations

from datetime import date, datetime, time, timezone, tzinfo
from typing import Any, Optional

from ..domain.repositories import HabitRepository
from ..errors import NotFoundError, NotOwnedError
from ..logging_config import get_logger
from ..models.common import utcnow
from ..models.habit import Habit, HabitEntry

logger = get_logger(__name__)


def to_storage_time(moment: datetime) -> datetime:
    """Convert a timestamp to the naive UTC form stored in the database.

    Naive inputs are taken to be UTC already.
    """

    if moment.tzinfo is None:
        return moment
    return moment.astimezone(timezone.utc).replace(tzinfo=None)


def day_bounds(day: date, tz: tzinfo | None = None) -> tuple[datetime, datetime]:
    """Inclusive [start, end] of a local calendar day as naive UTC datetimes.

    ``tz=None`` uses the server's local timezone.
    """

    if tz is None:
        start = datetime.combine(day, time.min).astimezone()
        end = datetime.combine(day, time.max).astimezone()
    else:
        start = datetime.combine(day, time.min, tzinfo=tz)
        end = datetime.combine(day, time.max, tzinfo=tz)
    return to_storage_time(start), to_storage_time(end)


def reconcile_streaks(streak: int, best_streak: int) -> tuple[int, int]:
    """Clamp counters so ``0 <= streak <= best_streak`` holds."""

    streak = max(int(streak), 0)
    best_streak = max(int(best_streak), streak)
    return streak, best_streak


def list_habits(repo: HabitRepository, user_id: int) -> list[Habit]:
    return repo.list_all(user_id=user_id)


def get_habit(repo: HabitRepository, habit_id: int, user_id: int) -> Habit:
    habit = repo.get_by_id(habit_id, user_id=user_id)
    if habit is None:
        raise NotFoundError("Habit not found")
    return habit


def create_habit(repo: HabitRepository, user_id: int, payload: dict[str, Any]) -> Habit:
    streak, best = reconcile_streaks(payload.get("streak", 0), payload.get("best_streak", 0))
    habit = Habit(
        user_id=user_id,
        title=payload["title"],
        description=payload.get("description"),
        frequency=payload.get("frequency", "daily"),
        time_of_day=payload.get("time_of_day"),
        streak=streak,
        best_streak=best,
    )
    created = repo.create(habit, user_id=user_id)
    logger.info("Habit created", extra={"user_id": user_id, "habit_id": created.id})
    return created


def update_habit(
    repo: HabitRepository, habit_id: int, user_id: int, changes: dict[str, Any]
) -> Habit:
    """Apply a partial edit; direct streak edits still respect the best-streak floor."""

    current = get_habit(repo, habit_id, user_id)
    if "streak" in changes or "best_streak" in changes:
        streak, best = reconcile_streaks(
            changes.get("streak", current.streak),
            changes.get("best_streak", current.best_streak),
        )
        changes = {**changes, "streak": streak, "best_streak": best}
    updated = repo.update(habit_id, changes, user_id=user_id)
    if updated is None:
        raise NotFoundError("Habit not found")
    return updated


def delete_habit(repo: HabitRepository, habit_id: int, user_id: int) -> None:
    if not repo.delete(habit_id, user_id=user_id):
        raise NotFoundError("Habit not found")
    logger.info("Habit deleted", extra={"user_id": user_id, "habit_id": habit_id})


def complete_habit(
    repo: HabitRepository,
    habit_id: int,
    user_id: int,
    notes: Optional[str] = None,
    completed_at: Optional[datetime] = None,
) -> HabitEntry:
    """Record a completion and bump the habit's streak atomically.

    Raises:
        NotOwnedError: the habit does not exist or belongs to another user.
    """

    if repo.get_by_id(habit_id, user_id=user_id) is None:
        raise NotOwnedError("Not authorized to create an entry for this habit")
    moment = to_storage_time(completed_at) if completed_at is not None else utcnow()
    entry = repo.record_completion(habit_id, user_id=user_id, completed_at=moment, notes=notes)
    logger.info(
        "Habit completed",
        extra={"user_id": user_id, "habit_id": habit_id, "entry_id": entry.id},
    )
    return entry


def delete_habit_entry(repo: HabitRepository, entry_id: int, user_id: int) -> bool:
    """Remove an entry and decrement its habit's streak.

    Returns False, without side effects, when the user has no such entry.
    """

    removed = repo.remove_entry(entry_id, user_id=user_id)
    if removed:
        logger.info("Habit entry removed", extra={"user_id": user_id, "entry_id": entry_id})
    return removed


def list_entries_for_user(
    repo: HabitRepository,
    user_id: int,
    day: Optional[date] = None,
    tz: tzinfo | None = None,
) -> list[HabitEntry]:
    """All of a user's entries, or only those completed on one local day."""

    if day is None:
        return repo.list_entries(user_id=user_id)
    start, end = day_bounds(day, tz)
    return repo.list_entries(user_id=user_id, start=start, end=end)


def list_entries_for_habit(repo: HabitRepository, habit_id: int, user_id: int) -> list[HabitEntry]:
    get_habit(repo, habit_id, user_id)
    return repo.list_entries_for_habit(habit_id, user_id=user_id)


__all__ = [
    "complete_habit",
    "create_habit",
    "day_bounds",
    "delete_habit",
    "delete_habit_entry",
    "get_habit",
    "list_entries_for_habit",
    "list_entries_for_user",
    "list_habits",
    "reconcile_streaks",
    "to_storage_time",
    "update_habit",
]

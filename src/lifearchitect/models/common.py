"""Helpers shared by table definitions."""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import Column, DateTime


def utcnow() -> datetime:
    """Naive UTC timestamp, the form every datetime column stores."""

    return datetime.now(timezone.utc).replace(tzinfo=None)


def naive_utc_column(*, nullable: bool = False, index: bool = False) -> Column:
    """A plain ``DateTime`` column holding naive UTC values.

    Declared explicitly so SQLModel binds naive datetimes as-is.
    """

    return Column(DateTime(timezone=False), nullable=nullable, index=index)


__all__ = ["naive_utc_column", "utcnow"]

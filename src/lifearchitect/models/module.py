"""Feature modules and the per-user settings that toggle them."""

from __future__ import annotations

from datetime import datetime
from typing import Any, ClassVar, Optional

from sqlalchemy import JSON, Column, UniqueConstraint
from sqlmodel import Field, SQLModel

from .common import naive_utc_column, utcnow


class Module(SQLModel, table=True):
    """A named, independently toggleable feature area."""

    __tablename__: ClassVar[str] = "module"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(nullable=False, unique=True, index=True, max_length=64)
    title: str = Field(nullable=False, max_length=120)
    description: str = Field(default="", max_length=255)
    icon: str = Field(default="", max_length=64)
    is_system: bool = Field(default=False, nullable=False)
    display_order: int = Field(default=0, nullable=False, index=True)
    default_settings: dict[str, Any] = Field(
        default_factory=dict, sa_column=Column(JSON, nullable=False)
    )


class UserSetting(SQLModel, table=True):
    """Whether a module is enabled for a user and how it is configured."""

    __tablename__: ClassVar[str] = "user_setting"
    __table_args__ = (UniqueConstraint("user_id", "module_id", name="uq_user_setting_module"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="user.id", ondelete="CASCADE", nullable=False, index=True)
    module_id: int = Field(foreign_key="module.id", ondelete="CASCADE", nullable=False)
    enabled: bool = Field(default=True, nullable=False)
    display_order: int = Field(default=0, nullable=False)
    settings: dict[str, Any] = Field(default_factory=dict, sa_column=Column(JSON, nullable=False))
    updated_at: datetime = Field(default_factory=utcnow, sa_column=naive_utc_column())

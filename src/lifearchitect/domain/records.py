"""Read models returned by repositories."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


@dataclass(slots=True)
class UserSettingRecord:
    """A user's setting for one module, joined with the module's name."""

    id: int
    user_id: int
    module_id: int
    module_name: str
    enabled: bool
    display_order: int
    settings: dict[str, Any] = field(default_factory=dict)
    updated_at: datetime | None = None


__all__ = ["UserSettingRecord"]

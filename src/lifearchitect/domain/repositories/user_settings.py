"""User settings repository protocol."""

from __future__ import annotations

from typing import Any, Optional, Protocol

from ...models.module import UserSetting
from ..records import UserSettingRecord


class UserSettingsRepository(Protocol):
    """Per-(user, module) settings, always scoped by the owning user."""

    def list_for_user(self, *, user_id: int) -> list[UserSettingRecord]:
        ...

    def get(self, setting_id: int, *, user_id: int) -> Optional[UserSettingRecord]:
        ...

    def get_by_module_name(self, module_name: str, *, user_id: int) -> Optional[UserSettingRecord]:
        ...

    def create(self, setting: UserSetting, *, user_id: int) -> UserSettingRecord:
        """Insert a setting; raises ConflictError for a duplicate (user, module)."""
        ...

    def update(
        self,
        setting_id: int,
        *,
        user_id: int,
        enabled: Optional[bool] = None,
        settings: Optional[dict[str, Any]] = None,
        display_order: Optional[int] = None,
    ) -> Optional[UserSettingRecord]:
        ...

    def delete(self, setting_id: int, *, user_id: int) -> bool:
        ...

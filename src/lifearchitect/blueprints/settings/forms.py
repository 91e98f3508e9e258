"""User setting form definitions."""

from __future__ import annotations

from typing import Any, Optional

from pydantic import AliasChoices, Field, StrictBool, model_validator

from ...schemas import CamelModel


class UserSettingCreateForm(CamelModel):
    """Payload for POST /api/user/settings.

    The module is named either by ``moduleId`` or ``moduleName``; a
    non-numeric ``moduleId`` string is read as a module name.
    """

    module_id: Optional[int] = None
    module_name: Optional[str] = Field(default=None, min_length=1, max_length=64)
    enabled: StrictBool = Field(default=True, validation_alias=AliasChoices("enabled", "isEnabled"))
    display_order: Optional[int] = None
    settings: Optional[dict[str, Any]] = None

    @model_validator(mode="before")
    @classmethod
    def module_id_as_name(cls, data: Any) -> Any:
        if isinstance(data, dict):
            raw = data.get("moduleId")
            if isinstance(raw, str) and not raw.strip().isdigit() and not data.get("moduleName"):
                data = {**data, "moduleName": raw, "moduleId": None}
        return data

    @model_validator(mode="after")
    def require_module(self) -> "UserSettingCreateForm":
        if self.module_id is None and not self.module_name:
            raise ValueError("Provide moduleId or moduleName.")
        return self


class UserSettingUpdateForm(CamelModel):
    """Payload for PATCH; every field is optional and independent."""

    enabled: Optional[StrictBool] = Field(
        default=None, validation_alias=AliasChoices("enabled", "isEnabled")
    )
    settings: Optional[dict[str, Any]] = None
    display_order: Optional[int] = None


__all__ = ["UserSettingCreateForm", "UserSettingUpdateForm"]

"""User settings store: per-user module toggles and configuration."""

from __future__ import annotations

from typing import Any, Optional

from ..domain.records import UserSettingRecord
from ..domain.repositories import ModuleRepository, UserSettingsRepository
from ..errors import NotFoundError
from ..logging_config import get_logger
from ..models.module import Module, UserSetting

logger = get_logger(__name__)


def initialize_user_settings(
    user_id: int,
    *,
    modules: ModuleRepository,
    settings: UserSettingsRepository,
) -> list[UserSettingRecord]:
    """Create the missing settings rows for every catalog module.

    New rows are enabled and copy the module's display order and default
    settings. Existing rows are left untouched.
    """

    existing = {record.module_id for record in settings.list_for_user(user_id=user_id)}
    created = 0
    for module in modules.list_all():
        if module.id in existing:
            continue
        settings.create(_setting_from_module(module), user_id=user_id)
        created += 1
    if created:
        logger.info("Initialized user settings", extra={"user_id": user_id, "created_count": created})
    return settings.list_for_user(user_id=user_id)


def _setting_from_module(
    module: Module,
    *,
    enabled: bool = True,
    display_order: Optional[int] = None,
    blob: Optional[dict[str, Any]] = None,
) -> UserSetting:
    return UserSetting(
        module_id=module.id,  # type: ignore[arg-type]
        enabled=enabled,
        display_order=module.display_order if display_order is None else display_order,
        settings=dict(module.default_settings if blob is None else blob),
    )


def resolve_module(
    modules: ModuleRepository,
    *,
    module_id: Optional[int] = None,
    module_name: Optional[str] = None,
) -> Module:
    """Look a module up by id or name, raising NotFoundError when unknown."""

    module = None
    if module_id is not None:
        module = modules.get_by_id(module_id)
    elif module_name is not None:
        module = modules.get_by_name(module_name)
    if module is None:
        raise NotFoundError("Module not found")
    return module


def create_user_setting(
    user_id: int,
    module: Module,
    *,
    settings: UserSettingsRepository,
    enabled: bool = True,
    display_order: Optional[int] = None,
    blob: Optional[dict[str, Any]] = None,
) -> UserSettingRecord:
    """Create one setting; duplicates surface as ConflictError from the store."""

    record = settings.create(
        _setting_from_module(module, enabled=enabled, display_order=display_order, blob=blob),
        user_id=user_id,
    )
    logger.info(
        "User setting created",
        extra={"user_id": user_id, "module_name": record.module_name, "enabled": record.enabled},
    )
    return record


def update_user_setting(
    setting_id: int,
    user_id: int,
    *,
    settings: UserSettingsRepository,
    enabled: Optional[bool] = None,
    blob: Optional[dict[str, Any]] = None,
    display_order: Optional[int] = None,
) -> UserSettingRecord:
    record = settings.update(
        setting_id,
        user_id=user_id,
        enabled=enabled,
        settings=blob,
        display_order=display_order,
    )
    if record is None:
        raise NotFoundError("Setting not found or does not belong to user")
    logger.info(
        "User setting updated",
        extra={"user_id": user_id, "module_name": record.module_name, "enabled": record.enabled},
    )
    return record


def delete_user_setting(setting_id: int, user_id: int, *, settings: UserSettingsRepository) -> None:
    if not settings.delete(setting_id, user_id=user_id):
        raise NotFoundError("Setting not found or does not belong to user")
    logger.info("User setting deleted", extra={"user_id": user_id, "setting_id": setting_id})


__all__ = [
    "create_user_setting",
    "delete_user_setting",
    "initialize_user_settings",
    "resolve_module",
    "update_user_setting",
]

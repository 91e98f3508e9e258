"""Per-user module settings repository."""

from __future__ import annotations

from typing import Any, Optional

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from ...domain.records import UserSettingRecord
from ...errors import ConflictError, NotFoundError
from ...models.common import utcnow
from ...models.module import Module, UserSetting
from ..database import SessionFactory


def _to_record(setting: UserSetting, module_name: str) -> UserSettingRecord:
    return UserSettingRecord(
        id=setting.id,  # type: ignore[arg-type]
        user_id=setting.user_id,
        module_id=setting.module_id,
        module_name=module_name,
        enabled=setting.enabled,
        display_order=setting.display_order,
        settings=dict(setting.settings or {}),
        updated_at=setting.updated_at,
    )


class SQLModelUserSettingsRepository:
    """SQLModel-based user settings repository."""

    def __init__(self, session_factory: SessionFactory):
        self.session_factory = session_factory

    @staticmethod
    def _joined():
        return select(UserSetting, Module.name).join(Module, Module.id == UserSetting.module_id)

    def _fetch(self, session: Session, setting_id: int, user_id: int) -> Optional[tuple[UserSetting, str]]:
        statement = self._joined().where(UserSetting.id == setting_id, UserSetting.user_id == user_id)
        row = session.exec(statement).first()
        return (row[0], row[1]) if row else None

    def list_for_user(self, *, user_id: int) -> list[UserSettingRecord]:
        with self.session_factory() as session:
            statement = (
                self._joined()
                .where(UserSetting.user_id == user_id)
                .order_by(UserSetting.display_order, Module.name)  # type: ignore[arg-type]
            )
            return [_to_record(setting, name) for setting, name in session.exec(statement).all()]

    def get(self, setting_id: int, *, user_id: int) -> Optional[UserSettingRecord]:
        with self.session_factory() as session:
            found = self._fetch(session, setting_id, user_id)
            return _to_record(*found) if found else None

    def get_by_module_name(self, module_name: str, *, user_id: int) -> Optional[UserSettingRecord]:
        with self.session_factory() as session:
            statement = self._joined().where(
                UserSetting.user_id == user_id, Module.name == module_name
            )
            row = session.exec(statement).first()
            return _to_record(row[0], row[1]) if row else None

    def create(self, setting: UserSetting, *, user_id: int) -> UserSettingRecord:
        setting.user_id = user_id
        try:
            with self.session_factory() as session:
                session.add(setting)
                session.flush()
                found = self._fetch(session, setting.id, user_id)  # type: ignore[arg-type]
                if found is None:
                    raise NotFoundError("Module not found")
                session.commit()
        except IntegrityError as exc:
            raise ConflictError("A setting for this module already exists") from exc
        return _to_record(*found)

    def update(
        self,
        setting_id: int,
        *,
        user_id: int,
        enabled: Optional[bool] = None,
        settings: Optional[dict[str, Any]] = None,
        display_order: Optional[int] = None,
    ) -> Optional[UserSettingRecord]:
        with self.session_factory() as session:
            found = self._fetch(session, setting_id, user_id)
            if found is None:
                return None
            setting, module_name = found
            if enabled is not None:
                setting.enabled = enabled
            if settings is not None:
                # Reassign so the JSON column registers the change
                setting.settings = dict(settings)
            if display_order is not None:
                setting.display_order = display_order
            setting.updated_at = utcnow()
            session.add(setting)
            session.commit()
            session.refresh(setting)
            return _to_record(setting, module_name)

    def delete(self, setting_id: int, *, user_id: int) -> bool:
        with self.session_factory() as session:
            setting = session.exec(
                select(UserSetting).where(UserSetting.id == setting_id, UserSetting.user_id == user_id)
            ).first()
            if setting is None:
                return False
            session.delete(setting)
            session.commit()
            return True


__all__ = ["SQLModelUserSettingsRepository"]

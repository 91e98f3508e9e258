"""Pydantic models for JSON request parsing and response serialization."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Annotated, Any, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, PlainSerializer, ValidationError
from pydantic.alias_generators import to_camel

from .errors import InvalidPayloadError

T = TypeVar("T", bound=BaseModel)


class CamelModel(BaseModel):
    """Base model speaking camelCase on the wire and snake_case in Python."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        str_strip_whitespace=True,
    )


def _as_utc_iso(value: datetime) -> str:
    # Stored datetimes are naive UTC
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.isoformat()


UtcDatetime = Annotated[datetime, PlainSerializer(_as_utc_iso, return_type=str, when_used="json")]


class UserOut(CamelModel):
    id: int
    username: str
    name: Optional[str] = None
    email: Optional[str] = None
    created_at: Optional[UtcDatetime] = None


class ModuleOut(CamelModel):
    id: int
    name: str
    title: str
    description: str
    icon: str
    is_system: bool
    display_order: int
    default_settings: dict[str, Any]


class UserSettingOut(CamelModel):
    id: int
    user_id: int
    module_id: int
    module_name: str
    enabled: bool
    display_order: int
    settings: dict[str, Any]
    updated_at: Optional[UtcDatetime] = None


class HabitOut(CamelModel):
    id: int
    user_id: int
    title: str
    description: Optional[str] = None
    frequency: str
    time_of_day: Optional[str] = None
    streak: int
    best_streak: int
    created_at: Optional[UtcDatetime] = None


class HabitEntryOut(CamelModel):
    id: int
    habit_id: int
    user_id: int
    completed: bool
    completed_at: UtcDatetime
    notes: Optional[str] = None


def dump(schema: type[CamelModel], obj: Any) -> dict[str, Any]:
    """Serialize an ORM row or record through ``schema`` into camelCase JSON."""

    return schema.model_validate(obj).model_dump(mode="json", by_alias=True)


def dump_many(schema: type[CamelModel], rows: Any) -> list[dict[str, Any]]:
    return [dump(schema, row) for row in rows]


def parse_payload(form: type[T], payload: Any, message: str) -> T:
    """Validate a request body, translating failures into a 400 error."""

    if not isinstance(payload, dict):
        raise InvalidPayloadError(message, [{"loc": [], "msg": "Expected a JSON object"}])
    try:
        return form.model_validate(payload)
    except ValidationError as exc:
        errors = [
            {"loc": list(error.get("loc", ())), "msg": error.get("msg", "Invalid value")}
            for error in exc.errors(include_url=False)
        ]
        raise InvalidPayloadError(message, errors) from exc


__all__ = [
    "CamelModel",
    "HabitEntryOut",
    "HabitOut",
    "ModuleOut",
    "UserOut",
    "UserSettingOut",
    "dump",
    "dump_many",
    "parse_payload",
]

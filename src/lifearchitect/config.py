"""Application configuration objects and helpers."""

from __future__ import annotations

import os
from datetime import timedelta, tzinfo
from pathlib import Path
from typing import Any
from zoneinfo import ZoneInfo

from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: bool = False) -> bool:
    """Interpret environment variable values as booleans."""

    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    return int(value)


class BaseConfig:
    """Base configuration shared across environments."""

    APP_NAME = "LifeArchitect"
    DB_FILENAME = "lifearchitect.db"
    SQLITE_PRAGMAS = {"foreign_keys": "on"}
    DEBUG = False
    TESTING = False
    DEV_MODE_DEFAULT = True

    def __init__(self) -> None:
        self.SECRET_KEY = os.getenv("LIFEARCHITECT_SECRET_KEY", "replace-me")
        self.DEV_MODE = _env_bool("LIFEARCHITECT_DEV_MODE", default=self.DEV_MODE_DEFAULT)
        self.DATA_DIR = self._resolve_data_dir()
        self.DATABASE_URL = os.getenv("LIFEARCHITECT_DATABASE_URL", self._build_sqlite_url())
        self.TIMEZONE = os.getenv("LIFEARCHITECT_TIMEZONE") or None
        self.SESSION_LIFETIME = timedelta(hours=_env_int("LIFEARCHITECT_SESSION_HOURS", 24))
        if not self.DEV_MODE and self.SECRET_KEY == "replace-me":
            raise ValueError("LIFEARCHITECT_SECRET_KEY must be set in non-dev mode.")

    def _resolve_data_dir(self) -> Path:
        """Return the directory where the SQLite file and logs live."""

        data_root = os.getenv("LIFEARCHITECT_DATA_DIR", "instance")
        path = Path(data_root).expanduser().resolve()
        path.mkdir(parents=True, exist_ok=True)
        return path

    def _build_sqlite_url(self) -> str:
        return f"sqlite:///{self.DATA_DIR / self.DB_FILENAME}"

    @property
    def is_sqlite(self) -> bool:
        return self.DATABASE_URL.startswith("sqlite")

    def local_timezone(self) -> tzinfo | None:
        """Timezone used for calendar-day boundaries; ``None`` means server local."""

        if not self.TIMEZONE:
            return None
        return ZoneInfo(self.TIMEZONE)

    def sqlalchemy_engine_options(self) -> dict[str, Any]:
        """Expose engine kwargs for SQLModel to consume."""

        if self.is_sqlite:
            return {"connect_args": {"check_same_thread": False}}
        return {"pool_pre_ping": True}

    def flask_settings(self) -> dict[str, Any]:
        """Values copied onto ``app.config`` by the app factory."""

        return {
            "SECRET_KEY": self.SECRET_KEY,
            "DEBUG": self.DEBUG,
            "TESTING": self.TESTING,
            "PERMANENT_SESSION_LIFETIME": self.SESSION_LIFETIME,
            "SESSION_COOKIE_HTTPONLY": True,
            "SESSION_COOKIE_SAMESITE": "Strict",
            "SESSION_COOKIE_SECURE": not self.DEV_MODE,
        }


class DevConfig(BaseConfig):
    """Development configuration using local SQLite."""

    DEBUG = True


class TestConfig(BaseConfig):
    """Configuration used by the pytest suite."""

    TESTING = True


class ProductionConfig(BaseConfig):
    """Production configuration; requires an explicit secret key."""

    DEV_MODE_DEFAULT = False


CONFIGS: dict[str, type[BaseConfig]] = {
    "development": DevConfig,
    "testing": TestConfig,
    "production": ProductionConfig,
}


def load_config(name: str | None = None) -> BaseConfig:
    """Instantiate the config class registered under ``name``."""

    key = (name or os.getenv("LIFEARCHITECT_ENV", "development")).strip().lower()
    try:
        config_cls = CONFIGS[key]
    except KeyError as exc:
        raise ValueError(f"Unknown configuration: {key}") from exc
    return config_cls()

"""Database and repository wiring for the Flask app."""

from __future__ import annotations

from flask import Flask, current_app

from .config import BaseConfig
from .infra.database import SessionFactory, bootstrap_database
from .infra.repositories import (
    SQLModelHabitRepository,
    SQLModelModuleRepository,
    SQLModelUserSettingsRepository,
)
from .logging_config import get_logger
from .services.modules import seed_modules

EXTENSION_KEY = "lifearchitect"

logger = get_logger(__name__)


def init_db(app: Flask, config: BaseConfig) -> None:
    """Create the engine, ensure the schema and seed the module catalog."""

    engine, session_factory = bootstrap_database(config)
    app.extensions[EXTENSION_KEY] = {
        "engine": engine,
        "session_factory": session_factory,
    }
    inserted = seed_modules(SQLModelModuleRepository(session_factory))
    logger.info("Database ready", extra={"modules_seeded": inserted})


def get_session_factory(app: Flask | None = None) -> SessionFactory:
    """Return the session factory attached to the (current) app."""

    state = (app or current_app).extensions.get(EXTENSION_KEY)
    if not state:  # pragma: no cover - only before init_db
        raise RuntimeError("Database engine not initialized")
    return state["session_factory"]


def module_repository() -> SQLModelModuleRepository:
    return SQLModelModuleRepository(get_session_factory())


def settings_repository() -> SQLModelUserSettingsRepository:
    return SQLModelUserSettingsRepository(get_session_factory())


def habit_repository() -> SQLModelHabitRepository:
    return SQLModelHabitRepository(get_session_factory())


def app_config() -> BaseConfig:
    return current_app.config["LIFEARCHITECT_CONFIG"]

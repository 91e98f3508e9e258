"""Pytest configuration and shared fixtures for LifeArchitect tests.

Every test gets its own data directory under ``tmp_path`` holding a fresh
SQLite file, so repositories, services and the Flask app never touch a real
database.
"""

from __future__ import annotations

from typing import Any

import pytest

from lifearchitect import create_app
from lifearchitect.config import BaseConfig, load_config
from lifearchitect.infra.database import create_db_engine, create_session_factory, init_database
from lifearchitect.infra.repositories import (
    SQLModelHabitRepository,
    SQLModelModuleRepository,
    SQLModelUserSettingsRepository,
)
from lifearchitect.models import Habit, User
from lifearchitect.services import auth
from lifearchitect.services import habits as habit_service
from lifearchitect.services.modules import seed_modules
from lifearchitect.services.settings import initialize_user_settings

# =============================================================================
# Configuration
# =============================================================================


@pytest.fixture
def config(tmp_path, monkeypatch) -> BaseConfig:
    """Test configuration pinned to a temp data dir and the UTC day."""

    monkeypatch.setenv("LIFEARCHITECT_DATA_DIR", str(tmp_path))
    monkeypatch.delenv("LIFEARCHITECT_DATABASE_URL", raising=False)
    monkeypatch.setenv("LIFEARCHITECT_DEV_MODE", "true")
    monkeypatch.setenv("LIFEARCHITECT_TIMEZONE", "UTC")
    monkeypatch.setenv("LIFEARCHITECT_SECRET_KEY", "test-secret")
    return load_config("testing")


# =============================================================================
# Database Fixtures
# =============================================================================


@pytest.fixture
def db_engine(config):
    """Engine on a temporary SQLite file with the full schema created.

    Yields:
        Engine: SQLAlchemy engine with foreign keys enforced
    """
    engine = create_db_engine(config)
    init_database(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    """Session factory matching what the repositories receive in the app."""

    return create_session_factory(db_engine)


@pytest.fixture
def module_repo(session_factory) -> SQLModelModuleRepository:
    return SQLModelModuleRepository(session_factory)


@pytest.fixture
def settings_repo(session_factory) -> SQLModelUserSettingsRepository:
    return SQLModelUserSettingsRepository(session_factory)


@pytest.fixture
def habit_repo(session_factory) -> SQLModelHabitRepository:
    return SQLModelHabitRepository(session_factory)


@pytest.fixture
def seeded_modules(module_repo):
    """The default module catalog, inserted once."""

    seed_modules(module_repo)
    return module_repo.list_all()


# =============================================================================
# Test Data Factories
# =============================================================================


@pytest.fixture
def user_factory(session_factory):
    """Factory for persisted users.

    Returns:
        Callable: Function that creates users with hashed passwords
    """

    counter = {"n": 0}

    def _create_user(username: str | None = None, password: str = "secret-pass") -> User:
        counter["n"] += 1
        return auth.create_user(
            username=username or f"user{counter['n']}",
            password=password,
            session_factory=session_factory,
        )

    return _create_user


@pytest.fixture
def user(user_factory) -> User:
    """Default user for scoping data."""

    return user_factory("tester")


@pytest.fixture
def settings_factory(seeded_modules, module_repo, settings_repo):
    """Give a user one enabled setting per catalog module."""

    def _initialize(owner: User):
        return initialize_user_settings(owner.id, modules=module_repo, settings=settings_repo)

    return _initialize


@pytest.fixture
def habit_factory(habit_repo, user):
    """Factory for habits owned by ``user`` unless another owner is given."""

    def _create_habit(
        title: str = "Meditation",
        streak: int = 0,
        best_streak: int = 0,
        owner: User | None = None,
        **extra: Any,
    ) -> Habit:
        owner = owner or user
        payload = {"title": title, "streak": streak, "best_streak": best_streak, **extra}
        return habit_service.create_habit(habit_repo, owner.id, payload)

    return _create_habit


# =============================================================================
# Flask Fixtures
# =============================================================================


@pytest.fixture
def app(config):
    """Flask app wired to the temp database."""

    return create_app(config=config)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def register(app):
    """Register a user on a fresh test client and return the signed-in client."""

    def _register(username: str = "alice", password: str = "secret-pass"):
        test_client = app.test_client()
        response = test_client.post(
            "/api/auth/register",
            json={"username": username, "password": password, "name": username.title()},
        )
        assert response.status_code == 201, response.get_json()
        return test_client

    return _register

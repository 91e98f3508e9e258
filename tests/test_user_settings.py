"""Tests for the module registry and the per-user settings store."""

from __future__ import annotations

import pytest
from sqlmodel import create_engine, select

from lifearchitect.errors import ConflictError, NotFoundError
from lifearchitect.infra.database import create_session_factory, init_database, session_scope
from lifearchitect.infra.repositories import SQLModelUserSettingsRepository
from lifearchitect.models import UserSetting
from lifearchitect.services import settings as settings_service
from lifearchitect.services.gate import is_module_enabled
from lifearchitect.services.modules import DEFAULT_MODULES, ModuleSpec, list_modules, seed_modules


class TestModuleRegistry:
    def test_seed_inserts_whole_catalog(self, module_repo):
        assert seed_modules(module_repo) == len(DEFAULT_MODULES)
        names = [module.name for module in list_modules(module_repo)]
        assert names[0] == "dashboard"
        assert names[-1] == "settings"
        assert len(names) == 13

    def test_seed_is_idempotent(self, module_repo):
        seed_modules(module_repo)
        assert seed_modules(module_repo) == 0
        assert len(module_repo.list_all()) == len(DEFAULT_MODULES)

    def test_seed_adds_only_new_modules(self, module_repo, seeded_modules):
        extra = ModuleSpec("finance", "Finance", "Money matters", "Wallet", 14, is_system=False)
        assert seed_modules(module_repo, [*DEFAULT_MODULES, extra]) == 1
        assert module_repo.get_by_name("finance").is_system is False

    def test_default_settings(self, seeded_modules):
        by_name = {module.name: module for module in seeded_modules}
        assert by_name["dashboard"].default_settings["widgets"][0] == "goals"
        assert by_name["habits"].default_settings == {"reminderTime": None}
        assert by_name["analytics"].default_settings == {"defaultTimeRange": "month"}
        assert by_name["goals"].default_settings == {}

    def test_duplicate_name_conflicts(self, module_repo, seeded_modules):
        with pytest.raises(ConflictError):
            module_repo.create(DEFAULT_MODULES[0].to_model())


class TestInitializeSettings:
    def test_creates_enabled_setting_per_module(self, user, settings_factory, seeded_modules):
        records = settings_factory(user)
        assert len(records) == len(seeded_modules)
        assert all(record.enabled for record in records)
        analytics = next(r for r in records if r.module_name == "analytics")
        assert analytics.settings == {"defaultTimeRange": "month"}

    def test_is_idempotent(self, user, settings_factory, settings_repo):
        settings_factory(user)
        again = settings_factory(user)
        assert len(again) == len(settings_repo.list_for_user(user_id=user.id))

    def test_fills_only_missing_rows(self, user, settings_factory, settings_repo):
        records = settings_factory(user)
        goals = next(r for r in records if r.module_name == "goals")
        settings_repo.update(goals.id, user_id=user.id, enabled=False)
        journal = next(r for r in records if r.module_name == "journal")
        settings_repo.delete(journal.id, user_id=user.id)

        refreshed = settings_factory(user)
        by_name = {r.module_name: r for r in refreshed}
        assert by_name["goals"].enabled is False
        assert by_name["journal"].enabled is True


class TestSettingsStore:
    def test_second_setting_for_same_module_fails(self, user, seeded_modules, settings_repo, module_repo):
        module = module_repo.get_by_name("analytics")
        settings_service.create_user_setting(user.id, module, settings=settings_repo)
        with pytest.raises(ConflictError):
            settings_service.create_user_setting(user.id, module, settings=settings_repo, enabled=False)
        assert len(settings_repo.list_for_user(user_id=user.id)) == 1

    def test_raw_duplicate_insert_fails(self, user, seeded_modules, settings_repo, module_repo):
        module = module_repo.get_by_name("goals")
        settings_repo.create(UserSetting(module_id=module.id, user_id=user.id), user_id=user.id)
        with pytest.raises(ConflictError):
            settings_repo.create(UserSetting(module_id=module.id, user_id=user.id), user_id=user.id)

    def test_create_without_module_row_leaves_nothing(self, tmp_path):
        # No foreign key pragma, so only the module join can catch the dangling id
        engine = create_engine(f"sqlite:///{tmp_path / 'loose.db'}")
        init_database(engine)
        repo = SQLModelUserSettingsRepository(create_session_factory(engine))

        with pytest.raises(NotFoundError):
            repo.create(UserSetting(module_id=999, user_id=1), user_id=1)
        with session_scope(engine) as session:
            assert session.exec(select(UserSetting)).all() == []
        engine.dispose()

    def test_same_module_for_two_users(self, user_factory, seeded_modules, settings_repo, module_repo):
        module = module_repo.get_by_name("mood")
        first, second = user_factory(), user_factory()
        settings_service.create_user_setting(first.id, module, settings=settings_repo)
        record = settings_service.create_user_setting(second.id, module, settings=settings_repo)
        assert record.user_id == second.id
        assert settings_repo.get_by_module_name("mood", user_id=first.id) is not None

    def test_update_fields_independently(self, user, settings_factory, settings_repo):
        records = settings_factory(user)
        record = next(r for r in records if r.module_name == "analytics")

        disabled = settings_service.update_user_setting(record.id, user.id, settings=settings_repo, enabled=False)
        assert disabled.enabled is False
        assert disabled.settings == {"defaultTimeRange": "month"}

        reconfigured = settings_service.update_user_setting(
            record.id, user.id, settings=settings_repo, blob={"defaultTimeRange": "week"}
        )
        assert reconfigured.enabled is False
        assert reconfigured.settings == {"defaultTimeRange": "week"}

    def test_update_foreign_setting(self, user, user_factory, settings_factory, settings_repo):
        record = settings_factory(user)[0]
        intruder = user_factory("mallory")
        with pytest.raises(NotFoundError):
            settings_service.update_user_setting(record.id, intruder.id, settings=settings_repo, enabled=False)
        assert settings_repo.get(record.id, user_id=user.id).enabled is True

    def test_delete(self, user, settings_factory, settings_repo):
        record = settings_factory(user)[0]
        settings_service.delete_user_setting(record.id, user.id, settings=settings_repo)
        assert settings_repo.get(record.id, user_id=user.id) is None
        with pytest.raises(NotFoundError):
            settings_service.delete_user_setting(record.id, user.id, settings=settings_repo)

    def test_listing_order(self, user, settings_factory, settings_repo):
        settings_factory(user)
        names = [r.module_name for r in settings_repo.list_for_user(user_id=user.id)]
        assert names[0] == "dashboard"
        assert names[-1] == "settings"

    def test_store_feeds_gate(self, user, settings_factory, settings_repo):
        records = settings_factory(user)
        habits = next(r for r in records if r.module_name == "habits")
        assert is_module_enabled(settings_repo.list_for_user(user_id=user.id), "habits") is True
        settings_repo.update(habits.id, user_id=user.id, enabled=False)
        assert is_module_enabled(settings_repo.list_for_user(user_id=user.id), "habits") is False

    def test_resolve_module(self, seeded_modules, module_repo):
        goals = settings_service.resolve_module(module_repo, module_name="goals")
        assert settings_service.resolve_module(module_repo, module_id=goals.id).name == "goals"
        with pytest.raises(NotFoundError):
            settings_service.resolve_module(module_repo, module_name="nope")
        with pytest.raises(NotFoundError):
            settings_service.resolve_module(module_repo)

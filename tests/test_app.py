"""App factory, system endpoints, error handlers and CLI commands."""

from __future__ import annotations

from lifearchitect.cli import DEMO_HABITS
from lifearchitect.extensions import get_session_factory
from lifearchitect.infra.repositories import SQLModelHabitRepository, SQLModelUserSettingsRepository
from lifearchitect.services import auth


def test_health(client):
    response = client.get("/api/health")
    assert response.status_code == 200
    body = response.get_json()
    assert body["status"] == "ok"
    assert "timestamp" in body


def test_current_date(client):
    assert "date" in client.get("/api/current-date").get_json()


def test_unmapped_route(client):
    response = client.get("/api/nothing-here")
    assert response.status_code == 404
    assert response.get_json() == {"message": "Not found"}


def test_method_not_allowed_is_json(client):
    response = client.put("/api/health")
    assert response.status_code == 405
    assert "message" in response.get_json()


def test_unexpected_error_hides_details(app):
    @app.get("/api/boom")
    def boom():
        raise RuntimeError("secret internals")

    response = app.test_client().get("/api/boom")
    assert response.status_code == 500
    assert response.get_json() == {"message": "Internal server error"}


def test_modules_seeded_on_startup(app, client):
    register = client.post("/api/auth/register", json={"username": "zoe", "password": "pw-zoe"})
    assert register.status_code == 201
    assert len(client.get("/api/modules").get_json()) == 13


def test_cli_init(app):
    result = app.test_cli_runner().invoke(args=["lifearchitect-init"])
    assert result.exit_code == 0
    assert "13 modules (0 newly seeded)" in result.output


def test_cli_seed_demo_is_rerunnable(app):
    runner = app.test_cli_runner()
    first = runner.invoke(args=["lifearchitect-seed-demo", "--username", "demo", "--password", "demo-pw"])
    assert first.exit_code == 0, first.output
    assert f"{len(DEMO_HABITS)} habits added" in first.output

    second = runner.invoke(args=["lifearchitect-seed-demo", "--username", "demo", "--password", "demo-pw"])
    assert "0 habits added" in second.output

    session_factory = get_session_factory(app)
    user = auth.get_user_by_username("demo", session_factory)
    habits = SQLModelHabitRepository(session_factory).list_all(user_id=user.id)
    assert len(habits) == len(DEMO_HABITS)
    assert all(h.best_streak >= h.streak for h in habits)
    assert len(SQLModelUserSettingsRepository(session_factory).list_for_user(user_id=user.id)) == 13

    client = app.test_client()
    assert client.post("/api/auth/login", json={"username": "demo", "password": "demo-pw"}).status_code == 200

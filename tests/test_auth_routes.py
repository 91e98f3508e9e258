"""Tests for session authentication."""

from __future__ import annotations

from lifearchitect.extensions import get_session_factory
from lifearchitect.infra.repositories import SQLModelUserSettingsRepository
from lifearchitect.services import auth


def test_register_returns_user_without_hash(client):
    response = client.post(
        "/api/auth/register",
        json={"username": "alice", "password": "pw-123456", "email": "alice@example.com"},
    )
    assert response.status_code == 201
    body = response.get_json()
    assert body["username"] == "alice"
    assert body["email"] == "alice@example.com"
    assert "passwordHash" not in body and "password_hash" not in body

    assert client.get("/api/auth/user").get_json()["id"] == body["id"]


def test_register_duplicate_username(register, client):
    register("alice")
    response = client.post("/api/auth/register", json={"username": "alice", "password": "other"})
    assert response.status_code == 409


def test_register_invalid(client):
    assert client.post("/api/auth/register", json={"username": "bob"}).status_code == 400
    response = client.post(
        "/api/auth/register", json={"username": "bob", "password": "pw", "email": "not-an-email"}
    )
    assert response.status_code == 400


def test_login_logout_cycle(register, app):
    register("alice", password="correct-horse")
    client = app.test_client()

    bad = client.post("/api/auth/login", json={"username": "alice", "password": "wrong"})
    assert bad.status_code == 401
    assert bad.get_json()["message"] == "Incorrect username or password."

    good = client.post("/api/auth/login", json={"username": "alice", "password": "correct-horse"})
    assert good.status_code == 200
    assert client.get("/api/auth/user").status_code == 200

    assert client.post("/api/auth/logout").status_code == 200
    response = client.get("/api/auth/user")
    assert response.status_code == 401
    assert response.get_json()["message"] == "Not authenticated"


def test_unknown_user_cannot_login(client):
    response = client.post("/api/auth/login", json={"username": "ghost", "password": "boo"})
    assert response.status_code == 401


def test_authenticate_sets_last_login(session_factory):
    user = auth.create_user(username="carol", password="pw-carol", session_factory=session_factory)
    assert user.last_login is None
    assert auth.authenticate(username="carol", password="nope", session_factory=session_factory) is None

    logged_in = auth.authenticate(username=" carol ", password="pw-carol", session_factory=session_factory)
    assert logged_in is not None
    assert logged_in.last_login is not None
    assert logged_in.password_hash != "pw-carol"


def test_failed_settings_setup_rolls_back_account(app, client, monkeypatch):
    def fail_initialize(*args, **kwargs):
        raise RuntimeError("settings store unavailable")

    monkeypatch.setattr("lifearchitect.blueprints.auth.routes.initialize_user_settings", fail_initialize)
    response = client.post("/api/auth/register", json={"username": "dana", "password": "pw-dana"})
    assert response.status_code == 500
    assert auth.get_user_by_username("dana", get_session_factory(app)) is None
    assert client.get("/api/auth/user").status_code == 401

    monkeypatch.undo()
    retry = client.post("/api/auth/register", json={"username": "dana", "password": "pw-dana"})
    assert retry.status_code == 201
    assert len(client.get("/api/user/settings").get_json()) == 13


def test_delete_user_cascades_settings(app, register):
    client = register("erin")
    user_id = client.get("/api/auth/user").get_json()["id"]
    session_factory = get_session_factory(app)

    assert auth.delete_user(user_id, session_factory) is True
    assert auth.get_user(user_id, session_factory) is None
    assert SQLModelUserSettingsRepository(session_factory).list_for_user(user_id=user_id) == []
    assert auth.delete_user(user_id, session_factory) is False

"""Session authentication routes."""

from __future__ import annotations

from flask import jsonify, request

from ...errors import NotFoundError, UnauthenticatedError
from ...extensions import get_session_factory, module_repository, settings_repository
from ...schemas import UserOut, dump, parse_payload
from ...security import current_user_id, login_user, logout_user
from ...services import auth as auth_service
from ...services.settings import initialize_user_settings
from . import bp
from .forms import LoginForm, RegisterForm


@bp.post("/register")
def register():
    """Create an account, seed its module settings and sign it in."""

    form = parse_payload(RegisterForm, request.get_json(silent=True), "Invalid user data")
    session_factory = get_session_factory()
    user = auth_service.create_user(
        username=form.username,
        password=form.password,
        name=form.name,
        email=form.email,
        session_factory=session_factory,
    )
    try:
        initialize_user_settings(
            user.id,  # type: ignore[arg-type]
            modules=module_repository(),
            settings=settings_repository(),
        )
    except Exception:
        # Registration is all-or-nothing
        auth_service.delete_user(user.id, session_factory)  # type: ignore[arg-type]
        raise
    login_user(user.id)  # type: ignore[arg-type]
    return jsonify(dump(UserOut, user)), 201


@bp.post("/login")
def login():
    form = parse_payload(LoginForm, request.get_json(silent=True), "Invalid credentials")
    user = auth_service.authenticate(
        username=form.username,
        password=form.password,
        session_factory=get_session_factory(),
    )
    if user is None:
        raise UnauthenticatedError("Incorrect username or password.")
    login_user(user.id)  # type: ignore[arg-type]
    return jsonify(dump(UserOut, user))


@bp.post("/logout")
def logout():
    logout_user()
    return jsonify({"message": "Logged out successfully"})


@bp.get("/user")
def current_user():
    try:
        user_id = current_user_id()
    except UnauthenticatedError:
        raise UnauthenticatedError("Not authenticated") from None
    user = auth_service.get_user(user_id, get_session_factory())
    if user is None:
        logout_user()
        raise NotFoundError("User not found")
    return jsonify(dump(UserOut, user))

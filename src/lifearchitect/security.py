"""Request guards: session authentication and module gating."""

from __future__ import annotations

from functools import wraps
from typing import Any, Callable, TypeVar, cast

from flask import g, session

from .errors import NotFoundError, UnauthenticatedError
from .extensions import settings_repository
from .services.gate import is_module_enabled

SESSION_USER_KEY = "user_id"

F = TypeVar("F", bound=Callable[..., Any])


def login_user(user_id: int) -> None:
    session.clear()
    session[SESSION_USER_KEY] = user_id
    session.permanent = True


def logout_user() -> None:
    session.clear()


def current_user_id() -> int:
    """Return the authenticated user id or raise UnauthenticatedError."""

    user_id = session.get(SESSION_USER_KEY)
    if user_id is None:
        raise UnauthenticatedError()
    g.user_id = user_id
    return int(user_id)


def login_required(view: F) -> F:
    """Reject the request with 401 before the view touches the store."""

    @wraps(view)
    def wrapped(*args: Any, **kwargs: Any):
        current_user_id()
        return view(*args, **kwargs)

    return cast(F, wrapped)


def ensure_module_enabled(module_name: str) -> None:
    """Raise the generic not-found error when the caller's gate denies the module."""

    user_settings = settings_repository().list_for_user(user_id=current_user_id())
    if not is_module_enabled(user_settings, module_name):
        raise NotFoundError()


def module_required(module_name: str) -> Callable[[F], F]:
    """Serve a view only while ``module_name`` is enabled for the caller.

    Denied requests get exactly the response an unmapped route gets.
    """

    def decorator(view: F) -> F:
        @wraps(view)
        def wrapped(*args: Any, **kwargs: Any):
            ensure_module_enabled(module_name)
            return view(*args, **kwargs)

        return cast(F, wrapped)

    return decorator


__all__ = [
    "current_user_id",
    "ensure_module_enabled",
    "login_required",
    "login_user",
    "logout_user",
    "module_required",
]

"""Authentication and user management services."""

from __future__ import annotations

from typing import Optional

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHash, VerificationError, VerifyMismatchError
from sqlalchemy.exc import IntegrityError
from sqlmodel import select

from ..errors import ConflictError
from ..infra.database import SessionFactory
from ..logging_config import get_logger
from ..models.common import utcnow
from ..models.user import User

logger = get_logger(__name__)

_hasher = PasswordHasher()


def get_user(user_id: int, session_factory: SessionFactory) -> Optional[User]:
    """Fetch a user by primary key."""
    with session_factory() as session:
        user = session.get(User, user_id)
        if user:
            session.expunge(user)
        return user


def get_user_by_username(username: str, session_factory: SessionFactory) -> Optional[User]:
    """Fetch a user by username."""
    username = username.strip()
    with session_factory() as session:
        user = session.exec(select(User).where(User.username == username)).first()
        if user:
            session.expunge(user)
        return user


def create_user(
    *,
    username: str,
    password: str,
    name: str | None = None,
    email: str | None = None,
    session_factory: SessionFactory,
) -> User:
    """Create a new user with hashed password."""

    username = username.strip()
    if not username:
        raise ValueError("Username cannot be empty")
    if not password:
        raise ValueError("Password cannot be empty")
    password_hash = _hasher.hash(password)
    try:
        with session_factory() as session:
            existing = session.exec(select(User).where(User.username == username)).first()
            if existing:
                raise ConflictError("Username already exists")
            user = User(username=username, password_hash=password_hash, name=name, email=email)
            session.add(user)
            session.commit()
            session.refresh(user)
            session.expunge(user)
    except IntegrityError as exc:
        raise ConflictError("Username already exists") from exc
    logger.info("User created", extra={"user_id": user.id})
    return user


def delete_user(user_id: int, session_factory: SessionFactory) -> bool:
    """Remove a user; owned rows go with it via ON DELETE CASCADE."""
    with session_factory() as session:
        user = session.get(User, user_id)
        if user is None:
            return False
        session.delete(user)
        session.commit()
    logger.info("User deleted", extra={"user_id": user_id})
    return True


def authenticate(
    *,
    username: str,
    password: str,
    session_factory: SessionFactory,
) -> Optional[User]:
    """Validate credentials and return the user when correct."""

    username = username.strip()
    if not username:
        return None
    with session_factory() as session:
        user = session.exec(select(User).where(User.username == username)).first()
        if user is None:
            return None
        try:
            _hasher.verify(user.password_hash, password)
        except (VerifyMismatchError, InvalidHash, VerificationError):
            return None

        if _hasher.check_needs_rehash(user.password_hash):
            user.password_hash = _hasher.hash(password)
        user.last_login = utcnow()
        session.add(user)
        session.commit()
        session.refresh(user)
        session.expunge(user)
        return user


__all__ = ["authenticate", "create_user", "delete_user", "get_user", "get_user_by_username"]

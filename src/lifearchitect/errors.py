"""Domain error taxonomy shared by services and blueprints."""

from __future__ import annotations

from typing import Any


class LifeArchitectError(Exception):
    """Base class for errors that map onto a JSON error response."""

    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class UnauthenticatedError(LifeArchitectError):
    """No valid session is attached to the request."""

    status_code = 401
    default_message = "Unauthorized"


class NotFoundError(LifeArchitectError):
    """The addressed entity does not exist for the caller."""

    status_code = 404
    default_message = "Not found"


class NotOwnedError(LifeArchitectError):
    """A parent entity referenced in a payload belongs to another user."""

    status_code = 403
    default_message = "Not authorized"


class InvalidPayloadError(LifeArchitectError):
    """Request body or query failed validation."""

    status_code = 400
    default_message = "Invalid request data"

    def __init__(self, message: str | None = None, errors: list[dict[str, Any]] | None = None) -> None:
        super().__init__(message)
        self.errors = errors or []


class ConflictError(LifeArchitectError):
    """A uniqueness constraint rejected the write."""

    status_code = 409
    default_message = "Resource already exists"


__all__ = [
    "ConflictError",
    "InvalidPayloadError",
    "LifeArchitectError",
    "NotFoundError",
    "NotOwnedError",
    "UnauthenticatedError",
]

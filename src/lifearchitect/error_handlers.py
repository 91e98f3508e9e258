"""JSON error responses for every failure the API can surface."""

from __future__ import annotations

from flask import Flask, jsonify, request
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.exceptions import HTTPException

from .errors import InvalidPayloadError, LifeArchitectError, NotFoundError
from .logging_config import get_logger

logger = get_logger(__name__)


def _error(message: str, status: int, **extra):
    body = {"message": message}
    body.update(extra)
    return jsonify(body), status


def register_error_handlers(app: Flask) -> None:
    """Attach handlers so no stack trace or internal id reaches the client."""

    @app.errorhandler(LifeArchitectError)
    def _domain_error(exc: LifeArchitectError):
        logger.info(
            "Request rejected",
            extra={"path": request.path, "status": exc.status_code, "reason": exc.message},
        )
        if isinstance(exc, InvalidPayloadError) and exc.errors:
            return _error(exc.message, exc.status_code, errors=exc.errors)
        return _error(exc.message, exc.status_code)

    @app.errorhandler(HTTPException)
    def _http_error(exc: HTTPException):
        if exc.code == 404:
            # Unmapped routes and gated modules share this body
            return _error(NotFoundError.default_message, 404)
        return _error(exc.description or exc.name, exc.code or 500)

    @app.errorhandler(SQLAlchemyError)
    def _store_error(exc: SQLAlchemyError):
        logger.exception("Data store failure", extra={"path": request.path})
        return _error(LifeArchitectError.default_message, 500)

    @app.errorhandler(Exception)
    def _unexpected_error(exc: Exception):
        if isinstance(exc, HTTPException):
            return _http_error(exc)
        logger.exception("Unhandled error", extra={"path": request.path})
        return _error(LifeArchitectError.default_message, 500)


__all__ = ["register_error_handlers"]

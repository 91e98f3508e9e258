"""HTTP blueprints for the LifeArchitect API."""

from __future__ import annotations

from flask import Flask


def register_blueprints(app: Flask) -> None:
    """Attach every API blueprint to ``app``."""

    from .auth import bp as auth_bp
    from .habits import bp as habits_bp
    from .modules import bp as modules_bp
    from .settings import bp as settings_bp
    from .system import bp as system_bp

    for blueprint in (system_bp, auth_bp, modules_bp, settings_bp, habits_bp):
        app.register_blueprint(blueprint)


__all__ = ["register_blueprints"]

"""LifeArchitect personal productivity API."""

from __future__ import annotations

from typing import Optional

from flask import Flask

from .config import BaseConfig, DevConfig, load_config

__version__ = "0.1.0"


def create_app(config_name: Optional[str] = None, *, config: Optional[BaseConfig] = None) -> Flask:
    """Application factory.

    ``config`` wins over ``config_name``; with neither, ``LIFEARCHITECT_ENV``
    picks the configuration (``development`` by default).
    """

    from . import cli
    from .blueprints import register_blueprints
    from .error_handlers import register_error_handlers
    from .extensions import init_db
    from .logging_config import get_logger, setup_logging

    config = config or load_config(config_name)
    app = Flask(__name__)
    app.config.update(config.flask_settings())
    app.config["LIFEARCHITECT_CONFIG"] = config

    setup_logging(config)
    init_db(app, config)
    register_error_handlers(app)
    register_blueprints(app)
    cli.init_app(app)

    get_logger(__name__).info(
        "Application created",
        extra={"config": type(config).__name__, "timezone": config.TIMEZONE or "local"},
    )
    return app


__all__ = ["BaseConfig", "DevConfig", "create_app", "load_config"]

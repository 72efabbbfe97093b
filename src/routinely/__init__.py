"""Routinely application factory."""

from __future__ import annotations

from importlib import import_module
from typing import Iterable

from flask import Flask, jsonify
from flask_cors import CORS

from . import cli as _cli
from .config import BaseConfig, DevConfig, TestingConfig
from .exceptions import TTSError, ValidationError
from .logging_config import get_logger, setup_logging

_CONFIG_MAP = {
    "development": DevConfig,
    "testing": TestingConfig,
    "default": BaseConfig,
}

logger = get_logger("app")


def _resolve_config(name: str | None) -> type[BaseConfig]:
    """Return the config class for the provided environment name."""

    if not name:
        return BaseConfig
    return _CONFIG_MAP.get(name.lower(), BaseConfig)


def _blueprint_paths() -> Iterable[str]:
    yield "routinely.blueprints.checkins"
    yield "routinely.blueprints.dashboard"
    yield "routinely.blueprints.checkouts"
    yield "routinely.blueprints.tts"


def create_app(config_name: str | None = None, *, synthesizer=None) -> Flask:
    """Create and configure the Flask application instance.

    ``synthesizer`` replaces the OpenAI speech client (tests pass a fake).
    """

    app = Flask(__name__, instance_relative_config=True)
    config_obj = _resolve_config(config_name)()
    app.config.from_object(config_obj)
    app.config["ROUTINELY_CONFIG"] = config_obj

    setup_logging(config_obj)
    CORS(app, resources={r"/api/*": {"origins": config_obj.CORS_ORIGINS}})

    from .extensions import init_db, init_services

    init_db(app)
    init_services(app, synthesizer=synthesizer)
    _register_blueprints(app)
    _register_error_handlers(app)
    _cli.init_app(app)

    logger.info("Application created", extra={"stats_window": config_obj.STATS_WINDOW})
    return app


def _register_blueprints(app: Flask) -> None:
    """Import and register all blueprints declared in `_blueprint_paths`."""

    for dotted_path in _blueprint_paths():
        module = import_module(dotted_path)
        app.register_blueprint(getattr(module, "bp"))


def _register_error_handlers(app: Flask) -> None:
    @app.errorhandler(ValidationError)
    def _validation_error(exc: ValidationError):
        return jsonify(exc.to_dict()), 400

    @app.errorhandler(TTSError)
    def _tts_error(exc: TTSError):
        logger.error("Error generating TTS: %s", exc, exc_info=True)
        return jsonify({"error": "Failed to generate audio"}), 500


__all__ = ["BaseConfig", "DevConfig", "TestingConfig", "create_app"]

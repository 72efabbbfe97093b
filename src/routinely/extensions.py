"""Database and service wiring for the Flask application."""

from __future__ import annotations

from typing import Any

from flask import Flask, current_app

from .config import BaseConfig
from .infra.database import bootstrap_database
from .infra.repositories import SQLModelCheckInRepository, SQLModelCheckoutRepository
from .services.checkins import CheckInService
from .services.tts import SpeechSynthesizer, TextToSpeechService

EXTENSION_KEY = "routinely"


def init_db(app: Flask) -> None:
    """Create the engine, ensure the schema and attach repositories to the app."""

    config: BaseConfig = app.config["ROUTINELY_CONFIG"]
    engine, session_factory = bootstrap_database(config)

    state = app.extensions.setdefault(EXTENSION_KEY, {})
    state["engine"] = engine
    state["session_factory"] = session_factory
    state["checkin_repo"] = SQLModelCheckInRepository(session_factory)
    state["checkout_repo"] = SQLModelCheckoutRepository(session_factory)


def init_services(app: Flask, *, synthesizer: SpeechSynthesizer | None = None) -> None:
    """Build the services the blueprints resolve at request time."""

    config: BaseConfig = app.config["ROUTINELY_CONFIG"]
    state = app.extensions.setdefault(EXTENSION_KEY, {})
    state["checkin_service"] = CheckInService.from_config(state["checkin_repo"], config)
    state["tts_service"] = TextToSpeechService.from_config(config, synthesizer)


def get_extension(name: str, app: Flask | None = None) -> Any:
    """Return a named object registered by :func:`init_db` / :func:`init_services`."""

    target = app or current_app
    state = target.extensions.get(EXTENSION_KEY, {})
    if name not in state:  # pragma: no cover - misconfigured app
        raise RuntimeError(f"Extension {name!r} not initialized")
    return state[name]


__all__ = ["get_extension", "init_db", "init_services"]

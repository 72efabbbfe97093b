"""On-device key/value storage for client state.

Values are stored as JSON strings in the local ``app_setting`` table. Read
failures fall back to the caller's default and write failures are logged;
neither is raised.
"""

from __future__ import annotations

import json
from typing import Any

from sqlalchemy.exc import SQLAlchemyError

from ..domain.repositories import SettingsRepository
from ..logging_config import get_logger

logger = get_logger("client.storage")

LANGUAGE_KEY = "language"
THEME_MODE_KEY = "themeMode"
REMINDERS_KEY = "reminders"
COMPLETED_ROUTINES_KEY = "completedRoutines"


class LocalStore:
    """JSON-valued key/value store backed by a settings repository."""

    def __init__(self, settings_repo: SettingsRepository):
        self.settings_repo = settings_repo

    def get_json(self, key: str, default: Any = None) -> Any:
        try:
            setting = self.settings_repo.get(key)
        except SQLAlchemyError as exc:
            logger.error("Error loading %s: %s", key, exc, exc_info=True)
            return default
        if setting is None:
            return default
        try:
            return json.loads(setting.value)
        except ValueError as exc:
            logger.error("Stored value for %s is not valid JSON: %s", key, exc)
            return default

    def set_json(self, key: str, value: Any) -> bool:
        """Persist ``value``; returns False (after logging) when the write fails."""
        try:
            self.settings_repo.set(key, json.dumps(value))
        except SQLAlchemyError as exc:
            logger.error("Error saving %s: %s", key, exc, exc_info=True)
            return False
        return True

    def get_str(self, key: str, default: str | None = None) -> str | None:
        value = self.get_json(key, default)
        return value if isinstance(value, str) else default

    def set_str(self, key: str, value: str) -> bool:
        return self.set_json(key, value)


__all__ = [
    "COMPLETED_ROUTINES_KEY",
    "LANGUAGE_KEY",
    "LocalStore",
    "REMINDERS_KEY",
    "THEME_MODE_KEY",
]

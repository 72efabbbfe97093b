"""Application configuration objects and helpers."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

from .constants import ROUTINES

load_dotenv()


def _env_bool(name: str, default: bool = False) -> bool:
    """Interpret environment variable values as booleans."""

    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return int(value)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {value!r}") from exc


def _env_float(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return float(value)
    except ValueError as exc:
        raise ValueError(f"{name} must be a number, got {value!r}") from exc


class BaseConfig:
    """Base configuration shared across environments."""

    APP_NAME = "Routinely"
    DB_FILENAME = "routinely.db"
    CLIENT_DB_FILENAME = "routinely_client.db"
    STATS_WINDOW_POLICIES = ("calendar", "sliding")
    PLATFORMS = ("android", "ios", "web", "desktop")

    def __init__(self) -> None:
        self.SECRET_KEY = os.getenv("ROUTINELY_SECRET_KEY", "replace-me")
        self.DEV_MODE = _env_bool("ROUTINELY_DEV_MODE", default=True)
        self.DATA_DIR = self._resolve_data_dir()
        self.DATABASE_URL = os.getenv("ROUTINELY_DATABASE_URL", self._build_sqlite_url())
        self.CLIENT_DATABASE_URL = os.getenv(
            "ROUTINELY_CLIENT_DATABASE_URL",
            f"sqlite:///{self.DATA_DIR / self.CLIENT_DB_FILENAME}",
        )

        # Fixed reference frame for "today", shared by client and server.
        self.REGION_UTC_OFFSET_HOURS = _env_float("ROUTINELY_REGION_UTC_OFFSET_HOURS", 6.0)
        self.TOTAL_ROUTINES = _env_int("ROUTINELY_TOTAL_ROUTINES", len(ROUTINES))
        self.STATS_WINDOW = os.getenv("ROUTINELY_STATS_WINDOW", "calendar").strip().lower()
        self.WEEKLY_WINDOW_DAYS = 7
        self.MONTHLY_LOOKBACK_DAYS = 30

        self.OPENAI_API_KEY = os.getenv("OPENAI_API_KEY")
        self.TTS_MODEL = os.getenv("ROUTINELY_TTS_MODEL", "gpt-4o-mini-tts")
        self.TTS_DEFAULT_VOICE = os.getenv("ROUTINELY_TTS_VOICE", "nova")
        self.TTS_CACHE_SIZE = _env_int("ROUTINELY_TTS_CACHE_SIZE", 128)
        self.TTS_CACHE_TTL = _env_int("ROUTINELY_TTS_CACHE_TTL", 86400)
        self.TTS_MAX_AGE = 86400

        self.CORS_ORIGINS = os.getenv("ROUTINELY_CORS_ORIGINS", "*")

        self.API_BASE_URL = os.getenv("ROUTINELY_API_BASE_URL", "http://127.0.0.1:5000")
        self.API_TIMEOUT = _env_float("ROUTINELY_API_TIMEOUT", 10.0)
        self.PLATFORM = os.getenv("ROUTINELY_PLATFORM", "android").strip().lower()

        if not self.DEV_MODE and self.SECRET_KEY == "replace-me":
            raise ValueError("ROUTINELY_SECRET_KEY must be set in non-dev mode.")
        self.validate()

    def validate(self) -> None:
        """Reject settings the statistics and scheduling code cannot work with."""

        if self.TOTAL_ROUTINES <= 0:
            raise ValueError("ROUTINELY_TOTAL_ROUTINES must be greater than zero.")
        if self.STATS_WINDOW not in self.STATS_WINDOW_POLICIES:
            raise ValueError(
                f"ROUTINELY_STATS_WINDOW must be one of {self.STATS_WINDOW_POLICIES}, "
                f"got {self.STATS_WINDOW!r}"
            )
        if not -14 <= self.REGION_UTC_OFFSET_HOURS <= 14:
            raise ValueError("ROUTINELY_REGION_UTC_OFFSET_HOURS must be between -14 and 14.")
        if self.TTS_CACHE_SIZE <= 0:
            raise ValueError("ROUTINELY_TTS_CACHE_SIZE must be greater than zero.")
        if self.PLATFORM not in self.PLATFORMS:
            raise ValueError(f"ROUTINELY_PLATFORM must be one of {self.PLATFORMS}.")

    def _resolve_data_dir(self) -> Path:
        """Return the directory where SQLite files and logs live."""

        data_root = os.getenv("ROUTINELY_DATA_DIR", "instance")
        base_path = Path(data_root).expanduser()
        try:
            path = base_path.resolve()
            path.mkdir(parents=True, exist_ok=True)
            return path
        except PermissionError:
            # Protected install locations fall back to user-local storage.
            fallback_path = Path.home() / f".{self.APP_NAME.lower()}"
            fallback_path.mkdir(parents=True, exist_ok=True)
            return fallback_path.resolve()

    def _build_sqlite_url(self) -> str:
        db_path = self.DATA_DIR / self.DB_FILENAME
        return f"sqlite:///{db_path}"

    def sqlalchemy_engine_options(self) -> dict[str, Any]:
        """Expose engine kwargs for SQLModel to consume."""

        connect_args: dict[str, Any] = {}
        if self.DATABASE_URL.startswith("sqlite"):
            connect_args["check_same_thread"] = False
        return {"connect_args": connect_args}


class DevConfig(BaseConfig):
    """Development configuration using local SQLite."""

    DEBUG = True
    TESTING = False


class TestingConfig(BaseConfig):
    """Configuration used by the test-suite: in-memory friendly, no real provider."""

    DEBUG = False
    TESTING = True

    def __init__(self) -> None:
        super().__init__()
        self.OPENAI_API_KEY = None


__all__ = ["BaseConfig", "DevConfig", "TestingConfig"]

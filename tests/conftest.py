"""Pytest configuration and shared fixtures for Routinely tests.

Provides isolated SQLite databases, a Flask test client wired to a fake speech
provider, and in-memory stand-ins for the notification backend and API client
so the client-side state can be tested without a network or a scheduler.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest
from sqlmodel import Session, SQLModel, create_engine

from routinely.client.storage import LocalStore
from routinely.infra.repositories import (
    SQLModelCheckInRepository,
    SQLModelSettingsRepository,
)
from routinely.models import AppSetting, CheckIn, Checkout  # noqa: F401  # register tables
from routinely.services import jobs

# 08:00 UTC == 14:00 in the UTC+6 reference frame, on 2024-03-15.
FIXED_NOW = datetime(2024, 3, 15, 8, 0, tzinfo=timezone.utc)
REGION = timezone(timedelta(hours=6))


def region_time(days_ago: int, hour: int, minute: int = 0) -> datetime:
    """UTC timestamp for ``hour:minute`` reference-frame time ``days_ago`` days before FIXED_NOW."""

    local_day = FIXED_NOW.astimezone(REGION).date() - timedelta(days=days_ago)
    local = datetime(local_day.year, local_day.month, local_day.day, hour, minute, tzinfo=REGION)
    return local.astimezone(timezone.utc)


# =============================================================================
# Database Fixtures
# =============================================================================


@pytest.fixture(scope="function")
def db_engine(tmp_path: Path):
    """Create an isolated SQLite database file for each test.

    Yields:
        Engine: SQLModel engine with every table created
    """
    engine = create_engine(f"sqlite:///{tmp_path / 'test.db'}", echo=False)
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture(scope="function")
def session_factory(db_engine):
    """Session factory matching the ``Callable[[], Session]`` repositories expect."""

    def factory():
        return Session(db_engine, expire_on_commit=False)

    return factory


@pytest.fixture
def checkin_repo(session_factory) -> SQLModelCheckInRepository:
    return SQLModelCheckInRepository(session_factory)


@pytest.fixture
def store(session_factory) -> LocalStore:
    return LocalStore(SQLModelSettingsRepository(session_factory))


@pytest.fixture(autouse=True)
def sync_jobs():
    """Run fire-and-forget jobs inline so their effects are visible immediately."""

    jobs.set_async_execution(False)
    yield
    jobs.set_async_execution(True)


# =============================================================================
# Application Fixtures
# =============================================================================


@pytest.fixture
def app_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point configuration at a temporary data directory and database."""

    monkeypatch.setenv("ROUTINELY_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("ROUTINELY_DATABASE_URL", f"sqlite:///{tmp_path / 'server.db'}")
    monkeypatch.setenv("ROUTINELY_CLIENT_DATABASE_URL", f"sqlite:///{tmp_path / 'client.db'}")
    monkeypatch.delenv("ROUTINELY_STATS_WINDOW", raising=False)
    monkeypatch.delenv("ROUTINELY_TOTAL_ROUTINES", raising=False)
    monkeypatch.delenv("ROUTINELY_REGION_UTC_OFFSET_HOURS", raising=False)
    monkeypatch.delenv("ROUTINELY_PLATFORM", raising=False)
    return tmp_path


class FakeSynthesizer:
    """Speech provider stand-in that records every call."""

    def __init__(self, error: Exception | None = None):
        self.calls: list[tuple[str, str]] = []
        self.error = error

    def __call__(self, text: str, voice: str) -> bytes:
        self.calls.append((text, voice))
        if self.error is not None:
            raise self.error
        return f"mp3:{voice}:{text}".encode("utf-8")


@pytest.fixture
def synthesizer() -> FakeSynthesizer:
    return FakeSynthesizer()


@pytest.fixture
def app(app_env, synthesizer):
    from routinely import create_app

    app = create_app("testing", synthesizer=synthesizer)
    app.config.update(TESTING=True)
    return app


@pytest.fixture
def client(app):
    with app.test_client() as client:
        yield client


# =============================================================================
# Client-side Fakes
# =============================================================================


class FakeNotificationBackend:
    """Records scheduled notifications keyed by reminder id."""

    def __init__(self, *, granted: bool = True, grant_on_request: bool = True):
        self.granted = granted
        self.grant_on_request = grant_on_request
        self.permission_requests = 0
        self.scheduled: dict[str, tuple[datetime, str]] = {}
        self.cancelled: list[str] = []
        self.fail_schedule = False

    def has_permission(self) -> bool:
        return self.granted

    def request_permission(self) -> bool:
        self.permission_requests += 1
        self.granted = self.grant_on_request
        return self.granted

    def schedule_daily(self, reminder_id: str, first_fire: datetime, title: str) -> None:
        if self.fail_schedule:
            raise RuntimeError("platform scheduling failed")
        self.scheduled[reminder_id] = (first_fire, title)

    def cancel(self, reminder_id: str) -> None:
        self.cancelled.append(reminder_id)
        self.scheduled.pop(reminder_id, None)


class FakeApiClient:
    """API client stand-in; set ``error`` to make calls raise."""

    def __init__(self, stats: dict | None = None):
        self.checkins: list[str] = []
        self.stats_requests = 0
        self.stats = stats or {"daily": 0, "weekly": 0, "monthly": 0, "breakdown": {}, "weeklyHistory": []}
        self.checkin_error: Exception | None = None
        self.stats_error: Exception | None = None

    def record_checkin(self, routine_id: str) -> None:
        if self.checkin_error is not None:
            raise self.checkin_error
        self.checkins.append(routine_id)

    def fetch_stats(self) -> dict:
        self.stats_requests += 1
        if self.stats_error is not None:
            raise self.stats_error
        return self.stats


@pytest.fixture
def backend() -> FakeNotificationBackend:
    return FakeNotificationBackend()


@pytest.fixture
def fake_api() -> FakeApiClient:
    return FakeApiClient()


@pytest.fixture
def fixed_clock():
    return lambda: FIXED_NOW

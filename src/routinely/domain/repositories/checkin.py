"""Check-in repository protocol."""

from __future__ import annotations

from datetime import datetime
from typing import Protocol

from ...models.checkin import CheckIn


class CheckInRepository(Protocol):
    """Append-only store of check-in events."""

    def create(self, routine_id: str, *, timestamp: datetime | None = None) -> CheckIn:
        """Append a check-in for ``routine_id`` (defaults to now)."""
        ...

    def list_all(self) -> list[CheckIn]:
        """Every recorded event, oldest first."""
        ...

    def count_by_routine(self) -> dict[str, int]:
        """All-time raw event count per routine id."""
        ...

    def count_since(self, since: datetime) -> int:
        """Number of raw events with ``timestamp >= since``."""
        ...

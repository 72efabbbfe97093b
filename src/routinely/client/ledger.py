"""Client-side completion ledger.

Tracks which routines were marked done on each calendar day. Days are keyed
``YYYY-M-D`` in the fixed reference offset, not the device timezone.

Completing a routine also sends a check-in to the server and refreshes the
dashboard statistics in the background. Un-completing is local only: the
server log keeps the original event, so the two views may disagree.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Callable, Optional

import requests

from ..logging_config import get_logger
from ..services import jobs
from ..services.checkins import validate_routine_id
from ..services.clock import today_key
from .api import RoutinelyApiClient
from .storage import COMPLETED_ROUTINES_KEY, LocalStore

logger = get_logger("client.ledger")


class CompletionLedger:
    """Day-keyed sets of completed routine ids, persisted as JSON."""

    def __init__(
        self,
        store: LocalStore,
        *,
        offset_hours: float = 6.0,
        api: Optional[RoutinelyApiClient] = None,
        clock: Callable[[], datetime] | None = None,
        on_stats: Callable[[dict[str, Any]], None] | None = None,
    ) -> None:
        self.store = store
        self.offset_hours = offset_hours
        self.api = api
        self._clock = clock
        self.on_stats = on_stats
        self.latest_stats: Optional[dict[str, Any]] = None
        self._days: dict[str, list[str]] = {}

    def load(self) -> dict[str, list[str]]:
        """Reload the ledger from storage (empty on missing or unreadable data)."""

        raw = self.store.get_json(COMPLETED_ROUTINES_KEY, {})
        days: dict[str, list[str]] = {}
        if isinstance(raw, dict):
            for key, ids in raw.items():
                if not isinstance(ids, list):
                    continue
                # Preserve order but collapse duplicates left by older builds.
                days[str(key)] = list(dict.fromkeys(str(item) for item in ids))
        else:
            logger.warning("Ignoring malformed completion ledger in storage")
        self._days = days
        return self.snapshot()

    def snapshot(self) -> dict[str, list[str]]:
        return {key: list(ids) for key, ids in self._days.items()}

    def today_key(self) -> str:
        now = self._clock() if self._clock else None
        return today_key(self.offset_hours, now=now)

    def completed_on(self, day: str) -> set[str]:
        return set(self._days.get(day, ()))

    def is_completed(self, routine_id: str) -> bool:
        return routine_id in self._days.get(self.today_key(), ())

    def today_count(self) -> int:
        return len(self._days.get(self.today_key(), ()))

    def toggle(self, routine_id: str) -> bool:
        """Flip today's completion of ``routine_id``; returns the new state."""

        routine_id = validate_routine_id(routine_id)
        day = self.today_key()
        completed = self._days.setdefault(day, [])
        if routine_id in completed:
            completed.remove(routine_id)
            now_completed = False
        else:
            completed.append(routine_id)
            now_completed = True
        if not completed:
            del self._days[day]

        self.store.set_json(COMPLETED_ROUTINES_KEY, self._days)
        logger.info("Routine %s %s for %s", routine_id, "completed" if now_completed else "reopened", day)

        if now_completed and self.api is not None:
            jobs.fire_and_forget(
                "record-checkin",
                self._sync_checkin,
                metadata={"routine_id": routine_id, "day": day},
                routine_id=routine_id,
            )
        return now_completed

    def _sync_checkin(self, routine_id: str) -> None:
        try:
            self.api.record_checkin(routine_id)
        except requests.RequestException as exc:
            logger.warning("Error recording check-in for %s: %s", routine_id, exc)
        self.refresh_stats()

    def refresh_stats(self) -> Optional[dict[str, Any]]:
        """Fetch dashboard stats; keeps the previous value when the call fails."""

        if self.api is None:
            return self.latest_stats
        try:
            stats = self.api.fetch_stats()
        except (requests.RequestException, ValueError) as exc:
            logger.warning("Error fetching stats: %s", exc)
            return self.latest_stats
        self.latest_stats = stats
        if self.on_stats is not None:
            self.on_stats(stats)
        return stats


__all__ = ["CompletionLedger"]

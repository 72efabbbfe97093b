"""Reminder settings mirrored into daily local notifications."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import datetime
from typing import Callable, Optional

from ..constants import DEFAULT_REMINDERS
from ..exceptions import PermissionDeniedError, ValidationError
from ..logging_config import get_logger
from ..services.clock import format_hhmm, next_occurrence, parse_hhmm
from .notifications import NotificationBackend
from .storage import REMINDERS_KEY, LocalStore

logger = get_logger("client.reminders")


@dataclass
class Reminder:
    id: str
    time: str
    title: str
    enabled: bool = False

    @classmethod
    def from_dict(cls, data: dict) -> "Reminder":
        return cls(
            id=str(data["id"]),
            time=format_hhmm(parse_hhmm(data["time"])),
            title=str(data.get("title", data["id"])),
            enabled=bool(data.get("enabled", False)),
        )

    def to_dict(self) -> dict:
        return asdict(self)


def default_reminders() -> list[Reminder]:
    return [Reminder(id=rid, time=at, title=title) for rid, at, title in DEFAULT_REMINDERS]


class ReminderScheduler:
    """Owns the reminder list and keeps backend registrations in sync with it."""

    def __init__(
        self,
        store: LocalStore,
        backend: NotificationBackend,
        *,
        offset_hours: float = 6.0,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self.store = store
        self.backend = backend
        self.offset_hours = offset_hours
        self._clock = clock
        self._reminders: list[Reminder] = []

    @property
    def reminders(self) -> list[Reminder]:
        return list(self._reminders)

    def load(self) -> list[Reminder]:
        """Load reminders from storage, seeding the defaults on first use."""

        raw = self.store.get_json(REMINDERS_KEY)
        reminders: list[Reminder] = []
        if isinstance(raw, list):
            for item in raw:
                try:
                    reminders.append(Reminder.from_dict(item))
                except (KeyError, TypeError, ValidationError) as exc:
                    logger.warning("Skipping malformed stored reminder %r: %s", item, exc)
        self._reminders = reminders or default_reminders()
        if not reminders:
            self._persist()
        return self.reminders

    def get(self, reminder_id: str) -> Reminder:
        for reminder in self._reminders:
            if reminder.id == reminder_id:
                return reminder
        raise ValidationError(f"Unknown reminder {reminder_id!r}", field="id")

    def ensure_permission(self) -> bool:
        if self.backend.has_permission():
            return True
        return self.backend.request_permission()

    def toggle(self, reminder_id: str) -> Reminder:
        """Flip ``enabled``; schedules or cancels the daily notification.

        Enabling requires notification permission. When it is denied the
        reminder keeps its previous state and :class:`PermissionDeniedError`
        is raised so the caller can point the user at system settings.
        """

        reminder = self.get(reminder_id)
        if not reminder.enabled and not self.ensure_permission():
            logger.warning("Notification permission denied; %s left disabled", reminder_id)
            raise PermissionDeniedError("Notification permission is required to enable reminders")

        reminder.enabled = not reminder.enabled
        self._persist()
        if reminder.enabled:
            self._schedule(reminder)
        else:
            self._cancel(reminder.id)
        return reminder

    def update_reminder_time(self, reminder_id: str, time: str) -> Reminder:
        """Set a new ``HH:MM`` time, force-enable the reminder and reschedule it."""

        normalized = format_hhmm(parse_hhmm(time))
        reminder = self.get(reminder_id)
        reminder.time = normalized
        reminder.enabled = True
        self._persist()
        self._cancel(reminder.id)
        if self.ensure_permission():
            self._schedule(reminder)
        else:
            logger.warning("Notification permission denied; %s saved but not scheduled", reminder_id)
        return reminder

    def reschedule_all(self) -> int:
        """Register every enabled reminder again (app start-up); returns how many."""

        if not self.backend.has_permission():
            return 0
        return sum(1 for r in self._reminders if r.enabled and self._schedule(r) is not None)

    def next_fire_time(self, reminder: Reminder) -> datetime:
        now = self._clock() if self._clock else None
        return next_occurrence(reminder.time, self.offset_hours, now=now)

    def _schedule(self, reminder: Reminder) -> Optional[datetime]:
        if not self.backend.has_permission():
            logger.warning("Cannot schedule %s without notification permission", reminder.id)
            return None
        first_fire = self.next_fire_time(reminder)
        try:
            self.backend.schedule_daily(reminder.id, first_fire, reminder.title)
        except Exception as exc:
            logger.error("Error scheduling reminder %s: %s", reminder.id, exc, exc_info=True)
            return None
        logger.info("Reminder %s scheduled for %s", reminder.id, first_fire.isoformat())
        return first_fire

    def _cancel(self, reminder_id: str) -> None:
        try:
            self.backend.cancel(reminder_id)
        except Exception as exc:
            logger.error("Error cancelling reminder %s: %s", reminder_id, exc, exc_info=True)

    def _persist(self) -> None:
        self.store.set_json(REMINDERS_KEY, [r.to_dict() for r in self._reminders])


__all__ = ["Reminder", "ReminderScheduler", "default_reminders"]

"""Local notification backends.

A backend owns the notification permission and the set of repeating daily
notifications, each keyed by reminder id. Registering an id twice replaces the
earlier registration.
"""

from __future__ import annotations

from datetime import datetime
from typing import Callable, Optional, Protocol

from ..logging_config import get_logger
from ..scheduler import NotificationScheduler

logger = get_logger("client.notifications")


class NotificationBackend(Protocol):
    def has_permission(self) -> bool:
        ...

    def request_permission(self) -> bool:
        ...

    def schedule_daily(self, reminder_id: str, first_fire: datetime, title: str) -> None:
        ...

    def cancel(self, reminder_id: str) -> None:
        ...


def log_delivery(reminder_id: str, title: str) -> None:
    logger.info("Reminder due: %s (%s)", title, reminder_id)


class SchedulerNotificationBackend:
    """Delivers reminders through an in-process APScheduler.

    On the ``web`` platform permission is always reported as granted.
    Elsewhere ``prompt`` is asked once per request; without a prompt the
    request is granted.
    """

    def __init__(
        self,
        scheduler: NotificationScheduler,
        *,
        platform: str = "android",
        prompt: Optional[Callable[[], bool]] = None,
        deliver: Callable[[str, str], None] = log_delivery,
        granted: bool = False,
    ) -> None:
        self.scheduler = scheduler
        self.platform = platform
        self.prompt = prompt
        self.deliver = deliver
        self._granted = granted

    def has_permission(self) -> bool:
        if self.platform == "web":
            return True
        return self._granted

    def request_permission(self) -> bool:
        if self.platform == "web":
            return True
        self._granted = bool(self.prompt()) if self.prompt is not None else True
        logger.info("Notification permission %s", "granted" if self._granted else "denied")
        return self._granted

    def schedule_daily(self, reminder_id: str, first_fire: datetime, title: str) -> None:
        self.scheduler.add_daily_job(
            reminder_id,
            self.deliver,
            first_run=first_fire,
            name=title,
            kwargs={"reminder_id": reminder_id, "title": title},
        )

    def cancel(self, reminder_id: str) -> None:
        self.scheduler.remove_job(reminder_id)


__all__ = ["NotificationBackend", "SchedulerNotificationBackend", "log_delivery"]

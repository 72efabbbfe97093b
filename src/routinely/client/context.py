"""Client context: wires storage, ledger, reminders and the API client together."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Optional

from ..config import BaseConfig
from ..infra.database import bootstrap_client_database
from ..infra.repositories import SQLModelSettingsRepository
from ..scheduler import NotificationScheduler
from ..services.clock import region_tz
from .api import RoutinelyApiClient
from .ledger import CompletionLedger
from .notifications import NotificationBackend, SchedulerNotificationBackend
from .preferences import Preferences
from .reminders import ReminderScheduler
from .storage import LocalStore


@dataclass
class ClientContext:
    """Centralized client state and services."""

    config: BaseConfig
    store: LocalStore
    preferences: Preferences
    ledger: CompletionLedger
    reminders: ReminderScheduler
    api: Optional[RoutinelyApiClient]
    scheduler: Optional[NotificationScheduler] = None

    def close(self) -> None:
        if self.scheduler is not None:
            self.scheduler.stop()


def create_client_context(
    config: Optional[BaseConfig] = None,
    *,
    api: Optional[RoutinelyApiClient] = None,
    backend: Optional[NotificationBackend] = None,
    on_stats: Callable[[dict[str, Any]], None] | None = None,
    start_scheduler: bool = True,
) -> ClientContext:
    """Create the client context and load persisted state.

    Without an explicit ``backend`` an APScheduler-backed one is created and
    enabled reminders are registered again.
    """

    if config is None:
        config = BaseConfig()

    _engine, session_factory = bootstrap_client_database(config)
    store = LocalStore(SQLModelSettingsRepository(session_factory))

    scheduler = None
    if backend is None:
        scheduler = NotificationScheduler(region_tz(config.REGION_UTC_OFFSET_HOURS))
        backend = SchedulerNotificationBackend(scheduler, platform=config.PLATFORM)
        if start_scheduler:
            scheduler.start()

    if api is None:
        api = RoutinelyApiClient.from_config(config)

    preferences = Preferences(store)
    preferences.load()

    ledger = CompletionLedger(
        store, offset_hours=config.REGION_UTC_OFFSET_HOURS, api=api, on_stats=on_stats
    )
    ledger.load()

    reminders = ReminderScheduler(store, backend, offset_hours=config.REGION_UTC_OFFSET_HOURS)
    reminders.load()
    reminders.reschedule_all()

    return ClientContext(
        config=config,
        store=store,
        preferences=preferences,
        ledger=ledger,
        reminders=reminders,
        api=api,
        scheduler=scheduler,
    )

"""Client-side state: completion ledger, reminders and preferences."""

from .context import ClientContext, create_client_context
from .ledger import CompletionLedger
from .reminders import Reminder, ReminderScheduler

__all__ = [
    "ClientContext",
    "CompletionLedger",
    "Reminder",
    "ReminderScheduler",
    "create_client_context",
]

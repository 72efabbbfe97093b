"""Concrete repository implementations using SQLModel."""

from .checkin import SQLModelCheckInRepository
from .checkout import SQLModelCheckoutRepository
from .settings import SQLModelSettingsRepository

__all__ = [
    "SQLModelCheckInRepository",
    "SQLModelCheckoutRepository",
    "SQLModelSettingsRepository",
]

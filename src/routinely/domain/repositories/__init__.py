"""Repository protocol definitions for domain layer."""

from .checkin import CheckInRepository
from .checkout import CheckoutRepository
from .settings import SettingsRepository

__all__ = ["CheckInRepository", "CheckoutRepository", "SettingsRepository"]

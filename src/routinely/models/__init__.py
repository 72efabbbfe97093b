"""SQLModel table exports."""

from .checkin import CheckIn
from .checkout import Checkout
from .settings import AppSetting

SERVER_TABLES = (CheckIn, Checkout)
CLIENT_TABLES = (AppSetting,)

__all__ = [
    "AppSetting",
    "CheckIn",
    "Checkout",
    "CLIENT_TABLES",
    "SERVER_TABLES",
]

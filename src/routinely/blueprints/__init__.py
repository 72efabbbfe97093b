"""Blueprint exports."""

from . import checkins, checkouts, dashboard, tts

__all__ = ["checkins", "checkouts", "dashboard", "tts"]

"""Static catalogs shipped with the app."""

from .routines import DEFAULT_REMINDERS, ROUTINES, Routine

__all__ = ["DEFAULT_REMINDERS", "ROUTINES", "Routine"]

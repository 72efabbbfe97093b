"""Service module exports."""

from . import checkins, clock, jobs, tts

__all__ = ["checkins", "clock", "jobs", "tts"]

"""Text-to-speech blueprint package."""

from __future__ import annotations

from flask import Blueprint

bp = Blueprint("tts", __name__, url_prefix="/api/tts")

from . import routes  # noqa: E402,F401

__all__ = ["bp"]

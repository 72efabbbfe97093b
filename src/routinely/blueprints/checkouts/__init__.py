"""Checkout log blueprint package."""

from __future__ import annotations

from flask import Blueprint

bp = Blueprint("checkouts", __name__, url_prefix="/api/checkouts")

from . import routes  # noqa: E402,F401

__all__ = ["bp"]

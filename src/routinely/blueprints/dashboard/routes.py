"""Dashboard statistics routes."""

from __future__ import annotations

from flask import jsonify

from ...extensions import get_extension
from . import bp


@bp.get("/stats")
def stats():
    """Return daily/weekly/monthly counts, per-routine breakdown and 7-day history."""

    service = get_extension("checkin_service")
    return jsonify(service.compute_stats().to_dict())

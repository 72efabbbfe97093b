"""Check-in routes."""

from __future__ import annotations

from ...extensions import get_extension
from ...services.checkins import CheckInService
from ..payload import json_object
from . import bp


@bp.post("")
def record_checkin():
    """Append a check-in event for ``routineId``; responds with an empty 200."""

    payload = json_object()
    service: CheckInService = get_extension("checkin_service")
    service.record_checkin(payload.get("routineId"))
    return "", 200

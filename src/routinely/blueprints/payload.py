"""Request body helpers shared by the JSON blueprints."""

from __future__ import annotations

from typing import Any

from flask import request

from ..exceptions import ValidationError


def json_object() -> dict[str, Any]:
    """Return the JSON request body as a dict.

    A missing or unparseable body reads as ``{}`` so field validation reports
    what is missing; any other JSON value is rejected.
    """

    payload = request.get_json(silent=True)
    if payload is None:
        return {}
    if not isinstance(payload, dict):
        raise ValidationError("Request body must be a JSON object", field="body")
    return payload

"""Text-to-speech routes."""

from __future__ import annotations

from flask import Response, current_app, jsonify

from ...extensions import get_extension
from ...services.tts import AUDIO_MIMETYPE, TextToSpeechService
from ..payload import json_object
from . import bp


@bp.post("")
def synthesize():
    """Synthesize ``text`` and return it base64-encoded. Never cached."""

    payload = json_object()
    service: TextToSpeechService = get_extension("tts_service")
    audio = service.synthesize_base64(payload.get("text"), payload.get("voice") or None)
    return jsonify({"audio": audio})


@bp.get("/<text_hash>")
def stream(text_hash: str):
    """Stream mp3 audio for the base64url-encoded text in ``text_hash``."""

    service: TextToSpeechService = get_extension("tts_service")
    audio = service.audio_for_hash(text_hash)
    max_age = current_app.config["ROUTINELY_CONFIG"].TTS_MAX_AGE
    response = Response(audio, mimetype=AUDIO_MIMETYPE)
    response.headers["Content-Length"] = str(len(audio))
    response.headers["Cache-Control"] = f"public, max-age={max_age}"
    return response

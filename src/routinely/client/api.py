"""HTTP client for the Routinely API."""

from __future__ import annotations

import base64
from typing import Any, Optional

import requests

from ..logging_config import get_logger
from ..services.tts import encode_text_hash

logger = get_logger("client.api")


class RoutinelyApiClient:
    """Calls the check-in, statistics and TTS endpoints.

    Methods raise :class:`requests.RequestException` on transport or HTTP
    errors; callers that must not fail catch it.
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 10.0,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    @classmethod
    def from_config(cls, config) -> "RoutinelyApiClient":
        return cls(config.API_BASE_URL, timeout=config.API_TIMEOUT)

    def _url(self, path: str) -> str:
        return f"{self.base_url}{path}"

    def record_checkin(self, routine_id: str) -> None:
        response = self.session.post(
            self._url("/api/checkins"), json={"routineId": routine_id}, timeout=self.timeout
        )
        response.raise_for_status()
        logger.debug("Check-in sent for %s", routine_id)

    def fetch_stats(self) -> dict[str, Any]:
        response = self.session.get(self._url("/api/dashboard/stats"), timeout=self.timeout)
        response.raise_for_status()
        return response.json()

    def synthesize(self, text: str, voice: str = "nova") -> bytes:
        response = self.session.post(
            self._url("/api/tts"), json={"text": text, "voice": voice}, timeout=self.timeout
        )
        response.raise_for_status()
        return base64.b64decode(response.json()["audio"])

    def audio_url(self, text: str) -> str:
        """URL of the cacheable mp3 stream for ``text``."""

        return self._url(f"/api/tts/{encode_text_hash(text)}")


__all__ = ["RoutinelyApiClient"]

"""Text-to-speech synthesis with a bounded in-process audio cache."""

from __future__ import annotations

import base64
import binascii
import time
from collections import OrderedDict
from dataclasses import dataclass
from threading import Lock
from typing import Callable, Optional, Protocol

from openai import OpenAI, OpenAIError

from ..exceptions import TTSError, ValidationError
from ..logging_config import get_logger

logger = get_logger(__name__)

AUDIO_FORMAT = "mp3"
AUDIO_MIMETYPE = "audio/mpeg"


class SpeechSynthesizer(Protocol):
    def __call__(self, text: str, voice: str) -> bytes:
        ...


def encode_text_hash(text: str) -> str:
    """Encode ``text`` as unpadded base64url (the form used in ``/api/tts/<hash>``)."""

    return base64.urlsafe_b64encode(text.encode("utf-8")).rstrip(b"=").decode("ascii")


def decode_text_hash(value: str) -> str:
    """Decode a base64url text hash; padding is optional."""

    if not value:
        raise ValidationError("Invalid hash", field="hash")
    padded = value + "=" * (-len(value) % 4)
    try:
        text = base64.urlsafe_b64decode(padded.encode("ascii")).decode("utf-8")
    except (binascii.Error, UnicodeError, ValueError) as exc:
        raise ValidationError("Invalid hash", field="hash") from exc
    if not text:
        raise ValidationError("Invalid hash", field="hash")
    return text


@dataclass
class _CacheEntry:
    audio: bytes
    stored_at: float


class AudioCache:
    """Size- and age-bounded key -> audio bytes store with LRU eviction."""

    def __init__(
        self,
        max_entries: int = 128,
        ttl_seconds: float = 86400,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if max_entries <= 0:
            raise ValueError("max_entries must be greater than zero")
        self.max_entries = max_entries
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: OrderedDict[str, _CacheEntry] = OrderedDict()
        self._lock = Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def get(self, key: str) -> Optional[bytes]:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            if self.ttl_seconds and self._clock() - entry.stored_at > self.ttl_seconds:
                del self._entries[key]
                return None
            self._entries.move_to_end(key)
            return entry.audio

    def set(self, key: str, audio: bytes) -> None:
        with self._lock:
            self._entries[key] = _CacheEntry(audio=audio, stored_at=self._clock())
            self._entries.move_to_end(key)
            while len(self._entries) > self.max_entries:
                evicted, _ = self._entries.popitem(last=False)
                logger.debug("Evicted cached audio", extra={"cache_key": evicted})

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()


class OpenAISpeechSynthesizer:
    """Synthesize mp3 audio through the OpenAI speech endpoint."""

    def __init__(self, api_key: Optional[str], *, model: str = "gpt-4o-mini-tts") -> None:
        self.api_key = api_key
        self.model = model
        self._client = None

    def _get_client(self):
        if self._client is None:
            if not self.api_key:
                raise TTSError("OPENAI_API_KEY is not configured")
            self._client = OpenAI(api_key=self.api_key)
        return self._client

    def __call__(self, text: str, voice: str) -> bytes:
        client = self._get_client()
        try:
            response = client.audio.speech.create(
                model=self.model,
                voice=voice,
                input=text,
                response_format=AUDIO_FORMAT,
            )
        except OpenAIError as exc:
            raise TTSError(f"Speech synthesis failed: {exc}") from exc
        return response.content


class TextToSpeechService:
    """Front for the speech provider; only hash lookups go through the cache."""

    def __init__(
        self,
        synthesizer: SpeechSynthesizer,
        *,
        cache: AudioCache | None = None,
        default_voice: str = "nova",
    ) -> None:
        self.synthesizer = synthesizer
        self.cache = cache or AudioCache()
        self.default_voice = default_voice

    @classmethod
    def from_config(cls, config, synthesizer: SpeechSynthesizer | None = None) -> "TextToSpeechService":
        return cls(
            synthesizer or OpenAISpeechSynthesizer(config.OPENAI_API_KEY, model=config.TTS_MODEL),
            cache=AudioCache(config.TTS_CACHE_SIZE, config.TTS_CACHE_TTL),
            default_voice=config.TTS_DEFAULT_VOICE,
        )

    def synthesize(self, text: str, voice: str | None = None) -> bytes:
        """Synthesize ``text`` without consulting the cache."""

        if not isinstance(text, str) or not text.strip():
            raise ValidationError("Text is required", field="text")
        voice = voice or self.default_voice
        audio = self.synthesizer(text, voice)
        logger.info("Synthesized speech", extra={"voice": voice, "chars": len(text), "bytes": len(audio)})
        return audio

    def synthesize_base64(self, text: str, voice: str | None = None) -> str:
        return base64.b64encode(self.synthesize(text, voice)).decode("ascii")

    def audio_for_hash(self, text_hash: str) -> bytes:
        """Decode ``text_hash`` and return cached or freshly synthesized audio."""

        text = decode_text_hash(text_hash)
        cache_key = f"{self.default_voice}:{text}"
        audio = self.cache.get(cache_key)
        if audio is None:
            audio = self.synthesize(text, self.default_voice)
            self.cache.set(cache_key, audio)
        return audio


__all__ = [
    "AUDIO_MIMETYPE",
    "AudioCache",
    "OpenAISpeechSynthesizer",
    "TextToSpeechService",
    "decode_text_hash",
    "encode_text_hash",
]

"""Exception types shared by the server and client halves."""

from __future__ import annotations


class RoutinelyError(Exception):
    """Base class for application errors."""


class ValidationError(RoutinelyError):
    """Raised when request or user input fails validation."""

    def __init__(self, message: str, *, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field

    def to_dict(self) -> dict[str, str]:
        payload = {"error": str(self)}
        if self.field:
            payload["field"] = self.field
        return payload


class TTSError(RoutinelyError):
    """Raised when the speech provider cannot produce audio."""


class PermissionDeniedError(RoutinelyError):
    """Raised when notification permission is required but not granted."""


__all__ = [
    "PermissionDeniedError",
    "RoutinelyError",
    "TTSError",
    "ValidationError",
]

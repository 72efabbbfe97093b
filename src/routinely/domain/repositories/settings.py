"""Settings repository protocol."""

from __future__ import annotations

from typing import Optional, Protocol

from ...models.settings import AppSetting


class SettingsRepository(Protocol):
    """Key/value persistence for client-side state."""

    def get(self, key: str) -> Optional[AppSetting]:
        ...

    def set(self, key: str, value: str) -> AppSetting:
        ...

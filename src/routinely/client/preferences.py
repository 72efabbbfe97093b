"""Language and theme preferences."""

from __future__ import annotations

from ..exceptions import ValidationError
from .storage import LANGUAGE_KEY, THEME_MODE_KEY, LocalStore

LANGUAGES = ("en", "bn")
THEME_MODES = ("light", "dark", "system")


class Preferences:
    def __init__(self, store: LocalStore):
        self.store = store
        self.language = "en"
        self.theme_mode = "system"

    def load(self) -> None:
        language = self.store.get_str(LANGUAGE_KEY)
        if language in LANGUAGES:
            self.language = language
        theme_mode = self.store.get_str(THEME_MODE_KEY)
        if theme_mode in THEME_MODES:
            self.theme_mode = theme_mode

    def set_language(self, language: str) -> None:
        if language not in LANGUAGES:
            raise ValidationError(f"Unsupported language {language!r}", field="language")
        self.language = language
        self.store.set_str(LANGUAGE_KEY, language)

    def set_theme_mode(self, mode: str) -> None:
        if mode not in THEME_MODES:
            raise ValidationError(f"Unsupported theme mode {mode!r}", field="themeMode")
        self.theme_mode = mode
        self.store.set_str(THEME_MODE_KEY, mode)

"""Application service: client preferences (theme and language)."""

from __future__ import annotations

from enum import Enum

from wms.application.ports import KeyValueStore
from wms.domain.exceptions import ValidationError

THEME_KEY = "theme"
LANGUAGE_KEY = "language"


class Theme(Enum):
    LIGHT = "light"
    DARK = "dark"
    SYSTEM = "system"


class Language(Enum):
    ID = "id"
    EN = "en"


class Preferences:
    """Theme and language, read from and written through a storage port."""

    def __init__(self, storage: KeyValueStore) -> None:
        self._storage = storage

    @property
    def theme(self) -> Theme:
        try:
            return Theme(self._storage.get(THEME_KEY) or Theme.SYSTEM.value)
        except ValueError:
            return Theme.SYSTEM

    def set_theme(self, value: str) -> Theme:
        theme = _parse(Theme, value, "theme")
        self._storage.set(THEME_KEY, theme.value)
        return theme

    def effective_theme(self, system_prefers_dark: bool) -> Theme:
        if self.theme == Theme.SYSTEM:
            return Theme.DARK if system_prefers_dark else Theme.LIGHT
        return self.theme

    @property
    def language(self) -> Language:
        try:
            return Language(self._storage.get(LANGUAGE_KEY) or Language.EN.value)
        except ValueError:
            return Language.EN

    def set_language(self, value: str) -> Language:
        language = _parse(Language, value, "language")
        self._storage.set(LANGUAGE_KEY, language.value)
        return language


def _parse(enum_cls, value: str, label: str):
    try:
        return enum_cls(value.strip().lower())
    except ValueError:
        allowed = ", ".join(member.value for member in enum_cls)
        raise ValidationError(f"Unknown {label} '{value}'. Expected one of: {allowed}") from None

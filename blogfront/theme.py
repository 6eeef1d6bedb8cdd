"""Light/dark theme selection with a persisted reader preference."""

from __future__ import annotations

import logging
import os
from typing import Callable, Protocol

THEME_KEY = "theme"
DARK = "dark"
LIGHT = "light"
THEMES = (DARK, LIGHT)
COLOR_SCHEME_ENV = "BLOGFRONT_COLOR_SCHEME"

ThemeListener = Callable[[str], None]
SchemeListener = Callable[[bool], None]
Unsubscribe = Callable[[], None]

logger = logging.getLogger(__name__)


class PreferenceBackend(Protocol):
    def get(self, key: str) -> str | None:  # pragma: no cover - Protocol
        ...

    def set(self, key: str, value: str) -> None:  # pragma: no cover - Protocol
        ...

    def delete(self, key: str) -> bool:  # pragma: no cover - Protocol
        ...


class SystemColorScheme:
    """Operating-system colour scheme as seen by the reader.

    ``prefers_dark`` is ``None`` when the system reports nothing.
    """

    def __init__(self, prefers_dark: bool | None = None) -> None:
        self._prefers_dark = prefers_dark
        self._listeners: list[SchemeListener] = []

    @classmethod
    def from_value(cls, value: str | None) -> "SystemColorScheme":
        """Build from a ``"dark"``/``"light"`` hint; anything else means unknown."""

        normalized = (value or "").strip().lower()
        if normalized == DARK:
            return cls(True)
        if normalized == LIGHT:
            return cls(False)
        return cls(None)

    @classmethod
    def from_environment(cls, default: str | None = None) -> "SystemColorScheme":
        return cls.from_value(os.environ.get(COLOR_SCHEME_ENV, default))

    @property
    def prefers_dark(self) -> bool | None:
        return self._prefers_dark

    def subscribe(self, listener: SchemeListener) -> Unsubscribe:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def set(self, prefers_dark: bool) -> None:
        """Report a colour scheme change and notify subscribers."""

        if prefers_dark == self._prefers_dark:
            return
        self._prefers_dark = prefers_dark
        for listener in list(self._listeners):
            listener(prefers_dark)


def read_theme_preference(store: PreferenceBackend) -> str | None:
    value = store.get(THEME_KEY)
    return value if value in THEMES else None


class ThemeController:
    """Tracks the active theme and tells listeners about every change.

    Resolution order at startup: stored preference, then the system colour
    scheme, then light. Until the reader toggles explicitly the controller
    follows system colour scheme changes.
    """

    def __init__(
        self,
        store: PreferenceBackend,
        system: SystemColorScheme | None = None,
    ) -> None:
        self._store = store
        self._system = system or SystemColorScheme()
        self._listeners: list[ThemeListener] = []
        self._unsubscribe_system: Unsubscribe | None = None
        self._theme: str | None = None

    @property
    def theme(self) -> str:
        if self._theme is None:
            raise RuntimeError("ThemeController.initialize() has not been called")
        return self._theme

    @property
    def follows_system(self) -> bool:
        return self._unsubscribe_system is not None

    def subscribe(self, listener: ThemeListener) -> Unsubscribe:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def initialize(self) -> str:
        saved = read_theme_preference(self._store)
        if saved is not None:
            self._apply(saved)
        else:
            self._apply(self._system_theme())
            self._follow_system()
        return self.theme

    def toggle(self) -> str:
        new_theme = LIGHT if self._theme == DARK else DARK
        self._store.set(THEME_KEY, new_theme)
        self._stop_following_system()
        self._apply(new_theme)
        return new_theme

    def reset(self) -> str:
        """Forget the stored preference and go back to the system scheme."""

        self._store.delete(THEME_KEY)
        self._apply(self._system_theme())
        self._follow_system()
        return self.theme

    def close(self) -> None:
        self._stop_following_system()
        self._listeners.clear()

    def _system_theme(self) -> str:
        return DARK if self._system.prefers_dark else LIGHT

    def _apply(self, theme: str) -> None:
        logger.debug("Theme set to %s", theme)
        self._theme = theme
        for listener in list(self._listeners):
            listener(theme)

    def _follow_system(self) -> None:
        if self._unsubscribe_system is None:
            self._unsubscribe_system = self._system.subscribe(self._on_system_change)

    def _stop_following_system(self) -> None:
        if self._unsubscribe_system is not None:
            self._unsubscribe_system()
            self._unsubscribe_system = None

    def _on_system_change(self, prefers_dark: bool) -> None:
        if read_theme_preference(self._store) is not None:
            return
        self._apply(DARK if prefers_dark else LIGHT)

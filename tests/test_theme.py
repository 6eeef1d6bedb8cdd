"""Tests for theme selection and persistence."""

from __future__ import annotations

from pathlib import Path

import pytest

from blogfront.preferences import PreferenceError, PreferenceStore
from blogfront.theme import (
    COLOR_SCHEME_ENV,
    DARK,
    LIGHT,
    THEME_KEY,
    SystemColorScheme,
    ThemeController,
)


class _MemoryStore:
    def __init__(self, **values: str) -> None:
        self.values = dict(values)

    def get(self, key: str) -> str | None:
        return self.values.get(key)

    def set(self, key: str, value: str) -> None:
        self.values[key] = value

    def delete(self, key: str) -> bool:
        return self.values.pop(key, None) is not None


def _controller(store, system=None) -> tuple[ThemeController, list[str]]:
    controller = ThemeController(store, system)
    seen: list[str] = []
    controller.subscribe(seen.append)
    return controller, seen


def test_saved_preference_wins_over_system() -> None:
    controller, seen = _controller(
        _MemoryStore(theme=LIGHT), SystemColorScheme(prefers_dark=True)
    )
    assert controller.initialize() == LIGHT
    assert seen == [LIGHT]
    assert not controller.follows_system


def test_system_preference_used_when_nothing_saved() -> None:
    controller, seen = _controller(_MemoryStore(), SystemColorScheme(prefers_dark=True))
    assert controller.initialize() == DARK
    assert seen == [DARK]
    assert controller.follows_system


def test_defaults_to_light_without_any_signal() -> None:
    controller, _ = _controller(_MemoryStore())
    assert controller.initialize() == LIGHT


def test_invalid_saved_value_counts_as_absent() -> None:
    controller, _ = _controller(
        _MemoryStore(theme="sepia"), SystemColorScheme(prefers_dark=True)
    )
    assert controller.initialize() == DARK


def test_system_changes_are_mirrored_until_toggle() -> None:
    system = SystemColorScheme(prefers_dark=True)
    store = _MemoryStore()
    controller, seen = _controller(store, system)
    controller.initialize()

    system.set(False)
    assert controller.theme == LIGHT

    assert controller.toggle() == DARK
    assert store.values[THEME_KEY] == DARK

    assert controller.toggle() == LIGHT
    system.set(True)
    assert controller.theme == LIGHT
    assert seen == [DARK, LIGHT, DARK, LIGHT]
    assert not controller.follows_system


def test_system_change_ignored_once_preference_saved_elsewhere() -> None:
    system = SystemColorScheme(prefers_dark=False)
    store = _MemoryStore()
    controller, _ = _controller(store, system)
    controller.initialize()

    store.set(THEME_KEY, LIGHT)
    system.set(True)
    assert controller.theme == LIGHT


def test_reset_forgets_preference_and_follows_system_again() -> None:
    system = SystemColorScheme(prefers_dark=True)
    store = _MemoryStore(theme=LIGHT)
    controller, _ = _controller(store, system)
    controller.initialize()

    assert controller.reset() == DARK
    assert THEME_KEY not in store.values
    system.set(False)
    assert controller.theme == LIGHT


def test_theme_before_initialize_raises() -> None:
    controller, _ = _controller(_MemoryStore())
    with pytest.raises(RuntimeError):
        _ = controller.theme


class _FailingStore(_MemoryStore):
    def set(self, key: str, value: str) -> None:
        raise PreferenceError("database is locked")


def test_failed_toggle_leaves_theme_untouched() -> None:
    controller, seen = _controller(_FailingStore(), SystemColorScheme(prefers_dark=False))
    controller.initialize()
    seen.clear()

    with pytest.raises(PreferenceError):
        controller.toggle()

    assert controller.theme == LIGHT
    assert controller.follows_system is True
    assert seen == []


def test_toggle_persists_in_preference_store(tmp_path: Path) -> None:
    store = PreferenceStore(tmp_path / "prefs.sqlite3")
    store.initialize()

    controller = ThemeController(store, SystemColorScheme(prefers_dark=False))
    controller.initialize()
    controller.toggle()

    again = ThemeController(store, SystemColorScheme(prefers_dark=False))
    assert again.initialize() == DARK


@pytest.mark.parametrize(
    ("value", "expected"),
    [("dark", True), (" Light ", False), ("", None), (None, None), ("blue", None)],
)
def test_system_color_scheme_from_value(value, expected) -> None:
    assert SystemColorScheme.from_value(value).prefers_dark is expected


def test_environment_overrides_default(monkeypatch) -> None:
    monkeypatch.setenv(COLOR_SCHEME_ENV, "dark")
    assert SystemColorScheme.from_environment("light").prefers_dark is True
    monkeypatch.delenv(COLOR_SCHEME_ENV)
    assert SystemColorScheme.from_environment("light").prefers_dark is False

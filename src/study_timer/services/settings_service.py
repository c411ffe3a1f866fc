"""Settings service: AppSettings <-> three scalar preference keys."""

from __future__ import annotations

from functools import lru_cache

from study_timer.models.settings import (
    BREAK_MINUTES_RANGE,
    DEFAULT_BREAK_MINUTES,
    DEFAULT_FOCUS_MINUTES,
    FOCUS_MINUTES_RANGE,
    AppSettings,
    ThemeMode,
    clamp,
)
from study_timer.services.preferences import PreferencesStore, get_preferences
from study_timer.utils.logger import get_logger

THEME_MODE_KEY = "themeMode"
FOCUS_MINUTES_KEY = "focusTimeMinutes"
BREAK_MINUTES_KEY = "breakTimeMinutes"


def parse_minutes(text: str | None, default: int, low: int, high: int) -> int:
    """Parse a user-entered duration.

    Non-numeric input falls back to *default*; the result is always clamped
    into ``[low, high]``.
    """
    try:
        value = int(str(text).strip())
    except (TypeError, ValueError):
        value = default
    return clamp(value, low, high)


def parse_focus_minutes(text: str | None) -> int:
    return parse_minutes(text, DEFAULT_FOCUS_MINUTES, *FOCUS_MINUTES_RANGE)


def parse_break_minutes(text: str | None) -> int:
    return parse_minutes(text, DEFAULT_BREAK_MINUTES, *BREAK_MINUTES_RANGE)


def parse_theme_mode(text: str) -> ThemeMode:
    """Parse a theme by name (``dark``) or index (``2``).

    Raises:
        ValueError: If *text* names no theme
    """
    value = text.strip().upper()
    if value.isdigit():
        return ThemeMode(int(value))
    try:
        return ThemeMode[value]
    except KeyError:
        raise ValueError(f"Unknown theme mode: {text}") from None


class SettingsService:
    """Loads and saves AppSettings through the preferences store."""

    def __init__(self, preferences: PreferencesStore):
        self.preferences = preferences
        self._logger = get_logger("settings")

    def load(self) -> AppSettings:
        """Load settings; missing or malformed values become defaults."""
        theme_index = self.preferences.get_int(THEME_MODE_KEY)
        try:
            theme_mode = ThemeMode(theme_index if theme_index is not None else 0)
        except ValueError:
            self._logger.warning("unknown theme index %r, using default", theme_index)
            theme_mode = ThemeMode.SYSTEM

        focus = self.preferences.get_int(FOCUS_MINUTES_KEY)
        brk = self.preferences.get_int(BREAK_MINUTES_KEY)

        return AppSettings(
            theme_mode=theme_mode,
            focus_time_minutes=focus if focus is not None else DEFAULT_FOCUS_MINUTES,
            break_time_minutes=brk if brk is not None else DEFAULT_BREAK_MINUTES,
        )

    def save(self, settings: AppSettings) -> AppSettings:
        """Persist *settings* (already clamped by the model) and return them."""
        self.preferences.set_int(THEME_MODE_KEY, int(settings.theme_mode))
        self.preferences.set_int(FOCUS_MINUTES_KEY, settings.focus_time_minutes)
        self.preferences.set_int(BREAK_MINUTES_KEY, settings.break_time_minutes)
        self._logger.info(
            "saved settings: theme=%s focus=%dm break=%dm",
            settings.theme_mode.name.lower(),
            settings.focus_time_minutes,
            settings.break_time_minutes,
        )
        return settings

    def reset(self) -> AppSettings:
        """Restore and persist the default settings."""
        return self.save(AppSettings())


@lru_cache(maxsize=1)
def get_settings_service() -> SettingsService:
    """Get a cached SettingsService instance."""
    return SettingsService(get_preferences())

"""Unit tests for services/settings_service.py."""

from __future__ import annotations

import pytest

from study_timer.models.settings import AppSettings, ThemeMode
from study_timer.services.settings_service import (
    BREAK_MINUTES_KEY,
    FOCUS_MINUTES_KEY,
    THEME_MODE_KEY,
    SettingsService,
    get_settings_service,
    parse_break_minutes,
    parse_focus_minutes,
    parse_minutes,
    parse_theme_mode,
)


@pytest.fixture()
def service(prefs) -> SettingsService:
    return SettingsService(prefs)


# ---------------------------------------------------------------------------
# AppSettings model
# ---------------------------------------------------------------------------


class TestAppSettings:
    def test_defaults(self):
        settings = AppSettings()
        assert settings.theme_mode == ThemeMode.SYSTEM
        assert settings.focus_time_minutes == 50
        assert settings.break_time_minutes == 10

    def test_durations_are_clamped(self):
        settings = AppSettings(focus_time_minutes=500, break_time_minutes=0)
        assert settings.focus_time_minutes == 120
        assert settings.break_time_minutes == 1

    def test_assignment_is_clamped(self):
        settings = AppSettings()
        settings.focus_time_minutes = -3
        settings.break_time_minutes = 61
        assert settings.focus_time_minutes == 1
        assert settings.break_time_minutes == 60

    def test_seconds_helpers(self):
        settings = AppSettings(focus_time_minutes=25, break_time_minutes=5)
        assert settings.focus_seconds == 1500
        assert settings.break_seconds == 300


# ---------------------------------------------------------------------------
# Parsing user input
# ---------------------------------------------------------------------------


class TestParseMinutes:
    @pytest.mark.parametrize(
        "text, expected",
        [("25", 25), (" 30 ", 30), ("0", 1), ("999", 120), ("abc", 50), ("", 50), (None, 50)],
    )
    def test_focus(self, text, expected):
        assert parse_focus_minutes(text) == expected

    @pytest.mark.parametrize(
        "text, expected", [("5", 5), ("-2", 1), ("90", 60), ("1.5", 10)]
    )
    def test_break(self, text, expected):
        assert parse_break_minutes(text) == expected

    def test_default_is_clamped_too(self):
        assert parse_minutes("x", default=500, low=1, high=120) == 120


class TestParseThemeMode:
    @pytest.mark.parametrize(
        "text, expected",
        [("dark", ThemeMode.DARK), ("LIGHT", ThemeMode.LIGHT), ("0", ThemeMode.SYSTEM)],
    )
    def test_valid(self, text, expected):
        assert parse_theme_mode(text) == expected

    @pytest.mark.parametrize("text", ["purple", "7"])
    def test_invalid(self, text):
        with pytest.raises(ValueError):
            parse_theme_mode(text)


# ---------------------------------------------------------------------------
# SettingsService
# ---------------------------------------------------------------------------


class TestLoad:
    def test_defaults_when_absent(self, service):
        assert service.load() == AppSettings()

    def test_reads_stored_values(self, service, prefs):
        prefs.set_int(THEME_MODE_KEY, 2)
        prefs.set_int(FOCUS_MINUTES_KEY, 25)
        prefs.set_int(BREAK_MINUTES_KEY, 5)
        settings = service.load()
        assert settings.theme_mode == ThemeMode.DARK
        assert settings.focus_time_minutes == 25
        assert settings.break_time_minutes == 5

    def test_malformed_values_become_defaults(self, service, prefs):
        prefs.set_int(THEME_MODE_KEY, 9)
        prefs.set_string_list(BREAK_MINUTES_KEY, ["5"])
        prefs.data[FOCUS_MINUTES_KEY] = "twenty"
        assert service.load() == AppSettings()

    def test_out_of_range_stored_values_are_clamped(self, service, prefs):
        prefs.set_int(FOCUS_MINUTES_KEY, 1000)
        prefs.set_int(BREAK_MINUTES_KEY, -4)
        settings = service.load()
        assert settings.focus_time_minutes == 120
        assert settings.break_time_minutes == 1


class TestSave:
    def test_writes_three_scalar_keys(self, service, prefs):
        service.save(
            AppSettings(theme_mode=ThemeMode.LIGHT, focus_time_minutes=40, break_time_minutes=8)
        )
        assert prefs.get_int(THEME_MODE_KEY) == 1
        assert prefs.get_int(FOCUS_MINUTES_KEY) == 40
        assert prefs.get_int(BREAK_MINUTES_KEY) == 8

    def test_save_then_load(self, service):
        saved = service.save(AppSettings(focus_time_minutes=200))
        assert service.load() == saved
        assert saved.focus_time_minutes == 120

    def test_reset_restores_defaults(self, service, prefs):
        service.save(AppSettings(theme_mode=ThemeMode.DARK, focus_time_minutes=5))
        assert service.reset() == AppSettings()
        assert prefs.get_int(FOCUS_MINUTES_KEY) == 50


class TestGetSettingsService:
    def test_is_cached(self):
        assert get_settings_service() is get_settings_service()

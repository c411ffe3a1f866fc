"""Data models for Study Timer."""

from .settings import (
    BREAK_MINUTES_RANGE,
    FOCUS_MINUTES_RANGE,
    AppSettings,
    ThemeMode,
)

__all__ = [
    "AppSettings",
    "ThemeMode",
    "FOCUS_MINUTES_RANGE",
    "BREAK_MINUTES_RANGE",
]

"""Application settings model.

Settings are persisted as three scalar preference keys (see
``study_timer.services.settings_service``). Durations are clamped into their
allowed range whenever a model is built, so a saved value is always valid.
"""

from __future__ import annotations

from enum import IntEnum

from pydantic import BaseModel, ConfigDict, Field, field_validator

FOCUS_MINUTES_RANGE = (1, 120)
BREAK_MINUTES_RANGE = (1, 60)

DEFAULT_FOCUS_MINUTES = 50
DEFAULT_BREAK_MINUTES = 10


class ThemeMode(IntEnum):
    """Display theme. The integer value is the persisted index."""

    SYSTEM = 0
    LIGHT = 1
    DARK = 2


def clamp(value: int, low: int, high: int) -> int:
    """Clamp *value* into ``[low, high]``."""
    return max(low, min(high, value))


class AppSettings(BaseModel):
    """User-adjustable timer and display settings."""

    model_config = ConfigDict(validate_assignment=True)

    theme_mode: ThemeMode = Field(default=ThemeMode.SYSTEM)
    focus_time_minutes: int = Field(default=DEFAULT_FOCUS_MINUTES)
    break_time_minutes: int = Field(default=DEFAULT_BREAK_MINUTES)

    @field_validator("focus_time_minutes")
    @classmethod
    def clamp_focus(cls, v: int) -> int:
        return clamp(v, *FOCUS_MINUTES_RANGE)

    @field_validator("break_time_minutes")
    @classmethod
    def clamp_break(cls, v: int) -> int:
        return clamp(v, *BREAK_MINUTES_RANGE)

    @property
    def focus_seconds(self) -> int:
        return self.focus_time_minutes * 60

    @property
    def break_seconds(self) -> int:
        return self.break_time_minutes * 60

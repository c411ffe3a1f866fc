"""Focus history record."""

import json
from dataclasses import dataclass
from datetime import date, datetime


@dataclass(frozen=True)
class FocusRecord:
    """Minutes of focus credited to the moment a focus session started."""

    date: datetime
    focus_minutes: int

    def __post_init__(self):
        if self.focus_minutes < 0:
            raise ValueError("focus_minutes must be non-negative")

    @property
    def day(self) -> date:
        """Calendar-day this record counts towards."""
        return self.date.date()

    def to_dict(self) -> dict:
        """Convert to the persisted mapping (epoch millis + camelCase key)."""
        return {
            "date": round(self.date.timestamp() * 1000),
            "focusMinutes": self.focus_minutes,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "FocusRecord":
        """Create from the persisted mapping.

        Raises ValueError, KeyError or TypeError on malformed input.
        """
        millis = data["date"]
        minutes = data["focusMinutes"]
        if isinstance(millis, bool) or not isinstance(millis, int):
            raise TypeError(f"date must be epoch millis, got {millis!r}")
        if isinstance(minutes, bool) or not isinstance(minutes, int):
            raise TypeError(f"focusMinutes must be an integer, got {minutes!r}")
        return cls(date=datetime.fromtimestamp(millis / 1000), focus_minutes=minutes)

    def to_json(self) -> str:
        return json.dumps(self.to_dict())

    @classmethod
    def from_json(cls, raw: str) -> "FocusRecord":
        return cls.from_dict(json.loads(raw))

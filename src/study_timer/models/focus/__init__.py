"""Focus mode - interval timer and focus history."""

from .history import HistoryStore
from .keyboard import KeyboardHandler
from .record import FocusRecord
from .timer import IntervalTimer, Phase, TimerState
from .ui import ClockDisplay, render_month_calendar

__all__ = [
    "FocusRecord",
    "HistoryStore",
    "IntervalTimer",
    "KeyboardHandler",
    "Phase",
    "TimerState",
    "ClockDisplay",
    "render_month_calendar",
]

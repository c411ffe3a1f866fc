"""Focus/break interval timer.

The timer is a two-phase state machine (focus, break) crossed with
running/paused. It is driven from outside: something calls ``tick()`` once a
second. Focus seconds accumulate while running in the focus phase and are
flushed into whole-minute ``FocusRecord`` objects when the focus phase ends,
is paused, reset, or torn down.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Literal

from study_timer.utils.logger import get_logger
from study_timer.utils.ui.formatters import format_countdown

from .record import FocusRecord

Phase = Literal["focus", "break"]

RecordSink = Callable[[FocusRecord], Awaitable[None]]
StateListener = Callable[["TimerState"], None]

SECONDS_PER_MINUTE = 60


@dataclass(frozen=True)
class TimerState:
    """Immutable snapshot of the interval timer."""

    phase: Phase
    remaining_seconds: int
    total_seconds: int
    is_running: bool = False
    elapsed_focus_seconds: int = 0
    focus_started_at: datetime | None = None

    @property
    def is_break(self) -> bool:
        return self.phase == "break"

    @property
    def progress(self) -> float:
        """Fraction of the current phase still remaining (1.0 = untouched)."""
        return self.remaining_seconds / self.total_seconds

    @property
    def is_visible(self) -> bool:
        """Whether a countdown is in progress and worth showing."""
        return self.is_running or self.remaining_seconds < self.total_seconds

    def format_remaining(self) -> str:
        return format_countdown(self.remaining_seconds)


def _check_duration(name: str, seconds: int) -> int:
    if seconds <= 0:
        raise ValueError(f"{name} must be positive, got {seconds}")
    return seconds


class IntervalTimer:
    """Alternates focus and break countdowns and records focused minutes."""

    def __init__(
        self,
        focus_seconds: int,
        break_seconds: int,
        sink: RecordSink,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self._focus_seconds = _check_duration("focus_seconds", focus_seconds)
        self._break_seconds = _check_duration("break_seconds", break_seconds)
        self._sink = sink
        self._clock = clock
        self._listeners: list[StateListener] = []
        self._logger = get_logger("timer")
        self._state = TimerState(
            phase="focus",
            remaining_seconds=focus_seconds,
            total_seconds=focus_seconds,
        )

    @property
    def state(self) -> TimerState:
        return self._state

    @property
    def focus_seconds(self) -> int:
        return self._focus_seconds

    @property
    def break_seconds(self) -> int:
        return self._break_seconds

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """Register *listener* for every new snapshot. Returns an unsubscribe callable."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _set_state(self, **changes) -> None:
        self._state = replace(self._state, **changes)
        for listener in list(self._listeners):
            listener(self._state)

    def configure(self, focus_seconds: int, break_seconds: int) -> None:
        """Change the durations used by the next phase transition."""
        self._focus_seconds = _check_duration("focus_seconds", focus_seconds)
        self._break_seconds = _check_duration("break_seconds", break_seconds)

    def start(self) -> None:
        if self._state.is_running:
            return
        if self._state.phase == "focus":
            self._set_state(is_running=True, focus_started_at=self._clock())
        else:
            self._set_state(is_running=True)

    async def pause(self) -> None:
        if not self._state.is_running:
            return
        if self._state.phase == "focus":
            await self.flush()
        self._set_state(is_running=False)

    async def toggle(self) -> None:
        """Start when paused, pause when running."""
        if self._state.is_running:
            await self.pause()
        else:
            self.start()

    async def reset(self, focus_seconds: int, break_seconds: int) -> None:
        """Flush any running focus session and rewind to a fresh focus phase."""
        self.configure(focus_seconds, break_seconds)
        if self._state.is_running and self._state.phase == "focus":
            await self.flush()
        self._set_state(
            phase="focus",
            remaining_seconds=focus_seconds,
            total_seconds=focus_seconds,
            is_running=False,
            elapsed_focus_seconds=0,
        )

    async def tick(self) -> None:
        """Advance the countdown by one second."""
        state = self._state
        if not state.is_running:
            return

        remaining = state.remaining_seconds - 1
        elapsed = state.elapsed_focus_seconds
        if state.phase == "focus":
            elapsed += 1

        if remaining > 0:
            self._set_state(remaining_seconds=remaining, elapsed_focus_seconds=elapsed)
            return

        if state.phase == "break":
            self._logger.info("break finished, starting focus phase")
            self._set_state(
                phase="focus",
                remaining_seconds=self._focus_seconds,
                total_seconds=self._focus_seconds,
                elapsed_focus_seconds=elapsed,
                focus_started_at=self._clock(),
            )
        else:
            self._state = replace(state, remaining_seconds=0, elapsed_focus_seconds=elapsed)
            await self.flush()
            self._logger.info("focus finished, starting break phase")
            self._set_state(
                phase="break",
                remaining_seconds=self._break_seconds,
                total_seconds=self._break_seconds,
            )

    async def flush(self) -> FocusRecord | None:
        """Emit accumulated focus time as a record and zero the accumulator.

        Only whole minutes are recorded; a session shorter than a minute
        produces no record and the sub-minute remainder is dropped.
        """
        elapsed = self._state.elapsed_focus_seconds
        record = None
        minutes = elapsed // SECONDS_PER_MINUTE
        if minutes > 0:
            record = FocusRecord(
                date=self._state.focus_started_at or self._clock(),
                focus_minutes=minutes,
            )
            self._logger.info(
                "recording %d focus minutes (%ds elapsed)", minutes, elapsed
            )
            await self._sink(record)
        elif elapsed:
            self._logger.debug("discarding %ds of focus (under a minute)", elapsed)
        self._set_state(elapsed_focus_seconds=0)
        return record

    async def dispose(self) -> None:
        """Tear down, flushing a running focus session first."""
        if self._state.is_running and self._state.phase == "focus":
            await self.flush()
        self._set_state(is_running=False)
        self._listeners.clear()

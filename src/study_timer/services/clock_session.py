"""Clock session: wires settings, history and the interval timer together.

A session owns the single recurring tick. ``close()`` cancels the tick and
then disposes the timer so a running focus session is flushed to history
before the process exits.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from datetime import datetime

from study_timer.models.focus.history import HistoryStore
from study_timer.models.focus.timer import IntervalTimer, StateListener, TimerState
from study_timer.models.settings import AppSettings
from study_timer.services.settings_service import SettingsService
from study_timer.utils.logger import get_logger

TICK_INTERVAL = 1.0


class ClockSession:
    """One foreground run of the clock screen."""

    def __init__(
        self,
        settings_service: SettingsService,
        history: HistoryStore,
        clock: Callable[[], datetime] = datetime.now,
        tick_interval: float = TICK_INTERVAL,
    ):
        self.settings_service = settings_service
        self.history = history
        self.clock = clock
        self.tick_interval = tick_interval
        self.settings = AppSettings()
        self._timer: IntervalTimer | None = None
        self._tick_task: asyncio.Task | None = None
        self._logger = get_logger("session")

    @property
    def timer(self) -> IntervalTimer:
        assert self._timer is not None, "ClockSession.open() must be awaited first"
        return self._timer

    @property
    def state(self) -> TimerState:
        return self.timer.state

    @property
    def is_ticking(self) -> bool:
        return self._tick_task is not None and not self._tick_task.done()

    async def open(self) -> None:
        """Load persisted settings and history and build the timer."""
        self.settings = self.settings_service.load()
        await self.history.load()
        self._timer = IntervalTimer(
            focus_seconds=self.settings.focus_seconds,
            break_seconds=self.settings.break_seconds,
            sink=self.history.append,
            clock=self.clock,
        )
        self._logger.info(
            "session opened: focus=%dm break=%dm, %d records",
            self.settings.focus_time_minutes,
            self.settings.break_time_minutes,
            len(self.history.records),
        )

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        return self.timer.subscribe(listener)

    async def toggle(self) -> None:
        if not self.timer.state.is_running:
            await self.refresh_settings()
        await self.timer.toggle()

    async def reset(self) -> None:
        await self.refresh_settings()
        await self.timer.reset(self.settings.focus_seconds, self.settings.break_seconds)

    async def refresh_settings(self) -> None:
        """Pick up settings saved since the session opened (``settings set``).

        A stopped timer is reset so the new focus duration shows at once;
        a running one picks the durations up at its next transition.
        """
        self.settings_service.preferences.reload()
        previous, self.settings = self.settings, self.settings_service.load()

        if (
            previous.focus_time_minutes == self.settings.focus_time_minutes
            and previous.break_time_minutes == self.settings.break_time_minutes
        ):
            return

        self._logger.info(
            "settings changed: focus=%dm break=%dm",
            self.settings.focus_time_minutes,
            self.settings.break_time_minutes,
        )
        if self.timer.state.is_running:
            self.timer.configure(self.settings.focus_seconds, self.settings.break_seconds)
        else:
            await self.timer.reset(self.settings.focus_seconds, self.settings.break_seconds)

    def focus_minutes_today(self) -> int:
        return self.history.minutes_for_date(self.clock())

    async def _tick_loop(self) -> None:
        while True:
            await asyncio.sleep(self.tick_interval)
            await self.timer.tick()

    def start_ticking(self) -> None:
        if self.is_ticking:
            return
        self._tick_task = asyncio.create_task(self._tick_loop())

    async def stop_ticking(self) -> None:
        if self._tick_task is None:
            return
        task, self._tick_task = self._tick_task, None
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass

    async def close(self) -> None:
        """Cancel the tick, then flush and dispose the timer."""
        await self.stop_ticking()
        if self._timer is not None:
            await self._timer.dispose()
        self._logger.info("session closed")

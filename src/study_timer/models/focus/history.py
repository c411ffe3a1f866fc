"""Focus history: an append-only log of focus records in the preferences store."""

from __future__ import annotations

import calendar
from collections import defaultdict
from datetime import date, datetime
from json import JSONDecodeError

from study_timer.services.preferences import PreferencesStore
from study_timer.utils.logger import get_logger

from .record import FocusRecord

HISTORY_KEY = "focus_history"


def _as_day(value: date | datetime) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


class HistoryStore:
    """Keeps focus records in memory and mirrors them to the preferences store.

    Every append rewrites the whole list under ``key``.
    """

    def __init__(self, preferences: PreferencesStore, key: str = HISTORY_KEY):
        self.preferences = preferences
        self.key = key
        self._records: list[FocusRecord] = []
        self._logger = get_logger("history")

    @property
    def records(self) -> tuple[FocusRecord, ...]:
        return tuple(self._records)

    async def load(self) -> None:
        """Load persisted records, replacing whatever is in memory.

        A single malformed entry invalidates the whole history, which then
        starts empty.
        """
        raw_entries = self.preferences.get_string_list(self.key)
        if raw_entries is None:
            if self.preferences.contains(self.key):
                self._logger.warning(
                    "focus history under %r is not a list of strings", self.key
                )
            self._records = []
            return

        try:
            self._records = [FocusRecord.from_json(raw) for raw in raw_entries]
        except (JSONDecodeError, ValueError, KeyError, TypeError) as e:
            self._logger.warning(
                "discarding unreadable focus history (%d entries): %s",
                len(raw_entries),
                e,
            )
            self._records = []
        else:
            self._logger.debug("loaded %d focus records", len(self._records))

    async def save(self) -> None:
        """Persist the full log."""
        self.preferences.set_string_list(
            self.key, [record.to_json() for record in self._records]
        )

    async def append(self, record: FocusRecord) -> None:
        self._records.append(record)
        try:
            await self.save()
        except OSError as e:
            self._logger.error("failed to persist focus history: %s", e)

    def minutes_for_date(self, day: date | datetime) -> int:
        """Total focus minutes recorded on the calendar-day of *day*."""
        target = _as_day(day)
        return sum(
            record.focus_minutes for record in self._records if record.day == target
        )

    def grouped_by_day(self) -> dict[date, list[FocusRecord]]:
        """Records bucketed by calendar-day, in append order within each day."""
        groups: dict[date, list[FocusRecord]] = defaultdict(list)
        for record in self._records:
            groups[record.day].append(record)
        return dict(groups)

    def month_totals(self, year: int, month: int) -> dict[date, int]:
        """Minutes per day for the days of a month that have history."""
        _, last_day = calendar.monthrange(year, month)
        first, last = date(year, month, 1), date(year, month, last_day)
        return {
            day: sum(record.focus_minutes for record in records)
            for day, records in sorted(self.grouped_by_day().items())
            if first <= day <= last
        }

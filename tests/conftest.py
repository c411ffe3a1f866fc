"""Shared test fixtures and configuration.

Provides infrastructure to isolate tests from real filesystem state.
"""

from __future__ import annotations

import logging
import logging.handlers
from datetime import datetime, timedelta
from unittest.mock import patch

import pytest

from study_timer.services.preferences import PreferencesStore


# ---------------------------------------------------------------------------
# Filesystem isolation
# ---------------------------------------------------------------------------


def _drop_file_handlers() -> None:
    logger = logging.getLogger("study_timer")
    for handler in list(logger.handlers):
        if isinstance(handler, logging.handlers.RotatingFileHandler):
            logger.removeHandler(handler)
            handler.close()


@pytest.fixture(autouse=True)
def isolated_dirs(tmp_path):
    """Point platformdirs at *tmp_path* and reset cached singletons.

    Keeps the log file and preferences of every test inside its own
    temporary directory.
    """
    import study_timer.utils.logger as logger_mod
    from study_timer.services.preferences import get_preferences
    from study_timer.services.settings_service import get_settings_service

    logger_mod._logger = None
    _drop_file_handlers()
    get_preferences.cache_clear()
    get_settings_service.cache_clear()

    log_dir = str(tmp_path / "logs")
    data_dir = str(tmp_path / "data")
    with patch("study_timer.utils.logger.user_log_dir", return_value=log_dir):
        with patch("study_timer.services.preferences.user_data_dir", return_value=data_dir):
            yield tmp_path

    get_preferences.cache_clear()
    get_settings_service.cache_clear()
    _drop_file_handlers()
    logger_mod._logger = None


@pytest.fixture()
def prefs(tmp_path) -> PreferencesStore:
    """PreferencesStore backed by a temporary directory."""
    return PreferencesStore(data_dir=tmp_path / "prefs")


# ---------------------------------------------------------------------------
# Controllable clock
# ---------------------------------------------------------------------------


class FakeClock:
    """Callable clock that only moves when told to."""

    def __init__(self, start: datetime | None = None):
        self.now = start or datetime(2024, 3, 14, 9, 0, 0)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: int = 1) -> None:
        self.now += timedelta(seconds=seconds)


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()

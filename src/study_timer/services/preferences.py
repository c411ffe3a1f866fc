"""Flat key-value preferences persisted as a single JSON file.

Values are ints or lists of strings. Reads of a missing key, or of
a key holding the wrong type, return ``None`` so callers can substitute a
default.
"""

from __future__ import annotations

import json
from functools import lru_cache
from json import JSONDecodeError
from pathlib import Path
from typing import Any

from platformdirs import user_data_dir

from study_timer.utils.logger import get_logger

PREFERENCES_FILE = "preferences.json"


class PreferencesStore:
    """Key-value store backed by ``preferences.json``."""

    def __init__(self, data_dir: Path | None = None):
        if data_dir is None:
            data_dir = Path(user_data_dir("study_timer"))

        self.data_dir = data_dir
        self.data_dir.mkdir(parents=True, exist_ok=True)
        self.path = self.data_dir / PREFERENCES_FILE
        self._data: dict[str, Any] | None = None
        self._logger = get_logger("preferences")

    @property
    def data(self) -> dict[str, Any]:
        if self._data is None:
            self._data = self._read()
        return self._data

    def _read(self) -> dict[str, Any]:
        if not self.path.exists():
            return {}

        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, JSONDecodeError, UnicodeDecodeError) as e:
            self._logger.warning("ignoring unreadable preferences %s: %s", self.path, e)
            return {}

        if not isinstance(data, dict):
            self._logger.warning("ignoring preferences %s: not a JSON object", self.path)
            return {}
        return data

    def _write(self, key: str, value: Any) -> None:
        # Merge into the file as it is now, not the cached copy
        self._data = self._read()
        self._data[key] = value
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(self._data, f, indent=2)

    def reload(self) -> None:
        """Drop the cached contents so the next read hits the file."""
        self._data = None

    def contains(self, key: str) -> bool:
        return key in self.data

    def get_int(self, key: str) -> int | None:
        value = self.data.get(key)
        if isinstance(value, bool) or not isinstance(value, int):
            return None
        return value

    def set_int(self, key: str, value: int) -> None:
        self._write(key, int(value))

    def get_string_list(self, key: str) -> list[str] | None:
        value = self.data.get(key)
        if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
            return None
        return list(value)

    def set_string_list(self, key: str, values: list[str]) -> None:
        self._write(key, list(values))


@lru_cache(maxsize=1)
def get_preferences() -> PreferencesStore:
    """Get a cached PreferencesStore instance."""
    return PreferencesStore()

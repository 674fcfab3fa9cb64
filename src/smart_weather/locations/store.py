"""Key-value persistence port with in-memory and JSON-file backends."""

from __future__ import annotations

import json
import os
from abc import ABC, abstractmethod
from pathlib import Path

from ..exceptions import MalformedPersistedState, PersistenceError

RECENT_LOCATIONS_KEY = "smartWeather_recentLocations"
SAVED_LOCATIONS_KEY = "smartWeather_savedLocations"
PREFERENCES_KEY = "smartWeather_preferences"


class KeyValueStore(ABC):
    """String blobs keyed by name, owned by the caller's UI layer."""

    @abstractmethod
    def get(self, key: str) -> str | None:
        """Return the stored blob, or None when absent."""

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Replace the stored blob."""


class InMemoryKeyValueStore(KeyValueStore):
    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value


class JsonFileKeyValueStore(KeyValueStore):
    """All keys live in one JSON object file, rewritten atomically on set."""

    def __init__(self, path: Path) -> None:
        self.path = path

    def get(self, key: str) -> str | None:
        value = self._read_all().get(key)
        if value is None:
            return None
        if not isinstance(value, str):
            raise MalformedPersistedState(f"Value for {key!r} in {self.path} is not a string.")
        return value

    def set(self, key: str, value: str) -> None:
        try:
            data = self._read_all()
        except MalformedPersistedState:
            data = {}
        data[key] = value

        tmp_path = self.path.with_name(f"{self.path.name}.tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with tmp_path.open("w", encoding="utf-8") as fh:
                json.dump(data, fh, ensure_ascii=False, indent=2)
                fh.write("\n")
            os.replace(tmp_path, self.path)
        except OSError as exc:
            raise PersistenceError(f"Failed writing state file {self.path}: {exc}") from exc

    def _read_all(self) -> dict[str, object]:
        if not self.path.exists():
            return {}
        try:
            payload = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            raise MalformedPersistedState(f"Cannot read state file {self.path}: {exc}") from exc
        if not isinstance(payload, dict):
            raise MalformedPersistedState(f"State file {self.path} is not a JSON object.")
        return payload

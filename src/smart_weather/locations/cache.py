"""Bounded, coordinate-deduplicated cache of recently viewed locations."""

from __future__ import annotations

import logging

from pydantic import TypeAdapter, ValidationError

from ..exceptions import MalformedPersistedState
from .models import RecentLocation
from .store import RECENT_LOCATIONS_KEY, KeyValueStore

RECENT_LOCATIONS_CAPACITY = 5

_LOCATIONS_ADAPTER = TypeAdapter(list[RecentLocation])


class RecentLocationCache:
    """Most-recent-first locations, capped at five entries.

    Recency is insertion order: upserting a coordinate that is already cached
    leaves the sequence untouched rather than moving it to the front.
    """

    def __init__(
        self,
        store: KeyValueStore,
        *,
        key: str = RECENT_LOCATIONS_KEY,
        logger: logging.Logger | None = None,
    ) -> None:
        self.store = store
        self.key = key
        self.logger = logger or logging.getLogger("smart_weather.locations.cache")
        self._entries: list[RecentLocation] = []
        self.load()

    def load(self) -> list[RecentLocation]:
        """Reload from the store; unreadable state resets to empty."""
        try:
            blob = self.store.get(self.key)
            entries = _LOCATIONS_ADAPTER.validate_json(blob) if blob else []
        except (MalformedPersistedState, ValidationError, ValueError) as exc:
            self.logger.warning("Resetting recent locations after unreadable state: %s", exc)
            entries = []
        self._entries = entries[:RECENT_LOCATIONS_CAPACITY]
        return self.list()

    def list(self) -> list[RecentLocation]:
        return list(self._entries)

    def upsert(self, location: RecentLocation) -> list[RecentLocation]:
        """Prepend a new coordinate and evict past capacity; known ones are a no-op."""
        if any(entry.key == location.key for entry in self._entries):
            return self.list()

        self._entries = [location, *self._entries][:RECENT_LOCATIONS_CAPACITY]
        self.store.set(self.key, _LOCATIONS_ADAPTER.dump_json(self._entries).decode("utf-8"))
        return self.list()

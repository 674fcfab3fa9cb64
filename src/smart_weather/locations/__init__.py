"""Persisted location and preference state behind a key-value port."""

from .models import Preferences, RecentLocation
from .store import (
    PREFERENCES_KEY,
    RECENT_LOCATIONS_KEY,
    SAVED_LOCATIONS_KEY,
    InMemoryKeyValueStore,
    JsonFileKeyValueStore,
    KeyValueStore,
)
from .cache import RECENT_LOCATIONS_CAPACITY, RecentLocationCache
from .profile import ProfileStore, enabled_personas, summary_text

__all__ = [
    "InMemoryKeyValueStore",
    "JsonFileKeyValueStore",
    "KeyValueStore",
    "PREFERENCES_KEY",
    "Preferences",
    "ProfileStore",
    "RECENT_LOCATIONS_CAPACITY",
    "RECENT_LOCATIONS_KEY",
    "RecentLocation",
    "RecentLocationCache",
    "SAVED_LOCATIONS_KEY",
    "enabled_personas",
    "summary_text",
]

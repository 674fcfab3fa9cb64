"""Persisted preferences and user-saved location names."""

from __future__ import annotations

import logging
from typing import Literal

from pydantic import TypeAdapter, ValidationError

from ..advisory.models import Persona
from ..exceptions import MalformedPersistedState, SavedLocationError
from .models import Preferences
from .store import PREFERENCES_KEY, SAVED_LOCATIONS_KEY, KeyValueStore

PreferenceFlag = Literal[
    "alerts_enabled",
    "agriculture_mode",
    "travel_mode",
    "daily_summary",
    "severe_alerts",
]

_NAMES_ADAPTER = TypeAdapter(list[str])


class ProfileStore:
    """Reads and writes the preferences object and the saved-locations list."""

    def __init__(self, store: KeyValueStore, logger: logging.Logger | None = None) -> None:
        self.store = store
        self.logger = logger or logging.getLogger("smart_weather.locations.profile")

    def load_preferences(self) -> Preferences:
        try:
            blob = self.store.get(PREFERENCES_KEY)
            return Preferences.model_validate_json(blob) if blob else Preferences()
        except (MalformedPersistedState, ValidationError, ValueError) as exc:
            self.logger.warning("Resetting preferences after unreadable state: %s", exc)
            return Preferences()

    def save_preferences(self, preferences: Preferences) -> None:
        self.store.set(PREFERENCES_KEY, preferences.model_dump_json(by_alias=True))

    def toggle(self, flag: PreferenceFlag) -> Preferences:
        if flag not in Preferences.model_fields or flag == "unit":
            raise ValueError(f"Unknown preference flag {flag!r}.")
        current = self.load_preferences()
        updated = current.model_copy(update={flag: not getattr(current, flag)})
        self.save_preferences(updated)
        return updated

    def set_unit(self, unit: Literal["C", "F"]) -> Preferences:
        if unit not in ("C", "F"):
            raise ValueError(f"Unknown temperature unit {unit!r}; expected 'C' or 'F'.")
        updated = self.load_preferences().model_copy(update={"unit": unit})
        self.save_preferences(updated)
        return updated

    def saved_locations(self) -> list[str]:
        try:
            blob = self.store.get(SAVED_LOCATIONS_KEY)
            return _NAMES_ADAPTER.validate_json(blob) if blob else []
        except (MalformedPersistedState, ValidationError, ValueError) as exc:
            self.logger.warning("Resetting saved locations after unreadable state: %s", exc)
            return []

    def add_saved_location(self, name: str) -> list[str]:
        cleaned = name.strip()
        if not cleaned:
            raise SavedLocationError("Enter a location name")
        current = self.saved_locations()
        if any(existing.lower() == cleaned.lower() for existing in current):
            raise SavedLocationError("Location already saved")
        updated = [cleaned, *current]
        self._save_names(updated)
        return updated

    def remove_saved_location(self, name: str) -> list[str]:
        current = self.saved_locations()
        if name not in current:
            raise SavedLocationError(f"{name!r} is not a saved location")
        updated = [existing for existing in current if existing != name]
        self._save_names(updated)
        return updated

    def _save_names(self, names: list[str]) -> None:
        self.store.set(SAVED_LOCATIONS_KEY, _NAMES_ADAPTER.dump_json(names).decode("utf-8"))


def summary_text(preferences: Preferences) -> str:
    alerts = "On" if preferences.alerts_enabled else "Off"
    daily = "On" if preferences.daily_summary else "Off"
    return f"{preferences.unit} • Alerts: {alerts} • Daily Summary: {daily}"


def enabled_personas(preferences: Preferences) -> list[Persona]:
    """Personas switched on in preferences, general first."""
    personas: list[Persona] = []
    if preferences.travel_mode:
        personas.append(Persona.GENERAL)
    if preferences.agriculture_mode:
        personas.append(Persona.AGRICULTURE)
    return personas

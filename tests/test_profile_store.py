"""Tests for preferences and saved locations."""

from __future__ import annotations

import json

import pytest

from smart_weather.advisory.models import Persona
from smart_weather.exceptions import SavedLocationError
from smart_weather.locations.models import Preferences
from smart_weather.locations.profile import ProfileStore, enabled_personas, summary_text
from smart_weather.locations.store import (
    PREFERENCES_KEY,
    SAVED_LOCATIONS_KEY,
    InMemoryKeyValueStore,
)


def _profile(initial: dict[str, str] | None = None) -> tuple[ProfileStore, InMemoryKeyValueStore]:
    store = InMemoryKeyValueStore(initial)
    return ProfileStore(store), store


def test_default_preferences() -> None:
    profile, _ = _profile()
    prefs = profile.load_preferences()

    assert prefs == Preferences()
    assert prefs.unit == "C"
    assert prefs.alerts_enabled is True
    assert prefs.agriculture_mode is False
    assert prefs.travel_mode is True


def test_toggle_persists_with_camel_case_keys() -> None:
    profile, store = _profile()
    updated = profile.toggle("agriculture_mode")

    assert updated.agriculture_mode is True
    raw = json.loads(store.get(PREFERENCES_KEY) or "{}")
    assert raw["agricultureMode"] is True
    assert raw["alertsEnabled"] is True
    assert profile.load_preferences().agriculture_mode is True


def test_toggle_rejects_unknown_flag() -> None:
    profile, store = _profile()
    with pytest.raises(ValueError):
        profile.toggle("unit")  # type: ignore[arg-type]
    assert store.get(PREFERENCES_KEY) is None


def test_set_unit() -> None:
    profile, _ = _profile()
    assert profile.set_unit("F").unit == "F"
    assert profile.load_preferences().unit == "F"
    with pytest.raises(ValueError):
        profile.set_unit("K")  # type: ignore[arg-type]


def test_corrupt_preferences_fall_back_to_defaults() -> None:
    profile, _ = _profile({PREFERENCES_KEY: "{oops"})
    assert profile.load_preferences() == Preferences()


def test_add_saved_location_trims_and_puts_newest_first() -> None:
    profile, _ = _profile()
    profile.add_saved_location("Colombo")
    names = profile.add_saved_location("  Kandy  ")

    assert names == ["Kandy", "Colombo"]
    assert profile.saved_locations() == ["Kandy", "Colombo"]


def test_add_saved_location_rejects_blank_and_duplicates() -> None:
    profile, _ = _profile()
    profile.add_saved_location("Galle")

    with pytest.raises(SavedLocationError, match="Enter a location name"):
        profile.add_saved_location("   ")
    with pytest.raises(SavedLocationError, match="Location already saved"):
        profile.add_saved_location("gALLE")
    assert profile.saved_locations() == ["Galle"]


def test_remove_saved_location() -> None:
    profile, _ = _profile({SAVED_LOCATIONS_KEY: json.dumps(["Galle", "Kandy"])})

    assert profile.remove_saved_location("Galle") == ["Kandy"]
    with pytest.raises(SavedLocationError):
        profile.remove_saved_location("Galle")


def test_summary_text() -> None:
    prefs = Preferences(unit="F", alerts_enabled=False)
    assert summary_text(prefs) == "F • Alerts: Off • Daily Summary: On"


def test_enabled_personas_follow_mode_flags() -> None:
    assert enabled_personas(Preferences()) == [Persona.GENERAL]
    assert enabled_personas(Preferences(agriculture_mode=True)) == [
        Persona.GENERAL,
        Persona.AGRICULTURE,
    ]
    assert enabled_personas(Preferences(travel_mode=False)) == []

"""Single-line contextual hint from current conditions and search history."""

from __future__ import annotations

from collections.abc import Sequence

from ..locations.models import RecentLocation
from ..weather.models import WeatherSnapshot

HOT_HINT_C = 32.0
COOL_HINT_C = 22.0

SEARCH_HINT = (
    "Hint: Try searching your city (e.g., Colombo, Kandy, Galle) "
    "to see live weather on the map."
)
RAIN_HINT = (
    "It's raining here. Hint: Check coastal cities like Galle or Negombo "
    "to compare rainfall patterns."
)
HOT_HINT = (
    "It's quite hot! Hint: Try hill-country locations like Kandy or Nuwara Eliya "
    "for cooler weather."
)
COOL_HINT = (
    "Cool temperature here. Hint: Compare with dry-zone cities like Anuradhapura "
    "or Trincomalee."
)
RECENT_HINT_TEMPLATE = (
    "You recently checked {name}. Hint: You can tap on the map anywhere "
    "to instantly view weather there."
)
MAP_HINT = "Hint: Click anywhere on the map to get weather for that exact spot."


def build_hint(
    snapshot: WeatherSnapshot | None,
    recent_locations: Sequence[RecentLocation],
) -> str:
    """Return the first matching hint.

    A snapshot that is neither rainy, hot nor cool falls through to the
    history-based hints below.
    """
    if snapshot is None and not recent_locations:
        return SEARCH_HINT

    if snapshot is not None:
        if snapshot.condition_contains("rain"):
            return RAIN_HINT
        if snapshot.temperature is not None:
            if snapshot.temperature.value > HOT_HINT_C:
                return HOT_HINT
            if snapshot.temperature.value < COOL_HINT_C:
                return COOL_HINT

    if recent_locations:
        return RECENT_HINT_TEMPLATE.format(name=recent_locations[0].name)

    return MAP_HINT

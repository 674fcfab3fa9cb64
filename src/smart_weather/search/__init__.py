"""Autocomplete search coordination."""

from .coordinator import (
    LOCATION_NOT_FOUND,
    MIN_QUERY_LENGTH,
    SEARCH_FAILED,
    WEATHER_NOT_FOUND,
    AutocompleteCoordinator,
    SearchState,
)
from .sequencer import RequestSequencer

__all__ = [
    "AutocompleteCoordinator",
    "LOCATION_NOT_FOUND",
    "MIN_QUERY_LENGTH",
    "RequestSequencer",
    "SEARCH_FAILED",
    "SearchState",
    "WEATHER_NOT_FOUND",
]

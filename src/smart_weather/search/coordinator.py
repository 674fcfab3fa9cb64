"""Search-as-you-type geocoding and selection-to-weather sequencing."""

from __future__ import annotations

import logging
from typing import Literal

from ..advisory.engine import derive_advisories
from ..advisory.hints import build_hint
from ..advisory.models import AdvisoryItem, Persona, SoilMoistureEstimate
from ..advisory.soil import estimate_soil_moisture
from ..exceptions import PersistenceError, WeatherProviderError
from ..locations.cache import RecentLocationCache
from ..locations.models import RecentLocation
from ..weather.base import WeatherProvider
from ..weather.models import ForecastWindow, GeoSuggestion, WeatherSnapshot
from ..weather.normalize import normalize, normalize_forecast
from .sequencer import RequestSequencer

SearchState = Literal["idle", "pending", "resolved", "failed"]

MIN_QUERY_LENGTH = 3
DEFAULT_SUGGESTION_LIMIT = 5
DEFAULT_CENTER = (6.9271, 79.8612)

LOCATION_NOT_FOUND = "Location not found."
SEARCH_FAILED = "Failed to search location."
WEATHER_NOT_FOUND = "Weather data not found for this location."


class AutocompleteCoordinator:
    """Own the search box, its suggestions and the currently displayed weather.

    Geocode and weather responses carry sequence numbers; a response older
    than one already applied is dropped, so the last issued query wins.
    Nothing is retried automatically; `refresh()` is the user-triggered retry.
    """

    def __init__(
        self,
        provider: WeatherProvider,
        cache: RecentLocationCache,
        *,
        suggestion_limit: int = DEFAULT_SUGGESTION_LIMIT,
        center: tuple[float, float] = DEFAULT_CENTER,
        logger: logging.Logger | None = None,
    ) -> None:
        self.provider = provider
        self.cache = cache
        self.suggestion_limit = suggestion_limit
        self.logger = logger or logging.getLogger("smart_weather.search.coordinator")

        self.query = ""
        self.state: SearchState = "idle"
        self.suggestions: tuple[GeoSuggestion, ...] = ()
        self.center = center
        self.snapshot: WeatherSnapshot | None = None
        self.forecast: ForecastWindow | None = None
        self.error: str | None = None

        self._search_seq = RequestSequencer()
        self._weather_seq = RequestSequencer()

    async def on_query_changed(self, query: str) -> None:
        """Handle one keystroke's worth of query change."""
        self.query = query
        if len(query) < MIN_QUERY_LENGTH:
            self._clear_suggestions()
            return

        seq = self._search_seq.issue()
        self.state = "pending"
        try:
            results = await self.provider.geocode_search(query, self.suggestion_limit)
        except WeatherProviderError as exc:
            if not self._search_seq.accept(seq):
                return
            self.logger.warning(
                "Autocomplete lookup failed for %r: %s",
                query,
                exc,
                extra={"query": query, "seq": seq},
            )
            if seq != self._search_seq.issued:
                self.state = "pending"
                return
            self.suggestions = ()
            self.state = "failed"
            return

        if not self._search_seq.accept(seq):
            self.logger.debug(
                "Discarding stale suggestions for %r", query, extra={"query": query, "seq": seq}
            )
            return
        self.suggestions = tuple(GeoSuggestion.from_result(result) for result in results)
        self.state = "resolved" if seq == self._search_seq.issued else "pending"

    async def select(self, suggestion: GeoSuggestion) -> bool:
        self.query = suggestion.display_name
        self._clear_suggestions()
        return await self.select_coordinates(
            suggestion.lat, suggestion.lon, name=suggestion.display_name
        )

    async def submit(self) -> bool:
        """Form submit: take the first suggestion, else a single-result lookup."""
        if not self.query:
            return False
        if self.suggestions:
            return await self.select(self.suggestions[0])

        seq = self._search_seq.issue()
        self.state = "pending"
        try:
            results = await self.provider.geocode_search(self.query, 1)
        except WeatherProviderError as exc:
            if self._search_seq.accept(seq):
                self.logger.warning("Location search failed for %r: %s", self.query, exc)
                self.error = SEARCH_FAILED
                self.state = "failed"
            return False

        if not self._search_seq.accept(seq):
            return False
        if not results:
            self.suggestions = ()
            self.error = LOCATION_NOT_FOUND
            self.state = "failed"
            return False
        return await self.select(GeoSuggestion.from_result(results[0]))

    async def select_coordinates(
        self, lat: float, lon: float, *, name: str | None = None
    ) -> bool:
        """Move the map center and load weather there (map or recent-list click)."""
        self.center = (lat, lon)
        return await self._load_weather(lat, lon, fallback_name=name)

    async def refresh(self) -> bool:
        return await self._load_weather(*self.center)

    def recent_locations(self) -> list[RecentLocation]:
        return self.cache.list()

    def hint(self) -> str:
        return build_hint(self.snapshot, self.cache.list())

    def advisories(self, persona: Persona | str) -> list[AdvisoryItem]:
        return derive_advisories(persona, self.snapshot, self.forecast)

    def soil_moisture(self) -> SoilMoistureEstimate:
        return estimate_soil_moisture(self.snapshot, self.forecast)

    def _clear_suggestions(self) -> None:
        self._search_seq.invalidate()
        self.suggestions = ()
        self.state = "idle"

    async def _load_weather(
        self, lat: float, lon: float, *, fallback_name: str | None = None
    ) -> bool:
        seq = self._weather_seq.issue()
        try:
            raw_current = await self.provider.fetch_current_weather(lat, lon)
            raw_forecast = await self.provider.fetch_forecast(lat, lon)
            snapshot = normalize(raw_current)
            forecast = normalize_forecast(raw_forecast)
        except WeatherProviderError as exc:
            if self._weather_seq.accept(seq):
                self.logger.warning(
                    "Weather load failed for (%s, %s): %s",
                    lat,
                    lon,
                    exc,
                    extra={"lat": lat, "lon": lon, "seq": seq},
                )
                self.error = WEATHER_NOT_FOUND
            return False

        if not self._weather_seq.accept(seq):
            self.logger.debug(
                "Discarding stale weather for (%s, %s)",
                lat,
                lon,
                extra={"lat": lat, "lon": lon, "seq": seq},
            )
            return False

        self.snapshot = snapshot
        self.forecast = forecast
        self.error = None

        name = snapshot.location_name or fallback_name or f"{lat:.4f}, {lon:.4f}"
        try:
            self.cache.upsert(RecentLocation(name=name, lat=lat, lon=lon))
        except PersistenceError as exc:
            self.logger.error("Failed to persist recent location %r: %s", name, exc)
        return True

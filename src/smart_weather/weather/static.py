"""File-backed provider for offline runs against saved OpenWeather payloads."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from ..exceptions import ProviderUnavailable, WeatherProviderError
from .base import WeatherProvider
from .models import GeocodeResult


class StaticWeatherProvider(WeatherProvider):
    """Serves the same saved payloads for every coordinate."""

    provider_name = "static"

    def __init__(
        self,
        *,
        current: dict[str, Any] | None = None,
        forecast: list[dict[str, Any]] | None = None,
        geocode: list[GeocodeResult] | None = None,
    ) -> None:
        self.current = current
        self.forecast = forecast or []
        self.geocode = geocode or []

    @classmethod
    def from_files(
        cls,
        *,
        weather_file: Path | None = None,
        forecast_file: Path | None = None,
        geocode_file: Path | None = None,
    ) -> StaticWeatherProvider:
        current = _load_json(weather_file) if weather_file else None
        if current is not None and not isinstance(current, dict):
            raise WeatherProviderError(f"Weather file {weather_file} must hold a JSON object.")

        forecast: Any = _load_json(forecast_file) if forecast_file else []
        if isinstance(forecast, dict):
            forecast = forecast.get("list", [])
        if not isinstance(forecast, list):
            raise WeatherProviderError(f"Forecast file {forecast_file} must hold a JSON list.")

        raw_geocode = _load_json(geocode_file) if geocode_file else []
        try:
            geocode = [GeocodeResult.model_validate(item) for item in raw_geocode]
        except (TypeError, ValidationError) as exc:
            raise WeatherProviderError(f"Geocode file {geocode_file} is malformed: {exc}") from exc

        return cls(current=current, forecast=forecast, geocode=geocode)

    async def fetch_current_weather(self, lat: float, lon: float) -> dict[str, Any]:
        if self.current is None:
            raise ProviderUnavailable("No saved current-weather payload.", category="offline")
        return self.current

    async def fetch_forecast(self, lat: float, lon: float) -> list[dict[str, Any]]:
        return list(self.forecast)

    async def geocode_search(self, query: str, limit: int) -> list[GeocodeResult]:
        needle = query.strip().lower()
        hits = [result for result in self.geocode if needle in result.name.lower()]
        return hits[:limit]

    async def close(self) -> None:
        return None


def _load_json(path: Path) -> Any:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        raise WeatherProviderError(f"Failed reading {path}: {exc}") from exc

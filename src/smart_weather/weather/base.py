"""Provider-agnostic weather and geocoding interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from .models import GeocodeResult


class WeatherProvider(ABC):
    """Base contract for the weather/geocode collaborator."""

    async def __aenter__(self) -> WeatherProvider:
        return self

    async def __aexit__(self, exc_type: Any, exc: Any, exc_tb: Any) -> None:
        await self.close()

    @abstractmethod
    async def fetch_current_weather(self, lat: float, lon: float) -> dict[str, Any]:
        """Fetch a raw current-weather payload (Kelvin, meters, m/s, hPa)."""

    @abstractmethod
    async def fetch_forecast(self, lat: float, lon: float) -> list[dict[str, Any]]:
        """Fetch raw 3-hourly forecast entries, nearest first."""

    @abstractmethod
    async def geocode_search(self, query: str, limit: int) -> list[GeocodeResult]:
        """Resolve a free-text place query into at most `limit` hits."""

    @abstractmethod
    async def close(self) -> None:
        """Release provider resources."""

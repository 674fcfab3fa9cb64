"""OpenWeather (api.openweathermap.org) provider implementation."""

from __future__ import annotations

import logging
from typing import Any

import httpx
from pydantic import ValidationError

from ..config import Settings
from ..exceptions import ProviderUnavailable, WeatherProviderError
from ..redaction import redact_url, sanitize_for_logging, sanitize_text
from .base import WeatherProvider
from .models import GeocodeResult


class OpenWeatherProvider(WeatherProvider):
    """Fetches raw weather, forecast and geocoding payloads from OpenWeather.

    Requests are never retried here; a failure surfaces as
    `ProviderUnavailable` and the caller decides when to try again.
    """

    provider_name = "openweather"

    def __init__(
        self,
        settings: Settings,
        logger: logging.Logger,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.settings = settings
        self.logger = logger
        self._client = client or httpx.AsyncClient(
            base_url=str(settings.openweather_base_url),
            timeout=settings.weather_timeout_seconds,
            headers={"Accept": "application/json"},
        )

    async def close(self) -> None:
        await self._client.aclose()

    async def fetch_current_weather(self, lat: float, lon: float) -> dict[str, Any]:
        self._validate_coords(lat, lon)
        payload = await self._request_json(
            self.settings.openweather_weather_endpoint,
            params={"lat": lat, "lon": lon},
            context="current weather fetch",
        )
        if not isinstance(payload, dict):
            raise ProviderUnavailable(
                f"OpenWeather current weather returned unexpected payload type "
                f"{type(payload).__name__}.",
                category="malformed",
            )
        return payload

    async def fetch_forecast(self, lat: float, lon: float) -> list[dict[str, Any]]:
        self._validate_coords(lat, lon)
        payload = await self._request_json(
            self.settings.openweather_forecast_endpoint,
            params={"lat": lat, "lon": lon},
            context="forecast fetch",
        )
        entries = payload.get("list") if isinstance(payload, dict) else payload
        if not isinstance(entries, list):
            raise ProviderUnavailable(
                "OpenWeather forecast payload missing 'list' array.",
                category="malformed",
            )
        return [item for item in entries if isinstance(item, dict)]

    async def geocode_search(self, query: str, limit: int) -> list[GeocodeResult]:
        if not query.strip():
            raise WeatherProviderError("Geocode query must not be empty.")
        if limit <= 0:
            raise WeatherProviderError(f"Invalid geocode limit {limit}; expected > 0.")

        payload = await self._request_json(
            self.settings.openweather_geocode_endpoint,
            params={"q": query, "limit": limit},
            context="geocode search",
        )
        if not isinstance(payload, list):
            raise ProviderUnavailable(
                f"OpenWeather geocode returned unexpected payload type "
                f"{type(payload).__name__}.",
                category="malformed",
            )

        results: list[GeocodeResult] = []
        for item in payload:
            try:
                results.append(GeocodeResult.model_validate(item))
            except ValidationError:
                self.logger.warning("Skipping malformed geocode entry for query %r", query)
        return results

    @staticmethod
    def _validate_coords(lat: float, lon: float) -> None:
        if not (-90 <= lat <= 90):
            raise WeatherProviderError(f"Invalid latitude {lat}; expected between -90 and 90.")
        if not (-180 <= lon <= 180):
            raise WeatherProviderError(f"Invalid longitude {lon}; expected between -180 and 180.")

    async def _request_json(self, endpoint: str, params: dict[str, Any], context: str) -> Any:
        query = {**params, "appid": self.settings.openweather_api_key}
        self.logger.debug(
            "OpenWeather %s request endpoint=%s params=%s",
            context,
            endpoint,
            sanitize_for_logging(query),
        )
        try:
            response = await self._client.get(endpoint, params=query)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            self.logger.warning(
                "OpenWeather %s failed (HTTP %d) url=%s",
                context,
                status,
                redact_url(exc.request.url),
                extra={"category": "http_status", "status_code": status},
            )
            raise ProviderUnavailable(
                f"OpenWeather {context} failed with status {status}: "
                f"{sanitize_text(exc.response.text[:300])}",
                category="http_status",
                status_code=status,
            ) from exc
        except httpx.HTTPError as exc:
            self.logger.warning(
                "OpenWeather %s request failed (%s)", context, type(exc).__name__
            )
            raise ProviderUnavailable(
                f"OpenWeather {context} request failed: {sanitize_text(str(exc))}",
                category="transport",
            ) from exc

        try:
            return response.json()
        except ValueError as exc:
            raise ProviderUnavailable(
                f"OpenWeather {context} returned non-JSON response.",
                category="malformed",
            ) from exc

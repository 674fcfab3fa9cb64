"""Tests for the OpenWeather provider request and error mapping."""

from __future__ import annotations

import logging
from types import SimpleNamespace
from typing import Any

import httpx
import pytest

from smart_weather.exceptions import ProviderUnavailable, WeatherProviderError
from smart_weather.weather.openweather import OpenWeatherProvider


def _make_settings(**overrides: Any) -> Any:
    defaults = {
        "openweather_api_key": "test-key-123",
        "openweather_base_url": "https://api.example.com",
        "openweather_weather_endpoint": "/data/2.5/weather",
        "openweather_forecast_endpoint": "/data/2.5/forecast",
        "openweather_geocode_endpoint": "/geo/1.0/direct",
        "weather_timeout_seconds": 5.0,
    }
    defaults.update(overrides)
    return SimpleNamespace(**defaults)


def _make_provider(handler: Any) -> OpenWeatherProvider:
    client = httpx.AsyncClient(
        base_url="https://api.example.com", transport=httpx.MockTransport(handler)
    )
    return OpenWeatherProvider(
        settings=_make_settings(),
        logger=logging.getLogger("test_openweather_provider"),
        client=client,
    )


@pytest.mark.asyncio
async def test_current_weather_sends_coordinates_and_key() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"name": "Colombo", "main": {"temp": 300.0}})

    async with _make_provider(handler) as provider:
        payload = await provider.fetch_current_weather(6.9271, 79.8612)

    assert payload["name"] == "Colombo"
    assert seen[0].url.path == "/data/2.5/weather"
    assert seen[0].url.params["lat"] == "6.9271"
    assert seen[0].url.params["lon"] == "79.8612"
    assert seen[0].url.params["appid"] == "test-key-123"


@pytest.mark.asyncio
async def test_forecast_unwraps_list_envelope() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"list": [{"dt": 1, "pop": 0.1}, "junk"]})

    async with _make_provider(handler) as provider:
        entries = await provider.fetch_forecast(0.0, 0.0)

    assert entries == [{"dt": 1, "pop": 0.1}]


@pytest.mark.asyncio
async def test_forecast_without_list_is_malformed() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"cod": "200"})

    async with _make_provider(handler) as provider:
        with pytest.raises(ProviderUnavailable) as excinfo:
            await provider.fetch_forecast(0.0, 0.0)

    assert excinfo.value.category == "malformed"


@pytest.mark.asyncio
async def test_geocode_search_parses_and_skips_bad_entries() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(
            200,
            json=[
                {"name": "Galle", "lat": 6.03, "lon": 80.21, "country": "LK"},
                {"name": "Broken"},
            ],
        )

    async with _make_provider(handler) as provider:
        results = await provider.geocode_search("Galle", 5)

    assert [result.name for result in results] == ["Galle"]
    assert results[0].state is None
    assert seen[0].url.path == "/geo/1.0/direct"
    assert seen[0].url.params["q"] == "Galle"
    assert seen[0].url.params["limit"] == "5"


@pytest.mark.asyncio
async def test_geocode_search_rejects_bad_input() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise AssertionError("no request expected")

    async with _make_provider(handler) as provider:
        with pytest.raises(WeatherProviderError):
            await provider.geocode_search("   ", 5)
        with pytest.raises(WeatherProviderError):
            await provider.geocode_search("Galle", 0)
        with pytest.raises(WeatherProviderError):
            await provider.fetch_current_weather(91.0, 0.0)


@pytest.mark.asyncio
async def test_http_status_error_is_redacted_and_categorized() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(401, text="Invalid API key appid=test-key-123")

    async with _make_provider(handler) as provider:
        with pytest.raises(ProviderUnavailable) as excinfo:
            await provider.fetch_current_weather(0.0, 0.0)

    assert excinfo.value.category == "http_status"
    assert excinfo.value.status_code == 401
    assert "test-key-123" not in str(excinfo.value)


@pytest.mark.asyncio
async def test_transport_error_is_not_retried() -> None:
    attempts = {"count": 0}

    def handler(request: httpx.Request) -> httpx.Response:
        attempts["count"] += 1
        raise httpx.ConnectError("connection refused", request=request)

    async with _make_provider(handler) as provider:
        with pytest.raises(ProviderUnavailable) as excinfo:
            await provider.fetch_current_weather(0.0, 0.0)

    assert excinfo.value.category == "transport"
    assert attempts["count"] == 1


@pytest.mark.asyncio
async def test_non_json_body_is_malformed() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="<html>oops</html>")

    async with _make_provider(handler) as provider:
        with pytest.raises(ProviderUnavailable) as excinfo:
            await provider.geocode_search("Galle", 1)

    assert excinfo.value.category == "malformed"


@pytest.mark.asyncio
async def test_request_debug_log_redacts_api_key(caplog: Any) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=[])

    with caplog.at_level(logging.DEBUG, logger="test_openweather_provider"):
        async with _make_provider(handler) as provider:
            await provider.geocode_search("Galle", 1)

    assert "geocode search" in caplog.text
    assert "test-key-123" not in caplog.text
    assert "[REDACTED]" in caplog.text

"""Tests for the file-backed offline provider."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from smart_weather.exceptions import ProviderUnavailable, WeatherProviderError
from smart_weather.weather.static import StaticWeatherProvider

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.mark.asyncio
async def test_from_files_loads_all_payloads() -> None:
    provider = StaticWeatherProvider.from_files(
        weather_file=FIXTURES / "colombo_current.json",
        forecast_file=FIXTURES / "colombo_forecast.json",
        geocode_file=FIXTURES / "geocode_results.json",
    )

    async with provider:
        current = await provider.fetch_current_weather(0.0, 0.0)
        forecast = await provider.fetch_forecast(0.0, 0.0)
        hits = await provider.geocode_search("KAN", 5)

    assert current["name"] == "Colombo"
    assert len(forecast) == 9
    assert [hit.name for hit in hits] == ["Kandy"]


@pytest.mark.asyncio
async def test_missing_current_payload_is_unavailable() -> None:
    provider = StaticWeatherProvider()

    with pytest.raises(ProviderUnavailable):
        await provider.fetch_current_weather(0.0, 0.0)
    assert await provider.fetch_forecast(0.0, 0.0) == []


def test_from_files_rejects_bad_files(tmp_path: Path) -> None:
    bad_forecast = tmp_path / "forecast.json"
    bad_forecast.write_text(json.dumps("nope"), encoding="utf-8")

    with pytest.raises(WeatherProviderError):
        StaticWeatherProvider.from_files(weather_file=tmp_path / "missing.json")
    with pytest.raises(WeatherProviderError):
        StaticWeatherProvider.from_files(forecast_file=bad_forecast)

"""Tests for the soil-moisture estimate."""

from __future__ import annotations

from typing import Any

import pytest

from smart_weather.advisory.soil import UNKNOWN_ESTIMATE, estimate_soil_moisture, soil_level
from smart_weather.weather.models import ForecastEntry, ForecastWindow, WeatherSnapshot


def _snapshot(**overrides: Any) -> WeatherSnapshot:
    return WeatherSnapshot(**{"humidity_pct": 60, "condition_main": "clouds", **overrides})


def _forecast(*pops: float) -> ForecastWindow:
    return ForecastWindow(
        entries=tuple(
            ForecastEntry(timestamp_epoch=index, label=str(index), precipitation_probability=pop)
            for index, pop in enumerate(pops)
        )
    )


def test_no_snapshot_is_unknown() -> None:
    assert estimate_soil_moisture(None) == UNKNOWN_ESTIMATE
    assert UNKNOWN_ESTIMATE.percent == 0
    assert UNKNOWN_ESTIMATE.level == "Unknown"


def test_humidity_is_clamped_into_base_range() -> None:
    assert estimate_soil_moisture(_snapshot(humidity_pct=10)).percent == 30
    assert estimate_soil_moisture(_snapshot(humidity_pct=99)).percent == 95
    assert estimate_soil_moisture(_snapshot(humidity_pct=None)).percent == 50


def test_rain_boost_then_forecast_boost_cap_at_100() -> None:
    estimate = estimate_soil_moisture(
        _snapshot(humidity_pct=84, condition_main="rain"), _forecast(0.9)
    )

    assert estimate.percent == 100
    assert estimate.level == "High"


def test_clear_sky_penalty() -> None:
    estimate = estimate_soil_moisture(_snapshot(humidity_pct=35, condition_main="clear"))

    assert estimate.percent == 25
    assert estimate.level == "Low"


def test_forecast_boost_requires_pop_above_half_in_next_24h() -> None:
    at_half = estimate_soil_moisture(_snapshot(), _forecast(0.5, 0.5))
    above = estimate_soil_moisture(_snapshot(), _forecast(0.1, 0.51))
    beyond_window = estimate_soil_moisture(_snapshot(), _forecast(*([0.0] * 8 + [0.9])))

    assert at_half.percent == 60
    assert above.percent == 70
    assert beyond_window.percent == 60


@pytest.mark.parametrize(
    ("percent", "level"),
    [(40, "Low"), (41, "Medium"), (74, "Medium"), (75, "High"), (0, "Low"), (100, "High")],
)
def test_soil_level_boundaries(percent: int, level: str) -> None:
    assert soil_level(percent) == level

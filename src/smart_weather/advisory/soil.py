"""Rule-based soil-moisture estimate from humidity, condition and forecast."""

from __future__ import annotations

from ..weather.models import ForecastWindow, WeatherSnapshot
from .models import SoilLevel, SoilMoistureEstimate

DEFAULT_HUMIDITY_PCT = 50
BASE_FLOOR_PCT = 30
BASE_CEILING_PCT = 95
RAIN_BOOST_PCT = 20
CLEAR_PENALTY_PCT = 10
FORECAST_BOOST_PCT = 10
FORECAST_RAIN_PROBABILITY = 0.5
HIGH_LEVEL_PCT = 75
LOW_LEVEL_PCT = 40

UNKNOWN_ESTIMATE = SoilMoistureEstimate(percent=0, level="Unknown")


def estimate_soil_moisture(
    snapshot: WeatherSnapshot | None,
    forecast: ForecastWindow | None = None,
) -> SoilMoistureEstimate:
    """Estimate soil moisture percent and level.

    Adjustments run in a fixed order (condition, then forecast boost) and
    each clamps before the next is applied.
    """
    if snapshot is None:
        return UNKNOWN_ESTIMATE

    humidity = snapshot.humidity_pct if snapshot.humidity_pct is not None else DEFAULT_HUMIDITY_PCT
    base: float = min(max(humidity, BASE_FLOOR_PCT), BASE_CEILING_PCT)

    if snapshot.condition_contains("rain"):
        base = min(base + RAIN_BOOST_PCT, 100)
    elif snapshot.condition_contains("clear", "sun"):
        base = max(base - CLEAR_PENALTY_PCT, 0)

    if forecast is not None and any(
        entry.precipitation_probability > FORECAST_RAIN_PROBABILITY
        for entry in forecast.next_24h
    ):
        base = min(base + FORECAST_BOOST_PCT, 100)

    percent = int(round(base))
    return SoilMoistureEstimate(percent=percent, level=soil_level(percent))


def soil_level(percent: int) -> SoilLevel:
    if percent >= HIGH_LEVEL_PCT:
        return "High"
    if percent <= LOW_LEVEL_PCT:
        return "Low"
    return "Medium"

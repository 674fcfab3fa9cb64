"""Normalize raw OpenWeather payloads into snapshots and forecast windows."""

from __future__ import annotations

import logging
import math
from datetime import UTC, datetime
from typing import Any

from ..exceptions import WeatherProviderError
from .models import Celsius, ForecastEntry, ForecastWindow, WeatherSnapshot

logger = logging.getLogger("smart_weather.weather.normalize")


def normalize(raw: dict[str, Any]) -> WeatherSnapshot:
    """Convert a raw current-weather payload (Kelvin, meters, m/s, hPa)."""
    if not isinstance(raw, dict):
        raise WeatherProviderError(
            f"Weather payload must be an object, got {type(raw).__name__}."
        )

    main = _as_dict(raw.get("main"))
    wind = _as_dict(raw.get("wind"))
    sys_block = _as_dict(raw.get("sys"))
    conditions = raw.get("weather")
    condition = conditions[0] if isinstance(conditions, list) and conditions else None
    condition = _as_dict(condition)

    visibility_m = _as_float(raw.get("visibility"))
    condition_main = _as_str(condition.get("main"))

    return WeatherSnapshot(
        temperature=_as_celsius(main.get("temp")),
        feels_like=_as_celsius(main.get("feels_like")),
        humidity_pct=_as_percent(main.get("humidity")),
        pressure_hpa=_as_int(main.get("pressure")),
        visibility_km=visibility_m / 1000 if visibility_m is not None else None,
        wind_speed_ms=_as_float(wind.get("speed")),
        condition_main=condition_main.lower() if condition_main else None,
        condition_description=_as_str(condition.get("description")),
        icon_code=_as_str(condition.get("icon")),
        location_name=_as_str(raw.get("name")),
        sunrise_epoch=_as_int(sys_block.get("sunrise")),
        sunset_epoch=_as_int(sys_block.get("sunset")),
    )


def normalize_forecast(raw: Any) -> ForecastWindow:
    """Convert raw forecast entries; accepts a bare list or a `{"list": [...]}` envelope."""
    if isinstance(raw, dict):
        raw = raw.get("list")
    if raw is None:
        return ForecastWindow()
    if not isinstance(raw, list):
        raise WeatherProviderError(
            f"Forecast payload must be a list, got {type(raw).__name__}."
        )

    entries: list[ForecastEntry] = []
    for item in raw:
        entry = _normalize_entry(item)
        if entry is None:
            logger.debug("Dropping forecast entry without a usable 'dt': %r", item)
            continue
        entries.append(entry)
    return ForecastWindow(entries=tuple(entries))


def _normalize_entry(item: Any) -> ForecastEntry | None:
    if not isinstance(item, dict):
        return None
    timestamp = _as_int(item.get("dt"))
    if timestamp is None:
        return None

    label = _as_str(item.get("dt_txt"))
    if label is None:
        label = datetime.fromtimestamp(timestamp, UTC).strftime("%Y-%m-%d %H:%M:%S")

    pop = _as_float(item.get("pop"))
    pop = 0.0 if pop is None else max(0.0, min(pop, 1.0))

    return ForecastEntry(
        timestamp_epoch=timestamp,
        label=label,
        temperature=_as_celsius(_as_dict(item.get("main")).get("temp")),
        precipitation_probability=pop,
    )


def _as_dict(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> str | None:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def _as_float(value: Any) -> float | None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    try:
        number = float(value)
    except OverflowError:
        return None
    return number if math.isfinite(number) else None


def _as_int(value: Any) -> int | None:
    number = _as_float(value)
    return int(number) if number is not None else None


def _as_percent(value: Any) -> int | None:
    number = _as_int(value)
    if number is None or not (0 <= number <= 100):
        return None
    return number


def _as_celsius(value: Any) -> Celsius | None:
    kelvin = _as_float(value)
    return Celsius.from_kelvin(kelvin) if kelvin is not None else None

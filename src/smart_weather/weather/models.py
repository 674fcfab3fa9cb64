"""Typed models for normalized weather snapshots, forecasts and geocoding."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

KELVIN_OFFSET = 273.15
FORECAST_WINDOW_SIZE = 8

TemperatureUnit = Literal["C", "F"]


class Celsius(BaseModel):
    """A temperature in degrees Celsius.

    Provider payloads arrive in Kelvin; the only way in from Kelvin is
    `from_kelvin`, so downstream threshold checks always compare Celsius.
    """

    model_config = ConfigDict(frozen=True)

    value: float

    @classmethod
    def from_kelvin(cls, kelvin: float) -> Celsius:
        return cls(value=kelvin - KELVIN_OFFSET)

    @property
    def fahrenheit(self) -> float:
        return self.value * 9.0 / 5.0 + 32.0

    def display(self, unit: TemperatureUnit = "C") -> str:
        """Format for display, rounded to one decimal place."""
        if unit == "F":
            return f"{self.fahrenheit:.1f}°F"
        return f"{self.value:.1f}°C"


class WeatherSnapshot(BaseModel):
    """Normalized, immutable point-in-time weather reading."""

    model_config = ConfigDict(frozen=True)

    temperature: Celsius | None = None
    feels_like: Celsius | None = None
    humidity_pct: int | None = Field(default=None, ge=0, le=100)
    pressure_hpa: int | None = None
    visibility_km: float | None = None
    wind_speed_ms: float | None = None
    condition_main: str | None = None
    condition_description: str | None = None
    icon_code: str | None = None
    location_name: str | None = None
    sunrise_epoch: int | None = None
    sunset_epoch: int | None = None

    def condition_contains(self, *keywords: str) -> bool:
        """True when the lowercased condition category contains any keyword."""
        if not self.condition_main:
            return False
        return any(keyword in self.condition_main for keyword in keywords)

    def display_temperature(self, unit: TemperatureUnit = "C") -> str:
        return self.temperature.display(unit) if self.temperature is not None else "-"


class ForecastEntry(BaseModel):
    """One 3-hour forecast step."""

    model_config = ConfigDict(frozen=True)

    timestamp_epoch: int
    label: str
    temperature: Celsius | None = None
    precipitation_probability: float = Field(default=0.0, ge=0.0, le=1.0)


class ForecastWindow(BaseModel):
    """Chronological forecast entries, nearest future first."""

    model_config = ConfigDict(frozen=True)

    entries: tuple[ForecastEntry, ...] = ()

    @property
    def next_24h(self) -> tuple[ForecastEntry, ...]:
        """The fixed first-8-entries slice consumed by the advisory engine."""
        return self.entries[:FORECAST_WINDOW_SIZE]

    def is_empty(self) -> bool:
        return not self.entries


class GeocodeResult(BaseModel):
    """Single geocoding hit from the provider."""

    name: str
    state: str | None = None
    country: str = ""
    lat: float
    lon: float


class GeoSuggestion(BaseModel):
    """Autocomplete suggestion shown to the user; never cached."""

    model_config = ConfigDict(frozen=True)

    display_name: str
    lat: float
    lon: float

    @classmethod
    def from_result(cls, result: GeocodeResult) -> GeoSuggestion:
        parts = [result.name]
        if result.state and result.state.strip():
            parts.append(result.state.strip())
        parts.append(result.country)
        return cls(display_name=", ".join(parts), lat=result.lat, lon=result.lon)

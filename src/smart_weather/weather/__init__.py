"""Weather provider integration and normalization."""

from .base import WeatherProvider
from .models import (
    Celsius,
    ForecastEntry,
    ForecastWindow,
    GeocodeResult,
    GeoSuggestion,
    WeatherSnapshot,
)
from .normalize import normalize, normalize_forecast
from .openweather import OpenWeatherProvider
from .static import StaticWeatherProvider

__all__ = [
    "Celsius",
    "ForecastEntry",
    "ForecastWindow",
    "GeoSuggestion",
    "GeocodeResult",
    "OpenWeatherProvider",
    "StaticWeatherProvider",
    "WeatherProvider",
    "WeatherSnapshot",
    "normalize",
    "normalize_forecast",
]

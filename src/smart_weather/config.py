"""Typed settings loader for the smart weather client."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

from pydantic import AnyUrl, Field, ValidationError, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import ConfigError


class Settings(BaseSettings):
    """Application settings loaded from environment variables and `.env`."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    app_env: Literal["dev", "staging", "prod"] = Field(default="dev", alias="APP_ENV")
    openweather_api_key: str = Field(alias="OPENWEATHER_API_KEY", repr=False)
    openweather_base_url: AnyUrl = Field(
        default="https://api.openweathermap.org",
        alias="OPENWEATHER_BASE_URL",
    )
    openweather_weather_endpoint: str = Field(
        default="/data/2.5/weather",
        alias="OPENWEATHER_WEATHER_ENDPOINT",
    )
    openweather_forecast_endpoint: str = Field(
        default="/data/2.5/forecast",
        alias="OPENWEATHER_FORECAST_ENDPOINT",
    )
    openweather_geocode_endpoint: str = Field(
        default="/geo/1.0/direct",
        alias="OPENWEATHER_GEOCODE_ENDPOINT",
    )
    weather_timeout_seconds: float = Field(default=15.0, alias="WEATHER_TIMEOUT_SECONDS")
    geocode_suggestion_limit: int = Field(default=5, alias="GEOCODE_SUGGESTION_LIMIT")

    default_lat: float | None = Field(default=6.9271, alias="DEFAULT_LAT")
    default_lon: float | None = Field(default=79.8612, alias="DEFAULT_LON")
    default_location_name: str = Field(default="Colombo", alias="DEFAULT_LOCATION_NAME")

    state_path: Path = Field(default=Path("./data/state.json"), alias="STATE_PATH")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        alias="LOG_LEVEL",
    )

    @field_validator("default_lat", "default_lon", mode="before")
    @classmethod
    def empty_string_to_none(cls, value: Any) -> Any:
        """Treat empty env-string values as unset optional coordinates."""
        if isinstance(value, str) and value.strip() == "":
            return None
        return value

    @field_validator("log_level", mode="before")
    @classmethod
    def upper_log_level(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().upper()
        return value

    @model_validator(mode="after")
    def validate_fields(self) -> Settings:
        """Validate endpoint shapes, limits and default coordinates."""
        if not self.openweather_api_key.strip():
            raise ValueError("OPENWEATHER_API_KEY must not be empty.")
        for alias, endpoint in (
            ("OPENWEATHER_WEATHER_ENDPOINT", self.openweather_weather_endpoint),
            ("OPENWEATHER_FORECAST_ENDPOINT", self.openweather_forecast_endpoint),
            ("OPENWEATHER_GEOCODE_ENDPOINT", self.openweather_geocode_endpoint),
        ):
            if not endpoint.startswith("/"):
                raise ValueError(f"{alias} must start with '/'.")
        if self.weather_timeout_seconds <= 0:
            raise ValueError("WEATHER_TIMEOUT_SECONDS must be > 0.")
        if not (1 <= self.geocode_suggestion_limit <= 5):
            raise ValueError("GEOCODE_SUGGESTION_LIMIT must be between 1 and 5.")

        has_default_lat = self.default_lat is not None
        has_default_lon = self.default_lon is not None
        if has_default_lat != has_default_lon:
            raise ValueError("DEFAULT_LAT and DEFAULT_LON must be set together.")
        if has_default_lat and not (-90 <= self.default_lat <= 90):
            raise ValueError("DEFAULT_LAT must be between -90 and 90.")
        if has_default_lon and not (-180 <= self.default_lon <= 180):
            raise ValueError("DEFAULT_LON must be between -180 and 180.")
        if not self.default_location_name.strip():
            raise ValueError("DEFAULT_LOCATION_NAME must not be empty.")
        return self

    def safe_summary(self) -> dict[str, Any]:
        """Return config summary safe for logging (no credentials)."""
        return {
            "app_env": self.app_env,
            "base_url": str(self.openweather_base_url),
            "weather_endpoint": self.openweather_weather_endpoint,
            "forecast_endpoint": self.openweather_forecast_endpoint,
            "geocode_endpoint": self.openweather_geocode_endpoint,
            "timeout_seconds": self.weather_timeout_seconds,
            "geocode_suggestion_limit": self.geocode_suggestion_limit,
            "default_location": self.default_location_name,
            "state_path": str(self.state_path),
        }


def load_settings() -> Settings:
    """Load and validate settings, raising ConfigError on failure."""
    try:
        settings = Settings()
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration: {exc}") from exc
    except OSError as exc:
        raise ConfigError(f"Failed reading environment/.env: {exc}") from exc

    try:
        settings.state_path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise ConfigError(
            f"Cannot create state directory for {settings.state_path}: {exc}"
        ) from exc
    return settings

"""Application exception classes."""


class ConfigError(Exception):
    """Raised when configuration is invalid or incomplete."""


class WeatherProviderError(Exception):
    """Raised when weather/geocode requests or normalization fail."""


class ProviderUnavailable(WeatherProviderError):
    """Raised for provider request failures with category/status metadata."""

    def __init__(
        self,
        message: str,
        *,
        category: str = "unknown",
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.category = category
        self.status_code = status_code


class MalformedPersistedState(Exception):
    """Raised when a persisted state blob cannot be decoded."""


class PersistenceError(Exception):
    """Raised when writing persisted state fails."""


class SavedLocationError(ValueError):
    """Raised when a saved-location edit is rejected."""

"""Domain-specific exceptions for POS Forecast.

This module defines custom exceptions that are part of the public API.
All exceptions inherit from PosForecastError for easy catching.
"""


class PosForecastError(Exception):
    """Base exception for all POS Forecast errors.

    Users can catch this exception to handle any forecasting error raised
    by the package. Errors from injected transaction readers are not wrapped.
    """

    pass


class ConfigError(PosForecastError):
    """Raised when there is a configuration error.

    This exception is raised when:
    - Invalid configuration values are provided (unknown timezone, empty windows)
    - Required configuration is missing
    """

    pass


class DataQualityError(PosForecastError):
    """Raised when input files fail validation.

    This exception is raised when:
    - Required columns are missing from a transactions CSV
    - A stores JSON file cannot be parsed
    """

    pass


class StoreNotFoundError(PosForecastError):
    """Raised when a store id is unknown to the store reader."""

    pass


class StoreLocationMissingError(PosForecastError):
    """Raised when a store has no latitude/longitude.

    The forecast pipeline does not run at all in this case. Callers should
    prompt the user to set the store location; retrying will not help.
    """

    def __init__(self, store_id: str | None = None) -> None:
        self.store_id = store_id
        label = f"Store '{store_id}'" if store_id else "Store"
        super().__init__(
            f"{label} has no location. Set the store latitude and longitude "
            "to enable weather-based forecasting."
        )


class WeatherAPIError(PosForecastError):
    """Raised when the weather provider cannot be reached or answers with an error.

    This exception is raised when:
    - The HTTP request fails (connection error, timeout)
    - The provider returns a non-2xx status
    - The response body is not valid JSON
    """

    pass


class WeatherDataError(WeatherAPIError):
    """Raised when the forecast response carries no daily weather data."""

    def __init__(self, message: str = "failed to fetch weather data") -> None:
        super().__init__(message)

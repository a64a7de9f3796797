"""Weather provider adapter and observation types."""

from pos_forecast.weather.client import OpenMeteoClient, parse_daily_payload
from pos_forecast.weather.codes import describe_weather_code, weather_condition
from pos_forecast.weather.types import WeatherObservation

__all__ = [
    "OpenMeteoClient",
    "WeatherObservation",
    "describe_weather_code",
    "parse_daily_payload",
    "weather_condition",
]

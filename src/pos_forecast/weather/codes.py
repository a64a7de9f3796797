"""WMO weather interpretation codes.

Descriptions follow the WMO table used by Open-Meteo. ``weather_condition``
buckets a code into the coarse classes the dashboard draws icons for.
"""

from __future__ import annotations

WEATHER_CODES = {
    0: "Clear sky",
    1: "Mainly clear",
    2: "Partly cloudy",
    3: "Overcast",
    45: "Fog",
    48: "Depositing rime fog",
    51: "Light drizzle",
    53: "Moderate drizzle",
    55: "Dense drizzle",
    56: "Light freezing drizzle",
    57: "Dense freezing drizzle",
    61: "Slight rain",
    63: "Moderate rain",
    65: "Heavy rain",
    66: "Light freezing rain",
    67: "Heavy freezing rain",
    71: "Slight snow",
    73: "Moderate snow",
    75: "Heavy snow",
    77: "Snow grains",
    80: "Slight rain showers",
    81: "Moderate rain showers",
    82: "Violent rain showers",
    85: "Slight snow showers",
    86: "Heavy snow showers",
    95: "Thunderstorm",
    96: "Thunderstorm with slight hail",
    99: "Thunderstorm with heavy hail",
}


def describe_weather_code(code: int) -> str:
    """Return the WMO description for ``code``, or "Unknown"."""
    return WEATHER_CODES.get(code, "Unknown")


def weather_condition(code: int) -> str:
    """Classify a weather code as "clear", "rain", "storm" or "cloudy"."""
    if code <= 3:
        return "clear"
    if 51 <= code <= 67:
        return "rain"
    if code >= 95:
        return "storm"
    return "cloudy"

"""Open-Meteo weather adapter.

Wraps the two read-only Open-Meteo queries the forecast needs, the
historical archive and the multi-day forecast, and normalizes their
parallel-array ``daily`` payloads into ``WeatherObservation`` records.

Environment (optional):
  OPEN_METEO_FORECAST_URL   forecast endpoint
  OPEN_METEO_ARCHIVE_URL    historical archive endpoint
  OPEN_METEO_TIMEOUT=30     seconds
  OPEN_METEO_RETRIES=0      transport retries (the pipeline itself never retries)
"""

from __future__ import annotations

import logging
import os
from datetime import date
from typing import Any

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from pos_forecast.config import DEFAULT_TIMEZONE
from pos_forecast.dates import parse_date
from pos_forecast.exceptions import WeatherAPIError, WeatherDataError
from pos_forecast.weather.types import WeatherObservation

logger = logging.getLogger(__name__)

# ------------------------- Config -------------------------
DEFAULT_FORECAST_URL = os.environ.get(
    "OPEN_METEO_FORECAST_URL", "https://api.open-meteo.com/v1/forecast"
)
DEFAULT_ARCHIVE_URL = os.environ.get(
    "OPEN_METEO_ARCHIVE_URL", "https://archive-api.open-meteo.com/v1/archive"
)
DEFAULT_TIMEOUT = float(os.environ.get("OPEN_METEO_TIMEOUT", "30"))
DEFAULT_RETRIES = int(os.environ.get("OPEN_METEO_RETRIES", "0"))

DAILY_FIELDS = ("temperature_2m_max", "precipitation_sum", "weather_code")


def make_session(retries: int = DEFAULT_RETRIES) -> requests.Session:
    """Create a requests Session for the weather provider.

    With the default of 0 retries a failed call surfaces immediately.

    Args:
        retries: Number of transport-level retry attempts.

    Returns:
        Configured requests.Session object.
    """
    s = requests.Session()
    s.headers.update({"User-Agent": "pos-forecast/0.1", "Accept": "application/json"})
    retry = Retry(
        total=retries,
        backoff_factor=0.8,
        status_forcelist=(429, 500, 502, 503, 504),
        allowed_methods=frozenset({"GET"}),
        raise_on_status=False,
    )
    adapter = HTTPAdapter(max_retries=retry)
    s.mount("http://", adapter)
    s.mount("https://", adapter)
    return s


def parse_daily_payload(payload: dict[str, Any]) -> list[WeatherObservation]:
    """Parse an Open-Meteo ``daily`` block into observations.

    The block holds parallel arrays ``time``, ``temperature_2m_max``,
    ``precipitation_sum`` and ``weather_code``. A day with a null (or
    missing) value in any array is skipped and becomes a gap.

    Args:
        payload: Decoded JSON response.

    Returns:
        Observations in the provider's order. Empty when there is no daily data.
    """
    daily = payload.get("daily") or {}
    times = daily.get("time") or []
    columns = [daily.get(name) or [] for name in DAILY_FIELDS]

    observations = []
    gaps = 0
    for i, day in enumerate(times):
        values = [col[i] if i < len(col) else None for col in columns]
        if day is None or any(v is None for v in values):
            gaps += 1
            continue
        temp_max, precipitation, code = values
        observations.append(
            WeatherObservation(
                date=parse_date(day),
                max_temperature_c=float(temp_max),
                precipitation_mm=float(precipitation),
                weather_code=int(code),
            )
        )

    if gaps:
        logger.debug(f"Skipped {gaps} days with incomplete weather values")
    return observations


class OpenMeteoClient:
    """Client for the Open-Meteo forecast and archive APIs.

    No API key is required; queries are keyed by latitude/longitude.

    Example:
        >>> client = OpenMeteoClient(timezone="Asia/Jakarta")
        >>> days = client.fetch_forecast_weather(-6.2, 106.8, days=14)
        >>> len(days)
        14
    """

    def __init__(
        self,
        timezone: str = DEFAULT_TIMEZONE,
        forecast_url: str = DEFAULT_FORECAST_URL,
        archive_url: str = DEFAULT_ARCHIVE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        session: requests.Session | None = None,
    ) -> None:
        self.timezone = timezone
        self.forecast_url = forecast_url
        self.archive_url = archive_url
        self.timeout = timeout
        self.session = session or make_session()

    def _get_json(self, url: str, params: dict[str, Any]) -> dict[str, Any]:
        logger.debug(f"GET {url} {params}")
        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
            response.raise_for_status()
            payload = response.json()
        except requests.exceptions.RequestException as e:
            raise WeatherAPIError(f"Weather request failed: {e}") from e
        except ValueError as e:
            raise WeatherAPIError(f"Weather response is not valid JSON: {e}") from e

        if not isinstance(payload, dict):
            raise WeatherAPIError("Weather response is not a JSON object")
        return payload

    def _base_params(self, latitude: float, longitude: float) -> dict[str, Any]:
        return {
            "latitude": latitude,
            "longitude": longitude,
            "daily": ",".join(DAILY_FIELDS),
            "timezone": self.timezone,
        }

    def fetch_historical_weather(
        self,
        latitude: float,
        longitude: float,
        start_date: date,
        end_date: date,
    ) -> dict[date, WeatherObservation]:
        """Fetch archived daily weather for ``start_date`` to ``end_date`` inclusive.

        An HTTP error status or a response without daily data is tolerated
        and yields an empty mapping; the engine then treats those days as
        neutral weather.

        Raises:
            WeatherAPIError: If the request cannot be completed (connection
                error, timeout) or the body is not JSON.
        """
        params = self._base_params(latitude, longitude)
        params["start_date"] = start_date.isoformat()
        params["end_date"] = end_date.isoformat()

        try:
            payload = self._get_json(self.archive_url, params)
        except WeatherAPIError as e:
            if not isinstance(e.__cause__, requests.exceptions.HTTPError):
                raise
            logger.warning(
                f"Historical weather request rejected ({e.__cause__}); "
                "backtest days will use neutral weather"
            )
            return {}

        if not payload.get("daily"):
            logger.warning(
                f"No historical weather returned for {start_date}..{end_date}; "
                "backtest days will use neutral weather"
            )
            return {}

        return {obs.date: obs for obs in parse_daily_payload(payload)}

    def fetch_forecast_weather(
        self,
        latitude: float,
        longitude: float,
        days: int = 14,
    ) -> list[WeatherObservation]:
        """Fetch the daily weather forecast for ``days`` days starting today.

        Raises:
            WeatherDataError: If the response carries no daily data.
            WeatherAPIError: If the request fails.
        """
        params = self._base_params(latitude, longitude)
        params["forecast_days"] = days

        payload = self._get_json(self.forecast_url, params)
        daily = payload.get("daily")
        if not daily or not daily.get("time"):
            raise WeatherDataError()

        return parse_daily_payload(payload)

"""Tests for the Open-Meteo weather adapter."""

import os
from datetime import date, timedelta
from typing import Any

import pytest
import requests

from pos_forecast.exceptions import WeatherAPIError, WeatherDataError
from pos_forecast.weather.client import OpenMeteoClient, parse_daily_payload
from pos_forecast.weather.codes import describe_weather_code, weather_condition


class FakeResponse:
    def __init__(self, payload: Any, status_code: int = 200) -> None:
        self.payload = payload
        self.status_code = status_code

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Server Error")

    def json(self) -> Any:
        if isinstance(self.payload, Exception):
            raise self.payload
        return self.payload


class FakeSession:
    """Records GET calls and replays a canned response."""

    def __init__(self, response: FakeResponse | Exception) -> None:
        self.response = response
        self.calls: list[tuple[str, dict[str, Any]]] = []

    def get(self, url: str, params: dict[str, Any], timeout: float) -> FakeResponse:
        self.calls.append((url, params))
        if isinstance(self.response, Exception):
            raise self.response
        return self.response


def daily_payload(days: list[str], temps, rain, codes) -> dict[str, Any]:
    return {
        "latitude": -6.2,
        "longitude": 106.8,
        "daily": {
            "time": days,
            "temperature_2m_max": temps,
            "precipitation_sum": rain,
            "weather_code": codes,
        },
    }


def test_parse_daily_payload() -> None:
    payload = daily_payload(
        ["2025-06-10", "2025-06-11"], [31.2, 33.5], [0.0, 12.4], [2, 63]
    )

    observations = parse_daily_payload(payload)

    assert [o.date for o in observations] == [date(2025, 6, 10), date(2025, 6, 11)]
    assert observations[1].max_temperature_c == 33.5
    assert observations[1].precipitation_mm == 12.4
    assert observations[1].weather_code == 63


def test_parse_daily_payload_skips_null_values() -> None:
    payload = daily_payload(
        ["2025-06-10", "2025-06-11", "2025-06-12"],
        [31.0, None, 30.0],
        [0.0, 1.0, 2.0],
        [1, 2],
    )

    observations = parse_daily_payload(payload)

    assert [o.date for o in observations] == [date(2025, 6, 10)]


def test_parse_daily_payload_without_daily() -> None:
    assert parse_daily_payload({"error": True}) == []


def test_fetch_forecast_weather_sends_expected_params() -> None:
    days = [(date(2025, 6, 10) + timedelta(days=i)).isoformat() for i in range(14)]
    session = FakeSession(
        FakeResponse(daily_payload(days, [30.0] * 14, [0.0] * 14, [1] * 14))
    )
    client = OpenMeteoClient(
        timezone="Asia/Jakarta", forecast_url="https://forecast.test", session=session
    )

    observations = client.fetch_forecast_weather(-6.2, 106.8, days=14)

    assert len(observations) == 14
    url, params = session.calls[0]
    assert url == "https://forecast.test"
    assert params["latitude"] == -6.2
    assert params["longitude"] == 106.8
    assert params["forecast_days"] == 14
    assert params["timezone"] == "Asia/Jakarta"
    assert params["daily"] == "temperature_2m_max,precipitation_sum,weather_code"


def test_fetch_forecast_weather_without_daily_raises() -> None:
    client = OpenMeteoClient(session=FakeSession(FakeResponse({"reason": "nope"})))

    with pytest.raises(WeatherDataError, match="failed to fetch weather data"):
        client.fetch_forecast_weather(-6.2, 106.8)


def test_fetch_historical_weather_returns_mapping() -> None:
    session = FakeSession(
        FakeResponse(daily_payload(["2025-06-08", "2025-06-09"], [29.0, 30.0], [7.0, 0.0], [61, 0]))
    )
    client = OpenMeteoClient(archive_url="https://archive.test", session=session)

    weather = client.fetch_historical_weather(-6.2, 106.8, date(2025, 6, 8), date(2025, 6, 9))

    assert set(weather) == {date(2025, 6, 8), date(2025, 6, 9)}
    assert weather[date(2025, 6, 8)].precipitation_mm == 7.0
    url, params = session.calls[0]
    assert url == "https://archive.test"
    assert params["start_date"] == "2025-06-08"
    assert params["end_date"] == "2025-06-09"


def test_fetch_historical_weather_tolerates_missing_daily() -> None:
    client = OpenMeteoClient(session=FakeSession(FakeResponse({})))
    assert client.fetch_historical_weather(0.5, 0.5, date(2025, 6, 1), date(2025, 6, 9)) == {}


def test_fetch_historical_weather_tolerates_http_error(caplog) -> None:
    rejected = FakeResponse({"error": True, "reason": "end_date out of range"}, status_code=400)
    client = OpenMeteoClient(session=FakeSession(rejected))

    with caplog.at_level("WARNING", logger="pos_forecast.weather.client"):
        weather = client.fetch_historical_weather(-6.2, 106.8, date(2025, 6, 1), date(2025, 6, 9))

    assert weather == {}
    assert "neutral weather" in caplog.text


def test_fetch_historical_weather_timeout_propagates() -> None:
    client = OpenMeteoClient(session=FakeSession(requests.Timeout("read timed out")))

    with pytest.raises(WeatherAPIError, match="read timed out"):
        client.fetch_historical_weather(-6.2, 106.8, date(2025, 6, 1), date(2025, 6, 9))


def test_http_error_raises_weather_api_error() -> None:
    client = OpenMeteoClient(session=FakeSession(FakeResponse({}, status_code=503)))

    with pytest.raises(WeatherAPIError, match="503"):
        client.fetch_forecast_weather(-6.2, 106.8)


def test_connection_error_raises_weather_api_error() -> None:
    client = OpenMeteoClient(session=FakeSession(requests.ConnectionError("connection refused")))

    with pytest.raises(WeatherAPIError, match="connection refused"):
        client.fetch_historical_weather(-6.2, 106.8, date(2025, 6, 1), date(2025, 6, 9))


def test_invalid_json_raises_weather_api_error() -> None:
    client = OpenMeteoClient(session=FakeSession(FakeResponse(ValueError("Expecting value"))))

    with pytest.raises(WeatherAPIError):
        client.fetch_forecast_weather(-6.2, 106.8)


def test_weather_codes() -> None:
    assert describe_weather_code(0) == "Clear sky"
    assert describe_weather_code(1234) == "Unknown"
    assert weather_condition(3) == "clear"
    assert weather_condition(63) == "rain"
    assert weather_condition(95) == "storm"
    assert weather_condition(45) == "cloudy"
    assert weather_condition(80) == "cloudy"


@pytest.mark.live
def test_open_meteo_live() -> None:
    """Live test: fetch real forecast and archive data for Jakarta."""
    if os.environ.get("POS_FORECAST_LIVE") != "1":
        pytest.skip("Live test skipped: set POS_FORECAST_LIVE=1 to call Open-Meteo")

    client = OpenMeteoClient(timezone="Asia/Jakarta")

    forecast = client.fetch_forecast_weather(-6.2, 106.8, days=14)
    assert len(forecast) == 14

    end = date.today() - timedelta(days=7)
    history = client.fetch_historical_weather(-6.2, 106.8, end - timedelta(days=6), end)
    assert len(history) > 0

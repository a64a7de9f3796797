"""Shared fixtures: fake collaborators and synthetic sales history."""

from datetime import date, datetime, time, timedelta, timezone

import pytest

from pos_forecast.config import ForecastConfig
from pos_forecast.exceptions import WeatherDataError
from pos_forecast.sales.transactions import Transaction
from pos_forecast.stores import StoreProfile
from pos_forecast.weather.types import WeatherObservation

# Tuesday
TODAY = date(2025, 6, 10)


class FakeTransactionReader:
    """In-memory transaction reader that records its calls."""

    def __init__(self, transactions: dict[str, list[Transaction]]) -> None:
        self.transactions = transactions
        self.calls: list[tuple[str, date, date]] = []

    def list_transactions(self, store_id: str, start: date, end: date) -> list[Transaction]:
        self.calls.append((store_id, start, end))
        return list(self.transactions.get(store_id, []))


class FakeStoreReader:
    def __init__(self, stores: dict[str, StoreProfile]) -> None:
        self.stores = stores

    def get_store(self, store_id: str) -> StoreProfile:
        return self.stores[store_id]


class FakeWeatherProvider:
    """Weather provider returning fixed observations."""

    def __init__(
        self,
        historical: dict[date, WeatherObservation] | None = None,
        forecast: list[WeatherObservation] | None = None,
        fail_forecast: bool = False,
    ) -> None:
        self.historical = historical or {}
        self.forecast = forecast or []
        self.fail_forecast = fail_forecast
        self.calls: list[str] = []

    def fetch_historical_weather(self, latitude, longitude, start_date, end_date):
        self.calls.append("historical")
        return dict(self.historical)

    def fetch_forecast_weather(self, latitude, longitude, days=14):
        self.calls.append("forecast")
        if self.fail_forecast:
            raise WeatherDataError()
        return list(self.forecast)


def sales_on_days(days: list[date], amount: float) -> list[Transaction]:
    """One transaction per day at 05:00 UTC (midday in Jakarta)."""
    return [
        Transaction(
            date=datetime.combine(d, time(5, 0), tzinfo=timezone.utc).isoformat(),
            total=amount,
            status="completed",
        )
        for d in days
    ]


def last_n_days(today: date, n: int) -> list[date]:
    return [today - timedelta(days=i) for i in range(n, 0, -1)]


def observation(
    day: date,
    temp: float = 28.0,
    rain: float = 0.0,
    code: int = 45,
) -> WeatherObservation:
    return WeatherObservation(
        date=day, max_temperature_c=temp, precipitation_mm=rain, weather_code=code
    )


@pytest.fixture
def today() -> date:
    return TODAY


@pytest.fixture
def config() -> ForecastConfig:
    return ForecastConfig(reporting_timezone="Asia/Jakarta")


@pytest.fixture
def flat_transactions(today: date) -> list[Transaction]:
    """100,000 in sales on each of the 30 days before today."""
    return sales_on_days(last_n_days(today, 30), 100_000)


@pytest.fixture
def store() -> StoreProfile:
    return StoreProfile(store_id="kopi-senja", name="Kopi Senja", latitude=-6.2, longitude=106.8)


@pytest.fixture
def store_without_location() -> StoreProfile:
    return StoreProfile(store_id="warung-baru", name="Warung Baru")


@pytest.fixture
def stores(store: StoreProfile, store_without_location: StoreProfile) -> FakeStoreReader:
    return FakeStoreReader(
        {store.store_id: store, store_without_location.store_id: store_without_location}
    )


@pytest.fixture
def neutral_forecast(today: date) -> list[WeatherObservation]:
    """14 forecast days with no weather effect (cloudy, dry, mild)."""
    return [observation(today + timedelta(days=i)) for i in range(14)]

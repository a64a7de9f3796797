"""Public API for the store forecast pipeline.

This module wires the collaborators together: it looks up the store,
fetches transactions and both weather series, and hands everything to the
pure ``compute_forecast``. It does NOT render anything or retry failed
calls; every error reaches the caller.
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from datetime import date, timedelta
from typing import Protocol

from pos_forecast.config import ForecastConfig
from pos_forecast.dates import reporting_today
from pos_forecast.exceptions import StoreLocationMissingError
from pos_forecast.forecasting.engine import compute_forecast
from pos_forecast.forecasting.types import ForecastResult
from pos_forecast.sales.aggregate import fetch_daily_sales
from pos_forecast.sales.transactions import TransactionReader
from pos_forecast.stores import StoreLocation, StoreProfile
from pos_forecast.weather.client import OpenMeteoClient
from pos_forecast.weather.types import WeatherObservation

logger = logging.getLogger(__name__)


class StoreReader(Protocol):
    """Store profile lookup."""

    def get_store(self, store_id: str) -> StoreProfile:
        ...


class WeatherProvider(Protocol):
    """The two read-only weather queries used by the pipeline."""

    def fetch_historical_weather(
        self, latitude: float, longitude: float, start_date: date, end_date: date
    ) -> dict[date, WeatherObservation]:
        ...

    def fetch_forecast_weather(
        self, latitude: float, longitude: float, days: int = 14
    ) -> list[WeatherObservation]:
        ...


def resolve_location(stores: StoreReader, store_id: str) -> StoreLocation:
    """Return the store's coordinates.

    Raises:
        StoreLocationMissingError: If the store has no latitude/longitude.
    """
    location = stores.get_store(store_id).location
    if location is None:
        raise StoreLocationMissingError(store_id)
    return location


def fetch_weather(
    weather: WeatherProvider,
    location: StoreLocation,
    today: date,
    config: ForecastConfig,
) -> tuple[dict[date, WeatherObservation], list[WeatherObservation]]:
    """Fetch historical and forecast weather concurrently.

    The historical window is the ``backtest_days`` days ending yesterday.
    Both calls are joined before returning; the first error raised wins.
    """
    start = today - timedelta(days=config.backtest_days)
    end = today - timedelta(days=1)

    with ThreadPoolExecutor(max_workers=2, thread_name_prefix="weather") as pool:
        historical_future = pool.submit(
            weather.fetch_historical_weather,
            location.latitude,
            location.longitude,
            start,
            end,
        )
        forecast_future = pool.submit(
            weather.fetch_forecast_weather,
            location.latitude,
            location.longitude,
            config.forecast_days,
        )
        forecast_weather = forecast_future.result()
        historical_weather = historical_future.result()

    return historical_weather, forecast_weather


def run_store_forecast(
    store_id: str,
    transactions: TransactionReader,
    stores: StoreReader,
    weather: WeatherProvider | None = None,
    today: date | None = None,
    config: ForecastConfig | None = None,
) -> ForecastResult:
    """Run the full forecast pipeline for one store.

    Steps: resolve location, fetch and aggregate transactions, fetch both
    weather series, compute backtest, forecast and insights.

    Args:
        store_id: Store to forecast.
        transactions: Transaction reader.
        stores: Store reader providing coordinates.
        weather: Weather provider. Defaults to an OpenMeteoClient in the
            reporting timezone.
        today: Current reporting day. Defaults to today in the reporting timezone.
        config: ForecastConfig. If None, uses defaults.

    Returns:
        ForecastResult for the store.

    Raises:
        ConfigError: If ``config`` fails validation.
        StoreLocationMissingError: If the store has no coordinates. Nothing is
            fetched in that case.
        WeatherDataError: If the weather forecast carries no daily data.
        WeatherAPIError: If a weather request fails.
    """
    if config is None:
        config = ForecastConfig()
    config.validate()
    if today is None:
        today = reporting_today(config.reporting_timezone)
    if weather is None:
        weather = OpenMeteoClient(timezone=config.reporting_timezone)

    location = resolve_location(stores, store_id)
    logger.info(f"Running forecast for store {store_id} as of {today}")

    daily_sales = fetch_daily_sales(transactions, store_id, today, config)
    historical_weather, forecast_weather = fetch_weather(weather, location, today, config)

    return compute_forecast(
        daily_sales,
        location,
        historical_weather,
        forecast_weather,
        today,
        config,
    )


class ForecastRunTracker:
    """Track which forecast run is current.

    Each ``start()`` supersedes every earlier run. A run may only publish
    its result while it is still current, so a slow run for a previously
    selected store never overwrites the newer one.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._current = 0
        self._result: ForecastResult | None = None

    def start(self) -> int:
        """Begin a new run and return its token."""
        with self._lock:
            self._current += 1
            return self._current

    def is_current(self, token: int) -> bool:
        with self._lock:
            return token == self._current

    def publish(self, token: int, result: ForecastResult) -> bool:
        """Store ``result`` if ``token`` is still current.

        Returns:
            True if the result was stored, False if the run was superseded.
        """
        with self._lock:
            if token != self._current:
                return False
            self._result = result
            return True

    @property
    def latest(self) -> ForecastResult | None:
        """Most recently published result, or None."""
        with self._lock:
            return self._result


class ForecastService:
    """Runs store forecasts on demand and discards results of superseded runs.

    Example:
        >>> service = ForecastService(transactions, stores)
        >>> result = service.refresh("kopi-senja")
        >>> result is None or result is service.latest
        True
    """

    def __init__(
        self,
        transactions: TransactionReader,
        stores: StoreReader,
        weather: WeatherProvider | None = None,
        config: ForecastConfig | None = None,
    ) -> None:
        self.transactions = transactions
        self.stores = stores
        self.config = config if config is not None else ForecastConfig()
        self.config.validate()
        self.weather = weather or OpenMeteoClient(timezone=self.config.reporting_timezone)
        self.tracker = ForecastRunTracker()

    @property
    def latest(self) -> ForecastResult | None:
        return self.tracker.latest

    def refresh(self, store_id: str, today: date | None = None) -> ForecastResult | None:
        """Run a forecast for ``store_id`` and publish it if still current.

        Returns:
            The result, or None when a newer ``refresh`` started before this
            one finished. Errors of a superseded run are not raised either.
        """
        token = self.tracker.start()
        config = self.config
        if today is None:
            today = reporting_today(config.reporting_timezone)

        try:
            location = resolve_location(self.stores, store_id)
            daily_sales = fetch_daily_sales(self.transactions, store_id, today, config)
            if not self.tracker.is_current(token):
                logger.info(f"Forecast run {token} for store {store_id} superseded, discarding")
                return None

            historical_weather, forecast_weather = fetch_weather(
                self.weather, location, today, config
            )
            if not self.tracker.is_current(token):
                logger.info(f"Forecast run {token} for store {store_id} superseded, discarding")
                return None

            result = compute_forecast(
                daily_sales, location, historical_weather, forecast_weather, today, config
            )
        except Exception:
            if not self.tracker.is_current(token):
                logger.info(f"Forecast run {token} for store {store_id} failed after being superseded")
                return None
            raise

        if not self.tracker.publish(token, result):
            logger.info(f"Forecast run {token} for store {store_id} superseded, discarding")
            return None
        return result

"""POS Forecast - weather-aware daily sales forecasting for POS stores.

This package fuses a store's transaction history with historical and
forecast weather to backtest a simple sales heuristic and to project the
next two weeks of sales:

- **Sales**: transactions aggregated into a dense daily series
- **Weather**: Open-Meteo archive and forecast, normalized per day
- **Forecasting**: baseline, weather/weekend multipliers, insights

Module Structure:
    pos_forecast.sales: Transaction readers and daily aggregation
    pos_forecast.weather: Open-Meteo adapter and weather codes
    pos_forecast.forecasting: Engine, insights and orchestration
    pos_forecast.stores: Store registry and locations
    pos_forecast.config: ForecastConfig

Quick Start:
    >>> from pos_forecast import ForecastConfig, StoreRegistry
    >>> from pos_forecast.forecasting import run_store_forecast
    >>> from pos_forecast.sales import CsvTransactionReader
    >>>
    >>> config = ForecastConfig(reporting_timezone="Asia/Jakarta")
    >>> result = run_store_forecast(
    ...     "kopi-senja",
    ...     transactions=CsvTransactionReader("transactions.csv"),
    ...     stores=StoreRegistry.from_json("stores.json"),
    ...     config=config,
    ... )
    >>> result.metadata["projected_total"]
"""

__version__ = "0.1.0"

from pos_forecast.config import ForecastConfig
from pos_forecast.exceptions import (
    ConfigError,
    DataQualityError,
    PosForecastError,
    StoreLocationMissingError,
    StoreNotFoundError,
    WeatherAPIError,
    WeatherDataError,
)
from pos_forecast.stores import StoreLocation, StoreProfile, StoreRegistry

__all__ = [
    "ConfigError",
    "DataQualityError",
    "ForecastConfig",
    "PosForecastError",
    "StoreLocation",
    "StoreLocationMissingError",
    "StoreNotFoundError",
    "StoreProfile",
    "StoreRegistry",
    "WeatherAPIError",
    "WeatherDataError",
    "__version__",
]

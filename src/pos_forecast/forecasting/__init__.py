"""Weather-aware sales forecasting module.

This module backtests a closed-form heuristic against the last 60 days of
sales and projects the next 14 days, annotated with insights.

Example:
    >>> from pos_forecast.forecasting import run_store_forecast
    >>> from pos_forecast.sales import CsvTransactionReader
    >>> from pos_forecast.stores import StoreRegistry
    >>>
    >>> result = run_store_forecast(
    ...     "kopi-senja",
    ...     transactions=CsvTransactionReader("transactions.csv"),
    ...     stores=StoreRegistry.from_json("stores.json"),
    ... )
    >>> result.to_frame().tail(14)          # forecast points
    >>> [i.message for i in result.insights]

"""

from pos_forecast.forecasting.api import (
    ForecastRunTracker,
    ForecastService,
    run_store_forecast,
)
from pos_forecast.forecasting.baseline import average_sales_before
from pos_forecast.forecasting.engine import (
    compute_forecast,
    day_multiplier,
    predict_sales,
    weather_multiplier,
)
from pos_forecast.forecasting.insights import generate_insights
from pos_forecast.forecasting.types import (
    BacktestSummary,
    ForecastPoint,
    ForecastResult,
    Insight,
)

__all__ = [
    "BacktestSummary",
    "ForecastPoint",
    "ForecastResult",
    "ForecastRunTracker",
    "ForecastService",
    "Insight",
    "average_sales_before",
    "compute_forecast",
    "day_multiplier",
    "generate_insights",
    "predict_sales",
    "run_store_forecast",
    "weather_multiplier",
]

"""Weather-adjusted sales forecast and backtest.

This module is the pure core of the package: given the aggregated daily
sales, the store location and both weather series, it predicts every day of
the backtest window and of the forward window with the same formula::

    predicted = round(baseline * weather_multiplier * weekend_factor)

It does NOT fetch data, read files or keep state between calls, so two
calls with identical inputs return identical results.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping, Sequence
from datetime import date, timedelta

import numpy as np
import pandas as pd

from pos_forecast.config import ForecastConfig
from pos_forecast.dates import day_range, is_weekend
from pos_forecast.exceptions import StoreLocationMissingError
from pos_forecast.forecasting.baseline import average_sales_before
from pos_forecast.forecasting.insights import generate_insights, projected_total
from pos_forecast.forecasting.types import BacktestSummary, ForecastPoint, ForecastResult
from pos_forecast.stores import StoreLocation
from pos_forecast.weather.types import WeatherObservation

logger = logging.getLogger(__name__)


def weather_multiplier(
    observation: WeatherObservation | None,
    config: ForecastConfig | None = None,
) -> float:
    """Return the weather factor for a day, before the weekend adjustment.

    The first matching rule wins: rain, then heat, then clear sky. Days
    without an observation are neutral.
    """
    if config is None:
        config = ForecastConfig()
    if observation is None:
        return 1.0

    if observation.precipitation_mm > config.rain_threshold_mm:
        return config.rain_factor
    if observation.max_temperature_c > config.heat_threshold_c:
        return config.heat_factor
    if observation.weather_code <= config.clear_code_max:
        return config.clear_factor
    return 1.0


def day_multiplier(
    day: date,
    observation: WeatherObservation | None,
    config: ForecastConfig | None = None,
) -> float:
    """Weather factor compounded with the weekend factor on Saturday and Sunday."""
    if config is None:
        config = ForecastConfig()

    multiplier = weather_multiplier(observation, config)
    if is_weekend(day):
        multiplier *= config.weekend_factor
    return multiplier


def predict_sales(baseline: float, multiplier: float) -> int:
    """Round ``baseline * multiplier`` half up to a whole currency unit, never below 0."""
    return max(0, math.floor(baseline * multiplier + 0.5))


def run_backtest(
    daily_sales: pd.Series,
    historical_weather: Mapping[date, WeatherObservation],
    today: date,
    config: ForecastConfig | None = None,
) -> list[ForecastPoint]:
    """Predict each of the ``backtest_days`` days before ``today`` and pair it with actuals.

    The baseline is recomputed for every day from the days preceding it.
    """
    if config is None:
        config = ForecastConfig()

    start = today - timedelta(days=config.backtest_days)
    points = []
    for day in day_range(start, today - timedelta(days=1)):
        baseline = average_sales_before(daily_sales, day, config.baseline_window)
        multiplier = day_multiplier(day, historical_weather.get(day), config)
        actual = float(daily_sales.get(pd.Timestamp(day), 0.0))
        points.append(
            ForecastPoint(
                date=day,
                actual_sales=actual,
                predicted_sales=predict_sales(baseline, multiplier),
                kind="historical",
            )
        )

    missing_weather = sum(1 for p in points if p.date not in historical_weather)
    if missing_weather:
        logger.debug(f"{missing_weather} backtest days without weather, treated as neutral")
    return points


def run_forward_forecast(
    daily_sales: pd.Series,
    forecast_weather: Sequence[WeatherObservation],
    today: date,
    config: ForecastConfig | None = None,
) -> tuple[list[ForecastPoint], float]:
    """Predict ``forecast_days`` days starting with ``today``.

    Unlike the backtest, the baseline is computed once, from the days before
    ``today``, and reused for every forecast day.

    Returns:
        Tuple of (forecast points, baseline used).
    """
    if config is None:
        config = ForecastConfig()

    baseline = average_sales_before(daily_sales, today, config.baseline_window)
    weather_by_date = {w.date: w for w in forecast_weather}

    points = []
    missing_days = []
    for day in day_range(today, today + timedelta(days=config.forecast_days - 1)):
        observation = weather_by_date.get(day)
        if observation is None:
            missing_days.append(day)
        points.append(
            ForecastPoint(
                date=day,
                actual_sales=None,
                predicted_sales=predict_sales(
                    baseline, day_multiplier(day, observation, config)
                ),
                kind="forecast",
                weather=observation,
            )
        )

    if missing_days:
        logger.warning(
            f"No forecast weather for {len(missing_days)} of {config.forecast_days} days "
            f"(first {missing_days[0]}); those days use neutral weather"
        )
    return points, baseline


def summarize_backtest(points: Sequence[ForecastPoint]) -> BacktestSummary:
    """Compute MAPE and accuracy over historical points with actual sales > 0."""
    historical = [p for p in points if p.kind == "historical"]
    actual = np.array([p.actual_sales or 0.0 for p in historical], dtype=float)
    predicted = np.array([p.predicted_sales for p in historical], dtype=float)

    mask = actual > 0
    if not mask.any():
        return BacktestSummary(mape=None, accuracy=0.0, evaluated_days=0)

    mape = float(np.mean(np.abs(actual[mask] - predicted[mask]) / actual[mask]) * 100)
    return BacktestSummary(
        mape=mape,
        accuracy=max(0.0, 100 - mape),
        evaluated_days=int(mask.sum()),
    )


def compute_forecast(
    daily_sales: pd.Series,
    location: StoreLocation | None,
    historical_weather: Mapping[date, WeatherObservation],
    forecast_weather: Sequence[WeatherObservation],
    today: date,
    config: ForecastConfig | None = None,
) -> ForecastResult:
    """Run the backtest and the forward forecast and derive insights.

    Args:
        daily_sales: Dense daily series from ``build_daily_sales``, covering at
            least the backtest window and the baseline window before it.
        location: Store coordinates; the forecast is meaningless without them.
        historical_weather: Observations by date for the backtest window. Gaps
            are treated as neutral weather.
        forecast_weather: Forecast observations starting ``today``.
        today: Current reporting day.
        config: Windows, thresholds and factors. Defaults to ForecastConfig().

    Returns:
        ForecastResult with backtest points followed by forecast points.

    Raises:
        StoreLocationMissingError: If ``location`` is None.
    """
    if location is None:
        raise StoreLocationMissingError()
    if config is None:
        config = ForecastConfig()

    backtest_points = run_backtest(daily_sales, historical_weather, today, config)
    forecast_points, baseline = run_forward_forecast(daily_sales, forecast_weather, today, config)
    points = backtest_points + forecast_points

    insights = generate_insights(forecast_weather, points, config)
    summary = summarize_backtest(backtest_points)

    total = projected_total(points)
    recent_actual = sum(p.actual_sales or 0.0 for p in backtest_points[-config.forecast_days :])
    trend = "up" if total >= recent_actual else "down"

    logger.info(
        f"Forecast computed: baseline={baseline:.2f}, projected_total={total}, "
        f"backtest_accuracy={summary.accuracy:.1f}%"
    )

    return ForecastResult(
        points=points,
        weather=list(forecast_weather),
        insights=insights,
        backtest=summary,
        metadata={
            "today": today,
            "location": location,
            "baseline": baseline,
            "backtest_start": backtest_points[0].date,
            "forecast_end": forecast_points[-1].date,
            "forecast_days": config.forecast_days,
            "projected_total": total,
            "recent_actual_total": recent_actual,
            "trend": trend,
        },
    )

"""Qualitative insights from the 14-day forecast.

Rules are independent; each is evaluated on every run. Warning and
opportunity insights come first in evaluation order, the projected total
always comes last.
"""

from __future__ import annotations

from collections.abc import Sequence

from pos_forecast.config import ForecastConfig
from pos_forecast.forecasting.formatting import format_currency
from pos_forecast.forecasting.types import ForecastPoint, Insight
from pos_forecast.weather.types import WeatherObservation


def count_rainy_days(weather: Sequence[WeatherObservation], threshold_mm: float) -> int:
    return sum(1 for w in weather if w.precipitation_mm > threshold_mm)


def count_hot_days(weather: Sequence[WeatherObservation], threshold_c: float) -> int:
    return sum(1 for w in weather if w.max_temperature_c > threshold_c)


def projected_total(points: Sequence[ForecastPoint]) -> int:
    """Sum of predicted sales over forecast-kind points."""
    return sum(p.predicted_sales for p in points if p.kind == "forecast")


def generate_insights(
    weather: Sequence[WeatherObservation],
    points: Sequence[ForecastPoint],
    config: ForecastConfig | None = None,
) -> list[Insight]:
    """Derive insights from the forecast weather and predicted totals.

    Args:
        weather: Forecast weather observations (the forward window).
        points: Forecast output; only forecast-kind points are summed.
        config: Thresholds and currency symbol. Defaults to ForecastConfig().

    Returns:
        Zero or more warning/opportunity insights followed by one info insight.
    """
    if config is None:
        config = ForecastConfig()

    insights: list[Insight] = []
    horizon = config.forecast_days

    rainy_days = count_rainy_days(weather, config.rain_threshold_mm)
    if rainy_days > config.insight_day_threshold:
        insights.append(
            Insight(
                category="warning",
                message=(
                    f"{rainy_days} rainy days expected in the next {horizon} days. "
                    "Consider stocking umbrellas or promoting delivery."
                ),
            )
        )

    hot_days = count_hot_days(weather, config.hot_day_threshold_c)
    if hot_days > config.insight_day_threshold:
        insights.append(
            Insight(
                category="opportunity",
                message=(
                    f"Hot weather ahead ({hot_days} days above "
                    f"{config.hot_day_threshold_c:g}°C). Increase cold beverage stock."
                ),
            )
        )

    total = projected_total(points)
    insights.append(
        Insight(
            category="info",
            message=(
                f"Projected sales for the next {horizon} days: "
                f"{format_currency(total, config.currency_symbol)}"
            ),
        )
    )

    return insights

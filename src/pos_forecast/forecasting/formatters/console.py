"""Console output formatting utilities."""

from __future__ import annotations

import re

from pos_forecast.forecasting.formatting import (
    format_amount,
    format_currency,
    format_date_short,
    format_day_name,
)
from pos_forecast.forecasting.types import ForecastResult
from pos_forecast.weather.codes import weather_condition


def sanitize_for_console(text: str) -> str:
    """Replace non-ASCII characters so the text prints on any console encoding.

    Args:
        text: Text that may contain symbols such as '°'

    Returns:
        Sanitized text safe for console output
    """
    text = text.replace("°", " ")
    return re.sub(r"[^\x00-\x7F]+", "", text)


def format_forecast_for_console(result: ForecastResult, currency_symbol: str = "Rp") -> str:
    """Build a human-readable summary of a forecast run.

    Args:
        result: ForecastResult from run_store_forecast or compute_forecast
        currency_symbol: Prefix for money amounts

    Returns:
        Human-readable text string for console output
    """
    if not result.points:
        return "No forecast available."

    forecast_points = result.forecast_points
    lines = []
    lines.append(f"Sales Forecast - Next {len(forecast_points)} Days")
    lines.append("=" * 60)

    for point in forecast_points:
        day = f"{format_day_name(point.date):<7} {format_date_short(point.date):<7}"
        value = format_amount(point.predicted_sales)
        if point.weather is not None:
            w = point.weather
            weather = (
                f"{weather_condition(w.weather_code):<7} "
                f"{w.max_temperature_c:5.1f}C {w.precipitation_mm:5.1f}mm"
            )
        else:
            weather = "no weather data"
        lines.append(f"  {day} {value:>14}   {weather}")

    lines.append("")
    lines.append("Backtest:")
    lines.append("-" * 60)
    historical = result.historical_points
    if historical:
        lines.append(f"  Window: {historical[0].date} .. {historical[-1].date}")
    if result.backtest.mape is None:
        lines.append("  Accuracy: n/a (no sales in backtest window)")
    else:
        lines.append(
            f"  Accuracy: {result.backtest.accuracy:.0f}% "
            f"(MAPE {result.backtest.mape:.1f}% over {result.backtest.evaluated_days} days)"
        )

    trend = result.metadata.get("trend")
    if trend is not None:
        recent = result.metadata.get("recent_actual_total", 0.0)
        lines.append(
            f"  Trend: {trend} (last {len(forecast_points)} days actual "
            f"{format_currency(recent, currency_symbol)})"
        )

    lines.append("")
    lines.append("Insights:")
    lines.append("-" * 60)
    for insight in result.insights:
        lines.append(f"  [{insight.category.upper()}] {sanitize_for_console(insight.message)}")

    return "\n".join(lines)

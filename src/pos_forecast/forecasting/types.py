"""Shared types for the forecasting engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Literal

import pandas as pd

from pos_forecast.weather.types import WeatherObservation

PointKind = Literal["historical", "forecast"]
InsightCategory = Literal["warning", "opportunity", "info"]


@dataclass(frozen=True)
class ForecastPoint:
    """One day of the combined backtest/forecast series.

    Attributes:
        date: Reporting day.
        actual_sales: Aggregated sales for backtest days; None for forecast days.
        predicted_sales: Heuristic prediction, rounded to a whole currency unit.
        kind: "historical" for backtest days, "forecast" for projected days.
        weather: Forecast observation used for the day (forecast points only).
    """

    date: date
    actual_sales: float | None
    predicted_sales: int
    kind: PointKind
    weather: WeatherObservation | None = None


@dataclass(frozen=True)
class Insight:
    """Qualitative flag derived from the forecast."""

    category: InsightCategory
    message: str


@dataclass(frozen=True)
class BacktestSummary:
    """Accuracy of the heuristic over the backtest window.

    Attributes:
        mape: Mean absolute percentage error over days with actual sales > 0,
            or None when no such day exists.
        accuracy: ``max(0, 100 - mape)``, 0 when mape is None.
        evaluated_days: Number of days that entered the error average.
    """

    mape: float | None
    accuracy: float
    evaluated_days: int


@dataclass
class ForecastResult:
    """Result of a forecast run.

    Attributes:
        points: Backtest points followed by forecast points, ascending by date.
        weather: Raw forecast weather observations as returned by the provider.
        insights: Warning/opportunity insights followed by the info total.
        backtest: Accuracy summary of the backtest window.
        metadata: Run details (today, baseline, windows, projected total, trend).
    """

    points: list[ForecastPoint]
    weather: list[WeatherObservation]
    insights: list[Insight]
    backtest: BacktestSummary
    metadata: dict[str, Any] = field(default_factory=dict)

    @property
    def historical_points(self) -> list[ForecastPoint]:
        return [p for p in self.points if p.kind == "historical"]

    @property
    def forecast_points(self) -> list[ForecastPoint]:
        return [p for p in self.points if p.kind == "forecast"]

    def to_frame(self) -> pd.DataFrame:
        """Return the points as a DataFrame for charting.

        Columns: date, actual_sales, predicted_sales, kind,
        max_temperature_c, precipitation_mm, weather_code.
        """
        columns = [
            "date",
            "actual_sales",
            "predicted_sales",
            "kind",
            "max_temperature_c",
            "precipitation_mm",
            "weather_code",
        ]
        rows = []
        for p in self.points:
            row = p.weather.to_dict() if p.weather else {}
            row.update(
                date=p.date,
                actual_sales=p.actual_sales,
                predicted_sales=p.predicted_sales,
                kind=p.kind,
            )
            rows.append(row)

        if not rows:
            return pd.DataFrame(columns=columns)

        df = pd.DataFrame(rows, columns=columns)
        df["date"] = pd.to_datetime(df["date"])
        return df

"""Tests for the trailing moving-average baseline."""

from datetime import date, timedelta

import pandas as pd
import pytest

from pos_forecast.forecasting.baseline import average_sales_before


@pytest.fixture
def series() -> pd.Series:
    """91 days of sales where day i sold i * 10."""
    index = pd.date_range("2025-03-11", periods=91, freq="D")
    return pd.Series([float(i * 10) for i in range(91)], index=index)


def test_average_of_thirty_preceding_days(series: pd.Series) -> None:
    target = series.index[40].date()
    expected = sum(i * 10 for i in range(10, 40)) / 30
    assert average_sales_before(series, target) == pytest.approx(expected)


def test_target_day_is_excluded(series: pd.Series) -> None:
    target = series.index[30].date()
    assert average_sales_before(series, target) == pytest.approx(sum(i * 10 for i in range(30)) / 30)


@pytest.mark.parametrize("position", [0, 1, 15, 29])
def test_insufficient_history_returns_zero(series: pd.Series, position: int) -> None:
    assert average_sales_before(series, series.index[position].date()) == 0.0


def test_date_outside_series_returns_zero(series: pd.Series) -> None:
    after = series.index[-1].date() + timedelta(days=1)
    assert average_sales_before(series, after) == 0.0
    assert average_sales_before(series, date(2020, 1, 1)) == 0.0


def test_custom_window(series: pd.Series) -> None:
    target = series.index[10].date()
    assert average_sales_before(series, target, window=7) == pytest.approx(
        sum(i * 10 for i in range(3, 10)) / 7
    )

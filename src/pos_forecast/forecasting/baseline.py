"""Trailing moving-average baseline.

The baseline for a day is the mean of the ``window`` daily totals strictly
before it. Days too close to the start of the series get 0 instead of a
partial average, so early backtest predictions are underestimated rather
than biased by a small sample.
"""

from __future__ import annotations

from datetime import date

import pandas as pd

BASELINE_WINDOW = 30


def average_sales_before(
    daily_sales: pd.Series,
    target_date: date,
    window: int = BASELINE_WINDOW,
) -> float:
    """Average daily sales over the ``window`` days strictly preceding ``target_date``.

    Args:
        daily_sales: Dense daily series from ``build_daily_sales``.
        target_date: Day being predicted.
        window: Number of preceding days to average.

    Returns:
        The mean, or 0.0 when ``target_date`` is not in the series or has
        fewer than ``window`` days before it.

    Examples:
        >>> s = pd.Series([10.0] * 40, index=pd.date_range("2025-01-01", periods=40))
        >>> average_sales_before(s, date(2025, 2, 5))
        10.0
        >>> average_sales_before(s, date(2025, 1, 10))
        0.0
    """
    target = pd.Timestamp(target_date)
    if target not in daily_sales.index:
        return 0.0

    position = daily_sales.index.get_loc(target)
    if position < window:
        return 0.0

    return float(daily_sales.iloc[position - window : position].sum() / window)

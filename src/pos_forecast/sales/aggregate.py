"""Daily sales aggregation.

This module turns a raw list of transactions into a dense, zero-filled
daily sales series keyed by reporting day. Every day in the window is
present exactly once; days without sales carry 0.0.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Any

import pandas as pd

from pos_forecast.config import ForecastConfig
from pos_forecast.dates import day_range, reporting_day
from pos_forecast.sales.transactions import Transaction, TransactionReader

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DailySalesPoint:
    """Total sales for one reporting day."""

    date: date
    total_sales: float


def _coerce_total(value: Any) -> float:
    """Return a usable transaction total; null, invalid or negative totals count as 0."""
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        total = float(value)
    except (TypeError, ValueError):
        return 0.0
    if math.isnan(total) or math.isinf(total) or total < 0:
        return 0.0
    return total


def build_daily_sales(
    transactions: Iterable[Transaction],
    start: date,
    end: date,
    timezone: str,
    excluded_statuses: Iterable[str] = (),
) -> pd.Series:
    """Aggregate transactions into one total per reporting day.

    Args:
        transactions: Transactions to aggregate.
        start: First reporting day of the window (inclusive).
        end: Last reporting day of the window (inclusive).
        timezone: IANA timezone defining the reporting day.
        excluded_statuses: Statuses (case-insensitive) left out of the totals.

    Returns:
        Series named ``total_sales`` indexed by a daily DatetimeIndex covering
        ``start`` to ``end``, with days without sales filled with 0.0.
    """
    excluded = {s.lower() for s in excluded_statuses}

    # Ordered date -> accumulator, pre-initialized so every day exists once
    totals: dict[date, float] = {d: 0.0 for d in day_range(start, end)}

    outside_window = 0
    unparseable = 0
    skipped_status = 0
    for tx in transactions:
        if tx.status is not None and str(tx.status).lower() in excluded:
            skipped_status += 1
            continue

        try:
            key = reporting_day(tx.date, timezone)
        except (TypeError, ValueError):
            unparseable += 1
            continue

        if key not in totals:
            outside_window += 1
            continue

        totals[key] += _coerce_total(tx.total)

    if outside_window or unparseable or skipped_status:
        logger.debug(
            f"Dropped transactions: {outside_window} outside {start}..{end}, "
            f"{unparseable} with unparseable dates, {skipped_status} by status"
        )

    index = pd.date_range(start=start, end=end, freq="D", name="date")
    return pd.Series(list(totals.values()), index=index, name="total_sales", dtype=float)


def to_points(daily_sales: pd.Series) -> list[DailySalesPoint]:
    """Convert a daily sales series into ``DailySalesPoint`` records."""
    return [
        DailySalesPoint(date=ts.date(), total_sales=float(value))
        for ts, value in daily_sales.items()
    ]


def fetch_daily_sales(
    reader: TransactionReader,
    store_id: str,
    today: date,
    config: ForecastConfig | None = None,
) -> pd.Series:
    """Fetch a store's transactions for the lookback window and aggregate them.

    The window runs from ``today - lookback_days`` to ``today`` inclusive.
    Errors raised by ``reader`` propagate unchanged.
    """
    if config is None:
        config = ForecastConfig()

    start = today - timedelta(days=config.lookback_days)
    transactions = reader.list_transactions(store_id, start, today)
    logger.info(f"Aggregating {len(transactions)} transactions for store {store_id}")

    return build_daily_sales(
        transactions,
        start=start,
        end=today,
        timezone=config.reporting_timezone,
        excluded_statuses=config.excluded_statuses,
    )

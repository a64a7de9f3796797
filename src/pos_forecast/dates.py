"""Reporting-day helpers.

Every date key in the package (transaction days, weather days, window
bounds) goes through this module so that a single fixed timezone decides
which calendar day a moment belongs to.

Examples:
    >>> reporting_day("2025-01-15T20:30:00Z", "Asia/Jakarta")
    datetime.date(2025, 1, 16)
    >>> parse_date("2025-01-15")
    datetime.date(2025, 1, 15)
"""

from __future__ import annotations

from datetime import date, datetime, timedelta

import pandas as pd

WEEKEND_DAYS = {5, 6}  # date.weekday(): Saturday, Sunday


def parse_date(s: str) -> date:
    """Parse a date string in YYYY-MM-DD format.

    Raises:
        ValueError: If the date string is not in YYYY-MM-DD format.
    """
    return datetime.strptime(s, "%Y-%m-%d").date()


def reporting_day(value: str | datetime | date | pd.Timestamp, timezone: str) -> date:
    """Truncate a timestamp to its calendar day in ``timezone``.

    Naive timestamps are taken to be UTC. Plain ``date`` values are already
    reporting days and are returned unchanged.

    Raises:
        ValueError: If ``value`` cannot be parsed as a timestamp.
    """
    if isinstance(value, date) and not isinstance(value, datetime):
        return value

    ts = pd.Timestamp(value)
    if ts is pd.NaT:
        raise ValueError(f"Not a timestamp: {value!r}")
    if ts.tzinfo is None:
        ts = ts.tz_localize("UTC")
    return ts.tz_convert(timezone).date()


def reporting_today(timezone: str) -> date:
    """Return the current reporting day in ``timezone``."""
    return pd.Timestamp.now(tz=timezone).date()


def day_range(start: date, end: date) -> list[date]:
    """Return every calendar day from ``start`` to ``end`` inclusive."""
    return [start + timedelta(days=i) for i in range((end - start).days + 1)]


def is_weekend(d: date) -> bool:
    """Return True for Saturday and Sunday."""
    return d.weekday() in WEEKEND_DAYS

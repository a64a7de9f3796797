"""Transaction records and readers.

The forecast pipeline only needs a store/date-ranged query returning
transactions with a timestamp and a total. ``TransactionReader`` is that
query; ``CsvTransactionReader`` serves it from an exported CSV file.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime
from pathlib import Path
from typing import Any, Protocol

import pandas as pd

from pos_forecast.exceptions import DataQualityError

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ["store_id", "date", "total"]


@dataclass(frozen=True)
class Transaction:
    """A single POS transaction.

    Attributes:
        date: Timestamp of the sale (ISO string or datetime; naive means UTC).
        total: Transaction total, or None when missing.
        status: Optional lifecycle status, e.g. "completed" or "void".
    """

    date: str | datetime | pd.Timestamp
    total: Any = None
    status: str | None = None


class TransactionReader(Protocol):
    """Store/date-ranged transaction query."""

    def list_transactions(self, store_id: str, start: date, end: date) -> list[Transaction]:
        ...


class CsvTransactionReader:
    """Read transactions from a CSV export.

    The file needs ``store_id``, ``date`` and ``total`` columns; ``status`` is
    optional. Rows are filtered by store and by the UTC calendar day of their
    timestamp, with one day of slack on both sides so that the aggregator can
    apply the reporting timezone itself.
    """

    def __init__(self, csv_path: str | Path) -> None:
        self.csv_path = Path(csv_path)
        self._df: pd.DataFrame | None = None

    def _load(self) -> pd.DataFrame:
        if self._df is not None:
            return self._df

        if not self.csv_path.exists():
            raise FileNotFoundError(f"Transactions file not found at {self.csv_path}")

        df = pd.read_csv(self.csv_path, dtype={"store_id": str})
        missing_columns = [col for col in REQUIRED_COLUMNS if col not in df.columns]
        if missing_columns:
            raise DataQualityError(
                f"Missing required columns in {self.csv_path}: {missing_columns}. "
                f"Required: {REQUIRED_COLUMNS}"
            )

        df["timestamp"] = pd.to_datetime(df["date"], utc=True, errors="coerce")
        invalid = int(df["timestamp"].isna().sum())
        if invalid:
            logger.warning(f"Dropping {invalid} rows with unparseable dates from {self.csv_path}")
        df = df.dropna(subset=["timestamp"]).sort_values("timestamp")

        self._df = df
        return df

    def list_transactions(self, store_id: str, start: date, end: date) -> list[Transaction]:
        df = self._load()
        days = df["timestamp"].dt.date
        lower = pd.Timestamp(start) - pd.Timedelta(days=1)
        upper = pd.Timestamp(end) + pd.Timedelta(days=1)
        mask = (
            (df["store_id"] == store_id)
            & (days >= lower.date())
            & (days <= upper.date())
        )
        rows = df.loc[mask]

        has_status = "status" in rows.columns
        transactions = []
        for _, row in rows.iterrows():
            status = row["status"] if has_status and pd.notna(row["status"]) else None
            total = row["total"] if pd.notna(row["total"]) else None
            transactions.append(Transaction(date=row["timestamp"], total=total, status=status))

        logger.debug(
            "Read %d transactions for store %s between %s and %s",
            len(transactions),
            store_id,
            start,
            end,
        )
        return transactions

"""Sales data: transaction readers and daily aggregation."""

from pos_forecast.sales.aggregate import (
    DailySalesPoint,
    build_daily_sales,
    fetch_daily_sales,
    to_points,
)
from pos_forecast.sales.transactions import CsvTransactionReader, Transaction, TransactionReader

__all__ = [
    "CsvTransactionReader",
    "DailySalesPoint",
    "Transaction",
    "TransactionReader",
    "build_daily_sales",
    "fetch_daily_sales",
    "to_points",
]

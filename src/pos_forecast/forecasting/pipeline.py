"""CLI wrapper for the store forecast pipeline.

This module provides a command-line interface for running forecasts from a
transactions CSV export and a stores JSON file. All forecasting logic is in
pos_forecast.forecasting.api.
"""

from __future__ import annotations

import argparse
import logging
import sys

from pos_forecast.config import ForecastConfig
from pos_forecast.dates import parse_date
from pos_forecast.exceptions import StoreLocationMissingError
from pos_forecast.forecasting.api import run_store_forecast
from pos_forecast.forecasting.formatters.console import format_forecast_for_console
from pos_forecast.sales.transactions import CsvTransactionReader
from pos_forecast.stores import StoreRegistry
from pos_forecast.weather.client import OpenMeteoClient


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point for the forecasting pipeline.

    Parses command-line arguments, loads the store and its transactions,
    fetches weather and prints the forecast.

    Returns:
        Process exit code: 0 on success, 2 when the store has no location,
        1 on any other error.
    """
    parser = argparse.ArgumentParser(description="Run weather-aware sales forecast for a store.")
    parser.add_argument(
        "--transactions",
        type=str,
        required=True,
        help="Path to a transactions CSV with store_id, date, total (and optional status) columns",
    )
    parser.add_argument(
        "--stores",
        type=str,
        required=True,
        help="Path to a stores JSON file keyed by store id with latitude/longitude",
    )
    parser.add_argument("--store-id", type=str, required=True, help="Store to forecast")
    parser.add_argument(
        "--today",
        type=str,
        help="Reporting day to forecast from (YYYY-MM-DD). Defaults to today.",
    )
    parser.add_argument(
        "--days",
        type=int,
        default=14,
        help="Number of days to forecast ahead (default: 14)",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose output",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    print("=" * 60)
    print("Sales Forecasting Pipeline")
    print("=" * 60)

    try:
        config = ForecastConfig.from_env(forecast_days=args.days)
        today = parse_date(args.today) if args.today else None

        print("\n[1/2] Loading stores and transactions...")
        stores = StoreRegistry.from_json(args.stores)
        transactions = CsvTransactionReader(args.transactions)

        print(f"\n[2/2] Generating {config.forecast_days}-day forecast for {args.store_id}...")
        result = run_store_forecast(
            args.store_id,
            transactions=transactions,
            stores=stores,
            weather=OpenMeteoClient(timezone=config.reporting_timezone),
            today=today,
            config=config,
        )

        print("\n" + format_forecast_for_console(result, currency_symbol=config.currency_symbol))
        print("\n[OK] Pipeline completed successfully")
        return 0

    except StoreLocationMissingError as e:
        print(f"\n[ACTION REQUIRED] {e}")
        print("Add latitude and longitude for the store in the stores file, then run again.")
        return 2
    except Exception as e:
        print(f"\n[ERROR] Pipeline failed: {e}")
        logging.getLogger(__name__).debug("Pipeline failure", exc_info=True)
        return 1


if __name__ == "__main__":
    sys.exit(main())

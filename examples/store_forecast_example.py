"""Example: Weather-aware forecast for a single store

This example runs the forecast pipeline against a transactions CSV export and
a stores JSON file, prints the console summary and saves the chart data.

Prerequisites:
- data/transactions.csv with store_id, date, total (and optional status) columns
- data/stores.json keyed by store id with latitude/longitude
- Network access to api.open-meteo.com
"""

from pathlib import Path

from pos_forecast import ForecastConfig, StoreLocationMissingError, StoreRegistry
from pos_forecast.forecasting import run_store_forecast
from pos_forecast.forecasting.formatters import format_forecast_for_console
from pos_forecast.sales import CsvTransactionReader

transactions_file = Path("data/transactions.csv")
stores_file = Path("data/stores.json")
store_id = "kopi-senja"

print("=" * 80)
print("Weather-aware Sales Forecast")
print("=" * 80)

if transactions_file.exists() and stores_file.exists():
    config = ForecastConfig(reporting_timezone="Asia/Jakarta")

    try:
        result = run_store_forecast(
            store_id,
            transactions=CsvTransactionReader(transactions_file),
            stores=StoreRegistry.from_json(stores_file),
            config=config,
        )
    except StoreLocationMissingError as e:
        print(f"\n{e}")
    else:
        print(format_forecast_for_console(result))

        output_dir = Path("data/forecasts")
        output_dir.mkdir(parents=True, exist_ok=True)
        forecast_file = output_dir / f"{store_id}_forecast.csv"
        result.to_frame().to_csv(forecast_file, index=False)
        print(f"\nSaved chart data to: {forecast_file}")

else:
    print(f"\nData files not found: {transactions_file}, {stores_file}")

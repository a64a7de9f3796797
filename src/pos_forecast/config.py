"""Unified configuration for POS Forecast.

This module provides a single configuration class shared by the aggregator,
the forecast engine and the insight generator.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pos_forecast.exceptions import ConfigError

DEFAULT_TIMEZONE = "Asia/Jakarta"
DEFAULT_CURRENCY = "Rp"


@dataclass(frozen=True)
class ForecastConfig:
    """Windows, thresholds and factors for the forecasting pipeline.

    Attributes:
        lookback_days: Days of transactions aggregated before today. The
            aggregated window is inclusive at both ends (lookback_days + 1 points).
        backtest_days: Historical days re-predicted and compared with actuals.
        baseline_window: Trailing days averaged into the baseline.
        forecast_days: Days projected forward, starting today.
        reporting_timezone: IANA timezone defining the reporting day.
        rain_threshold_mm: Precipitation above which a day counts as rainy.
        heat_threshold_c: Max temperature above which sales get the heat factor.
        hot_day_threshold_c: Max temperature above which a forecast day counts
            as hot for insights.
        clear_code_max: Highest weather code treated as clear / mostly clear.
        rain_factor: Multiplier for rainy days.
        heat_factor: Multiplier for hot days.
        clear_factor: Multiplier for clear days.
        weekend_factor: Extra multiplier for Saturday and Sunday.
        insight_day_threshold: Rainy/hot day count that must be exceeded
            before an insight is emitted.
        currency_symbol: Prefix used when formatting money.
        excluded_statuses: Transaction statuses left out of the sales totals.
    """

    lookback_days: int = 90
    backtest_days: int = 60
    baseline_window: int = 30
    forecast_days: int = 14
    reporting_timezone: str = DEFAULT_TIMEZONE

    rain_threshold_mm: float = 5.0
    heat_threshold_c: float = 32.0
    hot_day_threshold_c: float = 33.0
    clear_code_max: int = 3

    rain_factor: float = 0.8
    heat_factor: float = 1.1
    clear_factor: float = 1.05
    weekend_factor: float = 1.2

    insight_day_threshold: int = 3
    currency_symbol: str = DEFAULT_CURRENCY
    excluded_statuses: frozenset[str] = field(
        default_factory=lambda: frozenset({"void", "refunded", "cancelled"})
    )

    @classmethod
    def from_env(cls, **overrides: object) -> ForecastConfig:
        """Create a config, taking timezone and currency from the environment.

        Reads ``POS_FORECAST_TIMEZONE`` and ``POS_FORECAST_CURRENCY``. Explicit
        keyword overrides win over environment values.

        Examples:
            >>> config = ForecastConfig.from_env(forecast_days=7)
            >>> config.forecast_days
            7
        """
        values: dict[str, object] = {
            "reporting_timezone": os.environ.get("POS_FORECAST_TIMEZONE", DEFAULT_TIMEZONE),
            "currency_symbol": os.environ.get("POS_FORECAST_CURRENCY", DEFAULT_CURRENCY),
        }
        values.update(overrides)
        config = cls(**values)  # type: ignore[arg-type]
        config.validate()
        return config

    def validate(self) -> None:
        """Check window sizes and timezone.

        Raises:
            ConfigError: If a window is not positive, the backtest does not fit
                inside the lookback window, or the timezone is unknown.
        """
        for name in ("lookback_days", "backtest_days", "baseline_window", "forecast_days"):
            if getattr(self, name) <= 0:
                raise ConfigError(f"{name} must be positive, got {getattr(self, name)}")

        if self.backtest_days > self.lookback_days:
            raise ConfigError(
                f"backtest_days ({self.backtest_days}) cannot exceed "
                f"lookback_days ({self.lookback_days})"
            )

        try:
            ZoneInfo(self.reporting_timezone)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ConfigError(f"Unknown reporting timezone: {self.reporting_timezone}") from e

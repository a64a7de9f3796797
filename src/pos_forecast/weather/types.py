"""Weather observation record shared by the adapter and the engine."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class WeatherObservation:
    """Daily weather for one reporting day.

    Attributes:
        date: Reporting day the observation belongs to.
        max_temperature_c: Daily maximum temperature at 2 m, in °C.
        precipitation_mm: Daily precipitation sum, in mm.
        weather_code: WMO weather interpretation code (lower is clearer).
    """

    date: date
    max_temperature_c: float
    precipitation_mm: float
    weather_code: int

    def to_dict(self) -> dict[str, object]:
        return {
            "date": self.date.isoformat(),
            "max_temperature_c": self.max_temperature_c,
            "precipitation_mm": self.precipitation_mm,
            "weather_code": self.weather_code,
        }

"""Domain models shared across services."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class WeatherRecord:
    """A single weather observation parsed from the CSV."""

    date: str
    city: str
    min_temp: float
    max_temp: float
    humidity: float
    wind_speed: float
    condition: str

    @property
    def mean_temp(self) -> float:
        return (self.min_temp + self.max_temp) / 2.0


DISPLAY_COLUMNS = (
    ("date", "Date"),
    ("city", "City"),
    ("min_temp", "Min Temp (°C)"),
    ("max_temp", "Max Temp (°C)"),
    ("humidity", "Humidity (%)"),
    ("wind_speed", "Wind Speed (km/h)"),
    ("condition", "Condition"),
)

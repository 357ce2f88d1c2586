"""Pydantic schemas for the HTTP API layer."""

from __future__ import annotations

from datetime import datetime
from typing import List

from pydantic import BaseModel, Field

from datastore.dataset_store import LoadedDataset
from services.aggregator import format_average, summarize
from services.series import MAX_SERIES_NAME, MIN_SERIES_NAME, SeriesPoints, project_series


class WeatherRecordOut(BaseModel):
    """One table row."""

    date: str
    city: str
    min_temp: float
    max_temp: float
    humidity: float
    wind_speed: float
    condition: str


class SeriesPoint(BaseModel):
    label: str
    value: float


class TemperatureSeries(BaseModel):
    """A named line on the temperature trend chart."""

    name: str
    points: List[SeriesPoint] = Field(default_factory=list)

    @classmethod
    def from_points(cls, name: str, points: SeriesPoints) -> "TemperatureSeries":
        return cls(
            name=name,
            points=[SeriesPoint(label=label, value=value) for label, value in points],
        )


class SeriesResponse(BaseModel):
    series: List[TemperatureSeries] = Field(default_factory=list)


class DatasetResponse(BaseModel):
    """Everything a display needs for the most recently loaded CSV."""

    source: str
    loaded_at: datetime
    row_count: int = Field(..., ge=0)
    average_temp: float
    average_label: str
    records: List[WeatherRecordOut] = Field(default_factory=list)
    series: List[TemperatureSeries] = Field(default_factory=list)

    @classmethod
    def from_dataset(cls, dataset: LoadedDataset) -> "DatasetResponse":
        summary = summarize(dataset.records)
        return cls(
            source=dataset.source,
            loaded_at=dataset.loaded_at,
            row_count=summary.row_count,
            average_temp=summary.average_temp,
            average_label=format_average(summary.average_temp),
            records=[
                WeatherRecordOut(
                    date=record.date,
                    city=record.city,
                    min_temp=record.min_temp,
                    max_temp=record.max_temp,
                    humidity=record.humidity,
                    wind_speed=record.wind_speed,
                    condition=record.condition,
                )
                for record in dataset.records
            ],
            series=build_series(dataset),
        )


def build_series(dataset: LoadedDataset) -> List[TemperatureSeries]:
    min_points, max_points = project_series(dataset.records)
    return [
        TemperatureSeries.from_points(MIN_SERIES_NAME, min_points),
        TemperatureSeries.from_points(MAX_SERIES_NAME, max_points),
    ]

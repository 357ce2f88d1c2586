"""Projection of weather records into temperature trend series."""

from __future__ import annotations

from typing import List, Sequence, Tuple

from models.records import WeatherRecord

MIN_SERIES_NAME = "Min Temp"
MAX_SERIES_NAME = "Max Temp"
SERIES_NAMES = (MIN_SERIES_NAME, MAX_SERIES_NAME)

SeriesPoints = List[Tuple[str, float]]


def project_series(records: Sequence[WeatherRecord]) -> Tuple[SeriesPoints, SeriesPoints]:
    """Build the min and max series keyed by each record's date.

    Dates are used as category labels as-is: no sorting and no deduplication.
    """
    min_points: SeriesPoints = []
    max_points: SeriesPoints = []
    for record in records:
        min_points.append((record.date, record.min_temp))
        max_points.append((record.date, record.max_temp))
    return min_points, max_points

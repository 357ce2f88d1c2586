"""Aggregation logic for weather records."""

from __future__ import annotations

import math
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional, Sequence

from models.records import WeatherRecord

AVERAGE_LABEL_PLACEHOLDER = "Average Temperature: -- °C"
_CENTS = Decimal("0.01")


@dataclass(frozen=True)
class DatasetSummary:
    """Computed statistics for a loaded dataset."""

    row_count: int = 0
    average_temp: float = 0.0


def average_mean_temp(records: Sequence[WeatherRecord]) -> float:
    """Mean of ``(min_temp + max_temp) / 2`` across records, ``0.0`` when empty."""
    if not records:
        return 0.0
    total = sum(record.mean_temp for record in records)
    return total / len(records)


def summarize(records: Sequence[WeatherRecord]) -> DatasetSummary:
    return DatasetSummary(row_count=len(records), average_temp=average_mean_temp(records))


def format_average(value: Optional[float]) -> str:
    if value is None:
        return AVERAGE_LABEL_PLACEHOLDER
    if not math.isfinite(value):
        return f"Average Temperature: {value} °C"
    # Half-up on the shortest decimal form, so 8.125 reads 8.13.
    rounded = Decimal(repr(value)).quantize(_CENTS, rounding=ROUND_HALF_UP)
    return f"Average Temperature: {rounded} °C"

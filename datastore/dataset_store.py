from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from functools import lru_cache
from threading import Lock
from typing import Optional, Sequence, Tuple

from models.records import WeatherRecord


@dataclass(frozen=True)
class LoadedDataset:
    """The result of one successful load."""

    source: str
    loaded_at: datetime
    records: Tuple[WeatherRecord, ...]


class DatasetStore:
    """Holds the most recently loaded dataset in memory.

    Callers replace the dataset only after a load succeeds, so a failed load
    leaves the previous dataset visible.
    """

    def __init__(self) -> None:
        self._current: Optional[LoadedDataset] = None
        self._lock = Lock()

    def replace(self, source: str, records: Sequence[WeatherRecord]) -> LoadedDataset:
        dataset = LoadedDataset(
            source=source,
            loaded_at=datetime.now(timezone.utc),
            records=tuple(records),
        )
        with self._lock:
            self._current = dataset
        return dataset

    def current(self) -> Optional[LoadedDataset]:
        with self._lock:
            return self._current

    def clear(self) -> None:
        with self._lock:
            self._current = None


@lru_cache
def build_default_store() -> DatasetStore:
    return DatasetStore()

"""Unit tests for the in-memory dataset store."""

from __future__ import annotations

from models.records import WeatherRecord
from datastore.dataset_store import DatasetStore, build_default_store


def _record(date: str) -> WeatherRecord:
    return WeatherRecord(
        date=date,
        city="Springfield",
        min_temp=1.0,
        max_temp=2.0,
        humidity=50.0,
        wind_speed=10.0,
        condition="Clear",
    )


def test_current_is_none_until_replaced() -> None:
    store = DatasetStore()

    assert store.current() is None


def test_replace_swaps_whole_dataset() -> None:
    store = DatasetStore()
    records = [_record("2024-01-01")]

    first = store.replace("first.csv", records)
    records.append(_record("2024-01-02"))
    second = store.replace("second.csv", [_record("2024-02-01")])

    assert len(first.records) == 1
    assert store.current() is second
    assert [record.date for record in second.records] == ["2024-02-01"]
    assert second.loaded_at.tzinfo is not None


def test_clear_drops_dataset() -> None:
    store = DatasetStore()
    store.replace("weather.csv", [_record("2024-01-01")])

    store.clear()

    assert store.current() is None


def test_build_default_store_is_cached() -> None:
    build_default_store.cache_clear()
    try:
        assert build_default_store() is build_default_store()
    finally:
        build_default_store.cache_clear()

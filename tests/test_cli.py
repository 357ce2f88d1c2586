from __future__ import annotations

from pathlib import Path
from typing import Any, Dict

import pytest
from fastapi import FastAPI
from typer.testing import CliRunner

from cli.app import app

CSV_CONTENT = (
    "Date,City,MinTemp,MaxTemp,Humidity,WindSpeed,Condition\n"
    "2024-01-01,Springfield,9,11,60,12.3,Cloudy\n"
    "2024-01-02,Springfield,10,12,55,8.0,Sunny\n"
)


class StubClient:
    def __init__(self, config) -> None:
        self.config = config
        self.uploaded_path: Path | None = None
        self.payload: Dict[str, Any] = {
            "source": "weather.csv",
            "loaded_at": "2024-01-01T00:00:00Z",
            "row_count": 1,
            "average_temp": 1.25,
            "average_label": "Average Temperature: 1.25 °C",
            "records": [
                {
                    "date": "2024-01-01",
                    "city": "Springfield",
                    "min_temp": -2.5,
                    "max_temp": 5.0,
                    "humidity": 60.0,
                    "wind_speed": 12.3,
                    "condition": "Cloudy",
                }
            ],
            "series": [
                {"name": "Min Temp", "points": [{"label": "2024-01-01", "value": -2.5}]},
                {"name": "Max Temp", "points": [{"label": "2024-01-01", "value": 5.0}]},
            ],
        }
        self.closed = False

    def upload_file(self, path: Path) -> Dict[str, Any]:
        self.uploaded_path = path
        return self.payload

    def get_current(self) -> Dict[str, Any]:
        return self.payload

    def close(self) -> None:
        self.closed = True


@pytest.fixture()
def runner() -> CliRunner:
    return CliRunner()


def _install_stub(monkeypatch, stub: StubClient) -> None:
    def factory(config):
        stub.config = config
        return stub

    monkeypatch.setattr("cli.app.ApiClient", factory)


def test_show_prints_table_series_and_average(monkeypatch, runner: CliRunner, tmp_path) -> None:
    stub = StubClient(config=None)
    _install_stub(monkeypatch, stub)
    csv_path = tmp_path / "weather.csv"
    csv_path.write_text(CSV_CONTENT)

    result = runner.invoke(app, ["show", str(csv_path)])

    assert result.exit_code == 0
    assert "Wind Speed (km/h)" in result.output
    assert "Springfield" in result.output
    assert "Min Temp (°C):" in result.output
    assert "  - 2024-01-02: 12.0" in result.output
    assert "Average Temperature: 10.50 °C" in result.output
    assert stub.closed is True


def test_show_without_series(monkeypatch, runner: CliRunner, tmp_path) -> None:
    _install_stub(monkeypatch, StubClient(config=None))
    csv_path = tmp_path / "weather.csv"
    csv_path.write_text(CSV_CONTENT)

    result = runner.invoke(app, ["show", str(csv_path), "--no-series"])

    assert result.exit_code == 0
    assert "Temperature Trends" not in result.output
    assert "Average Temperature: 10.50 °C" in result.output


def test_show_missing_file_reports_expected_columns(monkeypatch, runner: CliRunner, tmp_path) -> None:
    _install_stub(monkeypatch, StubClient(config=None))

    result = runner.invoke(app, ["show", str(tmp_path / "missing.csv")])

    assert result.exit_code == 1
    assert "Error loading CSV" in result.output
    assert "Date,City,MinTemp,MaxTemp,Humidity,WindSpeed,Condition" in result.output


def test_upload_renders_returned_dataset(monkeypatch, runner: CliRunner, tmp_path) -> None:
    stub = StubClient(config=None)
    _install_stub(monkeypatch, stub)
    csv_path = tmp_path / "weather.csv"
    csv_path.write_text(CSV_CONTENT)

    result = runner.invoke(app, ["--base-url", "http://analyzer:9000/", "upload", str(csv_path)])

    assert result.exit_code == 0
    assert "Upload accepted. rows=1" in result.output
    assert "Average Temperature: 1.25 °C" in result.output
    assert stub.uploaded_path == csv_path
    assert stub.config.base_url == "http://analyzer:9000"
    assert stub.closed is True


def test_current_command(monkeypatch, runner: CliRunner) -> None:
    stub = StubClient(config=None)
    _install_stub(monkeypatch, stub)

    result = runner.invoke(app, ["current"])

    assert result.exit_code == 0
    assert "Weather Dataset" in result.output
    assert "source: weather.csv" in result.output
    assert stub.closed is True


def test_serve_runs_app_on_requested_address(monkeypatch, runner: CliRunner) -> None:
    _install_stub(monkeypatch, StubClient(config=None))
    calls: list[tuple[Any, Dict[str, Any]]] = []

    def fake_run(application, **kwargs) -> None:
        calls.append((application, kwargs))

    monkeypatch.setattr("uvicorn.run", fake_run)

    result = runner.invoke(app, ["serve", "--host", "0.0.0.0", "--port", "9000"])

    assert result.exit_code == 0
    assert "http://0.0.0.0:9000/ui" in result.output
    assert len(calls) == 1
    application, kwargs = calls[0]
    assert isinstance(application, FastAPI)
    assert {route.path for route in application.routes} >= {"/datasets", "/ui", "/ui/load"}
    assert kwargs == {"host": "0.0.0.0", "port": 9000, "log_config": None}

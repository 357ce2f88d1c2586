from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

import typer

from app.schemas import DatasetResponse
from cli.client import ApiClient
from cli.config import CLIConfig, load_config
from cli.render import render_dataset
from datastore.dataset_store import LoadedDataset
from logging_config import configure_logging
from services.loader import LoadError, load_weather_csv
from settings import get_settings


@dataclass
class CLIState:
    config: CLIConfig
    client: ApiClient


app = typer.Typer(
    help="Load weather CSV files and show their temperature trends.",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def _get_state(ctx: typer.Context) -> CLIState:
    state = ctx.obj
    if not isinstance(state, CLIState):
        raise typer.Exit(code=1)
    return state


@app.callback()
def main(
    ctx: typer.Context,
    base_url: Optional[str] = typer.Option(
        None,
        "--base-url",
        "-b",
        help="Analyzer API base URL (defaults to API_BASE_URL env or http://localhost:8000).",
    ),
    timeout: Optional[float] = typer.Option(
        None,
        "--timeout",
        help="Seconds to wait for an API response.",
    ),
) -> None:
    """Entry point for the CLI."""
    configure_logging()
    config = load_config(base_url=base_url, request_timeout=timeout)
    client = ApiClient(config)
    ctx.obj = CLIState(config=config, client=client)
    ctx.call_on_close(client.close)


@app.command("show")
def show_command(
    file: Path = typer.Argument(..., help="Path to a weather CSV file."),
    series: bool = typer.Option(
        True,
        "--series/--no-series",
        help="Print the min/max temperature series.",
    ),
) -> None:
    """Load a local CSV and print its table, trends and average temperature."""
    try:
        records = load_weather_csv(file, encoding=get_settings().csv_encoding)
    except LoadError as exc:
        typer.secho("Error loading CSV", fg=typer.colors.RED, bold=True, err=True)
        typer.secho(exc.message, fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from exc

    dataset = LoadedDataset(
        source=str(file),
        loaded_at=datetime.now(timezone.utc),
        records=tuple(records),
    )
    render_dataset(DatasetResponse.from_dataset(dataset).model_dump(mode="json"), show_series=series)


@app.command("upload")
def upload_command(
    ctx: typer.Context,
    file: Path = typer.Argument(..., exists=True, dir_okay=False, readable=True, help="Path to CSV file."),
    series: bool = typer.Option(
        True,
        "--series/--no-series",
        help="Print the min/max temperature series.",
    ),
) -> None:
    """Upload a CSV to the analyzer service and make it the current dataset."""
    state = _get_state(ctx)
    typer.echo(f"Uploading {file} to {state.config.base_url} ...")
    payload = state.client.upload_file(file)
    typer.secho(f"Upload accepted. rows={payload.get('row_count')}", fg=typer.colors.GREEN)
    typer.echo()
    render_dataset(payload, show_series=series)


@app.command("current")
def current_command(
    ctx: typer.Context,
    series: bool = typer.Option(
        True,
        "--series/--no-series",
        help="Print the min/max temperature series.",
    ),
) -> None:
    """Show the dataset currently loaded in the analyzer service."""
    state = _get_state(ctx)
    render_dataset(state.client.get_current(), show_series=series)


@app.command("serve")
def serve_command(
    host: str = typer.Option("127.0.0.1", "--host", help="Interface to bind."),
    port: int = typer.Option(8000, "--port", help="Port to listen on."),
) -> None:
    """Run the analyzer web UI and API."""
    import uvicorn

    from app.main import create_app

    typer.echo(f"Serving weather analyzer on http://{host}:{port}/ui")
    uvicorn.run(create_app(), host=host, port=port, log_config=None)

from __future__ import annotations

from typing import Any, Dict, Iterable, Sequence

import typer

from models.records import DISPLAY_COLUMNS


def echo_heading(text: str) -> None:
    typer.secho(text, bold=True)


def echo_key_values(pairs: Iterable[tuple[str, Any]]) -> None:
    for key, value in pairs:
        typer.echo(f"{key}: {value}")


def echo_table(rows: Sequence[Dict[str, Any]]) -> None:
    cells = [[str(row.get(key, "")) for key, _ in DISPLAY_COLUMNS] for row in rows]
    widths = [len(heading) for _, heading in DISPLAY_COLUMNS]
    for line in cells:
        widths = [max(width, len(cell)) for width, cell in zip(widths, line)]

    def _line(values: Sequence[str]) -> str:
        return "  ".join(value.ljust(width) for value, width in zip(values, widths)).rstrip()

    typer.echo(_line([heading for _, heading in DISPLAY_COLUMNS]))
    typer.echo(_line(["-" * width for width in widths]))
    for line in cells:
        typer.echo(_line(line))


def render_dataset(payload: Dict[str, Any], show_series: bool = True) -> None:
    echo_heading("Weather Dataset")
    echo_key_values(
        [
            ("source", payload.get("source")),
            ("loaded_at", payload.get("loaded_at")),
            ("row_count", payload.get("row_count")),
        ]
    )

    records = payload.get("records") or []
    typer.echo()
    echo_heading("Observations")
    if records:
        echo_table(records)
    else:
        typer.echo("No records loaded.")

    if show_series:
        typer.echo()
        echo_heading("Temperature Trends")
        for series in payload.get("series") or []:
            typer.echo(f"{series.get('name')} (°C):")
            for point in series.get("points") or []:
                typer.echo(f"  - {point.get('label')}: {point.get('value')}")

    typer.echo()
    typer.secho(payload.get("average_label", ""), bold=True)

"""Fixed-format weather CSV loading."""

from __future__ import annotations

import io
import logging
import math
from os import PathLike
from typing import Iterable, List, Optional, Union

from models.records import WeatherRecord

logger = logging.getLogger(__name__)

HEADER_TOKEN = "Date"
EXPECTED_COLUMNS = (
    "Date",
    "City",
    "MinTemp",
    "MaxTemp",
    "Humidity",
    "WindSpeed",
    "Condition",
)
MIN_FIELDS = len(EXPECTED_COLUMNS)
LOAD_ERROR_MESSAGE = "Make sure your CSV has correct columns:\n" + ",".join(EXPECTED_COLUMNS)


class LoadError(Exception):
    """Raised when a weather CSV cannot be opened, read or parsed."""

    def __init__(self, message: str = LOAD_ERROR_MESSAGE) -> None:
        super().__init__(message)
        self.message = message


def _split_fields(line: str) -> List[str]:
    # Trailing empty fields do not count towards the column total.
    fields = line.split(",")
    while fields and not fields[-1]:
        fields.pop()
    return fields


def _parse_number(text: str) -> float:
    # Underscore digit grouping and nan/inf are not valid column values.
    if "_" in text:
        raise ValueError(f"invalid numeric value: {text!r}")
    value = float(text)
    if not math.isfinite(value):
        raise ValueError(f"non-finite numeric value: {text!r}")
    return value


def parse_weather_lines(lines: Iterable[str]) -> List[WeatherRecord]:
    """Parse raw CSV lines into records, preserving input order.

    Any line starting with ``"Date"`` is treated as a header and skipped,
    wherever it appears. Lines with fewer than seven comma-separated fields
    are skipped. A non-numeric value in one of the four numeric columns
    raises ``ValueError`` and nothing is returned.
    """
    records: List[WeatherRecord] = []
    for line_number, raw in enumerate(lines, start=1):
        line = raw.rstrip("\r\n")

        if line.startswith(HEADER_TOKEN):
            continue

        fields = _split_fields(line)
        if len(fields) < MIN_FIELDS:
            logger.debug(
                "Skipping short line",
                extra={"line_number": line_number, "field_count": len(fields)},
            )
            continue

        records.append(
            WeatherRecord(
                date=fields[0],
                city=fields[1],
                min_temp=_parse_number(fields[2]),
                max_temp=_parse_number(fields[3]),
                humidity=_parse_number(fields[4]),
                wind_speed=_parse_number(fields[5]),
                condition=fields[6],
            )
        )
    return records


def load_weather_csv(
    path: Union[str, PathLike[str]],
    encoding: Optional[str] = None,
) -> List[WeatherRecord]:
    """Load every record from the CSV at ``path``.

    ``encoding=None`` reads with the platform default encoding. Missing files,
    read errors and malformed numbers all surface as :class:`LoadError`.
    """
    source = str(path)
    try:
        with open(path, "r", encoding=encoding) as handle:
            records = parse_weather_lines(handle)
    except (OSError, LookupError, ValueError) as exc:
        logger.warning(
            "Failed to load weather CSV",
            extra={"source": source, "reason": str(exc), "status": "failed"},
        )
        raise LoadError() from exc

    logger.info(
        "Loaded weather CSV",
        extra={"source": source, "row_count": len(records), "status": "loaded"},
    )
    return records


def load_weather_bytes(
    contents: bytes,
    encoding: str = "utf-8",
    source: str = "<upload>",
) -> List[WeatherRecord]:
    """Parse an uploaded CSV body with the same rules as :func:`load_weather_csv`."""
    try:
        text = contents.decode(encoding)
        records = parse_weather_lines(io.StringIO(text, newline=None))
    except (LookupError, ValueError) as exc:
        logger.warning(
            "Failed to load weather CSV",
            extra={"source": source, "reason": str(exc), "status": "failed"},
        )
        raise LoadError() from exc

    logger.info(
        "Loaded weather CSV",
        extra={"source": source, "row_count": len(records), "status": "loaded"},
    )
    return records

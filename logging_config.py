from __future__ import annotations

import logging
import time
from logging.config import dictConfig
from typing import Any, Dict, Iterable, Sequence

from settings import get_settings

CONTEXT_KEYS = (
    "source",
    "line_number",
    "field_count",
    "reason",
    "status",
    "row_count",
)

LOG_FORMAT = "%(asctime)sZ | %(levelname)s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"

_configured = False


class ContextualFormatter(logging.Formatter):
    """Formatter that stamps UTC times and appends known `extra` attributes.

    Values containing whitespace (file paths, exception text) are quoted so
    each ``key=value`` pair stays a single token.
    """

    converter = time.gmtime

    def __init__(
        self,
        fmt: str | None = None,
        datefmt: str | None = None,
        style: str = "%",
        extra_keys: Iterable[str] | None = None,
    ) -> None:
        super().__init__(fmt=fmt, datefmt=datefmt, style=style)
        self._extra_keys: Sequence[str] = tuple(extra_keys or CONTEXT_KEYS)

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        pairs = [
            _format_pair(key, getattr(record, key))
            for key in self._extra_keys
            if getattr(record, key, None) is not None
        ]
        return f"{message} | {' '.join(pairs)}" if pairs else message


def _format_pair(key: str, value: Any) -> str:
    text = str(value)
    if any(char.isspace() for char in text):
        text = repr(text)
    return f"{key}={text}"


def build_logging_config(level: str | int) -> Dict[str, Any]:
    """dictConfig payload shared by the web app, the CLI and `serve`."""
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "contextual": {
                "()": "logging_config.ContextualFormatter",
                "fmt": LOG_FORMAT,
                "datefmt": DATE_FORMAT,
                "extra_keys": list(CONTEXT_KEYS),
            }
        },
        "handlers": {
            "stderr": {
                "class": "logging.StreamHandler",
                "stream": "ext://sys.stderr",
                "level": level,
                "formatter": "contextual",
            }
        },
        "root": {"handlers": ["stderr"], "level": level},
    }


def configure_logging(level: str | int | None = None) -> None:
    """Apply :func:`build_logging_config` once per process."""
    global _configured
    if _configured:
        return
    dictConfig(build_logging_config(level if level is not None else get_settings().log_level))
    _configured = True

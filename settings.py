from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional


_LOG_LEVEL_ENV = "LOG_LEVEL"
_CSV_ENCODING_ENV = "WEATHER_CSV_ENCODING"
_UPLOAD_ENCODING_ENV = "WEATHER_UPLOAD_ENCODING"
_APP_TITLE_ENV = "WEATHER_APP_TITLE"

DEFAULT_APP_TITLE = "Temperature Variation and Weather Patterns"


@dataclass(frozen=True)
class Settings:
    log_level: str
    csv_encoding: Optional[str]
    upload_encoding: str
    app_title: str


def _read_str_env(name: str, default: str) -> str:
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip()
    return candidate or default


def _read_optional_env(name: str, default: Optional[str]) -> Optional[str]:
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip()
    return candidate or None


def _read_log_level(default: str) -> str:
    value = os.getenv(_LOG_LEVEL_ENV)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    return candidate.upper()


@lru_cache
def get_settings() -> Settings:
    return Settings(
        log_level=_read_log_level("INFO"),
        csv_encoding=_read_optional_env(_CSV_ENCODING_ENV, None),
        upload_encoding=_read_str_env(_UPLOAD_ENCODING_ENV, "utf-8"),
        app_title=_read_str_env(_APP_TITLE_ENV, DEFAULT_APP_TITLE),
    )

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional


DEFAULT_LATEST_URL = (
    "https://gist.githubusercontent.com/LukeGrif/188dc885b3eddb2941c08042185fbe61/raw/latest.json"
)
DEFAULT_HISTORY_URL = (
    "https://gist.githubusercontent.com/LukeGrif/188dc885b3eddb2941c08042185fbe61/raw/history.json"
)

_LATEST_URL_ENV = "FEED_LATEST_URL"
_HISTORY_URL_ENV = "FEED_HISTORY_URL"
_POLL_INTERVAL_ENV = "FEED_POLL_INTERVAL"
_TIMEOUT_ENV = "FEED_TIMEOUT"
_RECENT_SIZE_ENV = "RECENT_WINDOW_SIZE"
_MAX_TICKS_ENV = "AXIS_MAX_TICKS"
_TIMEZONE_ENV = "DASHBOARD_TIMEZONE"
_POLLER_ENABLED_ENV = "DASHBOARD_POLLER_ENABLED"
_LOG_LEVEL_ENV = "LOG_LEVEL"


@dataclass(frozen=True)
class Settings:
    latest_url: str
    history_url: str
    poll_interval: float
    request_timeout: float
    recent_size: int
    max_ticks: int
    timezone: Optional[str]
    poller_enabled: bool
    log_level: str


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


def _read_positive_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    try:
        parsed = int(candidate)
    except ValueError:
        return default
    return parsed if parsed > 0 else default


def _read_positive_float(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    try:
        parsed = float(candidate)
    except ValueError:
        return default
    return parsed if parsed > 0 else default


def _read_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip().lower()
    if candidate in {"1", "true", "yes", "on"}:
        return True
    if candidate in {"0", "false", "no", "off"}:
        return False
    return default


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
        latest_url=_read_str_env(_LATEST_URL_ENV, DEFAULT_LATEST_URL),
        history_url=_read_str_env(_HISTORY_URL_ENV, DEFAULT_HISTORY_URL),
        poll_interval=_read_positive_float(_POLL_INTERVAL_ENV, 10.0),
        request_timeout=_read_positive_float(_TIMEOUT_ENV, 10.0),
        recent_size=_read_positive_int(_RECENT_SIZE_ENV, 10),
        max_ticks=_read_positive_int(_MAX_TICKS_ENV, 12),
        timezone=_read_optional_env(_TIMEZONE_ENV, None),
        poller_enabled=_read_bool(_POLLER_ENABLED_ENV, True),
        log_level=_read_log_level("INFO"),
    )

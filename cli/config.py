from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from settings import get_settings


@dataclass(frozen=True)
class CLIConfig:
    latest_url: str
    history_url: str
    poll_interval: float
    request_timeout: float
    recent_size: int
    max_ticks: int
    timezone: Optional[str] = None


def _positive_or(value: Optional[float], default: float) -> float:
    if value is None or value <= 0:
        return default
    return value


def load_config(
    latest_url: Optional[str] = None,
    history_url: Optional[str] = None,
    poll_interval: Optional[float] = None,
    timezone: Optional[str] = None,
) -> CLIConfig:
    """Command-line options win over environment settings."""
    settings = get_settings()
    return CLIConfig(
        latest_url=(latest_url or settings.latest_url).strip(),
        history_url=(history_url or settings.history_url).strip(),
        poll_interval=_positive_or(poll_interval, settings.poll_interval),
        request_timeout=settings.request_timeout,
        recent_size=settings.recent_size,
        max_ticks=settings.max_ticks,
        timezone=timezone or settings.timezone,
    )

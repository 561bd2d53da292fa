"""Human-readable timestamps and values for axis labels and tooltips."""

from __future__ import annotations

import logging
import math
from datetime import datetime, tzinfo
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

logger = logging.getLogger(__name__)


def resolve_timezone(name: Optional[str]) -> Optional[tzinfo]:
    """Look up a configured IANA zone; ``None`` means the system local zone."""
    if not name:
        return None
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        logger.warning("Unknown time zone %r, using system local time", name)
        return None


def to_local(value: datetime, tz: Optional[tzinfo] = None) -> datetime:
    return value.astimezone(tz)


def ordinal(n: int) -> str:
    if 11 <= n % 100 <= 13:
        return f"{n}th"
    suffix = {1: "st", 2: "nd", 3: "rd"}.get(n % 10, "th")
    return f"{n}{suffix}"


class DateFormatter:
    """Stateless formatter bound to one display time zone.

    Weekday and month names follow the process locale through ``strftime``.
    """

    def __init__(self, tz: Optional[tzinfo] = None) -> None:
        self.tz = tz

    def pretty_long_form(self, value: datetime) -> str:
        """E.g. ``"Friday 5th December 2025 07:00"``."""
        local = to_local(value, self.tz)
        return (
            f"{local.strftime('%A')} {ordinal(local.day)} "
            f"{local.strftime('%B')} {local.year} {local.strftime('%H:%M')}"
        )

    def month_year(self, value: datetime) -> str:
        return to_local(value, self.tz).strftime("%b %Y")

    def time_label(self, value: datetime) -> str:
        return to_local(value, self.tz).strftime("%H:%M:%S")

    def local_label(self, value: datetime) -> str:
        return to_local(value, self.tz).strftime("%Y-%m-%d %H:%M:%S")

    @staticmethod
    def temperature_label(value: Optional[float]) -> str:
        if value is None or not math.isfinite(value):
            return "Temperature: -- °C"
        return f"Temperature: {value:.1f} °C"

    @staticmethod
    def now_label(value: Optional[float]) -> str:
        if value is None or not math.isfinite(value):
            return "--"
        return f"{value:.1f}"

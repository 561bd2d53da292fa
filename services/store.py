"""Append-only history of accepted temperature readings."""

from __future__ import annotations

import math
from datetime import datetime, timezone, tzinfo
from threading import Lock
from typing import List, Optional, Tuple

from models.records import Reading


class RejectedReading(ValueError):
    """Raised when a reading fails validation; the store is left untouched."""

    def __init__(self, reason: str, timestamp_raw: object, temperature: object) -> None:
        super().__init__(f"{reason}: timestamp={timestamp_raw!r} temperature={temperature!r}")
        self.reason = reason
        self.timestamp_raw = timestamp_raw
        self.temperature = temperature


def parse_timestamp(value: str, tz: Optional[tzinfo] = None) -> datetime:
    """Parse an ISO-8601 string into an aware datetime.

    Values without an offset are taken to be in ``tz`` (system local time when
    ``tz`` is ``None``).
    """
    if not isinstance(value, str):
        raise ValueError("Timestamp must be a string")
    candidate = value.strip()
    if not candidate:
        raise ValueError("Timestamp is empty.")

    if candidate.endswith(("Z", "z")):
        candidate = candidate[:-1] + "+00:00"

    try:
        parsed = datetime.fromisoformat(candidate)
    except ValueError as exc:
        raise ValueError("Invalid timestamp format") from exc

    try:
        if parsed.tzinfo is None:
            parsed = parsed.astimezone() if tz is None else parsed.replace(tzinfo=tz)
        # Values near datetime.min/max may not survive conversion to UTC or the display zone.
        parsed.astimezone(timezone.utc)
        parsed.astimezone(tz)
    except (OverflowError, ValueError) as exc:
        raise ValueError("Timestamp out of range") from exc
    return parsed


def coerce_temperature(value: object) -> float:
    """Convert a JSON-ish value to a finite float or raise ``ValueError``."""
    if value is None or isinstance(value, bool):
        raise ValueError("Temperature is missing")
    if isinstance(value, str):
        value = value.strip()
    try:
        number = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError) as exc:
        raise ValueError("Temperature is not numeric") from exc
    if not math.isfinite(number):
        raise ValueError("Temperature is not finite")
    return number


class ReadingStore:
    """Ordered by arrival; nothing is ever evicted."""

    def __init__(self, tz: Optional[tzinfo] = None) -> None:
        self.tz = tz
        self._readings: List[Reading] = []
        self._lock = Lock()

    def append(self, timestamp_raw: str, temperature: object) -> Reading:
        try:
            value = coerce_temperature(temperature)
        except ValueError as exc:
            raise RejectedReading("invalid temperature", timestamp_raw, temperature) from exc
        try:
            date = parse_timestamp(timestamp_raw, self.tz)
        except ValueError as exc:
            raise RejectedReading("invalid timestamp", timestamp_raw, temperature) from exc

        reading = Reading(timestamp_raw=timestamp_raw, temperature=value, date=date)
        with self._lock:
            self._readings.append(reading)
        return reading

    def size(self) -> int:
        with self._lock:
            return len(self._readings)

    def __len__(self) -> int:
        return self.size()

    def slice(self, start: Optional[int] = None, stop: Optional[int] = None) -> Tuple[Reading, ...]:
        with self._lock:
            return tuple(self._readings[start:stop])

    def last(self, n: int) -> Tuple[Reading, ...]:
        if n <= 0:
            return ()
        with self._lock:
            return tuple(self._readings[-n:])

    def latest(self) -> Optional[Reading]:
        with self._lock:
            return self._readings[-1] if self._readings else None

    def all(self) -> Tuple[Reading, ...]:
        return self.slice()

"""Domain models shared across services."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True, slots=True)
class Reading:
    """A single temperature sample accepted into the history."""

    timestamp_raw: str
    temperature: float
    date: datetime


@dataclass(frozen=True, slots=True)
class FeedRecord:
    """A decoded feed entry before validation; values are kept as received."""

    timestamp: object
    temperature: object

"""Per-calendar-day point colors."""

from __future__ import annotations

from datetime import datetime, tzinfo
from typing import Dict, Iterable, List, NamedTuple, Optional

from models.records import Reading
from services.formatting import to_local


class DayColor(NamedTuple):
    name: str
    rgb: str


# The 5th day seen is always blue and the 6th always red.
DAY_COLORS = (
    DayColor("green", "rgb(46, 204, 113)"),
    DayColor("yellow", "rgb(241, 196, 15)"),
    DayColor("purple", "rgb(155, 89, 182)"),
    DayColor("orange", "rgb(230, 126, 34)"),
    DayColor("blue", "rgb(52, 152, 219)"),
    DayColor("red", "rgb(231, 76, 60)"),
    DayColor("slate", "rgb(52, 73, 94)"),
)


def day_key(value: datetime, tz: Optional[tzinfo] = None) -> str:
    return to_local(value, tz).strftime("%Y-%m-%d")


def color_for(index: int) -> DayColor:
    return DAY_COLORS[index % len(DAY_COLORS)]


class DayColorAssigner:
    """Numbers days in order of first appearance, cycling through the palette.

    A fresh mapping is built on every call, so the result depends only on the
    order of the readings passed in.
    """

    def __init__(self, tz: Optional[tzinfo] = None) -> None:
        self.tz = tz

    def assign(self, readings: Iterable[Reading]) -> List[int]:
        day_to_color: Dict[str, int] = {}
        counter = 0
        indices: List[int] = []
        for reading in readings:
            key = day_key(reading.date, self.tz)
            if key not in day_to_color:
                day_to_color[key] = counter % len(DAY_COLORS)
                counter += 1
            indices.append(day_to_color[key])
        return indices

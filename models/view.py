"""Derived view values handed from the view engine to chart sinks."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Tuple


class ViewMode(str, Enum):
    """Which slice of the history is on screen."""

    recent = "recent"
    full = "full"


class TickStrategy(str, Enum):
    """How x-axis tick labels are produced for a view."""

    raw_labels = "raw_labels"
    month_decimated = "month_decimated"

    @property
    def axis_title(self) -> str:
        if self is TickStrategy.month_decimated:
            return "Month"
        return "Time"


@dataclass(frozen=True, slots=True)
class ViewPoint:
    label: str
    value: float
    color_index: int
    date: datetime


@dataclass(frozen=True, slots=True)
class ViewWindow:
    """Immutable result of one window computation."""

    mode: ViewMode
    points: Tuple[ViewPoint, ...] = ()

    @property
    def labels(self) -> list[str]:
        return [point.label for point in self.points]

    @property
    def values(self) -> list[float]:
        return [point.value for point in self.points]

    @property
    def color_indices(self) -> list[int]:
        return [point.color_index for point in self.points]

    @property
    def dates(self) -> list[datetime]:
        return [point.date for point in self.points]


@dataclass(frozen=True, slots=True)
class Tick:
    """A tick position selected by the renderer, carrying its point label."""

    index: int
    label: str


@dataclass(frozen=True, slots=True)
class ChartPayload:
    """Everything a chart sink needs to draw one view."""

    mode: ViewMode
    title: str
    labels: Tuple[str, ...]
    values: Tuple[float, ...]
    point_colors: Tuple[int, ...]
    tooltip_dates: Tuple[datetime, ...]
    tick_strategy: TickStrategy
    axis_title: str

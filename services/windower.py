"""Selection of the visible slice of history."""

from __future__ import annotations

from typing import Optional, Sequence

from models.records import Reading
from models.view import ViewMode, ViewPoint, ViewWindow
from services.colors import DayColorAssigner
from services.formatting import DateFormatter
from services.store import ReadingStore

DEFAULT_RECENT_SIZE = 10


class ViewWindower:
    """Pure window computation; every call builds a new ``ViewWindow``."""

    def __init__(
        self,
        formatter: Optional[DateFormatter] = None,
        assigner: Optional[DayColorAssigner] = None,
        recent_size: int = DEFAULT_RECENT_SIZE,
    ) -> None:
        self.formatter = formatter or DateFormatter()
        self.assigner = assigner or DayColorAssigner(self.formatter.tz)
        self.recent_size = recent_size

    def select(self, store: ReadingStore, mode: ViewMode) -> Sequence[Reading]:
        if mode is ViewMode.full:
            return store.all()
        return store.last(self.recent_size)

    def compute(self, store: ReadingStore, mode: ViewMode) -> ViewWindow:
        readings = self.select(store, mode)
        colors = self.assigner.assign(readings)
        points = tuple(
            ViewPoint(
                label=self._label(reading, mode),
                value=reading.temperature,
                color_index=color,
                date=reading.date,
            )
            for reading, color in zip(readings, colors)
        )
        return ViewWindow(mode=mode, points=points)

    def _label(self, reading: Reading, mode: ViewMode) -> str:
        # Full-history labels stay raw so tick planning can re-parse them.
        if mode is ViewMode.full:
            return reading.timestamp_raw
        return self.formatter.time_label(reading.date)

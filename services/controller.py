"""Dashboard orchestration: ingestion, mode switching and chart updates."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from functools import lru_cache
from threading import Lock
from typing import Iterable, Optional, Protocol

from models.records import FeedRecord, Reading
from models.view import ChartPayload, ViewMode, ViewWindow
from services.axis import AxisLabelPlanner
from services.colors import DayColorAssigner
from services.formatting import DateFormatter, resolve_timezone
from services.store import ReadingStore, RejectedReading, parse_timestamp
from services.windower import ViewWindower
from settings import get_settings

logger = logging.getLogger(__name__)


class ChartSink(Protocol):
    def push(self, payload: ChartPayload) -> None: ...


class SnapshotSink:
    """Keeps the most recently pushed payload for readers such as the HTTP API."""

    def __init__(self) -> None:
        self._payload: Optional[ChartPayload] = None
        self._lock = Lock()

    def push(self, payload: ChartPayload) -> None:
        with self._lock:
            self._payload = payload

    @property
    def latest(self) -> Optional[ChartPayload]:
        with self._lock:
            return self._payload


@dataclass(frozen=True)
class DashboardStatus:
    live: bool
    mode: ViewMode
    reading_count: int
    latest: Optional[Reading]


def chart_title(mode: ViewMode, recent_size: int) -> str:
    if mode is ViewMode.full:
        return "Temperature (all readings)"
    return f"Temperature (last {recent_size} readings)"


class DashboardController:
    """Owns the reading store and the current mode.

    Every mutation (new reading, history batch, mode switch) recomputes the
    window and pushes it to the sink while holding one lock, so sinks only
    ever see complete snapshots.
    """

    def __init__(
        self,
        sink: ChartSink,
        store: Optional[ReadingStore] = None,
        windower: Optional[ViewWindower] = None,
        planner: Optional[AxisLabelPlanner] = None,
        mode: ViewMode = ViewMode.recent,
    ) -> None:
        self.sink = sink
        self.store = store if store is not None else ReadingStore()
        self.windower = windower or ViewWindower(DateFormatter(self.store.tz))
        self.planner = planner or AxisLabelPlanner(self.windower.formatter)
        self._mode = mode
        self._live = False
        self.last_timestamp: Optional[str] = None
        self._lock = Lock()

    @property
    def mode(self) -> ViewMode:
        return self._mode

    @property
    def live(self) -> bool:
        return self._live

    def ingest_latest(self, timestamp_raw: str, temperature: object) -> Optional[Reading]:
        """Apply a polled reading unless its timestamp string was already seen."""
        with self._lock:
            if self.last_timestamp is not None and timestamp_raw == self.last_timestamp:
                return None
            self.last_timestamp = timestamp_raw
            reading = self._append(timestamp_raw, temperature)
            if reading is not None:
                self._push()
            return reading

    def add_reading(self, timestamp_raw: str, temperature: object) -> Optional[Reading]:
        with self._lock:
            reading = self._append(timestamp_raw, temperature)
            if reading is not None:
                self._push()
            return reading

    def load_history(self, records: Iterable[FeedRecord]) -> int:
        """Append a history batch in timestamp order and push one update."""
        ordered = sorted(records, key=self._history_sort_key)
        with self._lock:
            accepted = 0
            for record in ordered:
                if self._append(record.timestamp, record.temperature) is not None:  # type: ignore[arg-type]
                    accepted += 1
            self._push()
        logger.info(
            "Loaded history",
            extra={"reading_count": accepted, "point_count": len(ordered)},
        )
        return accepted

    def set_mode(self, mode: ViewMode) -> ChartPayload:
        with self._lock:
            self._mode = ViewMode(mode)
            return self._push()

    def refresh(self) -> ChartPayload:
        with self._lock:
            return self._push()

    def preview(self, mode: ViewMode) -> ChartPayload:
        """Build the payload for ``mode`` without switching or pushing."""
        with self._lock:
            return self.build_payload(self.windower.compute(self.store, ViewMode(mode)))

    def current_view(self) -> ViewWindow:
        return self.windower.compute(self.store, self._mode)

    def mark_live(self, live: bool) -> None:
        if live != self._live:
            logger.info("Feed status changed to %s", "live" if live else "reconnecting")
        self._live = live

    def status(self) -> DashboardStatus:
        return DashboardStatus(
            live=self._live,
            mode=self._mode,
            reading_count=self.store.size(),
            latest=self.store.latest(),
        )

    def build_payload(self, window: ViewWindow) -> ChartPayload:
        strategy = self.planner.plan(window.mode)
        return ChartPayload(
            mode=window.mode,
            title=chart_title(window.mode, self.windower.recent_size),
            labels=tuple(window.labels),
            values=tuple(window.values),
            point_colors=tuple(window.color_indices),
            tooltip_dates=tuple(window.dates),
            tick_strategy=strategy,
            axis_title=strategy.axis_title,
        )

    def _append(self, timestamp_raw: str, temperature: object) -> Optional[Reading]:
        try:
            return self.store.append(timestamp_raw, temperature)
        except RejectedReading as exc:
            logger.warning(
                "Dropped reading",
                extra={"reason": exc.reason, "timestamp_raw": timestamp_raw},
            )
            return None

    def _push(self) -> ChartPayload:
        payload = self.build_payload(self.current_view())
        self.sink.push(payload)
        logger.debug(
            "Pushed view",
            extra={"mode": payload.mode.value, "point_count": len(payload.values)},
        )
        return payload

    def _history_sort_key(self, record: FeedRecord) -> tuple[int, datetime]:
        try:
            return 0, parse_timestamp(record.timestamp, self.store.tz)  # type: ignore[arg-type]
        except ValueError:
            return 1, datetime.min


@lru_cache
def build_default_controller() -> DashboardController:
    """Factory that wires a controller from settings with a snapshot sink."""
    settings = get_settings()
    tz = resolve_timezone(settings.timezone)
    formatter = DateFormatter(tz)
    windower = ViewWindower(
        formatter=formatter,
        assigner=DayColorAssigner(tz),
        recent_size=settings.recent_size,
    )
    return DashboardController(
        sink=SnapshotSink(),
        store=ReadingStore(tz),
        windower=windower,
        planner=AxisLabelPlanner(formatter),
    )

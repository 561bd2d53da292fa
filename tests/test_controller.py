from __future__ import annotations

import logging
import math
from datetime import timezone
from typing import List

import pytest

from models.records import FeedRecord
from models.view import ChartPayload, TickStrategy, ViewMode
from services.controller import DashboardController, SnapshotSink, chart_title
from services.formatting import DateFormatter
from services.store import ReadingStore
from services.windower import ViewWindower


class RecordingSink:
    def __init__(self) -> None:
        self.payloads: List[ChartPayload] = []

    def push(self, payload: ChartPayload) -> None:
        self.payloads.append(payload)


@pytest.fixture()
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture()
def controller(sink: RecordingSink) -> DashboardController:
    return DashboardController(
        sink=sink,
        store=ReadingStore(tz=timezone.utc),
        windower=ViewWindower(DateFormatter(timezone.utc)),
    )


def test_end_to_end_two_readings(controller: DashboardController, sink: RecordingSink) -> None:
    controller.add_reading("2025-12-05T07:00:00Z", 10.0)
    controller.add_reading("2025-12-05T08:00:00Z", 12.5)

    payload = sink.payloads[-1]
    formatter = controller.windower.formatter
    assert payload.values == (10.0, 12.5)
    assert payload.point_colors == (0, 0)
    assert payload.labels == ("07:00:00", "08:00:00")
    assert payload.tick_strategy is TickStrategy.raw_labels
    assert payload.axis_title == "Time"
    assert payload.title == "Temperature (last 10 readings)"
    assert formatter.pretty_long_form(payload.tooltip_dates[0]) == "Friday 5th December 2025 07:00"


def test_ingest_latest_skips_repeated_timestamp(controller: DashboardController, sink: RecordingSink) -> None:
    first = controller.ingest_latest("2025-12-05T07:00:00Z", 10.0)
    repeat = controller.ingest_latest("2025-12-05T07:00:00Z", 10.0)
    second = controller.ingest_latest("2025-12-05T07:10:00Z", 10.5)

    assert first is not None
    assert repeat is None
    assert second is not None
    assert controller.store.size() == 2
    assert len(sink.payloads) == 2
    assert controller.last_timestamp == "2025-12-05T07:10:00Z"


def test_dedup_uses_exact_string_equality(controller: DashboardController) -> None:
    controller.ingest_latest("2025-12-05T07:00:00Z", 10.0)
    controller.ingest_latest("2025-12-05T07:00:00+00:00", 10.0)

    assert controller.store.size() == 2


def test_rejected_reading_is_dropped(
    controller: DashboardController, sink: RecordingSink, caplog: pytest.LogCaptureFixture
) -> None:
    with caplog.at_level(logging.WARNING):
        assert controller.ingest_latest("2025-12-05T07:00:00Z", math.nan) is None
        assert controller.add_reading("not-a-time", 10.0) is None

    assert controller.store.size() == 0
    assert sink.payloads == []
    reasons = {getattr(record, "reason", None) for record in caplog.records}
    assert {"invalid temperature", "invalid timestamp"} <= reasons


def test_rejected_latest_still_counts_as_seen(controller: DashboardController) -> None:
    controller.ingest_latest("2025-12-05T07:00:00Z", "n/a")

    assert controller.ingest_latest("2025-12-05T07:00:00Z", 10.0) is None
    assert controller.store.size() == 0


def test_set_mode_recomputes_without_new_data(controller: DashboardController, sink: RecordingSink) -> None:
    controller.add_reading("2025-11-30T12:00:00Z", 8.0)
    controller.add_reading("2025-12-01T12:00:00Z", 9.0)

    payload = controller.set_mode(ViewMode.full)

    assert controller.mode is ViewMode.full
    assert sink.payloads[-1] is payload
    assert payload.labels == ("2025-11-30T12:00:00Z", "2025-12-01T12:00:00Z")
    assert payload.tick_strategy is TickStrategy.month_decimated
    assert payload.axis_title == "Month"
    assert payload.title == "Temperature (all readings)"
    assert controller.store.size() == 2


def test_set_mode_accepts_strings(controller: DashboardController) -> None:
    controller.set_mode("full")  # type: ignore[arg-type]

    assert controller.mode is ViewMode.full


def test_load_history_sorts_and_pushes_once(controller: DashboardController, sink: RecordingSink) -> None:
    records = [
        FeedRecord(timestamp="2025-12-05T09:00:00Z", temperature=3.0),
        FeedRecord(timestamp="bad", temperature=4.0),
        FeedRecord(timestamp="2025-12-05T07:00:00Z", temperature=1.0),
        FeedRecord(timestamp="2025-12-05T08:00:00Z", temperature=None),
        FeedRecord(timestamp="2025-12-05T08:30:00Z", temperature="2.0"),
    ]

    accepted = controller.load_history(records)

    assert accepted == 3
    assert [r.temperature for r in controller.store.all()] == [1.0, 2.0, 3.0]
    assert len(sink.payloads) == 1
    assert controller.last_timestamp is None


def test_status_reports_latest_reading(controller: DashboardController) -> None:
    status = controller.status()
    assert status.latest is None
    assert status.live is False

    controller.add_reading("2025-12-05T07:00:00Z", 10.0)
    controller.mark_live(True)

    status = controller.status()
    assert status.live is True
    assert status.reading_count == 1
    assert status.latest is not None
    assert status.latest.temperature == 10.0
    assert status.mode is ViewMode.recent


def test_snapshot_sink_keeps_latest_payload() -> None:
    sink = SnapshotSink()
    controller = DashboardController(sink=sink, store=ReadingStore(tz=timezone.utc))
    assert sink.latest is None

    controller.add_reading("2025-12-05T07:00:00Z", 10.0)
    first = sink.latest
    controller.add_reading("2025-12-05T08:00:00Z", 11.0)

    assert first is not None
    assert sink.latest is not first
    assert sink.latest.values == (10.0, 11.0)


def test_refresh_is_stable(controller: DashboardController) -> None:
    for hour in range(7, 12):
        controller.add_reading(f"2025-12-05T{hour:02d}:00:00Z", float(hour))

    first = controller.refresh()
    second = controller.refresh()

    assert first == second


def test_chart_title_uses_window_size() -> None:
    assert chart_title(ViewMode.recent, 5) == "Temperature (last 5 readings)"
    assert chart_title(ViewMode.full, 5) == "Temperature (all readings)"


def test_out_of_range_timestamp_does_not_break_later_updates(
    controller: DashboardController, sink: RecordingSink
) -> None:
    assert controller.add_reading("9999-12-31T23:00:00-05:00", 1.0) is None
    assert controller.ingest_latest("0001-01-01T00:00:00+05:00", 1.0) is None

    reading = controller.add_reading("2025-12-05T07:00:00Z", 10.0)
    payload = controller.set_mode(ViewMode.full)

    assert reading is not None
    assert controller.store.size() == 1
    assert payload.labels == ("2025-12-05T07:00:00Z",)
    assert len(sink.payloads) == 2


def test_preview_leaves_mode_and_sink_alone(controller: DashboardController, sink: RecordingSink) -> None:
    controller.add_reading("2025-12-05T07:00:00Z", 10.0)

    payload = controller.preview(ViewMode.full)

    assert payload.mode is ViewMode.full
    assert payload.axis_title == "Month"
    assert controller.mode is ViewMode.recent
    assert len(sink.payloads) == 1

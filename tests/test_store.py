from __future__ import annotations

import math
from datetime import datetime, timedelta, timezone

import pytest

from services.store import ReadingStore, RejectedReading, coerce_temperature, parse_timestamp


@pytest.fixture()
def store() -> ReadingStore:
    return ReadingStore(tz=timezone.utc)


def test_append_then_last_returns_reading(store: ReadingStore) -> None:
    reading = store.append("2025-12-05T07:00:00Z", 10.0)

    assert store.last(1) == (reading,)
    assert reading.timestamp_raw == "2025-12-05T07:00:00Z"
    assert reading.temperature == 10.0
    assert reading.date == datetime(2025, 12, 5, 7, 0, tzinfo=timezone.utc)


@pytest.mark.parametrize(
    "temperature",
    [math.nan, math.inf, -math.inf, None, True, "warm", "", [1.0]],
)
def test_invalid_temperature_is_rejected(store: ReadingStore, temperature) -> None:
    store.append("2025-12-05T06:00:00Z", 9.0)

    with pytest.raises(RejectedReading) as excinfo:
        store.append("2025-12-05T07:00:00Z", temperature)

    assert excinfo.value.reason == "invalid temperature"
    assert store.size() == 1


@pytest.mark.parametrize("timestamp", ["", "yesterday", "2025-13-01T00:00:00Z", "2025-12-32", None])
def test_invalid_timestamp_is_rejected(store: ReadingStore, timestamp) -> None:
    with pytest.raises(RejectedReading) as excinfo:
        store.append(timestamp, 10.0)

    assert excinfo.value.reason == "invalid timestamp"
    assert len(store) == 0


def test_numeric_strings_and_ints_are_accepted(store: ReadingStore) -> None:
    first = store.append("2025-12-05T07:00:00Z", "12.5")
    second = store.append("2025-12-05T08:00:00Z", 11)

    assert first.temperature == 12.5
    assert second.temperature == 11.0
    assert isinstance(second.temperature, float)


def test_duplicate_timestamps_are_both_kept(store: ReadingStore) -> None:
    store.append("2025-12-05T07:00:00Z", 10.0)
    store.append("2025-12-05T07:00:00Z", 10.0)

    assert store.size() == 2


def test_last_and_slice_bounds(store: ReadingStore) -> None:
    start = datetime(2025, 12, 1, tzinfo=timezone.utc)
    for hour in range(5):
        store.append((start + timedelta(hours=hour)).isoformat(), float(hour))

    assert store.last(0) == ()
    assert store.last(-3) == ()
    assert [r.temperature for r in store.last(2)] == [3.0, 4.0]
    assert len(store.last(50)) == 5
    assert [r.temperature for r in store.slice(1, 3)] == [1.0, 2.0]
    assert store.latest().temperature == 4.0


def test_arrival_order_is_preserved(store: ReadingStore) -> None:
    store.append("2025-12-05T09:00:00Z", 3.0)
    store.append("2025-12-05T07:00:00Z", 1.0)

    assert [r.temperature for r in store.all()] == [3.0, 1.0]


def test_latest_on_empty_store_is_none(store: ReadingStore) -> None:
    assert store.latest() is None
    assert store.all() == ()


def test_parse_timestamp_naive_values_use_display_zone() -> None:
    tz = timezone(timedelta(hours=-5))

    parsed = parse_timestamp("2025-12-05T07:00:00", tz)
    date_only = parse_timestamp("2025-11-30", tz)

    assert parsed.tzinfo is tz
    assert parsed.hour == 7
    assert date_only == datetime(2025, 11, 30, tzinfo=tz)


def test_parse_timestamp_keeps_explicit_offsets() -> None:
    parsed = parse_timestamp("2025-12-05T07:00:00+02:00", timezone.utc)

    assert parsed.utcoffset() == timedelta(hours=2)


def test_coerce_temperature_strips_strings() -> None:
    assert coerce_temperature(" 21.25 ") == 21.25


@pytest.mark.parametrize(
    "timestamp",
    ["9999-12-31T23:00:00-05:00", "0001-01-01T00:00:00+05:00"],
)
def test_timestamps_outside_datetime_range_are_rejected(store: ReadingStore, timestamp: str) -> None:
    with pytest.raises(RejectedReading) as excinfo:
        store.append(timestamp, 1.0)

    assert excinfo.value.reason == "invalid timestamp"
    assert store.size() == 0


def test_short_fractional_seconds_are_accepted(store: ReadingStore) -> None:
    reading = store.append("2025-12-05T07:00:00.5Z", 10.0)

    assert reading.date == datetime(2025, 12, 5, 7, 0, 0, 500000, tzinfo=timezone.utc)

"""Tests for memory and throughput value series."""

from changeline.classifier.dispatcher import classify_all
from changeline.timeline.series import MEMORY_ICON, THROUGHPUT_ICON, build_series


def test_memory_series_per_entity_in_time_order(sample_records):
    series = build_series(classify_all(sample_records), MEMORY_ICON)

    assert len(series) == 1
    db1 = series[0]
    assert db1.name == "db1"
    assert db1.id == "memory-db1"
    assert [item.value for item in db1.data] == [1000, 2000]
    assert db1.data[0].timestamp < db1.data[1].timestamp


def test_throughput_series(sample_records):
    series = build_series(classify_all(sample_records), THROUGHPUT_ICON)

    assert [s.name for s in series] == ["db2"]
    assert series[0].to_dict() == {
        "id": "speedometer-db2",
        "name": "db2",
        "data": [{"timestamp": "2024-01-02T08:15:00", "value": 1000}],
    }


def test_no_matching_events_gives_no_series(make_record):
    events = classify_all([make_record("Backup enabled")])

    assert build_series(events, MEMORY_ICON) == []


def test_series_orders_mixed_offset_timestamps(make_record):
    events = classify_all(
        [
            make_record("Memory Limit changed from 1 GB to 2 GB", "db1", "2024-01-01T11:00:00"),
            make_record("Memory Limit changed from 500 MB to 1 GB", "db1", "2024-01-01T10:00:00Z"),
        ]
    )

    series = build_series(events, MEMORY_ICON)

    assert [item.value for item in series[0].data] == [1000, 2000]

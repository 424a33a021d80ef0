"""Tests for timeline report assembly and the record models."""

from datetime import UTC, datetime

import pytest
from pydantic import ValidationError

from changeline.core.config import ReportConfig
from changeline.models.record import ClassifiedEvent, Direction, RawChangeRecord
from changeline.report import build_report


def test_report_contents(sample_records):
    report = build_report(sample_records, ReportConfig(title="January changes"))

    assert report.title == "January changes"
    assert report.entities == ["", "db1", "db2"]
    assert report.labels == {"": "Subscription", "db1": "db1", "db2": "db2"}
    assert report.timeline.buckets() == ["2024-01-01", "2024-01-02"]
    assert [e.change for e in report.timeline.events("2024-01-01", "db1")] == [
        "DB activated",
        "Memory Limit changed from 500 MB to 1 GB",
        "Memory Limit changed from 1 GB to 2 GB",
    ]
    assert len(report.legend) == 5


def test_report_to_dict(sample_records):
    config = ReportConfig(granularity="hourly", legend_row_width=7, title="Ops")
    data = build_report(sample_records, config).to_dict()

    assert data["title"] == "Ops"
    assert data["granularity"] == "hourly"
    assert data["databases"] == ["", "db1", "db2"]
    assert [len(row) for row in data["legend"]] == [7, 7, 7]
    assert data["legend"][0][0] == {"title": "Network Change", "icon": "sign-intersection-side"}
    assert "2024-01-02 08:00" in data["timeline"]
    assert len(data["timeline"]["2024-01-02 08:00"]["db2"]) == 2
    assert data["series"]["memory"][0]["name"] == "db1"
    assert data["series"]["throughput"][0]["data"][0]["value"] == 1000


def test_report_with_threads_matches_inline(sample_records):
    inline = build_report(sample_records).to_dict()
    threaded = build_report(sample_records, ReportConfig(workers=3)).to_dict()

    assert inline == threaded


def test_empty_input():
    report = build_report([])

    assert report.entities == []
    assert report.timeline.buckets() == []
    assert report.to_dict()["timeline"] == {}


def test_record_accepts_export_column_names():
    record = RawChangeRecord.model_validate(
        {
            "date": "2024-01-01T10:00:00",
            "database name": "orders",
            "description": "Backup enabled",
            "activity": "Configuration",
        }
    )

    assert record.timestamp == datetime(2024, 1, 1, 10, 0)
    assert record.entity == "orders"
    assert record.change == "Backup enabled"


def test_record_entity_defaults_to_subscription():
    record = RawChangeRecord(timestamp="2024-01-01T10:00:00", change="VPC peering initiated")

    assert record.entity == ""


def test_classified_event_is_immutable():
    event = ClassifiedEvent(
        timestamp=datetime(2024, 1, 1),
        entity="db1",
        change="Backup enabled",
        title="Backups",
        icon="cloud-download",
        direction=Direction.UP,
    )

    with pytest.raises(ValidationError):
        event.direction = Direction.DOWN


def test_record_instant_treats_naive_timestamps_as_utc():
    naive = RawChangeRecord(timestamp="2024-01-01T10:00:00", change="Backup enabled")
    aware = RawChangeRecord(timestamp="2024-01-01T12:00:00+02:00", change="Backup enabled")

    assert naive.timestamp.tzinfo is None
    assert naive.instant == datetime(2024, 1, 1, 10, 0, tzinfo=UTC)
    assert aware.instant == naive.instant

"""Pytest configuration and fixtures."""

import json
from collections.abc import Callable
from datetime import datetime

import pytest

from changeline.models.record import RawChangeRecord


@pytest.fixture
def make_record() -> Callable[..., RawChangeRecord]:
    """Factory for raw change records."""

    def _make(
        change: str,
        entity: str = "db1",
        timestamp: str | datetime = "2024-01-01T10:00:00",
    ) -> RawChangeRecord:
        return RawChangeRecord(timestamp=timestamp, entity=entity, change=change)

    return _make


@pytest.fixture
def sample_records(make_record: Callable[..., RawChangeRecord]) -> list[RawChangeRecord]:
    """A small mixed set of changes across two databases and the subscription."""
    return [
        make_record("DB activated", "db1", "2024-01-01T09:00:00"),
        make_record("Memory Limit changed from 1 GB to 2 GB", "db1", "2024-01-01T23:59:00"),
        make_record("Memory Limit changed from 500 MB to 1 GB", "db1", "2024-01-01T10:00:00"),
        make_record(
            "Database Throughput was changed from 2000 ops/sec to 1000 ops/sec",
            "db2",
            "2024-01-02T08:15:00",
        ),
        make_record("Backup enabled", "db2", "2024-01-02T08:45:00"),
        make_record("VPC peering initiated", "", "2024-01-01T12:00:00"),
    ]


@pytest.fixture
def sample_jsonl(sample_records: list[RawChangeRecord]) -> str:
    """Sample records as JSON Lines, using the original export column names."""
    lines = [
        json.dumps(
            {
                "date": r.timestamp.isoformat(),
                "database name": r.entity,
                "description": r.change,
            }
        )
        for r in sample_records
    ]
    return "\n".join(lines) + "\n"

"""Run ID generation and metrics collection for changeline."""

import time
from collections.abc import Generator
from contextlib import contextmanager
from typing import Any
from uuid import UUID, uuid4

from changeline.models.metrics import StepMetrics


def generate_run_id() -> UUID:
    """Generate a unique run ID.

    Returns:
        UUID v4 for run correlation
    """
    return uuid4()


class MetricsCollector:
    """Collects metrics for a command execution."""

    def __init__(self, run_id: UUID | None = None, step_name: str = "unknown"):
        self.run_id = run_id or generate_run_id()
        self.step_name = step_name
        self.start_time: float | None = None
        self.end_time: float | None = None

        self.records_processed = 0
        self.records_output = 0
        self.warnings = 0
        self.errors = 0
        self.skipped = 0

    def start(self) -> None:
        """Mark the start of execution."""
        self.start_time = time.perf_counter()

    def stop(self) -> None:
        """Mark the end of execution."""
        self.end_time = time.perf_counter()

    @property
    def duration_ms(self) -> int:
        """Get execution duration in milliseconds."""
        if self.start_time is None:
            return 0
        end = self.end_time or time.perf_counter()
        return int((end - self.start_time) * 1000)

    def add_records_processed(self, count: int = 1) -> None:
        self.records_processed += count

    def add_records_output(self, count: int = 1) -> None:
        self.records_output += count

    def add_warnings(self, count: int = 1) -> None:
        self.warnings += count

    def add_errors(self, count: int = 1) -> None:
        self.errors += count

    def add_skipped(self, count: int = 1) -> None:
        self.skipped += count

    def to_step_metrics(self) -> StepMetrics:
        """Convert to StepMetrics model."""
        return StepMetrics(
            run_id=self.run_id,
            step_name=self.step_name,
            duration_ms=self.duration_ms,
            records_processed=self.records_processed,
            records_output=self.records_output,
            warnings=self.warnings,
            errors=self.errors,
            skipped=self.skipped,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON output."""
        return self.to_step_metrics().model_dump(mode="json")


@contextmanager
def collect_metrics(
    step_name: str, run_id: UUID | None = None
) -> Generator[MetricsCollector, None, None]:
    """Context manager for collecting metrics.

    Usage:
        with collect_metrics("timeline") as metrics:
            for record in records:
                metrics.add_records_processed()
                ...

    Args:
        step_name: Name of the step being executed
        run_id: Optional run ID for correlation

    Yields:
        MetricsCollector instance
    """
    collector = MetricsCollector(run_id=run_id, step_name=step_name)
    collector.start()
    try:
        yield collector
    finally:
        collector.stop()

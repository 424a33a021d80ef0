"""Reading change records for CLI commands.

Input is JSON Lines: one already-decoded change record per line.
Lines that are not valid records are logged and skipped.
"""

import json
from collections.abc import Iterable, Iterator

from pydantic import ValidationError

from changeline.core.errors import InputError
from changeline.core.logging import warning
from changeline.core.metrics import MetricsCollector
from changeline.models.record import RawChangeRecord


def parse_line(line: str, line_number: int) -> RawChangeRecord:
    """Parse one JSON line into a RawChangeRecord.

    Raises:
        InputError: If the line is not a JSON object with a valid record
    """
    try:
        data = json.loads(line)
    except json.JSONDecodeError as e:
        raise InputError(f"Line {line_number} is not valid JSON: {e.msg}", line=line_number) from e

    if not isinstance(data, dict):
        raise InputError(f"Line {line_number} is not a JSON object", line=line_number)

    try:
        return RawChangeRecord.model_validate(data)
    except ValidationError as e:
        first = e.errors()[0]
        field = ".".join(str(p) for p in first["loc"])
        raise InputError(
            f"Line {line_number} is not a change record: {field}: {first['msg']}",
            line=line_number,
        ) from e


def read_records(
    lines: Iterable[str], metrics: MetricsCollector | None = None
) -> Iterator[RawChangeRecord]:
    """Yield records from JSON lines, skipping blank and invalid lines."""
    for line_number, line in enumerate(lines, start=1):
        if not line.strip():
            continue

        if metrics:
            metrics.add_records_processed()

        try:
            yield parse_line(line, line_number)
        except InputError as e:
            warning(e.error.message, line=line_number)
            if metrics:
                metrics.add_skipped()

"""Output formatting for the changeline CLI.

Results go to stdout as JSON, JSON Lines or human-readable text; logs go to
stderr.
"""

import json
import sys
from collections.abc import Iterable
from datetime import datetime
from enum import Enum
from typing import Any, Literal, TextIO

from pydantic import BaseModel

OutputFormat = Literal["json", "jsonl", "human"]

EVENT_COLUMNS = ["timestamp", "entity", "title", "direction", "change"]

_output_format: OutputFormat = "json"


def set_output_format(format: OutputFormat) -> None:
    """Set the format used for errors raised outside a command."""
    global _output_format
    _output_format = format


class JSONEncoder(json.JSONEncoder):
    """JSON encoder for changeline types."""

    def default(self, obj: Any) -> Any:
        if isinstance(obj, datetime):
            return obj.isoformat()
        if isinstance(obj, Enum):
            return obj.value
        return super().default(obj)


def _plain(data: Any) -> Any:
    if isinstance(data, BaseModel):
        return data.model_dump(mode="json")
    return data


def output_json(data: Any, file: TextIO | None = None) -> None:
    """Write data as a single JSON document."""
    file = file or sys.stdout
    json.dump(_plain(data), file, cls=JSONEncoder, ensure_ascii=False)
    file.write("\n")
    file.flush()


def output_jsonl(records: Iterable[Any], file: TextIO | None = None) -> None:
    """Write records as JSON Lines, flushing after each record."""
    for record in records:
        output_json(record, file)


def _heading(title: str | None, file: TextIO) -> None:
    if title:
        file.write(f"\n{title}\n{'=' * len(title)}\n\n")


def _render(data: Any, file: TextIO, indent: int = 0) -> None:
    prefix = "  " * indent
    if isinstance(data, dict):
        items = data.items()
    elif isinstance(data, list):
        items = ((f"[{i}]", item) for i, item in enumerate(data))
    else:
        file.write(f"{prefix}{data}\n")
        return

    for key, value in items:
        if isinstance(value, (dict, list)):
            file.write(f"{prefix}{key}:\n")
            _render(value, file, indent + 1)
        else:
            file.write(f"{prefix}{key}: {value}\n")


def output_human(data: Any, title: str | None = None, file: TextIO | None = None) -> None:
    """Write data as indented key/value text."""
    file = file or sys.stdout
    _heading(title, file)
    _render(_plain(data), file)
    file.flush()


def output_human_table(
    records: list[dict[str, Any]],
    columns: list[str] | None = None,
    title: str | None = None,
    file: TextIO | None = None,
    max_width: int = 50,
) -> None:
    """Write records as a fixed-width table.

    Args:
        records: Record dictionaries
        columns: Columns to display (event columns, or the first six keys)
        title: Optional heading
        file: Output file (defaults to stdout)
        max_width: Maximum column width; longer cells are cut with "..."
    """
    file = file or sys.stdout
    if not records:
        file.write("No records.\n")
        return

    _heading(title, file)
    if columns is None:
        first = records[0]
        columns = EVENT_COLUMNS if all(c in first for c in EVENT_COLUMNS) else list(first)[:6]

    cells = [["" if r.get(c) is None else str(r.get(c)) for c in columns] for r in records]
    widths = [
        min(max_width, max([len(col)] + [len(row[i]) for row in cells[:100]]))
        for i, col in enumerate(columns)
    ]

    header = " | ".join(col.ljust(w)[:w] for col, w in zip(columns, widths))
    file.write(f"{header}\n{'-' * len(header)}\n")
    for row in cells:
        fitted = (v if len(v) <= w else v[: w - 3] + "..." for v, w in zip(row, widths))
        file.write(" | ".join(v.ljust(w) for v, w in zip(fitted, widths)) + "\n")

    file.write(f"\nTotal: {len(records)} records\n")
    file.flush()


def output_error(error: Any, file: TextIO | None = None) -> None:
    """Write an error to stdout in the current format.

    Errors go to stdout, not stderr, so callers can parse them.
    """
    if _output_format == "human":
        output_human(error, title="Error", file=file)
    else:
        output_json(error, file)


class OutputFormatter:
    """Writes command results in the selected format."""

    def __init__(self, format: OutputFormat = "json"):
        self.format = format

    def output(self, data: Any, title: str | None = None) -> None:
        """Write a single result."""
        if self.format == "human":
            output_human(data, title=title)
        elif self.format == "jsonl" and isinstance(data, list):
            output_jsonl(data)
        else:
            output_json(data)

    def error(self, error: Any) -> None:
        output_error(error)

    def stream(self, records: Iterable[Any], title: str | None = None) -> None:
        """Write a sequence of records.

        JSON collects them into one array, JSONL writes one per line and
        human renders a table.
        """
        if self.format == "jsonl":
            output_jsonl(records)
        elif self.format == "human":
            output_human_table([_plain(r) for r in records], title=title)
        else:
            output_json([_plain(r) for r in records])

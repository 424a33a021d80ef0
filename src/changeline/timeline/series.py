"""Value series for graphing memory limits and throughput over time.

Each series holds the post-change value of every matching event for one
entity, oldest first.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from changeline.models.record import ClassifiedEvent

MEMORY_ICON = "memory"
THROUGHPUT_ICON = "speedometer"


@dataclass
class Item:
    """A single point of a series."""

    timestamp: datetime
    value: int

    def to_dict(self) -> dict[str, Any]:
        return {"timestamp": self.timestamp.isoformat(), "value": self.value}


@dataclass
class DataSet:
    """Values of one kind for one entity."""

    id: str
    name: str
    data: list[Item] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON output."""
        return {
            "id": self.id,
            "name": self.name,
            "data": [item.to_dict() for item in self.data],
        }


def build_series(events: Iterable[ClassifiedEvent], icon: str) -> list[DataSet]:
    """Build one series per entity from events carrying the given icon.

    Args:
        events: Classified events
        icon: Icon selecting the events, e.g. MEMORY_ICON or THROUGHPUT_ICON

    Returns:
        DataSets sorted by entity, each ordered by timestamp
    """
    datasets: dict[str, DataSet] = {}
    for event in sorted((e for e in events if e.icon == icon), key=lambda e: e.instant):
        dataset = datasets.get(event.entity)
        if dataset is None:
            dataset = DataSet(id=f"{icon}-{event.entity}", name=event.entity)
            datasets[event.entity] = dataset
        dataset.data.append(Item(timestamp=event.timestamp, value=event.to_value))

    return [datasets[name] for name in sorted(datasets)]

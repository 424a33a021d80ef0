"""Timeline builder grouping classified events by time bucket and entity.

The dataset is keyed first by bucket (a day or an hour), then by entity.
Events within each entity bucket are returned in ascending timestamp order;
sorting happens on a copy when a bucket is read, so reads never modify the
dataset and may run from several threads.
"""

from collections.abc import Iterable, Iterator, Mapping
from datetime import datetime
from typing import Any

from changeline.core.config import Granularity
from changeline.core.errors import ConfigurationError
from changeline.models.record import ClassifiedEvent

BUCKET_FORMATS = {
    Granularity.DAILY: "%Y-%m-%d",
    Granularity.HOURLY: "%Y-%m-%d %H:00",
}

SUBSCRIPTION_ENTITY = ""


def _granularity(value: Granularity | str) -> Granularity:
    try:
        return Granularity(value)
    except ValueError as e:
        raise ConfigurationError(
            f"Unknown granularity {value!r}; expected one of "
            f"{', '.join(g.value for g in Granularity)}",
            field="granularity",
        ) from e


def bucket_key(timestamp: datetime, granularity: Granularity | str = Granularity.DAILY) -> str:
    """Get the bucket key for a timestamp.

    Daily keys look like ``2024-01-01``; hourly keys are truncated to the
    hour, e.g. ``2024-01-01 10:00``.

    Raises:
        ConfigurationError: If granularity is not recognized
    """
    return timestamp.strftime(BUCKET_FORMATS[_granularity(granularity)])


def entity_label(entity: str, subscription_label: str = "Subscription") -> str:
    """Display label for an entity; the empty entity is the whole subscription."""
    return entity if entity != SUBSCRIPTION_ENTITY else subscription_label


class TimelineDataset:
    """Nested bucket -> entity -> events mapping."""

    def __init__(self, granularity: Granularity | str = Granularity.DAILY) -> None:
        self.granularity = _granularity(granularity)
        self._buckets: dict[str, dict[str, list[ClassifiedEvent]]] = {}

    def add(self, event: ClassifiedEvent, entity: str | None = None) -> str:
        """Add an event to its bucket.

        Args:
            event: Classified event
            entity: Entity to file the event under (defaults to event.entity)

        Returns:
            The bucket key the event was added to
        """
        key = bucket_key(event.timestamp, self.granularity)
        owner = event.entity if entity is None else entity
        self._buckets.setdefault(key, {}).setdefault(owner, []).append(event)
        return key

    def events(self, bucket: str, entity: str) -> list[ClassifiedEvent]:
        """Get the events for an entity in a bucket, oldest first.

        Returns an empty list when the bucket or entity has no events.
        """
        entities = self._buckets.get(bucket)
        if entities is None or entity not in entities:
            return []

        return sorted(entities[entity], key=lambda e: e.instant)

    def buckets(self) -> list[str]:
        """Bucket keys in ascending order."""
        return sorted(self._buckets)

    def entities_in(self, bucket: str) -> list[str]:
        """Entities with events in a bucket, sorted."""
        return sorted(self._buckets.get(bucket, {}))

    def __contains__(self, bucket: object) -> bool:
        return bucket in self._buckets

    def __len__(self) -> int:
        return len(self._buckets)

    def __iter__(self) -> Iterator[str]:
        return iter(self.buckets())

    def to_dict(self) -> dict[str, dict[str, list[dict[str, Any]]]]:
        """Convert to nested dictionaries for JSON output."""
        return {
            bucket: {
                entity: [e.model_dump(mode="json") for e in self.events(bucket, entity)]
                for entity in self.entities_in(bucket)
            }
            for bucket in self.buckets()
        }


def build_timeline(
    events_by_entity: Mapping[str, Iterable[ClassifiedEvent]],
    granularity: Granularity | str = Granularity.DAILY,
) -> TimelineDataset:
    """Bucket per-entity events into a timeline dataset.

    Args:
        events_by_entity: Classified events grouped by owning entity
        granularity: ``daily`` or ``hourly``

    Returns:
        TimelineDataset keyed by bucket, then entity

    Raises:
        ConfigurationError: If granularity is not recognized
    """
    dataset = TimelineDataset(granularity)
    for entity, events in events_by_entity.items():
        for event in events:
            dataset.add(event, entity=entity)
    return dataset

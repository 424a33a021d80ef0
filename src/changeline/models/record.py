"""Change record models for changeline."""

from datetime import UTC, datetime
from enum import Enum

from pydantic import AliasChoices, BaseModel, Field


class Direction(str, Enum):
    """Coarse polarity of a configuration change."""

    UP = "up"
    DOWN = "down"
    NA = "NA"


class RawChangeRecord(BaseModel):
    """A single configuration change as read from the control plane log.

    The original export column names (``date``, ``database name``,
    ``description``) are accepted alongside the field names.
    """

    timestamp: datetime = Field(
        ...,
        validation_alias=AliasChoices("timestamp", "date"),
        description="When the change happened",
    )

    entity: str = Field(
        default="",
        validation_alias=AliasChoices("entity", "database name", "database"),
        description="Database the change applies to (empty for subscription-level changes)",
    )

    change: str = Field(
        ...,
        validation_alias=AliasChoices("change", "description"),
        description="Free-text change description",
    )

    model_config = {"extra": "ignore", "frozen": True}

    @property
    def instant(self) -> datetime:
        """Timestamp as an aware datetime for ordering.

        Timestamps without an offset are taken as UTC. The stored
        timestamp keeps its original wall-clock form for bucketing.
        """
        if self.timestamp.tzinfo is None:
            return self.timestamp.replace(tzinfo=UTC)
        return self.timestamp


class ClassifiedEvent(RawChangeRecord):
    """A change record with its display classification attached.

    Built once by the dispatcher and never modified afterwards.
    """

    title: str = Field(
        ...,
        description="Category title of the matching rule",
    )

    icon: str = Field(
        ...,
        description="Icon identifier for display",
    )

    direction: Direction = Field(
        default=Direction.NA,
        description="Whether the change grows, shrinks or is neutral",
    )

    from_value: int = Field(
        default=0,
        description="Value before the change (sizes in MB, throughput in ops/sec)",
    )

    to_value: int = Field(
        default=0,
        description="Value after the change (sizes in MB, throughput in ops/sec)",
    )

    model_config = {"extra": "forbid", "frozen": True}

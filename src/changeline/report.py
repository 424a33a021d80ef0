"""Timeline report assembly.

Ties classification and aggregation together and produces the dataset
handed to a renderer.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from changeline.classifier.dispatcher import classify_all, group_by_entity
from changeline.classifier.rules import RULE_TABLE, RuleTable
from changeline.core.config import ReportConfig
from changeline.models.record import ClassifiedEvent, RawChangeRecord
from changeline.timeline.builder import TimelineDataset, build_timeline, entity_label
from changeline.timeline.entities import entities as entity_list
from changeline.timeline.legend import LegendEntry, paginate
from changeline.timeline.series import MEMORY_ICON, THROUGHPUT_ICON, DataSet, build_series


@dataclass
class TimelineReport:
    """Everything a renderer needs to draw the timeline."""

    title: str
    timeline: TimelineDataset
    entities: list[str]
    legend: list[list[LegendEntry]]
    labels: dict[str, str] = field(default_factory=dict)
    series: dict[str, list[DataSet]] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON output."""
        return {
            "title": self.title,
            "granularity": self.timeline.granularity.value,
            "databases": self.entities,
            "labels": self.labels,
            "legend": [
                [{"title": entry.title, "icon": entry.icon} for entry in row]
                for row in self.legend
            ],
            "timeline": self.timeline.to_dict(),
            "series": {
                name: [dataset.to_dict() for dataset in datasets]
                for name, datasets in self.series.items()
            },
        }


def build_report(
    records: Iterable[RawChangeRecord],
    config: ReportConfig | None = None,
    rules: RuleTable = RULE_TABLE,
) -> TimelineReport:
    """Classify records and aggregate them into a timeline report.

    Args:
        records: Raw change records, already filtered by the caller
        config: Report settings (defaults apply when None)
        rules: Rule table used for classification

    Returns:
        TimelineReport
    """
    config = config or ReportConfig()
    events = classify_all(records, rules, workers=config.workers)
    return assemble_report(events, config, rules)


def assemble_report(
    events: list[ClassifiedEvent],
    config: ReportConfig,
    rules: RuleTable = RULE_TABLE,
) -> TimelineReport:
    """Aggregate already classified events into a timeline report."""
    by_entity = group_by_entity(events)
    names = entity_list(by_entity)

    return TimelineReport(
        title=config.title,
        timeline=build_timeline(by_entity, config.granularity),
        entities=names,
        legend=paginate(rules, config.legend_row_width),
        labels={name: entity_label(name, config.subscription_label) for name in names},
        series={
            "memory": build_series(events, MEMORY_ICON),
            "throughput": build_series(events, THROUGHPUT_ICON),
        },
    )

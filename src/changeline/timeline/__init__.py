"""Aggregation of classified events for reporting.

Provides builders for:
- TimelineDataset: bucket -> entity -> events, oldest first
- Legend: rule titles and icons in fixed-width rows
- Entity list: sorted timeline columns
- Value series: memory limit and throughput values over time
"""

from changeline.timeline.builder import TimelineDataset, bucket_key, build_timeline, entity_label
from changeline.timeline.entities import entities
from changeline.timeline.legend import LegendEntry, legend, paginate
from changeline.timeline.series import DataSet, Item, build_series

__all__ = [
    "TimelineDataset",
    "bucket_key",
    "build_timeline",
    "entity_label",
    "entities",
    "LegendEntry",
    "legend",
    "paginate",
    "DataSet",
    "Item",
    "build_series",
]

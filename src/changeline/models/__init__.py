"""Pydantic models for changeline."""

from changeline.models.error import StructuredError
from changeline.models.metrics import StepMetrics
from changeline.models.record import ClassifiedEvent, Direction, RawChangeRecord

__all__ = [
    "StructuredError",
    "StepMetrics",
    "RawChangeRecord",
    "ClassifiedEvent",
    "Direction",
]

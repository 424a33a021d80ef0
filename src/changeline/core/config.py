"""Report configuration for changeline.

Settings can come from a YAML file and be overridden from the command
line. Invalid values fail fast with a ConfigurationError.
"""

from enum import Enum
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError

from changeline.core.errors import ConfigurationError


class Granularity(str, Enum):
    """Width of a timeline bucket."""

    DAILY = "daily"
    HOURLY = "hourly"


class ReportConfig(BaseModel):
    """Settings for building a timeline report."""

    granularity: Granularity = Field(
        default=Granularity.DAILY,
        description="Bucket width for the timeline",
    )

    legend_row_width: int = Field(
        default=5,
        ge=1,
        description="Number of legend entries per row",
    )

    title: str = Field(
        default="",
        description="Report title passed through to the renderer",
    )

    workers: int = Field(
        default=1,
        ge=1,
        description="Threads used for classification",
    )

    subscription_label: str = Field(
        default="Subscription",
        description="Display label for subscription-level changes",
    )

    model_config = {"extra": "forbid", "frozen": True}

    def with_overrides(self, **overrides: Any) -> "ReportConfig":
        """Return a validated copy with the non-None overrides applied.

        Raises:
            ConfigurationError: If an override is invalid
        """
        values = self.model_dump()
        values.update({k: v for k, v in overrides.items() if v is not None})
        return _validate(values)


def _validate(values: dict[str, Any]) -> ReportConfig:
    try:
        return ReportConfig.model_validate(values)
    except ValidationError as e:
        first = e.errors()[0]
        field = ".".join(str(p) for p in first["loc"]) or None
        raise ConfigurationError(f"Invalid configuration: {first['msg']}", field=field) from e


def load_config(path: Path | None = None) -> ReportConfig:
    """Load report configuration from a YAML file.

    Args:
        path: YAML file path; defaults are used when None

    Returns:
        Validated ReportConfig

    Raises:
        ConfigurationError: If the file is missing, unreadable or invalid
    """
    if path is None:
        return ReportConfig()

    if not path.exists():
        raise ConfigurationError(f"Configuration file not found: {path}", field="config")

    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {path}: {e}", field="config") from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"Configuration in {path} must be a mapping", field="config")

    return _validate(data)

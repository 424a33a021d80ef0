"""Observability metrics models for changeline."""

from uuid import UUID

from pydantic import BaseModel, Field


class StepMetrics(BaseModel):
    """Observability metrics for a command.

    Emitted to stderr after a run when verbose logging is enabled.
    """

    run_id: UUID = Field(
        ...,
        description="Correlation ID for this run",
    )

    step_name: str = Field(
        ...,
        description="Step identifier (e.g., 'timeline', 'classify')",
    )

    duration_ms: int = Field(
        ...,
        ge=0,
        description="Execution time in milliseconds",
    )

    records_processed: int = Field(
        default=0,
        ge=0,
        description="Number of change records read",
    )

    records_output: int = Field(
        default=0,
        ge=0,
        description="Number of classified events emitted",
    )

    warnings: int = Field(
        default=0,
        ge=0,
        description="Warning count",
    )

    errors: int = Field(
        default=0,
        ge=0,
        description="Error count",
    )

    skipped: int = Field(
        default=0,
        ge=0,
        description="Input lines skipped as invalid",
    )

    model_config = {"extra": "forbid"}

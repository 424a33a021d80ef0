"""Structured error model for changeline."""

from typing import Any

from pydantic import BaseModel, Field


class StructuredError(BaseModel):
    """Structured error response format.

    Errors surfaced by the CLI follow this schema so callers can react
    to them programmatically.
    """

    code: str = Field(
        ...,
        pattern=r"^[A-Z][A-Z0-9_]*$",
        description="Error code (e.g., VALUE_EXTRACTION_ERROR)",
        examples=[
            "VALUE_EXTRACTION_ERROR",
            "RULE_TABLE_ERROR",
            "CONFIGURATION_ERROR",
            "INPUT_ERROR",
        ],
    )

    message: str = Field(
        ...,
        description="Human-readable error message",
    )

    remediation: str = Field(
        ...,
        description="Suggested fix or next step",
    )

    retryable: bool = Field(
        ...,
        description="Whether retry may succeed",
    )

    context: dict[str, Any] | None = Field(
        default=None,
        description="Additional context (description, field, path, etc.)",
    )

    model_config = {"extra": "forbid"}


class ErrorCode:
    """Standard error codes for changeline."""

    VALUE_EXTRACTION_ERROR = "VALUE_EXTRACTION_ERROR"
    RULE_TABLE_ERROR = "RULE_TABLE_ERROR"
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"
    INPUT_ERROR = "INPUT_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"

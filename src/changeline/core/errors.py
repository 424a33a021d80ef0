"""Structured error handling for changeline."""

import sys
from typing import Any, NoReturn

from changeline.models.error import ErrorCode, StructuredError


class ChangelineError(Exception):
    """Base exception for changeline errors.

    Wraps a StructuredError for consistent error handling.
    """

    def __init__(
        self,
        code: str,
        message: str,
        remediation: str,
        retryable: bool = False,
        context: dict[str, Any] | None = None,
    ):
        self.error = StructuredError(
            code=code,
            message=message,
            remediation=remediation,
            retryable=retryable,
            context=context,
        )
        super().__init__(message)

    def to_structured(self) -> StructuredError:
        """Convert to StructuredError."""
        return self.error

    def to_structured_error(self) -> dict:
        """Convert to JSON-serializable dict for output."""
        return self.error.model_dump(mode="json", exclude_none=True)


class ValueExtractionError(ChangelineError):
    """A numeric value could not be read from a change description.

    Recoverable: the dispatcher degrades the classification instead of
    propagating it.
    """

    def __init__(self, message: str, text: str | None = None):
        super().__init__(
            code=ErrorCode.VALUE_EXTRACTION_ERROR,
            message=message,
            remediation="Check the change description for a malformed magnitude",
            retryable=False,
            context={"text": text} if text is not None else None,
        )


class RuleTableError(ChangelineError):
    """The classification rule table is misconfigured."""

    def __init__(self, message: str, rule: str | None = None):
        super().__init__(
            code=ErrorCode.RULE_TABLE_ERROR,
            message=message,
            remediation="Fix the rule table definition; the last rule must be the only catch-all",
            retryable=False,
            context={"rule": rule} if rule else None,
        )


class ConfigurationError(ChangelineError):
    """Invalid report configuration (granularity, legend width, ...)."""

    def __init__(self, message: str, field: str | None = None):
        super().__init__(
            code=ErrorCode.CONFIGURATION_ERROR,
            message=message,
            remediation="Check the configuration file and command-line options",
            retryable=False,
            context={"field": field} if field else None,
        )


class InputError(ChangelineError):
    """An input line is not a valid change record."""

    def __init__(self, message: str, line: int | None = None):
        super().__init__(
            code=ErrorCode.INPUT_ERROR,
            message=message,
            remediation="Each input line must be a JSON object with timestamp and change fields",
            retryable=False,
            context={"line": line} if line is not None else None,
        )


def handle_error(error: ChangelineError | Exception, exit_code: int = 1) -> NoReturn:
    """Handle an error by outputting it and exiting.

    Args:
        error: The error to handle
        exit_code: Exit code to use
    """
    from changeline.cli.output import output_error

    if isinstance(error, ChangelineError):
        output_error(error.to_structured())
    else:
        structured = StructuredError(
            code=ErrorCode.INTERNAL_ERROR,
            message=str(error),
            remediation="This is an unexpected error. Please report it.",
            retryable=False,
            context={"type": type(error).__name__},
        )
        output_error(structured)

    sys.exit(exit_code)


# Exit codes
EXIT_ERROR = 1
EXIT_INVALID_ARGS = 2

"""Logging utilities for changeline.

All log output goes to stderr to keep stdout clean for the
machine-readable timeline dataset.
"""

import json
import sys
import threading
from datetime import UTC, datetime
from typing import Any, Literal

_verbose = False
_quiet = False
_log_format: Literal["text", "json"] = "text"

_counts = {"warning": 0, "error": 0}
_counts_lock = threading.Lock()


def set_verbose(verbose: bool) -> None:
    """Set verbose mode."""
    global _verbose
    _verbose = verbose


def configure_logging(
    log_format: Literal["text", "json"] = "text",
    quiet: bool = False,
) -> None:
    """Configure logging settings.

    Args:
        log_format: Output format for log messages
        quiet: Suppress informational output
    """
    global _log_format, _quiet
    _log_format = log_format
    _quiet = quiet


def log(
    message: str,
    level: Literal["debug", "info", "warning", "error"] = "info",
    **context: Any,
) -> None:
    """Log a message to stderr.

    Warnings and errors are counted even when quiet mode hides them.

    Args:
        message: Log message
        level: Log level
        **context: Additional context to include
    """
    if level in _counts:
        with _counts_lock:
            _counts[level] += 1

    if _quiet and level in ("debug", "info"):
        return

    if level == "debug" and not _verbose:
        return

    if _log_format == "json":
        log_entry = {
            "timestamp": datetime.now(UTC).isoformat(),
            "level": level,
            "message": message,
            **context,
        }
        print(json.dumps(log_entry, default=str), file=sys.stderr)
    else:
        prefix = f"[{level.upper()}]" if level != "info" else ""
        suffix = ""
        if context and _verbose:
            suffix = " " + " ".join(f"{k}={v!r}" for k, v in context.items())
        if prefix:
            print(f"{prefix} {message}{suffix}", file=sys.stderr)
        else:
            print(f"{message}{suffix}", file=sys.stderr)


def debug(message: str, **context: Any) -> None:
    """Log a debug message."""
    log(message, level="debug", **context)


def info(message: str, **context: Any) -> None:
    """Log an info message."""
    log(message, level="info", **context)


def warning(message: str, **context: Any) -> None:
    """Log a warning message."""
    log(message, level="warning", **context)


def get_counts() -> dict[str, int]:
    """Return the number of warnings and errors logged so far."""
    with _counts_lock:
        return dict(_counts)


def reset_counts() -> None:
    """Reset the warning and error counters."""
    with _counts_lock:
        for level in _counts:
            _counts[level] = 0

"""Structured logging for bundle-mapping.

Thin helpers over the ``bundle_mapping`` stdlib logger. Each helper takes a
message plus optional structured fields; the fields are attached to the
record as ``record.fields`` and rendered as ``key=value`` pairs after the
message.

Example:
    >>> from bundle_mapping import log_info, log_error
    >>>
    >>> log_info("Resolved compiler passes", {
    ...     "bundle": "AttributeBundle",
    ...     "passes": 1,
    ... })
    >>>
    >>> try:
    ...     coordinator.resolve(descriptor)
    ... except BundleMappingError as e:
    ...     log_error(f"Resolution failed: {e}", {
    ...         "bundle": descriptor.identity,
    ...         "error_type": type(e).__name__,
    ...     })
"""

from __future__ import annotations

import logging
from typing import Any

from .types import LogContext

LOGGER_NAME = "bundle_mapping"

TRACE = 5
logging.addLevelName(TRACE, "TRACE")

logger = logging.getLogger(LOGGER_NAME)


def log_error(message: str, fields: dict[str, Any] | LogContext | None = None) -> None:
    """Log an ERROR level message with structured fields.

    Use this for failures that abort the build.

    Args:
        message: The log message.
        fields: Optional structured fields for context. Can be a dict
                or a LogContext instance.
    """
    _emit(logging.ERROR, message, fields)


def log_warn(message: str, fields: dict[str, Any] | LogContext | None = None) -> None:
    """Log a WARN level message with structured fields.

    Args:
        message: The log message.
        fields: Optional structured fields for context.
    """
    _emit(logging.WARNING, message, fields)


def log_info(message: str, fields: dict[str, Any] | LogContext | None = None) -> None:
    """Log an INFO level message with structured fields.

    Use this for once-per-bundle summaries.

    Args:
        message: The log message.
        fields: Optional structured fields for context.
    """
    _emit(logging.INFO, message, fields)


def log_debug(message: str, fields: dict[str, Any] | LogContext | None = None) -> None:
    """Log a DEBUG level message with structured fields.

    Use this for per-driver resolution detail.

    Args:
        message: The log message.
        fields: Optional structured fields for context.
    """
    _emit(logging.DEBUG, message, fields)


def log_trace(message: str, fields: dict[str, Any] | LogContext | None = None) -> None:
    """Log a TRACE level message with structured fields.

    Args:
        message: The log message.
        fields: Optional structured fields for context.
    """
    _emit(TRACE, message, fields)


def _emit(level: int, message: str, fields: dict[str, Any] | LogContext | None) -> None:
    if not logger.isEnabledFor(level):
        return

    fields_dict = _normalize_fields(fields) or {}
    if fields_dict:
        rendered = " ".join(f"{key}={value}" for key, value in fields_dict.items())
        message = f"{message} {rendered}"

    logger.log(level, message, extra={"fields": fields_dict})


def _normalize_fields(
    fields: dict[str, Any] | LogContext | None,
) -> dict[str, str] | None:
    """Normalize fields to a dict of strings.

    Args:
        fields: Input fields as dict, LogContext, or None.

    Returns:
        Dict with string values, or None if no fields.
    """
    if fields is None:
        return None

    if isinstance(fields, LogContext):
        # Convert LogContext to dict, excluding None values
        return {k: str(v) for k, v in fields.model_dump().items() if v is not None}

    return {k: str(getattr(v, "value", v)) for k, v in fields.items()}


__all__ = [
    "LOGGER_NAME",
    "TRACE",
    "log_error",
    "log_warn",
    "log_info",
    "log_debug",
    "log_trace",
]

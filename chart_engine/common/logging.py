"""
Structured logging configuration for the chart engine.
"""

import logging
import sys
from datetime import UTC, datetime
from typing import Any

import structlog

PLATFORM = "chart-engine"


def setup_logging(
    log_level: str = "INFO",
    log_format: str = "json",
    service_name: str | None = None
) -> None:
    """
    Set up structured logging for the application.

    Logs go to stderr so that chart output written to stdout stays parseable.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: Format type ('json' or 'console')
        service_name: Name of the service for log context
    """
    # Configure standard library logging
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, log_level.upper()),
        force=True,
    )

    # Configure structlog
    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        add_timestamp,
        add_service_context(service_name) if service_name else add_default_context,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if log_format == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()))

    structlog.configure(
        processors=processors,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def add_timestamp(logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """Add timestamp to log events."""
    event_dict["timestamp"] = datetime.now(UTC).isoformat().replace("+00:00", "Z")
    return event_dict


def add_service_context(service_name: str):
    """Create processor to add service context."""
    def processor(logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
        event_dict["service"] = service_name
        event_dict["platform"] = PLATFORM
        return event_dict
    return processor


def add_default_context(logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """Add default context to log events."""
    event_dict["platform"] = PLATFORM
    return event_dict


def log_transform_result(
    logger: structlog.stdlib.BoundLogger,
    operation: str,
    success: bool,
    duration_ms: float,
    record_count: int | None = None,
    error_message: str | None = None,
    **kwargs
) -> None:
    """
    Log transformation results with consistent structure.

    Args:
        logger: Structured logger instance
        operation: Transformation name
        success: Whether the transformation succeeded
        duration_ms: Duration in milliseconds
        record_count: Number of records transformed
        error_message: Error message if the transformation failed
        **kwargs: Additional context
    """
    logger.info(
        "transform_result",
        operation=operation,
        success=success,
        duration_ms=duration_ms,
        record_count=record_count,
        error_message=error_message,
        **kwargs
    )

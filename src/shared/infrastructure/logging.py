"""
Structured Logging
==================

JSON-structured logging for the classifier service.

Provides:
- Structured JSON logs (parseable by log aggregators)
- Correlation ID and environment on every record
- Redaction of credential-looking fields
- Timing helper for awaited operations

Usage:
    from src.shared.infrastructure.logging import get_logger

    logger = get_logger(__name__)
    logger.info("Classification completed", extra={"decision": "operational_workflow"})
"""

import logging
import sys
import time
from datetime import datetime, timezone
from typing import Any
from contextlib import contextmanager

from pythonjsonlogger import jsonlogger


REDACTED = "***REDACTED***"
SENSITIVE_KEY_MARKERS = ("password", "api_key", "authorization", "secret")

# Third-party loggers that are too chatty at INFO
QUIET_LOGGERS = ("uvicorn.access", "httpx", "httpcore", "openai")


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """
    JSON formatter that stamps records with service context.

    Adds:
    - timestamp in ISO format (UTC)
    - correlation_id when the record carries one
    - environment name
    """

    def __init__(self, *args: Any, environment: str = "unknown", **kwargs: Any):
        super().__init__(*args, **kwargs)
        self.environment = environment

    def add_fields(
        self,
        log_record: dict[str, Any],
        record: logging.LogRecord,
        message_dict: dict[str, Any],
    ) -> None:
        super().add_fields(log_record, record, message_dict)

        if not log_record.get("timestamp"):
            log_record["timestamp"] = datetime.now(timezone.utc).isoformat()

        correlation_id = getattr(record, "correlation_id", None)
        if correlation_id:
            log_record["correlation_id"] = correlation_id

        log_record["environment"] = self.environment
        redact_sensitive(log_record)


def redact_sensitive(fields: dict[str, Any]) -> dict[str, Any]:
    """Mask values whose key looks like a credential. Mutates and returns ``fields``."""
    for key, value in list(fields.items()):
        lowered = key.lower()
        if isinstance(value, str) and any(marker in lowered for marker in SENSITIVE_KEY_MARKERS):
            fields[key] = REDACTED
        elif "token" in lowered and "tokens" not in lowered and isinstance(value, str):
            fields[key] = REDACTED
    return fields


def setup_logging(
    level: str = "INFO",
    environment: str = "development",
) -> None:
    """
    Configure structured JSON logging for the application.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR)
        environment: Environment name for log context
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)

    # Replace only handlers we installed earlier; leave test/capture handlers alone
    for existing in list(root_logger.handlers):
        if isinstance(existing.formatter, CustomJsonFormatter):
            root_logger.removeHandler(existing)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(numeric_level)
    handler.setFormatter(
        CustomJsonFormatter(
            fmt="%(asctime)s %(name)s %(levelname)s %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S",
            environment=environment,
        )
    )
    root_logger.addHandler(handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance with the given name.

    Args:
        name: Logger name (typically __name__ of the module)

    Returns:
        logging.Logger: Configured logger instance
    """
    return logging.getLogger(name)


@contextmanager
def log_latency(logger: logging.Logger, operation: str, **extra_context: Any):
    """
    Context manager for measuring and logging operation latency.

    Usage:
        with log_latency(logger, "external_assessment", channel="api"):
            assessment = await adapter.assess(ticket)

    Args:
        logger: Logger instance
        operation: Operation name for logging
        **extra_context: Additional context to include in log
    """
    start = time.perf_counter()
    try:
        yield
    finally:
        latency_ms = (time.perf_counter() - start) * 1000
        logger.debug(
            f"{operation} finished",
            extra={
                "operation": operation,
                "latency_ms": round(latency_ms, 2),
                **extra_context,
            },
        )

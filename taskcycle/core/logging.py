"""Logging and observability configuration using Pydantic Logfire.

All modules use Python's standard logging library (logging.getLogger(__name__)),
and Logfire captures and enriches these records once configured.

Standard usage:
    import logging
    logger = logging.getLogger(__name__)
    logger.info("Message", extra={"key": "value"})

Structured logging utilities:
    log_with_context(logger, "info", "Message", task_id="123", pattern="weekly")
"""

import logging

import logfire

from taskcycle.core.config import Constants, settings


def configure_logfire() -> None:
    """Configure Pydantic Logfire with token from environment.

    Nothing is sent unless a token is configured.
    """
    logfire.configure(
        token=settings.logfire_token,
        service_name=Constants.SERVICE_NAME,
        service_version=Constants.SERVICE_VERSION,
        environment=settings.environment,
        send_to_logfire="if-token-present",
    )

    logger = logging.getLogger(__name__)
    logger.info("Logfire configured successfully")


def span(name: str, **attributes: object) -> logfire.LogfireSpan:
    """Create a custom span around an engine computation.

    Usage:
        with span("recurrence_engine.next_occurrence", after=after.isoformat()):
            ...
    """
    return logfire.span(name, **attributes)


def log_with_context(
    logger: logging.Logger,
    level: str,
    message: str,
    **context: object,
) -> None:
    """Log a message with structured context fields.

    Args:
        logger: Logger instance to use
        level: Log level ("debug", "info", "warning", "error", "critical")
        message: Log message
        **context: Additional context fields (task_id, pattern, horizon, etc.)

    Usage:
        log_with_context(logger, "warning", "Scan exhausted", task_id="123", horizon=366)
    """
    log_method = getattr(logger, level.lower())
    log_method(message, extra=context)

"""Observability setup for tideflow: Pydantic Logfire plus stdlib logging.

Modules log through ``logging.getLogger(__name__)`` and pass structured fields
via ``extra``; Logfire picks the records up once configured. Workflow and
store operations open spans named ``<module>.<operation>`` with the date keys
and task IDs they touch as attributes.

Example:
    with span("focus_service.complete_task", date="2024-05-06", task_id=task_id):
        ...
    log_with_task_context(logger, "info", "Task completed", task_id=task_id, date="2024-05-06")
"""

import logging

import logfire
from fastapi import FastAPI

from src.core.config import settings


logger = logging.getLogger(__name__)

SERVICE_NAME = "tideflow"
SERVICE_VERSION = "0.1.0"


def configure_logfire() -> None:
    """Configure Logfire for the current environment.

    Records are only shipped when LOGFIRE_TOKEN is set; otherwise spans and
    logs stay local.
    """
    logfire.configure(
        token=settings.logfire_token,
        service_name=SERVICE_NAME,
        service_version=SERVICE_VERSION,
        environment=settings.environment,
        send_to_logfire="if-token-present",
    )
    logger.info("Logfire configured", extra={"environment": settings.environment})


def instrument_fastapi(app: FastAPI) -> None:
    """Trace every request handled by the app."""
    logfire.instrument_fastapi(app)
    logger.info("FastAPI instrumentation configured", extra={"app": app.title})


def span(name: str, **attributes: object) -> logfire.LogfireSpan:
    """Open a span around a workflow or store operation.

    None-valued attributes are dropped so optional arguments do not clutter traces.
    """
    return logfire.span(name, **{key: value for key, value in attributes.items() if value is not None})


def log_with_context(
    logger: logging.Logger,
    level: str,
    message: str,
    **context: object,
) -> None:
    """Log at the named level with structured context fields.

    Args:
        logger: Logger instance to use
        level: Log level name ("debug", "info", "warning", "error", "critical")
        message: Log message
        **context: Fields such as date, task_id, energy
    """
    getattr(logger, level.lower())(message, extra=context)


def log_with_task_context(
    logger: logging.Logger,
    level: str,
    message: str,
    task_id: str | None = None,
    **extra: object,
) -> None:
    """Log a task mutation, tagging the record with the task ID when known."""
    context = {"task_id": task_id, **extra} if task_id else extra
    log_with_context(logger, level, message, **context)


def log_rejected_request(logger: logging.Logger, *, path: str, code: str, error: Exception) -> None:
    """Warn about a request refused by the store or date validation."""
    log_with_context(
        logger,
        "warning",
        "Request rejected",
        path=path,
        code=code,
        error=str(error),
        error_type=type(error).__name__,
    )

"""Error classification utilities for store and workflow errors."""

from enum import Enum

from pydantic import BaseModel, ValidationError

from src.core.dates import InvalidDateKeyError
from src.core.task_store import DuplicateTaskError, InvalidTaskStateError, TaskNotFoundError


class ErrorSeverity(Enum):
    """Severity levels for errors."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ErrorCode:
    """Error codes for specific error conditions."""

    # Task errors
    ERR_TASK_NOT_FOUND = "ERR_TASK_NOT_FOUND"
    ERR_DUPLICATE_TASK = "ERR_DUPLICATE_TASK"
    ERR_INVALID_STATE_TRANSITION = "ERR_INVALID_STATE_TRANSITION"

    # Input errors
    ERR_INVALID_DATE = "ERR_INVALID_DATE"
    ERR_INVALID_INPUT = "ERR_INVALID_INPUT"

    # Generic errors
    ERR_UNKNOWN = "ERR_UNKNOWN"


class ErrorResponse(BaseModel):
    """Structured error response with user-friendly messaging."""

    code: str
    message: str
    suggestion: str
    severity: ErrorSeverity


def classify_error_with_response(exception: Exception) -> ErrorResponse:
    """Classify an error and return a structured response with recovery suggestions.

    Args:
        exception: The exception raised while handling a request

    Returns:
        ErrorResponse with code, message, suggestion, and severity
    """
    if isinstance(exception, TaskNotFoundError):
        return ErrorResponse(
            code=ErrorCode.ERR_TASK_NOT_FOUND,
            message="I couldn't find that task.",
            suggestion="Reload the day's tasks and try again.",
            severity=ErrorSeverity.LOW,
        )

    if isinstance(exception, DuplicateTaskError):
        return ErrorResponse(
            code=ErrorCode.ERR_DUPLICATE_TASK,
            message="A task with that ID already exists.",
            suggestion="Let the service assign task IDs instead of reusing old ones.",
            severity=ErrorSeverity.MEDIUM,
        )

    if isinstance(exception, InvalidTaskStateError):
        return ErrorResponse(
            code=ErrorCode.ERR_INVALID_STATE_TRANSITION,
            message="This action cannot be performed in the task's current state.",
            suggestion="Completed or already rescheduled tasks cannot be changed again.",
            severity=ErrorSeverity.LOW,
        )

    if isinstance(exception, InvalidDateKeyError):
        return ErrorResponse(
            code=ErrorCode.ERR_INVALID_DATE,
            message="Invalid date.",
            suggestion="Use dates in YYYY-MM-DD format, e.g. 2024-05-01.",
            severity=ErrorSeverity.LOW,
        )

    if isinstance(exception, ValidationError | ValueError):
        return ErrorResponse(
            code=ErrorCode.ERR_INVALID_INPUT,
            message="Some of the task details are invalid.",
            suggestion="Check titles are not blank and durations are positive minutes.",
            severity=ErrorSeverity.LOW,
        )

    return ErrorResponse(
        code=ErrorCode.ERR_UNKNOWN,
        message="An unexpected error occurred.",
        suggestion="Please try again later. If the problem persists, check the service logs.",
        severity=ErrorSeverity.MEDIUM,
    )


def http_status_for(exception: Exception) -> int:
    """HTTP status code matching the error classification."""
    code = classify_error_with_response(exception).code
    return {
        ErrorCode.ERR_TASK_NOT_FOUND: 404,
        ErrorCode.ERR_DUPLICATE_TASK: 409,
        ErrorCode.ERR_INVALID_STATE_TRANSITION: 409,
        ErrorCode.ERR_INVALID_DATE: 422,
        ErrorCode.ERR_INVALID_INPUT: 422,
    }.get(code, 500)

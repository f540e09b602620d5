"""
Custom exception hierarchy for the Wellness Core API.

Rule: every HTTP error has a machine-readable `code` string so clients
can branch on it without parsing English messages.

Pure services (aggregator, score engine, insights, recurrence) raise the
InvalidInputError family synchronously. Store adapters raise
TransientStoreError. Task cancellation is never converted into one of these.
"""
from __future__ import annotations

import logging
from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette import status

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Exception classes
# ---------------------------------------------------------------------------

class WellnessError(Exception):
    """Base class for all application-level errors."""
    http_status: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    code: str = "INTERNAL_ERROR"

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict:
        payload: dict[str, Any] = {"code": self.code, "message": self.message}
        if self.details:
            payload["details"] = self.details
        return payload


class InvalidInputError(WellnessError):
    """Malformed input to a pure function. Never retried."""
    http_status = status.HTTP_422_UNPROCESSABLE_ENTITY
    code = "INVALID_INPUT"


class EmptyActiveDaysError(InvalidInputError):
    code = "EMPTY_ACTIVE_DAYS"

    def __init__(self):
        super().__init__(message="A reminder needs at least one active weekday.")


class MixedMetricKindsError(InvalidInputError):
    code = "MIXED_METRIC_KINDS"

    def __init__(self, expected: str, received: str):
        super().__init__(
            message=f"Cannot summarize '{received}' entries together with '{expected}' entries.",
            details={"expected": expected, "received": received},
        )


class InvalidTimeOfDayError(InvalidInputError):
    code = "INVALID_TIME_OF_DAY"

    def __init__(self, value: str):
        super().__init__(
            message=f"Time of day '{value}' is not a valid 24h HH:MM value.",
            details={"value": value},
        )


class TransientStoreError(WellnessError):
    """The backing store failed (connection, timeout, constraint)."""
    http_status = status.HTTP_503_SERVICE_UNAVAILABLE
    code = "STORE_UNAVAILABLE"

    def __init__(self, message: str, operation: str | None = None):
        super().__init__(
            message=message,
            details={"operation": operation} if operation else {},
        )


class ReminderNotFoundError(WellnessError):
    http_status = status.HTTP_404_NOT_FOUND
    code = "REMINDER_NOT_FOUND"

    def __init__(self, reminder_id: str):
        super().__init__(
            message=f"Reminder {reminder_id} does not exist.",
            details={"reminder_id": reminder_id},
        )


class TemplatePackNotFoundError(WellnessError):
    http_status = status.HTTP_404_NOT_FOUND
    code = "TEMPLATE_PACK_NOT_FOUND"

    def __init__(self, pack_id: str):
        super().__init__(
            message=f"Template pack '{pack_id}' does not exist.",
            details={"pack_id": pack_id},
        )


# ---------------------------------------------------------------------------
# FastAPI exception handlers
# ---------------------------------------------------------------------------

async def wellness_exception_handler(request: Request, exc: WellnessError) -> JSONResponse:
    if exc.http_status >= 500:
        logger.warning("%s %s -> %s: %s", request.method, request.url.path, exc.code, exc.message)
    return JSONResponse(status_code=exc.http_status, content=exc.to_dict())


def _field_error(error: dict) -> dict:
    # "body" prefixes every payload location; query/path prefixes are kept
    loc = [str(part) for part in error["loc"] if part != "body"]
    return {"field": ".".join(loc), "message": error["msg"], "type": error["type"]}


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """422 VALIDATION_ERROR with one `{field, message, type}` per failed field."""
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "code": "VALIDATION_ERROR",
            "message": "Request validation failed.",
            "details": {"errors": [_field_error(e) for e in exc.errors()]},
        },
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"code": "INTERNAL_ERROR", "message": "An unexpected error occurred."},
    )

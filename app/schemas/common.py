"""
Error envelope documented on every route's non-2xx responses.

Mirrors WellnessError.to_dict() and the request-validation handler.
"""
from typing import Any, Optional

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    code: str = Field(
        description="Machine-readable error code.",
        examples=["REMINDER_NOT_FOUND", "STORE_UNAVAILABLE", "VALIDATION_ERROR"],
    )
    message: str
    details: Optional[dict[str, Any]] = Field(
        default=None,
        description="Omitted when empty. VALIDATION_ERROR carries `errors: [{field, message, type}]`.",
    )

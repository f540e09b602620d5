"""
Template pack schemas.

GET  /templates                  → TemplatePackListResponse
POST /templates/{pack_id}/apply  → TemplateApplyResponse (207)
"""
from typing import Optional

from pydantic import BaseModel, Field

from app.schemas.reminders import ReminderResponse


class ReminderSpecResponse(BaseModel):
    type: str
    time: str
    days: list[str]
    days_label: str


class TemplatePackResponse(BaseModel):
    id: str
    name: str
    description: str
    reminder_count: int
    reminders: list[ReminderSpecResponse]


class TemplatePackListResponse(BaseModel):
    total: int
    items: list[TemplatePackResponse]


class TemplateItemResponse(BaseModel):
    """Outcome for a single reminder spec of the pack."""
    index: int = Field(description="Zero-based position in the pack's reminder list.")
    ok: bool = Field(description="True if the reminder was created.")
    reminder: Optional[ReminderResponse] = Field(
        default=None,
        description="Populated when ok=True.",
    )
    error: Optional[str] = Field(
        default=None,
        description="First error encountered when ok=False.",
    )


class TemplateApplyResponse(BaseModel):
    """Summary of a template pack application."""
    pack_id: str
    total: int = Field(description="Reminders attempted.")
    succeeded: int = Field(description="Reminders created.")
    failed: int = Field(description="Reminders that could not be created.")
    items: list[TemplateItemResponse] = Field(description="Per-item results in pack order.")

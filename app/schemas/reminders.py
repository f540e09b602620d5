"""
Reminder request / response schemas.

POST /reminders             → ReminderCreateRequest → ReminderResponse
PUT  /reminders/{id}        → ReminderUpdateRequest → ReminderResponse
GET  /reminders/{id}/next   → NextOccurrenceResponse
GET  /reminders/upcoming    → UpcomingReminderListResponse
"""
from __future__ import annotations

from typing import Annotated, Optional

from pydantic import BaseModel, ConfigDict, Field

from app.domain.reminders import ReminderType, Sound, Weekday

_TIME_FIELD = Field(
    pattern=r"^([01]\d|2[0-3]):[0-5]\d$",
    description="24h local wall-clock time, HH:MM.",
    examples=["09:00"],
)


class ReminderCreateRequest(BaseModel):
    type: ReminderType
    time: Annotated[str, _TIME_FIELD]
    days: Annotated[list[Weekday], Field(
        min_length=1,
        max_length=7,
        description="Active weekday tags. Must not be empty.",
        examples=[["mon", "tue", "wed", "thu", "fri"]],
    )]
    enabled: bool = True
    message: str = Field(default="", max_length=512)
    sound: Optional[Sound] = Field(
        default=None,
        description="Defaults to the reminder type's sound.",
    )


class ReminderUpdateRequest(BaseModel):
    type: Optional[ReminderType] = None
    time: Optional[Annotated[str, _TIME_FIELD]] = None
    days: Optional[Annotated[list[Weekday], Field(min_length=1, max_length=7)]] = None
    enabled: Optional[bool] = None
    message: Optional[str] = Field(default=None, max_length=512)
    sound: Optional[Sound] = None


class ReminderResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    type: str
    time: str
    days: list[str] = Field(description="Weekday tags, Monday first.")
    days_label: str = Field(examples=["Weekdays"])
    enabled: bool
    message: str
    sound: str


class NextOccurrenceResponse(BaseModel):
    reminder_id: str
    now: str = Field(description="Reference instant used for the calculation.")
    next_occurrence: str = Field(description="ISO-8601 local wall-clock instant.")


class UpcomingReminderResponse(BaseModel):
    reminder: ReminderResponse
    next_occurrence: str


class UpcomingReminderListResponse(BaseModel):
    now: str
    items: list[UpcomingReminderResponse]

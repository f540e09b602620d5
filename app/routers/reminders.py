"""
Reminders router.

GET    /reminders                 — list reminders
POST   /reminders                 — create a reminder
GET    /reminders/upcoming        — enabled reminders by next firing instant
GET    /reminders/{id}            — fetch one
PUT    /reminders/{id}            — partial update
DELETE /reminders/{id}            — delete
GET    /reminders/{id}/next       — next firing instant
"""
from __future__ import annotations

from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from app.db.base import get_db
from app.domain.reminders import Reminder, ReminderRequest, ReminderSpec, sorted_days
from app.schemas.common import ErrorResponse
from app.schemas.reminders import (
    NextOccurrenceResponse,
    ReminderCreateRequest,
    ReminderResponse,
    ReminderUpdateRequest,
    UpcomingReminderListResponse,
    UpcomingReminderResponse,
)
from app.services import reminder_store
from app.services.recurrence import next_occurrence_for, upcoming

router = APIRouter(prefix="/reminders", tags=["reminders"])


def _now() -> datetime:
    # Local wall-clock, no tz conversion.
    return datetime.now().replace(second=0, microsecond=0)


# ---------------------------------------------------------------------------
# Serialization helper
# ---------------------------------------------------------------------------

def reminder_to_response(r: Reminder) -> ReminderResponse:
    return ReminderResponse(
        id=r.id,
        type=r.type.value,
        time=r.time_of_day,
        days=[d.value for d in sorted_days(r.active_days)],
        days_label=r.days_label,
        enabled=r.enabled,
        message=r.message,
        sound=r.sound.value,
    )


# ---------------------------------------------------------------------------
# Collection
# ---------------------------------------------------------------------------

@router.get("", response_model=list[ReminderResponse], summary="List reminders")
def list_reminders(
    enabled_only: bool = Query(default=False, description="Only enabled reminders."),
    db: Session = Depends(get_db),
):
    return [reminder_to_response(r) for r in reminder_store.list_reminders(db, enabled_only)]


@router.post(
    "",
    response_model=ReminderResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a reminder",
    responses={
        422: {"model": ErrorResponse, "description": "Invalid time, type, sound or empty days."},
        503: {"model": ErrorResponse, "description": "Store unavailable."},
    },
)
def create_reminder(payload: ReminderCreateRequest, db: Session = Depends(get_db)):
    """`sound` defaults to the type's sound (water → drop, meal → bell, …)."""
    request = ReminderRequest(
        spec=ReminderSpec(type=payload.type, time_of_day=payload.time, active_days=payload.days),
        enabled=payload.enabled,
        message=payload.message,
        sound=payload.sound,
    )
    return reminder_to_response(reminder_store.create_reminder(db, request))


@router.get(
    "/upcoming",
    response_model=UpcomingReminderListResponse,
    summary="Enabled reminders ordered by next firing instant",
)
def upcoming_reminders(
    limit: Optional[int] = Query(default=None, ge=1, le=100, description="Max items."),
    now: Optional[datetime] = Query(
        default=None,
        description="Reference instant (local wall-clock). Defaults to now.",
        examples=["2026-02-23T08:00:00"],
    ),
    db: Session = Depends(get_db),
):
    ref = now or _now()
    pairs = upcoming(reminder_store.list_reminders(db, enabled_only=True), ref, limit)
    return UpcomingReminderListResponse(
        now=ref.isoformat(),
        items=[
            UpcomingReminderResponse(
                reminder=reminder_to_response(r),
                next_occurrence=at.isoformat(),
            )
            for r, at in pairs
        ],
    )


# ---------------------------------------------------------------------------
# Item
# ---------------------------------------------------------------------------

@router.get(
    "/{reminder_id}",
    response_model=ReminderResponse,
    summary="Fetch a reminder",
    responses={404: {"model": ErrorResponse, "description": "Unknown reminder id."}},
)
def get_reminder(reminder_id: str, db: Session = Depends(get_db)):
    return reminder_to_response(reminder_store.get_reminder(db, reminder_id))


@router.put(
    "/{reminder_id}",
    response_model=ReminderResponse,
    summary="Update a reminder (partial)",
    responses={404: {"model": ErrorResponse, "description": "Unknown reminder id."}},
)
def update_reminder(
    reminder_id: str,
    payload: ReminderUpdateRequest,
    db: Session = Depends(get_db),
):
    updated = reminder_store.update_reminder(
        db,
        reminder_id,
        reminder_type=payload.type,
        time_of_day=payload.time,
        active_days=payload.days,
        enabled=payload.enabled,
        message=payload.message,
        sound=payload.sound,
    )
    return reminder_to_response(updated)


@router.delete(
    "/{reminder_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a reminder",
    responses={404: {"model": ErrorResponse, "description": "Unknown reminder id."}},
)
def delete_reminder(reminder_id: str, db: Session = Depends(get_db)):
    reminder_store.delete_reminder(db, reminder_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get(
    "/{reminder_id}/next",
    response_model=NextOccurrenceResponse,
    summary="Next firing instant of a reminder",
    responses={404: {"model": ErrorResponse, "description": "Unknown reminder id."}},
)
def reminder_next_occurrence(
    reminder_id: str,
    now: Optional[datetime] = Query(
        default=None,
        description="Reference instant (local wall-clock). Defaults to now.",
        examples=["2026-02-23T08:00:00"],
    ),
    db: Session = Depends(get_db),
):
    """
    First instant strictly after `now` at the reminder's time on one of its
    active weekdays. Disabled reminders still report their schedule.
    """
    reminder = reminder_store.get_reminder(db, reminder_id)
    ref = now or _now()
    return NextOccurrenceResponse(
        reminder_id=reminder.id,
        now=ref.isoformat(),
        next_occurrence=next_occurrence_for(reminder, ref).isoformat(),
    )

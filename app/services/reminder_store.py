"""
Reminder store: CRUD over the `reminders` table.

Public API
----------
create_reminder(db, request)           -> Reminder
list_reminders(db, enabled_only)       -> list[Reminder]
get_reminder(db, reminder_id)          -> Reminder
update_reminder(db, reminder_id, ...)  -> Reminder
delete_reminder(db, reminder_id)       -> None
ReminderStore(db).create               async create contract used by templates

Returned values are domain Reminders, never ORM rows.
"""
from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterable, Iterator, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from starlette.concurrency import run_in_threadpool

from app.core.errors import ReminderNotFoundError, TransientStoreError
from app.domain.reminders import (
    Reminder,
    ReminderRequest,
    ReminderSpec,
    ReminderType,
    Sound,
    Weekday,
    sorted_days,
)
from app.models.reminder import ReminderRow

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _days_to_csv(days: Iterable[Weekday]) -> str:
    return ",".join(d.value for d in sorted_days(days))


def _csv_to_days(raw: str) -> frozenset[Weekday]:
    return frozenset(Weekday(tag) for tag in raw.split(",") if tag)


def _row_to_reminder(row: ReminderRow) -> Reminder:
    return Reminder(
        id=row.id,
        type=row.type,
        time_of_day=row.time,
        active_days=_csv_to_days(row.days),
        enabled=row.enabled,
        message=row.message or "",
        sound=row.sound,
    )


@contextmanager
def _store_call(db: Session, operation: str) -> Iterator[None]:
    """Roll back and re-raise any SQLAlchemy failure as TransientStoreError."""
    try:
        yield
    except SQLAlchemyError as exc:
        db.rollback()
        logger.error("Reminder store %s failed: %s", operation, exc)
        raise TransientStoreError(str(exc), operation=operation) from exc


def _get_row(db: Session, reminder_id: str) -> ReminderRow:
    with _store_call(db, "get_reminder"):
        row = db.get(ReminderRow, reminder_id)
    if row is None:
        raise ReminderNotFoundError(reminder_id)
    return row


# ---------------------------------------------------------------------------
# Public — CRUD
# ---------------------------------------------------------------------------

def create_reminder(db: Session, request: ReminderRequest) -> Reminder:
    spec = request.spec
    row = ReminderRow(
        type=spec.type,
        time=spec.time_of_day,
        days=_days_to_csv(spec.active_days),
        enabled=request.enabled,
        message=request.message,
        sound=request.sound,
    )
    with _store_call(db, "create_reminder"):
        db.add(row)
        db.commit()
        db.refresh(row)
    return _row_to_reminder(row)


def list_reminders(db: Session, enabled_only: bool = False) -> list[Reminder]:
    with _store_call(db, "list_reminders"):
        q = db.query(ReminderRow)
        if enabled_only:
            q = q.filter(ReminderRow.enabled == True)  # noqa: E712
        rows = q.order_by(ReminderRow.time.asc()).all()
    return [_row_to_reminder(r) for r in rows]


def get_reminder(db: Session, reminder_id: str) -> Reminder:
    return _row_to_reminder(_get_row(db, reminder_id))


def update_reminder(
    db: Session,
    reminder_id: str,
    reminder_type: Optional[ReminderType] = None,
    time_of_day: Optional[str] = None,
    active_days: Optional[Iterable[Weekday]] = None,
    enabled: Optional[bool] = None,
    message: Optional[str] = None,
    sound: Optional[Sound] = None,
) -> Reminder:
    """Partial update. The merged schedule is re-validated before writing."""
    row = _get_row(db, reminder_id)
    merged = ReminderSpec(
        type=reminder_type if reminder_type is not None else row.type,
        time_of_day=time_of_day if time_of_day is not None else row.time,
        active_days=active_days if active_days is not None else _csv_to_days(row.days),
    )
    row.type = merged.type
    row.time = merged.time_of_day
    row.days = _days_to_csv(merged.active_days)
    if enabled is not None:
        row.enabled = enabled
    if message is not None:
        row.message = message
    if sound is not None:
        row.sound = Sound(sound)
    with _store_call(db, "update_reminder"):
        db.commit()
        db.refresh(row)
    return _row_to_reminder(row)


def delete_reminder(db: Session, reminder_id: str) -> None:
    row = _get_row(db, reminder_id)
    with _store_call(db, "delete_reminder"):
        db.delete(row)
        db.commit()


class ReminderStore:
    """
    Binds a session to the async `create(request) -> Reminder` contract.

    The blocking write runs in the threadpool, so each create is a real
    suspension point for the event loop.
    """

    def __init__(self, db: Session):
        self.db = db

    async def create(self, request: ReminderRequest) -> Reminder:
        return await run_in_threadpool(create_reminder, self.db, request)

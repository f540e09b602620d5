"""
Metric store: persistence adapter for metric entries.

Public API
----------
log_metric(db, entry, note)        -> MetricEntryRow
load_metrics(db, start, end)       -> dict[MetricKind, list[MetricEntry]]
MetricStore(db).fetch_metrics      async contract consumed by the dashboard

Any SQLAlchemy failure is rolled back and re-raised as TransientStoreError.
"""
from __future__ import annotations

import logging
from datetime import date
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from starlette.concurrency import run_in_threadpool

from app.core.errors import TransientStoreError
from app.domain.metrics import MetricEntry, MetricKind
from app.models.metric_entry import MetricEntryRow

logger = logging.getLogger(__name__)


def _row_to_entry(row: MetricEntryRow) -> MetricEntry:
    return MetricEntry(
        kind=row.kind,
        day=row.day,
        mood=row.mood,
        hours=row.hours,
        glasses=row.glasses,
    )


def log_metric(db: Session, entry: MetricEntry, note: Optional[str] = None) -> MetricEntryRow:
    """Persist one validated entry and commit."""
    row = MetricEntryRow(
        kind=entry.kind,
        day=entry.day,
        mood=entry.mood,
        hours=entry.hours,
        glasses=entry.glasses,
        note=note,
    )
    try:
        db.add(row)
        db.commit()
        db.refresh(row)
    except SQLAlchemyError as exc:
        db.rollback()
        logger.error("Failed to log %s metric: %s", entry.kind.value, exc)
        raise TransientStoreError(str(exc), operation="log_metric") from exc
    return row


def load_metrics(
    db: Session,
    start: date,
    end: date,
) -> dict[MetricKind, list[MetricEntry]]:
    """All entries with start <= day <= end, grouped by kind, oldest first."""
    try:
        rows = (
            db.query(MetricEntryRow)
            .filter(MetricEntryRow.day >= start, MetricEntryRow.day <= end)
            .order_by(MetricEntryRow.day.asc(), MetricEntryRow.id.asc())
            .all()
        )
    except SQLAlchemyError as exc:
        db.rollback()
        raise TransientStoreError(str(exc), operation="fetch_metrics") from exc

    grouped: dict[MetricKind, list[MetricEntry]] = {kind: [] for kind in MetricKind}
    for row in rows:
        entry = _row_to_entry(row)
        grouped[entry.kind].append(entry)
    return grouped


class MetricStore:
    """Binds a session to the `fetch_metrics(start, end)` contract; the query runs in the threadpool."""

    def __init__(self, db: Session):
        self.db = db

    async def fetch_metrics(self, start: date, end: date) -> dict[MetricKind, list[MetricEntry]]:
        return await run_in_threadpool(load_metrics, self.db, start, end)

"""
Metrics router — logging observations and summarizing a window.

POST /metrics/{kind}       — log one mood / sleep / hydration / work entry
GET  /metrics/summary      — per-kind average + sample count over [start, end]
"""
from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.db.base import get_db
from app.domain.metrics import MetricEntry, MetricKind, MetricSummary, mood_from_value
from app.models.metric_entry import MetricEntryRow
from app.schemas.common import ErrorResponse
from app.schemas.wellness import (
    MetricEntryRequest,
    MetricEntryResponse,
    MetricSummaryListResponse,
    MetricSummaryResponse,
)
from app.services.aggregator import summarize_all
from app.services.dashboard import default_window
from app.services.metric_store import load_metrics, log_metric

router = APIRouter(prefix="/metrics", tags=["metrics"])


def _today() -> date:
    return datetime.now(tz=timezone.utc).date()


def _ev(v) -> Optional[str]:
    """Extract bare string value from a str-enum or plain str."""
    if v is None:
        return None
    return v.value if hasattr(v, "value") else str(v)


# ---------------------------------------------------------------------------
# Serialization helpers
# ---------------------------------------------------------------------------

def _row_to_response(row: MetricEntryRow) -> MetricEntryResponse:
    return MetricEntryResponse(
        id=row.id,
        kind=_ev(row.kind),
        date=str(row.day),
        mood=_ev(row.mood),
        hours=row.hours,
        glasses=row.glasses,
        note=row.note,
    )


def summaries_to_response(summaries: dict[MetricKind, MetricSummary]) -> list[MetricSummaryResponse]:
    return [
        MetricSummaryResponse(kind=kind, average=s.average, sample_count=s.sample_count)
        for kind, s in summaries.items()
    ]


# ---------------------------------------------------------------------------
# POST /metrics/{kind}
# ---------------------------------------------------------------------------

@router.post(
    "/{kind}",
    response_model=MetricEntryResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Log a single metric observation",
    responses={
        422: {"model": ErrorResponse, "description": "Missing or invalid value for this metric kind."},
        503: {"model": ErrorResponse, "description": "Store unavailable."},
    },
)
def create_metric_entry(
    kind: MetricKind,
    payload: MetricEntryRequest,
    db: Session = Depends(get_db),
):
    """
    Log one observation. The value field depends on `kind`:

    | kind | field |
    |---|---|
    | `mood` | `mood` (label) or `mood_value` (1–5) |
    | `sleep`, `work` | `hours` |
    | `hydration` | `glasses` |
    """
    mood = payload.mood
    if mood is None and payload.mood_value is not None:
        mood = mood_from_value(payload.mood_value)

    entry = MetricEntry(
        kind=kind,
        day=payload.day or _today(),
        mood=mood if kind is MetricKind.mood else None,
        hours=payload.hours if kind in (MetricKind.sleep, MetricKind.work) else None,
        glasses=payload.glasses if kind is MetricKind.hydration else None,
    )
    row = log_metric(db, entry, note=payload.note)
    return _row_to_response(row)


# ---------------------------------------------------------------------------
# GET /metrics/summary
# ---------------------------------------------------------------------------

@router.get(
    "/summary",
    response_model=MetricSummaryListResponse,
    summary="Per-kind summaries over a date window",
)
def metric_summary(
    start: Optional[date] = Query(default=None, description="First day (inclusive)."),
    end: Optional[date] = Query(default=None, description="Last day (inclusive). Defaults to today (UTC)."),
    db: Session = Depends(get_db),
):
    """
    Average and sample count for every metric kind. A `sample_count` of 0
    means the kind has no data in the window.
    """
    default_start, default_end = default_window(end or _today())
    start = start or default_start
    summaries = summarize_all(load_metrics(db, start, default_end))
    return MetricSummaryListResponse(
        start=str(start),
        end=str(default_end),
        summaries=summaries_to_response(summaries),
    )

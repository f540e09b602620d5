"""
Wellness router — the scoring pipeline.

GET  /wellness/dashboard   — Wellness Score + breakdown + today's focus insight
POST /wellness/balance    — work-life balance score + recommendations
"""
from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.db.base import get_db
from app.domain.metrics import TimeAllocation
from app.routers.metrics import summaries_to_response
from app.schemas.common import ErrorResponse
from app.schemas.wellness import (
    BalanceRecommendationResponse,
    BalanceRequest,
    BalanceResponse,
    DashboardResponse,
    InsightResponse,
)
from app.services.dashboard import Dashboard, build_dashboard, default_window
from app.services.insights import Insight
from app.services.metric_store import MetricStore
from app.services.score_engine import balance_recommendations, balance_score

router = APIRouter(prefix="/wellness", tags=["wellness"])


def _today() -> date:
    return datetime.now(tz=timezone.utc).date()


# ---------------------------------------------------------------------------
# Serialization helpers
# ---------------------------------------------------------------------------

def _insight_to_response(insight: Insight) -> InsightResponse:
    return InsightResponse(
        category=insight.category.value,
        title=insight.title,
        description=insight.description,
        priority=insight.priority,
        action_label=insight.action_label,
        action_target=insight.action_target,
    )


def _dashboard_to_response(d: Dashboard) -> DashboardResponse:
    return DashboardResponse(
        start=str(d.start),
        end=str(d.end),
        wellness_score=d.score,
        sub_scores={kind.value: value for kind, value in d.sub_scores.items()},
        summaries=summaries_to_response(d.summaries),
        insight=_insight_to_response(d.insight),
    )


# ---------------------------------------------------------------------------
# GET /wellness/dashboard
# ---------------------------------------------------------------------------

@router.get(
    "/dashboard",
    response_model=DashboardResponse,
    summary="Wellness Score and today's focus",
    responses={
        200: {"description": "Score, per-kind breakdown and one insight."},
        503: {"model": ErrorResponse, "description": "Metric store unavailable."},
    },
)
async def dashboard(
    start: Optional[date] = Query(default=None, description="First day (inclusive)."),
    end: Optional[date] = Query(
        default=None,
        description="Last day (inclusive). Defaults to today (UTC).",
        examples=["2026-02-21"],
    ),
    db: Session = Depends(get_db),
):
    """
    Summarize the window (default: the last 7 days) and return:

    - **wellness_score** — mean of the 0–20 sub-scores of every kind with data.
      Kinds without data do not vote.
    - **insight** — the single highest-priority recommendation, or
      *On Track!* when nothing needs attention.
    """
    default_start, window_end = default_window(end or _today())
    result = await build_dashboard(
        MetricStore(db).fetch_metrics,
        start or default_start,
        window_end,
    )
    return _dashboard_to_response(result)


# ---------------------------------------------------------------------------
# POST /wellness/balance
# ---------------------------------------------------------------------------

@router.post(
    "/balance",
    response_model=BalanceResponse,
    summary="Work-life balance score",
    responses={422: {"model": ErrorResponse, "description": "Negative or out-of-range hours."}},
)
def work_life_balance(payload: BalanceRequest):
    """
    Score weekly hours per category against targets (0–100, 50 with no data)
    and list the work / rest / family recommendations that apply.
    """
    allocations = [
        TimeAllocation(category=item.category, hours=item.hours, target=item.target)
        for item in payload.allocations
    ]
    return BalanceResponse(
        balance_score=balance_score(allocations),
        recommendations=[
            BalanceRecommendationResponse(
                category=tip.category.value,
                title=tip.title,
                description=tip.description,
            )
            for tip in balance_recommendations(allocations)
        ],
    )

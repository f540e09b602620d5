"""
Wellness schemas.

POST /metrics/{kind}        → MetricEntryRequest → MetricEntryResponse
GET  /metrics/summary       → MetricSummaryListResponse
GET  /wellness/dashboard    → DashboardResponse
POST /wellness/balance      → BalanceRequest → BalanceResponse
"""
from datetime import date
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from app.domain.metrics import BalanceCategory, MetricKind, Mood


class MetricEntryRequest(BaseModel):
    """
    One observation. Which value field is required depends on the kind in
    the URL: `mood` for mood, `hours` for sleep/work, `glasses` for hydration.
    """
    model_config = ConfigDict(populate_by_name=True)

    day: Optional[date] = Field(
        default=None,
        alias="date",
        description="ISO date of the observation. Defaults to today (UTC).",
        examples=["2026-02-20"],
    )
    mood: Optional[Mood] = Field(default=None, examples=["happy"])
    mood_value: Optional[int] = Field(
        default=None, ge=1, le=5,
        description="1–5 slider value; alternative to `mood`.",
    )
    hours: Optional[float] = Field(default=None, ge=0, le=24, examples=[7.5])
    glasses: Optional[int] = Field(default=None, ge=0, le=100, examples=[8])
    note: Optional[str] = Field(default=None, max_length=512)


class MetricEntryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    kind: str
    date: str
    mood: Optional[str] = None
    hours: Optional[float] = None
    glasses: Optional[int] = None
    note: Optional[str] = None


class MetricSummaryResponse(BaseModel):
    kind: MetricKind
    average: float
    sample_count: int = Field(description="0 means no data, not an average of 0.")


class MetricSummaryListResponse(BaseModel):
    start: str
    end: str
    summaries: list[MetricSummaryResponse]


class InsightResponse(BaseModel):
    category: str = Field(description='"sleep" | "hydration" | "work" | "mood" | "default"')
    title: str
    description: str
    priority: int
    action_label: str
    action_target: str


class DashboardResponse(BaseModel):
    """Wellness Score, per-kind breakdown and the single selected insight."""
    start: str = Field(description="First day (inclusive) of the window.")
    end: str = Field(description="Last day (inclusive) of the window.")
    wellness_score: int = Field(ge=0, le=100, examples=[18])
    sub_scores: dict[str, float] = Field(
        description="0–20 contribution of each kind that has data."
    )
    summaries: list[MetricSummaryResponse]
    insight: InsightResponse


class TimeAllocationItem(BaseModel):
    category: BalanceCategory
    hours: float = Field(ge=0, le=168, description="Hours spent this week.", examples=[45])
    target: float = Field(ge=0, le=168, description="Target hours for the week.", examples=[40])


class BalanceRequest(BaseModel):
    allocations: list[TimeAllocationItem] = Field(
        default_factory=list,
        description="One entry per category. An empty list scores a neutral 50.",
    )


class BalanceRecommendationResponse(BaseModel):
    category: str
    title: str
    description: str


class BalanceResponse(BaseModel):
    balance_score: int = Field(ge=0, le=100, examples=[78])
    recommendations: list[BalanceRecommendationResponse]

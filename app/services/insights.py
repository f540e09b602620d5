"""
Insight selector — one prioritized recommendation per evaluation.

Rules (evaluated in this order, each independently)
----------------------------------------------------
  1. SLEEP       ≥1 sample, average sleep < 7 h             → priority 3
  2. HYDRATION   ≥1 sample, latest entry < 2 L              → priority 2
  3. WORK        ≥2 samples, average work > 9 h             → priority 1
  4. MOOD        ≥2 samples, average mood value ≤ 3         → priority 4

Mood and work reason about a trend, hence two samples. Hydration looks at the
most recent entry rather than the average (recency bias).

Selection
---------
Firing candidates are stably sorted by priority, highest first, and the first
one wins: among equal priorities the rule evaluated earlier wins. With no
candidates the fixed "On Track!" insight is returned.

Zero I/O. Same inputs, same insight.
"""
from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Iterable, Mapping, Optional

from app.domain.metrics import (
    EMPTY_SUMMARY,
    MetricEntry,
    MetricKind,
    MetricSummary,
    glasses_to_liters,
)
from app.services.aggregator import summarize_all


class InsightCategory(str, enum.Enum):
    sleep = "sleep"
    hydration = "hydration"
    work = "work"
    mood = "mood"
    default = "default"


# Thresholds
_SLEEP_MIN_HOURS = 7
_HYDRATION_MIN_LITERS = 2
_WORK_MAX_HOURS = 9
_MOOD_MAX_VALUE = 3
_TREND_MIN_SAMPLES = 2


@dataclass(frozen=True)
class Insight:
    category: InsightCategory
    title: str
    description: str
    priority: int
    action_label: str
    action_target: str


SLEEP_INSIGHT = Insight(
    category=InsightCategory.sleep,
    title="Sleep Focus",
    description=(
        "You're averaging less than 7 hours of sleep. "
        "Try going to bed 30 minutes earlier this week."
    ),
    priority=3,
    action_label="View Sleep Tips",
    action_target="/dashboard/mental-health",
)

HYDRATION_INSIGHT = Insight(
    category=InsightCategory.hydration,
    title="Hydration Alert",
    description=(
        "Your recent water intake is below the recommended 2 liters. "
        "Set reminders to drink more water."
    ),
    priority=2,
    action_label="Add Reminder",
    action_target="/dashboard/reminders",
)

WORK_INSIGHT = Insight(
    category=InsightCategory.work,
    title="Work-Life Balance",
    description=(
        "You're working more than 9 hours on average. "
        "Consider scheduling more breaks."
    ),
    priority=1,
    action_label="View Balance",
    action_target="/dashboard/work-life",
)

MOOD_INSIGHT = Insight(
    category=InsightCategory.mood,
    title="Mood Support",
    description=(
        "Your recent mood entries indicate stress. "
        "Try a meditation session in the Mental Health section."
    ),
    priority=4,
    action_label="Try Meditation",
    action_target="/dashboard/mental-health",
)

ON_TRACK_INSIGHT = Insight(
    category=InsightCategory.default,
    title="On Track!",
    description="Your wellness metrics look good. Keep up the great work!",
    priority=0,
    action_label="View Details",
    action_target="/dashboard/tracking",
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _latest(entries: Iterable[MetricEntry]) -> Optional[MetricEntry]:
    """Entry with the greatest day; on equal days the later-supplied one."""
    latest: Optional[MetricEntry] = None
    for entry in entries:
        if latest is None or entry.day >= latest.day:
            latest = entry
    return latest


def _summary(summaries: Mapping[MetricKind, MetricSummary], kind: MetricKind) -> MetricSummary:
    return summaries.get(kind) or EMPTY_SUMMARY


# ---------------------------------------------------------------------------
# Individual rule evaluators
# ---------------------------------------------------------------------------

def _rule_sleep(summaries, entries) -> Optional[Insight]:
    s = _summary(summaries, MetricKind.sleep)
    if s.has_data and s.average < _SLEEP_MIN_HOURS:
        return SLEEP_INSIGHT
    return None


def _rule_hydration(summaries, entries) -> Optional[Insight]:
    s = _summary(summaries, MetricKind.hydration)
    if not s.has_data:
        return None
    latest = _latest(entries.get(MetricKind.hydration, ()))
    # Without raw entries the summary average is the only signal left.
    glasses = latest.glasses if latest is not None else s.average
    if glasses_to_liters(glasses) < _HYDRATION_MIN_LITERS:
        return HYDRATION_INSIGHT
    return None


def _rule_work(summaries, entries) -> Optional[Insight]:
    s = _summary(summaries, MetricKind.work)
    if s.sample_count >= _TREND_MIN_SAMPLES and s.average > _WORK_MAX_HOURS:
        return WORK_INSIGHT
    return None


def _rule_mood(summaries, entries) -> Optional[Insight]:
    s = _summary(summaries, MetricKind.mood)
    if s.sample_count >= _TREND_MIN_SAMPLES and s.average <= _MOOD_MAX_VALUE:
        return MOOD_INSIGHT
    return None


# Evaluation order is the tie-break order.
_RULES = (_rule_sleep, _rule_hydration, _rule_work, _rule_mood)


# ---------------------------------------------------------------------------
# Public
# ---------------------------------------------------------------------------

def candidate_insights(
    summaries: Mapping[MetricKind, MetricSummary],
    entries: Optional[Mapping[MetricKind, Iterable[MetricEntry]]] = None,
) -> list[Insight]:
    """All firing insights, highest priority first (stable)."""
    by_kind = {MetricKind(k): list(v) for k, v in (entries or {}).items()}
    fired = [
        insight
        for insight in (rule(summaries, by_kind) for rule in _RULES)
        if insight is not None
    ]
    # sorted() is stable: equal priorities keep evaluation order
    return sorted(fired, key=lambda i: i.priority, reverse=True)


def select_insight(
    summaries: Mapping[MetricKind, MetricSummary],
    entries: Optional[Mapping[MetricKind, Iterable[MetricEntry]]] = None,
) -> Insight:
    """Return the single highest-priority insight, or ON_TRACK_INSIGHT."""
    candidates = candidate_insights(summaries, entries)
    return candidates[0] if candidates else ON_TRACK_INSIGHT


def select_insight_from_entries(
    entries: Mapping[MetricKind, Iterable[MetricEntry]],
) -> Insight:
    """Convenience: summarize then select, from raw entries alone."""
    materialized = {MetricKind(k): list(v) for k, v in entries.items()}
    return select_insight(summarize_all(materialized), materialized)

"""
Wellness Score engine.

Definition
----------
Each metric kind with at least one sample contributes a sub-score on a fixed
0–20 rubric. The Wellness Score is the unweighted mean of those sub-scores,
rounded half-up to an integer. Kinds without samples do not vote; with no
voters the score is 0. The result always lies in [0, 100].

Rubrics
-------
  mood       average mood value (1–5) × 4
  sleep      [7, 9] h → 20 · [6, 7) or (9, 10] h → 15 · otherwise 5
  hydration  liters = glasses × 0.25 · ≥ 2 L → 20 · [1, 2) L → 15 · otherwise 5
  work       [7, 8] h → 20 · > 10 h or < 4 h → 5 · otherwise 15

Work-life balance
-----------------
A separate 0–100 score over weekly time allocations. Each category scores
100 minus its percentage deviation from target; overwork and under-rest lose
a further 10. Category scores are clamped to [0, 100] and averaged, rounded
half-up. No allocations -> 50.

Public API
----------
sub_scores(summaries)                 -> dict[MetricKind, float]
compute_score(summaries)              -> int
balance_score(allocations)            -> int
balance_recommendations(allocations)  -> list[BalanceRecommendation]
"""
from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Callable, Iterable, Mapping

from app.domain.metrics import (
    BalanceCategory,
    MetricKind,
    MetricSummary,
    TimeAllocation,
    glasses_to_liters,
)

MAX_SUB_SCORE = 20
MIN_SCORE = 0
MAX_SCORE = 100


# ---------------------------------------------------------------------------
# Rubrics (0–20)
# ---------------------------------------------------------------------------

def _mood_rubric(average: float) -> float:
    return average * 4


def _sleep_rubric(hours: float) -> float:
    if 7 <= hours <= 9:
        return 20
    if 6 <= hours <= 10:
        return 15
    return 5


def _hydration_rubric(glasses: float) -> float:
    liters = glasses_to_liters(glasses)
    if liters >= 2:
        return 20
    if liters >= 1:
        return 15
    return 5


def _work_rubric(hours: float) -> float:
    if 7 <= hours <= 8:
        return 20
    if hours > 10 or hours < 4:
        return 5
    return 15


_RUBRICS: dict[MetricKind, Callable[[float], float]] = {
    MetricKind.mood: _mood_rubric,
    MetricKind.sleep: _sleep_rubric,
    MetricKind.hydration: _hydration_rubric,
    MetricKind.work: _work_rubric,
}


def _round_half_up(value: float) -> int:
    return int(Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


# ---------------------------------------------------------------------------
# Public
# ---------------------------------------------------------------------------

def sub_scores(summaries: Mapping[MetricKind | str, MetricSummary]) -> dict[MetricKind, float]:
    """Per-kind 0–20 contributions, only for kinds with data."""
    result: dict[MetricKind, float] = {}
    for kind in MetricKind:
        # str-enum keys: "sleep" and MetricKind.sleep hash alike
        summary = summaries.get(kind)
        if summary is None or not summary.has_data:
            continue
        result[kind] = _RUBRICS[kind](summary.average)
    return result


def compute_score(summaries: Mapping[MetricKind | str, MetricSummary]) -> int:
    """Unweighted mean of participating sub-scores, rounded. No voters -> 0."""
    voters = sub_scores(summaries)
    if not voters:
        return MIN_SCORE
    score = _round_half_up(sum(voters.values()) / len(voters))
    return max(MIN_SCORE, min(MAX_SCORE, score))


# ---------------------------------------------------------------------------
# Work-life balance
# ---------------------------------------------------------------------------

NEUTRAL_BALANCE_SCORE = 50
_BALANCE_EXTRA_PENALTY = 10
# hours beyond target (work) or short of target (rest, family) before a tip fires
_RECOMMENDATION_SLACK_HOURS = 5


@dataclass(frozen=True)
class BalanceRecommendation:
    category: BalanceCategory
    title: str
    description: str


_REDUCE_WORK = BalanceRecommendation(
    category=BalanceCategory.work,
    title="Reduce Work Hours",
    description=(
        "You're working significantly more than your target. "
        "Consider setting stricter boundaries."
    ),
)
_INCREASE_REST = BalanceRecommendation(
    category=BalanceCategory.rest,
    title="Increase Rest Time",
    description=(
        "You're not getting enough rest. "
        "Try to allocate more time for sleep and relaxation."
    ),
)
_FAMILY_TIME = BalanceRecommendation(
    category=BalanceCategory.family,
    title="Prioritize Family Time",
    description=(
        "You're spending less time with family than targeted. "
        "Consider scheduling dedicated family time."
    ),
)


def _category_balance(a: TimeAllocation) -> float:
    if a.hours == a.target:
        return 100.0
    if a.target == 0:
        # any time against a zero target is a full deviation
        return 0.0
    score = 100 - abs(a.hours - a.target) / a.target * 100
    if a.category is BalanceCategory.work and a.hours > a.target:
        score -= _BALANCE_EXTRA_PENALTY
    if a.category is BalanceCategory.rest and a.hours < a.target:
        score -= _BALANCE_EXTRA_PENALTY
    return max(0.0, min(100.0, score))


def balance_score(allocations: Iterable[TimeAllocation]) -> int:
    """Mean of per-category closeness to target, 0–100. No allocations -> 50."""
    scores = [_category_balance(a) for a in allocations]
    if not scores:
        return NEUTRAL_BALANCE_SCORE
    return _round_half_up(sum(scores) / len(scores))


def balance_recommendations(allocations: Iterable[TimeAllocation]) -> list[BalanceRecommendation]:
    """Tips for work, rest and family, in that order; first allocation per category counts."""
    by_category: dict[BalanceCategory, TimeAllocation] = {}
    for a in allocations:
        by_category.setdefault(a.category, a)

    tips: list[BalanceRecommendation] = []
    work = by_category.get(BalanceCategory.work)
    if work is not None and work.hours > work.target + _RECOMMENDATION_SLACK_HOURS:
        tips.append(_REDUCE_WORK)
    rest = by_category.get(BalanceCategory.rest)
    if rest is not None and rest.hours < rest.target - _RECOMMENDATION_SLACK_HOURS:
        tips.append(_INCREASE_REST)
    family = by_category.get(BalanceCategory.family)
    if family is not None and family.hours < family.target - _RECOMMENDATION_SLACK_HOURS:
        tips.append(_FAMILY_TIME)
    return tips

"""
Dashboard pipeline: fetch → summarize → score + insight.

Public API
----------
default_window(today)                        -> (start, end)
evaluate(metrics)                            -> Dashboard   (pure)
build_dashboard(fetch_metrics, start, end)   -> Dashboard   (async)

The fetch is the only suspension point. A failing fetch surfaces as
TransientStoreError. A cancelled fetch (asyncio.CancelledError) is not a
failure: it propagates as-is, nothing is logged as an error and no result
is produced.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Awaitable, Callable, Iterable, Mapping

from app.core.config import settings
from app.core.errors import TransientStoreError, WellnessError
from app.domain.metrics import MetricEntry, MetricKind, MetricSummary
from app.services.aggregator import summarize_all
from app.services.insights import Insight, select_insight
from app.services.score_engine import compute_score, sub_scores

logger = logging.getLogger(__name__)

FetchMetrics = Callable[[date, date], Awaitable[Mapping[MetricKind, Iterable[MetricEntry]]]]


@dataclass
class Dashboard:
    start: date
    end: date
    score: int
    sub_scores: dict[MetricKind, float]
    summaries: dict[MetricKind, MetricSummary]
    insight: Insight


def default_window(today: date, days: int | None = None) -> tuple[date, date]:
    """Window of `days` (default METRICS_WINDOW_DAYS) ending on `today`, inclusive."""
    n = days or settings.METRICS_WINDOW_DAYS
    return today - timedelta(days=n - 1), today


def evaluate(
    metrics: Mapping[MetricKind, Iterable[MetricEntry]],
    start: date,
    end: date,
) -> Dashboard:
    materialized = {MetricKind(k): list(v) for k, v in metrics.items()}
    summaries = summarize_all(materialized)
    return Dashboard(
        start=start,
        end=end,
        score=compute_score(summaries),
        sub_scores=sub_scores(summaries),
        summaries=summaries,
        insight=select_insight(summaries, materialized),
    )


async def build_dashboard(fetch_metrics: FetchMetrics, start: date, end: date) -> Dashboard:
    try:
        metrics = await fetch_metrics(start, end)
    except WellnessError:
        raise
    except Exception as exc:
        logger.error("Metric fetch for %s..%s failed: %s", start, end, exc)
        raise TransientStoreError(str(exc), operation="fetch_metrics") from exc
    return evaluate(metrics, start, end)

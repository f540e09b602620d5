"""
Metric aggregator: reduce a list of entries of ONE kind to a MetricSummary.

Public API
----------
summarize(entries)          -> MetricSummary
summarize_all(metrics)      -> dict[MetricKind, MetricSummary]

Pure: no DB, no I/O, no memory between calls.
"""
from __future__ import annotations

from typing import Iterable, Mapping

from app.core.errors import MixedMetricKindsError
from app.domain.metrics import EMPTY_SUMMARY, MetricEntry, MetricKind, MetricSummary


def summarize(
    entries: Iterable[MetricEntry],
    kind: MetricKind | None = None,
) -> MetricSummary:
    """
    Average and count the entries. All entries must share one kind
    (`kind`, when given, pins it). Empty input -> {average: 0, sample_count: 0}.
    """
    expected = MetricKind(kind) if kind is not None else None
    total = 0.0
    count = 0
    for entry in entries:
        if expected is None:
            expected = entry.kind
        elif entry.kind is not expected:
            raise MixedMetricKindsError(expected=expected.value, received=entry.kind.value)
        total += entry.value
        count += 1

    if count == 0:
        return EMPTY_SUMMARY
    return MetricSummary(average=total / count, sample_count=count)


def summarize_all(
    metrics: Mapping[MetricKind | str, Iterable[MetricEntry]],
) -> dict[MetricKind, MetricSummary]:
    """Summarize every metric kind. Kinds missing from `metrics` get an empty summary."""
    by_kind = {MetricKind(k): v for k, v in metrics.items()}
    return {
        kind: summarize(by_kind.get(kind, ()), kind=kind)
        for kind in MetricKind
    }

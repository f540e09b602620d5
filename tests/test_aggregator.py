"""
Unit tests for the metric aggregator (no DB, no HTTP).
"""
import pytest
from datetime import date

from app.core.errors import InvalidInputError, MixedMetricKindsError
from app.domain.metrics import MetricEntry, MetricKind, MetricSummary, Mood
from app.services.aggregator import summarize, summarize_all


def _sleep(hours, day=date(2026, 3, 2)):
    return MetricEntry(kind=MetricKind.sleep, day=day, hours=hours)


class TestSummarize:
    def test_empty_is_zero_zero(self):
        assert summarize([]) == MetricSummary(average=0.0, sample_count=0)

    def test_empty_is_idempotent(self):
        first = summarize([])
        summarize([_sleep(8)])
        assert summarize([]) == first
        assert not summarize([]).has_data

    def test_average_and_count(self):
        s = summarize([_sleep(6), _sleep(8), _sleep(7)])
        assert s.average == pytest.approx(7.0)
        assert s.sample_count == 3
        assert s.has_data

    def test_mood_uses_numeric_mapping(self):
        entries = [
            MetricEntry(kind=MetricKind.mood, day=date(2026, 3, 2), mood=Mood.happy),
            MetricEntry(kind=MetricKind.mood, day=date(2026, 3, 3), mood=Mood.sad),
        ]
        assert summarize(entries).average == pytest.approx(3.5)

    def test_hydration_averages_glasses(self):
        entries = [
            MetricEntry(kind=MetricKind.hydration, day=date(2026, 3, 2), glasses=6),
            MetricEntry(kind=MetricKind.hydration, day=date(2026, 3, 3), glasses=9),
        ]
        assert summarize(entries).average == pytest.approx(7.5)

    def test_accepts_generator(self):
        s = summarize(_sleep(h) for h in (5, 9))
        assert s.sample_count == 2

    def test_mixed_kinds_rejected(self):
        work = MetricEntry(kind=MetricKind.work, day=date(2026, 3, 2), hours=8)
        with pytest.raises(MixedMetricKindsError) as exc_info:
            summarize([_sleep(8), work])
        assert exc_info.value.details == {"expected": "sleep", "received": "work"}
        assert isinstance(exc_info.value, InvalidInputError)

    def test_pinned_kind_rejects_other_kind(self):
        with pytest.raises(MixedMetricKindsError):
            summarize([_sleep(8)], kind=MetricKind.work)


class TestSummarizeAll:
    def test_every_kind_present(self):
        result = summarize_all({MetricKind.sleep: [_sleep(8)]})
        assert set(result) == set(MetricKind)
        assert result[MetricKind.sleep].sample_count == 1
        assert result[MetricKind.mood].sample_count == 0

    def test_string_keys_accepted(self):
        result = summarize_all({"sleep": [_sleep(6)]})
        assert result[MetricKind.sleep].average == 6

    def test_entry_filed_under_wrong_kind_rejected(self):
        with pytest.raises(MixedMetricKindsError):
            summarize_all({MetricKind.work: [_sleep(8)]})

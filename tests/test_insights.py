"""
Tests for the insight selector.

Covered scenarios:
  A) no rule fires         → "On Track!"
  B) each rule individually, including its sample-count minimum
  C) several rules fire    → highest priority wins
  D) hydration uses the latest entry, not the average
  E) equal priorities      → first-evaluated rule wins
"""
from __future__ import annotations

import pytest
from datetime import date

from app.domain.metrics import MetricEntry, MetricKind, MetricSummary, Mood
from app.services import insights
from app.services.insights import (
    HYDRATION_INSIGHT,
    MOOD_INSIGHT,
    ON_TRACK_INSIGHT,
    SLEEP_INSIGHT,
    WORK_INSIGHT,
    Insight,
    InsightCategory,
    candidate_insights,
    select_insight,
    select_insight_from_entries,
)


def _s(average, count):
    return MetricSummary(average=average, sample_count=count)


def _water(day: int, glasses: int) -> MetricEntry:
    return MetricEntry(kind=MetricKind.hydration, day=date(2026, 3, day), glasses=glasses)


class TestDefault:
    def test_no_data_is_on_track(self):
        insight = select_insight({})
        assert insight is ON_TRACK_INSIGHT
        assert insight.title == "On Track!"
        assert insight.category is InsightCategory.default

    def test_healthy_metrics_are_on_track(self):
        summaries = {
            MetricKind.sleep: _s(8, 3),
            MetricKind.work: _s(8, 3),
            MetricKind.mood: _s(4.5, 3),
        }
        assert select_insight(summaries) is ON_TRACK_INSIGHT


class TestIndividualRules:
    def test_sleep_fires_with_single_sample(self):
        assert select_insight({MetricKind.sleep: _s(6, 1)}) is SLEEP_INSIGHT

    def test_sleep_at_seven_does_not_fire(self):
        assert select_insight({MetricKind.sleep: _s(7, 4)}) is ON_TRACK_INSIGHT

    def test_work_needs_two_samples(self):
        assert select_insight({MetricKind.work: _s(11, 1)}) is ON_TRACK_INSIGHT
        assert select_insight({MetricKind.work: _s(11, 2)}) is WORK_INSIGHT

    def test_work_at_nine_does_not_fire(self):
        assert select_insight({MetricKind.work: _s(9, 5)}) is ON_TRACK_INSIGHT

    def test_mood_needs_two_samples(self):
        assert select_insight({MetricKind.mood: _s(2, 1)}) is ON_TRACK_INSIGHT
        assert select_insight({MetricKind.mood: _s(2, 2)}) is MOOD_INSIGHT

    def test_mood_threshold_is_inclusive(self):
        assert select_insight({MetricKind.mood: _s(3, 2)}) is MOOD_INSIGHT
        assert select_insight({MetricKind.mood: _s(3.1, 2)}) is ON_TRACK_INSIGHT

    def test_priorities(self):
        assert (MOOD_INSIGHT.priority, SLEEP_INSIGHT.priority,
                HYDRATION_INSIGHT.priority, WORK_INSIGHT.priority) == (4, 3, 2, 1)


class TestHydrationRecency:
    def test_latest_low_fires_despite_good_average(self):
        entries = {MetricKind.hydration: [_water(1, 12), _water(2, 12), _water(3, 4)]}
        summaries = {MetricKind.hydration: _s(28 / 3, 3)}
        assert select_insight(summaries, entries) is HYDRATION_INSIGHT

    def test_latest_good_does_not_fire_despite_low_average(self):
        entries = {MetricKind.hydration: [_water(1, 2), _water(2, 2), _water(3, 8)]}
        summaries = {MetricKind.hydration: _s(4, 3)}
        assert select_insight(summaries, entries) is ON_TRACK_INSIGHT

    def test_latest_is_by_date_not_list_order(self):
        entries = {MetricKind.hydration: [_water(5, 3), _water(1, 10)]}
        assert select_insight_from_entries(entries) is HYDRATION_INSIGHT

    def test_without_entries_falls_back_to_average(self):
        assert select_insight({MetricKind.hydration: _s(4, 2)}) is HYDRATION_INSIGHT


class TestSelection:
    def test_mood_beats_work(self):
        summaries = {MetricKind.mood: _s(2, 3), MetricKind.work: _s(10, 3)}
        assert select_insight(summaries) is MOOD_INSIGHT

    def test_candidates_sorted_descending(self):
        summaries = {
            MetricKind.sleep: _s(5, 3),
            MetricKind.work: _s(11, 3),
            MetricKind.mood: _s(1.5, 3),
            MetricKind.hydration: _s(2, 3),
        }
        fired = candidate_insights(summaries)
        assert [i.category for i in fired] == [
            InsightCategory.mood,
            InsightCategory.sleep,
            InsightCategory.hydration,
            InsightCategory.work,
        ]

    def test_equal_priority_first_evaluated_wins(self, monkeypatch):
        first = Insight(InsightCategory.sleep, "first", "", 5, "", "")
        second = Insight(InsightCategory.mood, "second", "", 5, "", "")
        monkeypatch.setattr(insights, "_RULES", (
            lambda s, e: first,
            lambda s, e: second,
        ))
        assert select_insight({}) is first

    def test_from_entries(self):
        entries = {
            MetricKind.mood: [
                MetricEntry(kind=MetricKind.mood, day=date(2026, 3, 1), mood=Mood.sad),
                MetricEntry(kind=MetricKind.mood, day=date(2026, 3, 2), mood=Mood.anxious),
            ],
        }
        assert select_insight_from_entries(entries) is MOOD_INSIGHT

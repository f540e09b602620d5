"""
Tests for the dashboard pipeline (fetch → summarize → score + insight).
"""
from __future__ import annotations

import asyncio
import logging
from datetime import date

import pytest

from app.core.errors import TransientStoreError
from app.domain.metrics import MetricEntry, MetricKind, Mood
from app.services.dashboard import build_dashboard, default_window, evaluate
from app.services.insights import MOOD_INSIGHT, ON_TRACK_INSIGHT

START = date(2026, 3, 1)
END = date(2026, 3, 7)


def _entries():
    return {
        MetricKind.sleep: [MetricEntry(kind="sleep", day=date(2026, 3, d), hours=8) for d in (1, 2)],
        MetricKind.mood: [MetricEntry(kind="mood", day=date(2026, 3, d), mood=Mood.sad) for d in (1, 2)],
    }


class TestEvaluate:
    def test_score_and_insight(self):
        d = evaluate(_entries(), START, END)
        # sleep 20, mood 2×4 = 8 → 14
        assert d.score == 14
        assert d.sub_scores == {MetricKind.sleep: 20, MetricKind.mood: 8}
        assert d.insight is MOOD_INSIGHT
        assert d.summaries[MetricKind.hydration].sample_count == 0

    def test_no_data(self):
        d = evaluate({}, START, END)
        assert d.score == 0
        assert d.insight is ON_TRACK_INSIGHT


class TestDefaultWindow:
    def test_seven_days_inclusive(self):
        assert default_window(END) == (START, END)

    def test_custom_length(self):
        assert default_window(END, days=1) == (END, END)


class TestBuildDashboard:
    @pytest.mark.asyncio
    async def test_fetches_requested_window(self):
        seen = []

        async def fetch(start, end):
            seen.append((start, end))
            return _entries()

        d = await build_dashboard(fetch, START, END)
        assert seen == [(START, END)]
        assert d.score == 14

    @pytest.mark.asyncio
    async def test_store_failure_becomes_transient_error(self):
        async def fetch(start, end):
            raise ConnectionError("db down")

        with pytest.raises(TransientStoreError) as exc_info:
            await build_dashboard(fetch, START, END)
        assert exc_info.value.details == {"operation": "fetch_metrics"}

    @pytest.mark.asyncio
    async def test_transient_error_passes_through(self):
        original = TransientStoreError("timeout", operation="fetch_metrics")

        async def fetch(start, end):
            raise original

        with pytest.raises(TransientStoreError) as exc_info:
            await build_dashboard(fetch, START, END)
        assert exc_info.value is original

    @pytest.mark.asyncio
    async def test_cancelled_fetch_is_not_an_error(self, caplog):
        started = asyncio.Event()

        async def fetch(start, end):
            started.set()
            await asyncio.sleep(10)

        task = asyncio.create_task(build_dashboard(fetch, START, END))
        await started.wait()
        with caplog.at_level(logging.ERROR, logger="app.services.dashboard"):
            task.cancel()
            with pytest.raises(asyncio.CancelledError):
                await task
        assert caplog.records == []

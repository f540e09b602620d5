"""
Integration tests for API endpoints using a SQLite file DB.

The database is shared across the session, so metric tests use their own
date windows and reminder tests only assert on the ids they created.
"""
import pytest
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

from app.core.errors import TransientStoreError
from app.services import reminder_store


def _log(client, kind, day, **values):
    r = client.post(f"/metrics/{kind}", json={"date": day, **values})
    assert r.status_code == 201, r.text
    return r.json()


def _create_reminder(client, **overrides):
    payload = {"type": "water", "time": "09:00", "days": ["mon"], **overrides}
    r = client.post("/reminders", json=payload)
    assert r.status_code == 201, r.text
    return r.json()


class TestHealth:
    def test_health(self, client):
        r = client.get("/health")
        assert r.status_code == 200
        assert r.json()["status"] == "ok"

    def test_health_db_down(self, client, monkeypatch):
        def db_down(self, *args, **kwargs):
            raise OperationalError("SELECT 1", {}, Exception("connection refused"))

        monkeypatch.setattr(Session, "execute", db_down)
        r = client.get("/health")
        assert r.status_code == 503
        assert r.json()["db"] == "unreachable"


class TestMetrics:
    def test_log_sleep(self, client):
        body = _log(client, "sleep", "2031-01-10", hours=7.5, note="slept well")
        assert body["kind"] == "sleep"
        assert body["date"] == "2031-01-10"
        assert body["hours"] == 7.5
        assert body["note"] == "slept well"
        assert body["id"] > 0

    def test_log_mood_by_label(self, client):
        assert _log(client, "mood", "2031-01-10", mood="happy")["mood"] == "happy"

    def test_log_mood_by_slider_value(self, client):
        assert _log(client, "mood", "2031-01-10", mood_value=2)["mood"] == "sad"

    def test_log_hydration_ignores_other_fields(self, client):
        body = _log(client, "hydration", "2031-01-10", glasses=6, hours=3)
        assert body["glasses"] == 6
        assert body["hours"] is None

    def test_summary_window(self, client):
        _log(client, "work", "2031-02-01", hours=8)
        _log(client, "work", "2031-02-02", hours=10)
        _log(client, "work", "2031-02-20", hours=2)  # outside

        r = client.get("/metrics/summary", params={"start": "2031-02-01", "end": "2031-02-07"})
        assert r.status_code == 200
        body = r.json()
        assert body["start"] == "2031-02-01"
        assert body["end"] == "2031-02-07"
        by_kind = {s["kind"]: s for s in body["summaries"]}
        assert set(by_kind) == {"mood", "sleep", "hydration", "work"}
        assert by_kind["work"] == {"kind": "work", "average": 9.0, "sample_count": 2}
        assert by_kind["sleep"]["sample_count"] == 0

    def test_summary_default_window_is_seven_days(self, client):
        r = client.get("/metrics/summary", params={"end": "2031-03-07"})
        assert r.json()["start"] == "2031-03-01"


class TestDashboard:
    def test_empty_window_is_on_track(self, client):
        r = client.get("/wellness/dashboard", params={"start": "2032-01-01", "end": "2032-01-07"})
        assert r.status_code == 200
        body = r.json()
        assert body["wellness_score"] == 0
        assert body["sub_scores"] == {}
        assert body["insight"]["title"] == "On Track!"
        assert body["insight"]["action_target"] == "/dashboard/tracking"

    def test_score_and_mood_insight(self, client):
        for day in ("2032-02-01", "2032-02-02"):
            _log(client, "sleep", day, hours=8)
            _log(client, "mood", day, mood="anxious")
        r = client.get("/wellness/dashboard", params={"start": "2032-02-01", "end": "2032-02-07"})
        body = r.json()
        # sleep 20, mood 3 → 12  ⇒  16
        assert body["wellness_score"] == 16
        assert body["sub_scores"] == {"sleep": 20, "mood": 12}
        assert body["insight"]["category"] == "mood"
        assert body["insight"]["priority"] == 4

    def test_hydration_uses_latest_entry(self, client):
        _log(client, "hydration", "2032-03-01", glasses=12)
        _log(client, "hydration", "2032-03-02", glasses=12)
        _log(client, "hydration", "2032-03-03", glasses=3)
        r = client.get("/wellness/dashboard", params={"start": "2032-03-01", "end": "2032-03-07"})
        assert r.json()["insight"]["title"] == "Hydration Alert"

    def test_store_failure_is_503(self, client, monkeypatch):
        from app.services import metric_store

        def broken(db, start, end):
            raise TransientStoreError("connection refused", operation="fetch_metrics")

        monkeypatch.setattr(metric_store, "load_metrics", broken)
        r = client.get("/wellness/dashboard", params={"end": "2032-04-07"})
        assert r.status_code == 503
        body = r.json()
        assert body["code"] == "STORE_UNAVAILABLE"
        assert body["details"]["operation"] == "fetch_metrics"


class TestReminders:
    def test_create_with_default_sound(self, client):
        body = _create_reminder(client, type="meal", days=["fri", "mon"])
        assert body["sound"] == "bell"
        assert body["days"] == ["mon", "fri"]
        assert body["days_label"] == "Mon, Fri"
        assert body["enabled"] is True
        assert len(body["id"]) == 32

    def test_get_and_list(self, client):
        created = _create_reminder(client, type="posture", time="14:00", days=["sat", "sun"])
        r = client.get(f"/reminders/{created['id']}")
        assert r.status_code == 200
        assert r.json()["days_label"] == "Weekends"
        ids = [x["id"] for x in client.get("/reminders").json()]
        assert created["id"] in ids

    def test_partial_update(self, client):
        created = _create_reminder(client)
        r = client.put(
            f"/reminders/{created['id']}",
            json={"enabled": False, "days": ["mon", "tue", "wed", "thu", "fri"]},
        )
        assert r.status_code == 200
        body = r.json()
        assert body["enabled"] is False
        assert body["days_label"] == "Weekdays"
        assert body["time"] == "09:00"
        assert body["sound"] == "drop"

        enabled_ids = [x["id"] for x in client.get("/reminders", params={"enabled_only": True}).json()]
        assert created["id"] not in enabled_ids

    def test_delete(self, client):
        created = _create_reminder(client)
        assert client.delete(f"/reminders/{created['id']}").status_code == 204
        assert client.get(f"/reminders/{created['id']}").status_code == 404

    def test_next_occurrence(self, client):
        created = _create_reminder(client, time="09:00", days=["mon"])
        # 2026-02-23 is a Monday
        r = client.get(f"/reminders/{created['id']}/next", params={"now": "2026-02-23T10:00:00"})
        assert r.status_code == 200
        assert r.json()["next_occurrence"] == "2026-03-02T09:00:00"

    def test_upcoming_order(self, client):
        late = _create_reminder(client, time="23:58", days=["sun"])
        early = _create_reminder(client, time="23:57", days=["sun"])
        r = client.get("/reminders/upcoming", params={"now": "2026-03-01T23:56:00"})
        assert r.status_code == 200
        ids = [item["reminder"]["id"] for item in r.json()["items"]]
        assert ids[:2] == [early["id"], late["id"]]
        assert r.json()["items"][0]["next_occurrence"] == "2026-03-01T23:57:00"


class TestTemplates:
    def test_list(self, client):
        r = client.get("/templates")
        assert r.status_code == 200
        body = r.json()
        assert body["total"] == 4
        counts = {p["id"]: p["reminder_count"] for p in body["items"]}
        assert counts == {"desk_worker": 12, "mindfulness": 2, "hydration": 7, "work_breaks": 7}

    def test_apply(self, client):
        r = client.post("/templates/mindfulness/apply")
        assert r.status_code == 207
        body = r.json()
        assert body["succeeded"] == 2
        assert body["failed"] == 0
        assert [i["reminder"]["time"] for i in body["items"]] == ["07:30", "18:00"]
        assert all(i["reminder"]["sound"] == "calm" for i in body["items"])

    def test_partial_failure(self, client, monkeypatch):
        real_create = reminder_store.create_reminder
        calls = {"n": 0}

        def flaky(db, request):
            calls["n"] += 1
            if calls["n"] == 2:
                raise TransientStoreError("write timed out", operation="create_reminder")
            return real_create(db, request)

        monkeypatch.setattr(reminder_store, "create_reminder", flaky)
        r = client.post("/templates/desk_worker/apply")
        assert r.status_code == 207
        body = r.json()
        assert body["total"] == 12
        assert body["succeeded"] == 11
        assert body["failed"] == 1
        failed = body["items"][1]
        assert failed["ok"] is False
        assert failed["reminder"] is None
        assert failed["error"] == "write timed out"
        assert [i["index"] for i in body["items"]] == list(range(12))


class TestWorkLifeBalance:
    def test_score_and_recommendations(self, client):
        r = client.post("/wellness/balance", json={"allocations": [
            {"category": "work", "hours": 52, "target": 40},
            {"category": "rest", "hours": 56, "target": 56},
        ]})
        assert r.status_code == 200
        body = r.json()
        # work: 70 − 10 = 60, rest 100 → 80
        assert body["balance_score"] == 80
        assert [t["title"] for t in body["recommendations"]] == ["Reduce Work Hours"]

    def test_empty_is_neutral(self, client):
        r = client.post("/wellness/balance", json={})
        assert r.json() == {"balance_score": 50, "recommendations": []}

    def test_negative_hours_rejected(self, client):
        r = client.post("/wellness/balance", json={"allocations": [
            {"category": "work", "hours": -3, "target": 40},
        ]})
        assert r.status_code == 422
        assert r.json()["code"] == "VALIDATION_ERROR"

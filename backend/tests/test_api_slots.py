"""
Tests for api/v1/routes/slots.py

Slot endpoints end to end: console app -> httpx -> fake admin backend.
"""

import httpx
from fastapi.testclient import TestClient

from clinic_console.core.config import Settings
from clinic_console.main import create_app


def test_health_reports_policy(client):
    r = client.get("/api/v1/health")
    assert r.status_code == 200
    assert r.json()["status"] == "ok"
    assert r.json()["whole_day_policy"] == "coexist"


def test_toggle_round_trip(client, fake):
    r = client.post("/api/v1/slots/toggle", json={"date": "2024-06-01", "time": "10:00"})
    assert r.status_code == 200
    body = r.json()
    assert body["action"] == "blocked"
    assert body["slots"][0]["date"] == "2024-06-01"
    assert body["slots"][0]["time"] == "10:00:00"

    r = client.post("/api/v1/slots/toggle", json={"date": "2024-06-01", "time": "10:00:00"})
    assert r.json()["action"] == "unblocked"
    assert fake.tables["blocked_slot"] == []


def test_toggle_failure_returns_502_and_keeps_state(client, fake):
    fake.fail("POST", "blocked_slot")

    r = client.post("/api/v1/slots/toggle", json={"date": "2024-06-01"})

    assert r.status_code == 502
    assert r.json()["detail"] == "Operation failed. Please try again."
    assert client.get("/api/v1/slots").json() == []


def test_toggle_rejects_bad_time(client):
    r = client.post("/api/v1/slots/toggle", json={"date": "2024-06-01", "time": "noon"})
    assert r.status_code == 422


def test_day_panel(client, fake):
    fake.seed(
        "blocked_slot",
        {"id": 1, "date": "2024-06-01", "time": None},
        {"id": 2, "date": "2024-06-01T00:00:00.000Z", "time": "10:00:00"},
    )

    r = client.get("/api/v1/slots/day", params={"date": "2024-06-01"})

    assert r.status_code == 200
    panel = r.json()
    assert panel["whole_day_blocked"] is True
    am = {s["time"]: s for s in panel["am"]}
    assert am["10:00:00"]["disabled"] is False
    assert am["09:00:00"]["disabled"] is True
    assert len(panel["am"]) + len(panel["pm"]) == 13


def test_day_panel_rejects_bad_date(client):
    r = client.get("/api/v1/slots/day", params={"date": "June 1st"})
    assert r.status_code == 400


def test_calendar_marks_days(client, fake):
    fake.seed("blocked_slot", {"id": 1, "date": "2024-06-15", "time": "09:00:00"})

    r = client.get("/api/v1/slots/calendar", params={"month": "2024-06"})

    assert r.status_code == 200
    days = [d for d in r.json()["days"] if d is not None]
    assert [d["date"] for d in days if d["has_block"]] == ["2024-06-15"]


def test_calendar_rejects_bad_month(client):
    assert client.get("/api/v1/slots/calendar", params={"month": "2024-13"}).status_code == 400


def test_fetch_failure_returns_502(client, fake):
    fake.fail("GET", "blocked_slot")
    r = client.get("/api/v1/slots")
    assert r.status_code == 502
    assert r.json()["detail"] == "Failed to fetch records."


def test_supersede_policy_rejects_time_toggle(fake):
    settings = Settings(_env_file=None, whole_day_policy="supersede")
    fake.seed("blocked_slot", {"id": 1, "date": "2024-06-01", "time": None})
    app = create_app(settings, transport=httpx.ASGITransport(app=fake.app))

    with TestClient(app) as client:
        r = client.post("/api/v1/slots/toggle", json={"date": "2024-06-01", "time": "09:00"})

    assert r.status_code == 409
    assert len(fake.tables["blocked_slot"]) == 1

"""
Tests for the HTTP surface, using FastAPI's TestClient and the mock API.
"""

from __future__ import annotations

import threading
from datetime import timedelta

from fastapi.testclient import TestClient

from consultation_scheduler.application.utils.dates import today_in
from consultation_scheduler.core.config import Settings
from consultation_scheduler.infrastructure.api.mock_consultation_api import MockConsultationApi
from consultation_scheduler.main import create_app


def _client(fail: bool = False) -> tuple[TestClient, MockConsultationApi]:
    api = MockConsultationApi(fail=fail)
    config = Settings(USE_MOCK_API=True, BUSINESS_TIMEZONE="UTC")
    return TestClient(create_app(config, api)), api


def _next_weekday():
    day = today_in("UTC") + timedelta(days=7)
    while day.weekday() >= 5:
        day += timedelta(days=1)
    return day


def _first_open_slot(client: TestClient, day) -> dict:
    slots = client.get(f"/api/v1/availability/{day.isoformat()}").json()["slots"]
    return next(s for s in slots if s["available"])


def _payload(day, slot_label: str, **overrides) -> dict:
    payload = {
        "name": "Ada Lovelace",
        "email": "ada@example.com",
        "phone": "555-0100",
        "property_type": "apartment",
        "message": "Window cleaning",
        "selected_date": day.isoformat(),
        "selected_time_slot": slot_label,
    }
    payload.update(overrides)
    return payload


def test_health():
    client, _ = _client()
    assert client.get("/health").json() == {"status": "ok"}


def test_startup_refreshes_store_off_the_event_loop(monkeypatch):
    api = MockConsultationApi(fail=True)
    app = create_app(Settings(USE_MOCK_API=True, BUSINESS_TIMEZONE="UTC"), api)
    store = app.state.booking_store
    refresh = store.refresh
    refresh_threads = []

    def _refresh():
        refresh_threads.append(threading.get_ident())
        refresh()

    monkeypatch.setattr(store, "refresh", _refresh)

    with TestClient(app) as client:
        loop_thread = client.portal.call(threading.get_ident)
        response = client.get("/api/v1/consultations")

    assert api.calls == ["list", "availability"]
    assert len(refresh_threads) == 1
    assert refresh_threads[0] != loop_thread
    assert [c["id"] for c in response.json()["consultations"]] == ["1", "2"]
    assert response.json()["error"] == "Failed to fetch consultations from server"


def test_calendar_endpoint():
    client, _ = _client()

    response = client.get("/api/v1/calendar/2026/2", params={"selected": "2026-02-10"})

    assert response.status_code == 200
    data = response.json()
    assert data["title"] == "February 2026"
    assert data["weekdays"][0] == "Sun"
    assert len(data["cells"]) == 42
    assert [c["day_number"] for c in data["cells"] if c["is_selected"]] == [10]


def test_calendar_rejects_bad_month():
    client, _ = _client()
    assert client.get("/api/v1/calendar/2026/13").status_code == 400


def test_availability_endpoint():
    client, _ = _client()

    data = client.get("/api/v1/availability/2026-11-10").json()

    assert data["unavailable_slots"] == [2, 4, 6]
    assert len(data["slots"]) == 8


def test_schedule_consultation_end_to_end():
    client, api = _client()
    day = _next_weekday()
    slot = _first_open_slot(client, day)

    response = client.post("/api/v1/consultations", json=_payload(day, slot["label"]))

    assert response.status_code == 200
    data = response.json()
    assert data["step"] == "success"
    assert data["recorded_locally"] is False
    listed = client.get("/api/v1/consultations").json()["consultations"]
    assert [c["id"] for c in listed] == [data["id"]]
    assert "create" in api.calls


def test_schedule_consultation_offline_records_locally():
    client, _ = _client(fail=True)
    day = _next_weekday()
    slot = _first_open_slot(client, day)

    data = client.post("/api/v1/consultations", json=_payload(day, slot["label"])).json()

    assert data["recorded_locally"] is True
    assert data["id"].isdigit()
    assert data["error"]
    listed = client.get("/api/v1/consultations").json()["consultations"]
    assert data["id"] in [c["id"] for c in listed]


def test_schedule_consultation_validation_errors():
    client, _ = _client()
    day = _next_weekday()
    slot = _first_open_slot(client, day)

    missing = client.post("/api/v1/consultations", json=_payload(day, slot["label"], email=""))
    assert missing.status_code == 422
    assert missing.json()["detail"] == "Please fill out all required fields"

    bad_slot = client.post("/api/v1/consultations", json=_payload(day, "6:00 PM"))
    assert bad_slot.status_code == 400

    past = client.post("/api/v1/consultations", json=_payload(day - timedelta(days=30), slot["label"]))
    assert past.status_code == 422


def test_status_update_and_cancel():
    client, api = _client()
    day = _next_weekday()
    slot = _first_open_slot(client, day)
    booking_id = client.post("/api/v1/consultations", json=_payload(day, slot["label"])).json()["id"]

    patched = client.patch(f"/api/v1/consultations/{booking_id}", json={"status": "scheduled"}).json()
    assert patched["ok"] is True
    assert patched["consultation"]["status"] == "confirmed"

    assert client.patch(f"/api/v1/consultations/{booking_id}", json={"status": "bogus"}).status_code == 400
    assert client.delete("/api/v1/consultations/missing").status_code == 404

    api.fail = True
    cancelled = client.delete(f"/api/v1/consultations/{booking_id}").json()
    assert cancelled["ok"] is False
    assert cancelled["consultation"]["status"] == "cancelled"

    api.fail = False
    removed = client.delete(f"/api/v1/consultations/{booking_id}").json()
    assert removed["ok"] is True
    assert removed["consultation"] is None

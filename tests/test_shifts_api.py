"""API tests for the shift endpoints."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from shiftboard.core.config import Settings
from shiftboard.main import create_app
from shiftboard.repos.memory import ShiftRepository


@pytest.fixture()
def repo() -> ShiftRepository:
    return ShiftRepository()


@pytest.fixture()
def client(repo) -> TestClient:
    return TestClient(create_app(Settings(), repo=repo))


def _body(
    *spans: tuple[str, str, str],
    shift_type: str = "Consultation",
    title: str = "Shift",
    price: float = 100,
) -> dict:
    return {
        "shift": {"title": title, "price": price, "type": shift_type},
        "dates": [
            {"date": d, "startTime": start, "endTime": end} for d, start, end in spans
        ],
    }


def test_health(client: TestClient):
    assert client.get("/health").json() == {"status": "ok"}


# ---------------------------------------------------------------------------
# Create
# ---------------------------------------------------------------------------


def test_create_shift_returns_201_and_camel_case_payload(client: TestClient):
    resp = client.post(
        "/api/shifts",
        json=_body(("20-03-2024", "09:00", "12:00"), title="Morning"),
    )
    assert resp.status_code == 201
    body = resp.json()

    assert body["id"] == 1
    assert body["title"] == "Morning"
    assert body["type"] == "Consultation"
    assert body["description"] is None
    assert "createdAt" in body and "updatedAt" in body
    assert len(body["dates"]) == 1
    date = body["dates"][0]
    assert date["shiftId"] == 1
    assert (date["date"], date["startTime"], date["endTime"]) == (
        "20-03-2024",
        "09:00",
        "12:00",
    )


def test_end_to_end_conflict_scenario(client: TestClient):
    a = client.post("/api/shifts", json=_body(("20-03-2024", "09:00", "12:00"), title="A"))
    assert a.status_code == 201

    b = client.post("/api/shifts", json=_body(("20-03-2024", "11:00", "13:00"), title="B"))
    assert b.status_code == 409
    assert b.json()["detail"] == (
        "Overlapping shift exists for date 20-03-2024 with type Consultation"
    )

    c = client.post(
        "/api/shifts",
        json=_body(("20-03-2024", "11:00", "13:00"), shift_type="Telephone", title="C"),
    )
    assert c.status_code == 201

    titles = [s["title"] for s in client.get("/api/shifts").json()]
    assert titles == ["A", "C"]


@pytest.mark.parametrize(
    "mutate",
    [
        lambda b: b["dates"][0].update(date="2024-03-20"),
        lambda b: b["dates"][0].update(startTime="9:00"),
        lambda b: b["dates"][0].update(startTime="12:00", endTime="09:00"),
        lambda b: b["dates"][0].update(startTime="09:00", endTime="09:00"),
        lambda b: b["shift"].update(type="Surgery"),
        lambda b: b["shift"].update(title=""),
        lambda b: b["shift"].update(title="x" * 101),
        lambda b: b["shift"].update(description="x" * 501),
        lambda b: b["shift"].update(price=-1),
        lambda b: b.update(dates=[]),
        lambda b: b.update(dates=b["dates"] * 11),
        lambda b: b.pop("shift"),
    ],
)
def test_create_rejects_malformed_input(client: TestClient, repo, mutate):
    body = _body(("20-03-2024", "09:00", "12:00"))
    mutate(body)

    resp = client.post("/api/shifts", json=body)
    assert resp.status_code == 422
    assert repo.list_all() == []


def test_create_accepts_ten_dates(client: TestClient):
    spans = [(f"{day:02d}-04-2024", "09:00", "10:00") for day in range(1, 11)]
    resp = client.post("/api/shifts", json=_body(*spans))
    assert resp.status_code == 201
    assert len(resp.json()["dates"]) == 10


# ---------------------------------------------------------------------------
# Read / filter
# ---------------------------------------------------------------------------


def test_get_shift_and_404(client: TestClient):
    client.post("/api/shifts", json=_body(("20-03-2024", "09:00", "12:00")))

    assert client.get("/api/shifts/1").json()["id"] == 1

    missing = client.get("/api/shifts/99")
    assert missing.status_code == 404
    assert missing.json()["detail"] == "Shift not found"


def test_get_shift_rejects_non_integer_id(client: TestClient):
    assert client.get("/api/shifts/abc").status_code == 422


def test_filters_and_price_range(client: TestClient):
    client.post("/api/shifts", json=_body(("20-03-2024", "09:00", "10:00"), price=40, title="low"))
    client.post(
        "/api/shifts",
        json=_body(("20-03-2024", "09:00", "10:00"), shift_type="Ambulance", price=200, title="high"),
    )

    by_price = client.post("/api/shifts/filter/price", json={"maxPrice": 100})
    assert [s["title"] for s in by_price.json()] == ["low"]

    by_type = client.post("/api/shifts/filter/type", json={"type": "Ambulance"})
    assert [s["title"] for s in by_type.json()] == ["high"]

    assert client.post("/api/shifts/filter/type", json={"type": "Nope"}).status_code == 422

    assert client.get("/api/shifts/price-range").json() == {"min": 40, "max": 200}


def test_check_overlap_endpoint(client: TestClient):
    client.post("/api/shifts", json=_body(("20-03-2024", "09:00", "10:00")))
    probe = {
        "date": "20-03-2024",
        "startTime": "09:30",
        "endTime": "11:00",
        "type": "Consultation",
    }

    assert client.post("/api/shifts/check-overlap", json=probe).json() == {"hasOverlap": True}

    probe["excludeShiftId"] = 1
    assert client.post("/api/shifts/check-overlap", json=probe).json() == {"hasOverlap": False}

    probe.pop("excludeShiftId")
    probe["type"] = "Telephone"
    assert client.post("/api/shifts/check-overlap", json=probe).json() == {"hasOverlap": False}


# ---------------------------------------------------------------------------
# Update / delete
# ---------------------------------------------------------------------------


def test_update_shift(client: TestClient):
    client.post("/api/shifts", json=_body(("20-03-2024", "09:00", "10:00")))
    client.post("/api/shifts", json=_body(("20-03-2024", "12:00", "13:00"), title="other"))

    same_slot = client.put(
        "/api/shifts/1", json=_body(("20-03-2024", "09:00", "10:00"), title="Renamed")
    )
    assert same_slot.status_code == 200
    assert same_slot.json()["title"] == "Renamed"

    clash = client.put("/api/shifts/1", json=_body(("20-03-2024", "12:30", "14:00")))
    assert clash.status_code == 409
    assert client.get("/api/shifts/1").json()["dates"][0]["startTime"] == "09:00"


def test_update_missing_shift_returns_404(client: TestClient):
    resp = client.put("/api/shifts/5", json=_body(("20-03-2024", "09:00", "10:00")))
    assert resp.status_code == 404
    assert resp.json()["detail"] == "Shift with ID 5 not found"


def test_delete_shift(client: TestClient):
    client.post("/api/shifts", json=_body(("20-03-2024", "09:00", "10:00")))

    resp = client.delete("/api/shifts/1")
    assert resp.status_code == 200
    assert resp.json() == {"message": "Shift deleted successfully"}
    assert client.get("/api/shifts").json() == []

    assert client.delete("/api/shifts/1").status_code == 404


def test_storage_failure_returns_500(client: TestClient, repo, monkeypatch):
    def _boom(*args, **kwargs):
        raise RuntimeError("disk full")

    monkeypatch.setattr(repo, "_insert_dates", _boom)

    resp = client.post("/api/shifts", json=_body(("20-03-2024", "09:00", "10:00")))
    assert resp.status_code == 500
    assert resp.json()["detail"] == "Failed to create shift"
    assert repo.list_all() == []


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------


def test_batch_overlap_setting(repo):
    client = TestClient(create_app(Settings(check_batch_overlaps=True), repo=repo))

    resp = client.post(
        "/api/shifts",
        json=_body(("20-03-2024", "09:00", "12:00"), ("20-03-2024", "11:00", "13:00")),
    )
    assert resp.status_code == 409


def test_seed_demo_data_setting():
    client = TestClient(create_app(Settings(seed_demo_data=True)))

    shifts = client.get("/api/shifts").json()
    assert len(shifts) == 3
    assert {s["type"] for s in shifts} == {"Consultation", "Telephone", "Ambulance"}


def test_settings_read_from_environment(monkeypatch):
    monkeypatch.setenv("SHIFTBOARD_CHECK_BATCH_OVERLAPS", "true")
    monkeypatch.setenv("SHIFTBOARD_LOG_LEVEL", "debug")

    settings = Settings()
    assert settings.check_batch_overlaps is True
    assert settings.log_level == "debug"

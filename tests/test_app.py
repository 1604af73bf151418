from typing import Dict, Iterator

import pytest
from fastapi.testclient import TestClient

from app.main import create_app
from datastore.entry_store import EntryStore
from datastore.room_registry import RoomRegistry
from services.reading_log import ReadingLogService, build_default_service


@pytest.fixture
def api_client(monkeypatch) -> Iterator[TestClient]:
    services: Dict[str, ReadingLogService] = {}

    def build_test_service() -> ReadingLogService:
        service = services.get("default")
        if service is None:
            registry = RoomRegistry(capacity=16, max_name_length=32, room_capacity=16)
            service = ReadingLogService(registry=registry, store=EntryStore(capacity=16))
            services["default"] = service
        return service

    build_test_service.cache_clear = services.clear  # type: ignore[attr-defined]

    monkeypatch.setattr("app.main.build_default_service", build_test_service)
    monkeypatch.setattr("app.api.build_default_service", build_test_service)

    app = create_app()
    with TestClient(app) as client:
        yield client


def test_lifespan_clears_cached_service() -> None:
    app = create_app()

    with TestClient(app):
        service_during = build_default_service()

    service_after = build_default_service()
    try:
        assert service_after is not service_during
    finally:
        build_default_service.cache_clear()


def test_health(api_client: TestClient) -> None:
    assert api_client.get("/health").json() == {"status": "ok"}
    assert api_client.get("/").status_code == 200


def test_create_room_and_reject_duplicate(api_client: TestClient) -> None:
    response = api_client.post("/rooms", json={"name": "Kitchen"})

    assert response.status_code == 201
    assert response.json() == {"name": "Kitchen", "entry_count": 0, "entries": []}

    duplicate = api_client.post("/rooms", json={"name": "Kitchen"})
    assert duplicate.status_code == 409
    assert "Kitchen" in duplicate.json()["detail"]


def test_empty_room_name_fails_validation(api_client: TestClient) -> None:
    assert api_client.post("/rooms", json={"name": ""}).status_code == 422


def test_record_entries_in_sorted_order(api_client: TestClient) -> None:
    api_client.post("/rooms", json={"name": "Kitchen"})

    temperature = api_client.post(
        "/rooms/Kitchen/entries", json={"kind": 1, "value": 24.0, "timestamp": 100}
    )
    motion = api_client.post(
        "/rooms/Kitchen/entries", json={"kind": 3, "value": [1, 0, 1], "timestamp": 100}
    )
    sound = api_client.post("/rooms/Kitchen/entries", json={"kind": 2, "value": 45, "timestamp": 50})

    assert temperature.status_code == 201
    assert temperature.json()["temperature"] == 24.0
    assert temperature.json()["label"] == "TEMP"
    assert motion.json()["motion"] == [1, 0, 1]
    assert sound.json()["decibels"] == 45

    entries = api_client.get("/entries").json()
    assert [(entry["label"], entry["timestamp"]) for entry in entries] == [
        ("TEMP", 100),
        ("DB", 50),
        ("MOTION", 100),
    ]

    room = api_client.get("/rooms/Kitchen").json()
    assert room["entry_count"] == 3
    assert [entry["label"] for entry in room["entries"]] == ["TEMP", "DB", "MOTION"]


def test_entry_for_unknown_room_returns_not_found(api_client: TestClient) -> None:
    response = api_client.post("/rooms/Ghost/entries", json={"kind": 2, "value": 10, "timestamp": 1})

    assert response.status_code == 404
    assert "Ghost" in response.json()["detail"]
    assert api_client.get("/entries").json() == []
    assert api_client.get("/rooms/Ghost").status_code == 404


def test_invalid_entry_is_unprocessable(api_client: TestClient) -> None:
    api_client.post("/rooms", json={"name": "Lab"})

    response = api_client.post("/rooms/Lab/entries", json={"kind": 5, "value": 10, "timestamp": 1})

    assert response.status_code == 422
    assert response.json()["detail"] == "Invalid entry data."


def test_entry_capacity_returns_conflict(api_client: TestClient) -> None:
    api_client.post("/rooms", json={"name": "Office"})
    for timestamp in range(16):
        api_client.post("/rooms/Office/entries", json={"kind": 2, "value": 30, "timestamp": timestamp})

    response = api_client.post("/rooms/Office/entries", json={"kind": 2, "value": 30, "timestamp": 99})

    assert response.status_code == 409
    assert len(api_client.get("/entries").json()) == 16


def test_sample_and_checks(api_client: TestClient) -> None:
    assert api_client.post("/sample").status_code == 201
    assert api_client.post("/sample").status_code == 409

    rooms = api_client.get("/rooms").json()
    assert [room["name"] for room in rooms] == ["Living Room", "Kitchen", "Bedroom", "Office"]
    assert api_client.get("/rooms/Living Room").json()["entry_count"] == 3
    assert api_client.get("/checks").json() == {"order": True, "rooms": True}


@pytest.mark.parametrize(
    "payload",
    [
        {"kind": 2, "value": True, "timestamp": 1},
        {"kind": True, "value": 10, "timestamp": 1},
        {"kind": 2, "value": 10, "timestamp": False},
        {"kind": 3, "value": [True, False, True], "timestamp": 1},
    ],
)
def test_boolean_fields_are_rejected(api_client: TestClient, payload) -> None:
    api_client.post("/rooms", json={"name": "Lab"})

    response = api_client.post("/rooms/Lab/entries", json=payload)

    assert response.status_code == 422
    assert api_client.get("/entries").json() == []


@pytest.mark.parametrize("value", [1e39, 10**400])
def test_out_of_range_temperature_is_unprocessable(api_client: TestClient, value) -> None:
    api_client.post("/rooms", json={"name": "Lab"})

    response = api_client.post("/rooms/Lab/entries", json={"kind": 1, "value": value, "timestamp": 1})

    assert response.status_code == 422
    assert response.json()["detail"] == "Invalid entry data."
    assert api_client.get("/entries").json() == []


def test_sample_beyond_capacity_reports_capacity(api_client: TestClient, monkeypatch) -> None:
    registry = RoomRegistry(capacity=16, max_name_length=32, room_capacity=4)
    small = ReadingLogService(registry=registry, store=EntryStore(capacity=4))
    monkeypatch.setattr("app.api.build_default_service", lambda: small)

    response = api_client.post("/sample")

    assert response.status_code == 409
    assert response.json()["detail"] == "Capacity exhausted."


def test_room_entry_count_matches_listed_entries(api_client: TestClient) -> None:
    api_client.post("/sample")

    for room in api_client.get("/rooms").json():
        assert room["entry_count"] == len(room["entries"])

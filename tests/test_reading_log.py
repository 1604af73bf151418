from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor

import pytest

from datastore.entry_store import EntryStore
from datastore.room_registry import RoomRegistry
from models.outcome import Status
from models.records import ReadingKind
from services.reading_log import ReadingLogService


@pytest.fixture()
def service() -> ReadingLogService:
    registry = RoomRegistry(capacity=16, max_name_length=32, room_capacity=16)
    return ReadingLogService(registry=registry, store=EntryStore(capacity=16))


def test_record_for_unknown_room_is_not_found(service: ReadingLogService) -> None:
    service.add_room("Kitchen")

    outcome = service.record("Ghost", ReadingKind.SOUND, 40, 1)

    assert outcome.status is Status.not_found
    assert service.entries() == []
    assert [room.name for room in service.rooms()] == ["Kitchen"]


def test_record_without_room_name_is_null_reference(service: ReadingLogService) -> None:
    assert service.record(None, 1, 20.0, 1).status is Status.null_reference


def test_record_and_read_back(service: ReadingLogService) -> None:
    kitchen = service.add_room("Kitchen").value

    outcome = service.record("Kitchen", 1, 24.0, 100)

    assert outcome.ok
    entry = service.resolve(outcome.value)
    assert entry.room is kitchen
    assert service.entries_for(kitchen) == [entry]
    assert service.check_order()
    assert service.check_rooms()


def test_room_snapshots_pair_rooms_with_their_entries(service: ReadingLogService) -> None:
    kitchen = service.add_room("Kitchen").value
    office = service.add_room("Office").value
    service.record("Kitchen", 2, 45, 50)
    service.record("Kitchen", 1, 24.0, 100)

    snapshots = service.room_snapshots()

    assert [(room, len(entries)) for room, entries in snapshots] == [(kitchen, 2), (office, 0)]
    assert [entry.kind for entry in snapshots[0][1]] == [ReadingKind.TEMPERATURE, ReadingKind.SOUND]
    assert service.room_snapshot("Kitchen") == snapshots[0]
    assert service.room_snapshot("Ghost") is None


def test_load_sample_through_service(service: ReadingLogService) -> None:
    assert service.load_sample() is Status.ok
    assert service.find_room("Office") is not None
    assert service.load_sample() is Status.invalid_input


def test_rejections_are_logged_with_context(service: ReadingLogService, caplog) -> None:
    with caplog.at_level(logging.INFO):
        service.add_room("Lab")
        service.add_room("Lab")
        service.record("Ghost", ReadingKind.MOTION, (1, 0, 1), 7)
        service.record("Lab", 9, 1, 7)

    records = [record for record in caplog.records if record.name == "services.reading_log"]
    assert [record.getMessage() for record in records] == [
        "Room added",
        "Room rejected",
        "Reading rejected",
        "Reading rejected",
    ]
    assert [getattr(record, "status", None) for record in records[1:]] == [
        Status.duplicate_name,
        Status.not_found,
        Status.invalid_input,
    ]
    assert records[2].room == "Ghost"
    assert records[2].levelno == logging.WARNING


def test_concurrent_writers_keep_structures_consistent(service: ReadingLogService) -> None:
    names = ("North", "South", "East", "West")
    for name in names:
        service.add_room(name)

    def write(index: int):
        return service.record(names[index % 4], (index % 3) + 1, _value(index), index % 5)

    with ThreadPoolExecutor(max_workers=4) as executor:
        outcomes = list(executor.map(write, range(20)))

    assert sum(outcome.ok for outcome in outcomes) == 16
    assert {outcome.status for outcome in outcomes if not outcome.ok} == {Status.full}
    assert len(service.entries()) == 16
    assert service.check_order()
    assert service.check_rooms()


def _value(index: int) -> object:
    kind = (index % 3) + 1
    if kind == 1:
        return 20.0 + index
    if kind == 2:
        return 30 + index
    return (index % 2, 1, 0)

"""Bundled demonstration dataset, loaded through the ordinary add/create path."""

from __future__ import annotations

from typing import Tuple

from datastore.entry_store import EntryStore
from datastore.room_registry import RoomRegistry
from models.outcome import Status
from models.records import ReadingKind

SAMPLE_ROOMS: Tuple[str, ...] = ("Living Room", "Kitchen", "Bedroom", "Office")

# (room, kind, value, timestamp), deliberately out of order.
SAMPLE_READINGS: Tuple[Tuple[str, ReadingKind, object, int], ...] = (
    ("Office", ReadingKind.SOUND, 38, 1200),
    ("Kitchen", ReadingKind.TEMPERATURE, 23.5, 1100),
    ("Living Room", ReadingKind.MOTION, (0, 1, 0), 1005),
    ("Kitchen", ReadingKind.MOTION, (1, 0, 1), 1000),
    ("Bedroom", ReadingKind.TEMPERATURE, 19.25, 1300),
    ("Kitchen", ReadingKind.SOUND, 52, 1050),
    ("Living Room", ReadingKind.TEMPERATURE, 21.0, 1010),
    ("Office", ReadingKind.TEMPERATURE, 22.75, 1150),
    ("Kitchen", ReadingKind.TEMPERATURE, 24.0, 1000),
    ("Bedroom", ReadingKind.SOUND, 30, 1250),
    ("Living Room", ReadingKind.SOUND, 44, 1020),
    ("Office", ReadingKind.MOTION, (0, 0, 1), 1180),
)


def load_sample(registry: RoomRegistry, store: EntryStore) -> Status:
    """Populate empty collections; return the first failing status, if any."""
    if len(registry) or len(store):
        return Status.invalid_input

    for name in SAMPLE_ROOMS:
        outcome = registry.add(name)
        if not outcome.ok:
            return outcome.status

    for room_name, kind, value, timestamp in SAMPLE_READINGS:
        room = registry.find(room_name)
        if room is None:
            return Status.not_found
        outcome = store.create(room, kind, value, timestamp)
        if not outcome.ok:
            return outcome.status

    return Status.ok

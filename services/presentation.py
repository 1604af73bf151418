"""Plain-text rows for entries and rooms. Pure functions, no output."""

from __future__ import annotations

from typing import List

from datastore.entry_store import EntryStore
from models.records import Entry, MotionReading, Reading, Room, SoundReading, TemperatureReading

COLUMN_HEADER = f"{'ROOM':<15} {'TIMESTAMP':>10}  {'TYPE':<10}  VALUE"
COLUMN_RULE = "--------------- ----------  ----------  ---------------"
NO_ENTRIES = "  (No entries)"


def format_value(reading: Reading) -> str:
    if isinstance(reading, TemperatureReading):
        return f"{reading.celsius:.2f}°C"
    if isinstance(reading, SoundReading):
        return f"{reading.decibels} dB"
    if isinstance(reading, MotionReading):
        return "[" + ",".join(str(flag) for flag in reading.flags) + "]"
    raise ValueError(f"Unsupported reading type {type(reading).__name__}.")


def format_entry(entry: Entry) -> str:
    if entry.room is None:
        raise ValueError("Entry has no owning room.")
    return (
        f"{entry.room.name:<15} {entry.timestamp:>10}  "
        f"{entry.kind.label:<10}  {format_value(entry.reading)}"
    )


def format_table(entries: List[Entry]) -> List[str]:
    if not entries:
        return [NO_ENTRIES]
    return [COLUMN_HEADER, COLUMN_RULE, *(format_entry(entry) for entry in entries)]


def format_entries(store: EntryStore) -> List[str]:
    """The canonical sequence as table rows."""
    return format_table(store.entries())


def format_room(room: Room, store: EntryStore) -> List[str]:
    """Room header followed by its entries in room-view order."""
    header = f"Room: {room.name} (entries={len(room)})"
    return [header, *format_table(store.entries_for(room))]

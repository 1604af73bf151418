from __future__ import annotations

import itertools
from bisect import bisect_right
from typing import Iterator, List, Optional

from models.outcome import Outcome, Status
from models.records import Entry, EntryHandle, Reading, Room, build_reading, is_int32
from services.ordering import sort_key
from settings import get_settings

_generations = itertools.count(1)


class EntryStore:
    """Canonical, sorted, capacity-bounded collection that owns every entry.

    Entries live in an append-only arena and are addressed by generation-tagged
    handles. The canonical order is a list of arena slots kept sorted by
    ``services.ordering``. Rooms hold handles, so inserting in the middle of
    the canonical order never invalidates a room's view.
    """

    def __init__(self, capacity: int, room_capacity: Optional[int] = None) -> None:
        self.capacity = capacity
        self.room_capacity = capacity if room_capacity is None else min(room_capacity, capacity)
        self.generation = next(_generations)
        self._arena: List[Entry] = []
        self._order: List[int] = []

    def create(
        self,
        room: Optional[Room],
        kind: object,
        value: object,
        timestamp: object,
    ) -> Outcome[EntryHandle]:
        """Validate primitive input, then insert it in sorted position."""
        if room is None:
            return Outcome.failure(Status.null_reference)
        reading = build_reading(kind, value)
        if reading is None:
            return Outcome.failure(Status.invalid_input)
        return self.insert(room, reading, timestamp)

    def insert(
        self,
        room: Optional[Room],
        reading: Optional[Reading],
        timestamp: object,
    ) -> Outcome[EntryHandle]:
        if room is None or reading is None:
            return Outcome.failure(Status.null_reference)
        if not is_int32(timestamp):
            return Outcome.failure(Status.invalid_input)
        if any(handle.generation != self.generation for handle in room.handles):
            # The room already views a different store.
            return Outcome.failure(Status.invalid_input)
        if self.is_full or room.is_full or len(room) >= self.room_capacity:
            return Outcome.failure(Status.full)

        entry = Entry(reading=reading, timestamp=timestamp, room=room)
        key = sort_key(entry)

        # bisect_right places the entry after any order-equivalent residents.
        position = bisect_right(self._order, key, key=lambda slot: sort_key(self._arena[slot]))
        room_position = bisect_right(
            room.handles, key, key=lambda handle: sort_key(self._arena[handle.slot])
        )

        slot = len(self._arena)
        handle = EntryHandle(slot=slot, generation=self.generation)
        self._arena.append(entry)
        self._order.insert(position, slot)
        room.attach(room_position, handle)
        return Outcome.success(handle)

    def resolve(self, handle: Optional[EntryHandle]) -> Optional[Entry]:
        if handle is None or handle.generation != self.generation:
            return None
        if not 0 <= handle.slot < len(self._arena):
            return None
        return self._arena[handle.slot]

    def handles(self) -> List[EntryHandle]:
        """Handles in canonical order."""
        return [EntryHandle(slot=slot, generation=self.generation) for slot in self._order]

    def entries(self) -> List[Entry]:
        """Entries in canonical order."""
        return [self._arena[slot] for slot in self._order]

    def entries_for(self, room: Room) -> List[Entry]:
        """Entries in the room's view order, skipping handles from other stores."""
        resolved = (self.resolve(handle) for handle in room.handles)
        return [entry for entry in resolved if entry is not None]

    def position_of(self, handle: EntryHandle) -> Optional[int]:
        """Canonical index of ``handle``, or None when it does not resolve here."""
        if self.resolve(handle) is None:
            return None
        return self._order.index(handle.slot)

    @property
    def is_full(self) -> bool:
        return len(self._arena) >= self.capacity

    def __getitem__(self, index: int) -> Entry:
        return self._arena[self._order[index]]

    def __iter__(self) -> Iterator[Entry]:
        return iter(self.entries())

    def __len__(self) -> int:
        return len(self._order)


def build_store() -> EntryStore:
    settings = get_settings()
    return EntryStore(capacity=settings.max_entries, room_capacity=settings.max_room_entries)


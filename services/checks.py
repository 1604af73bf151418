"""Read-only verifiers for the store ordering and the store/room linkage."""

from __future__ import annotations

from collections import Counter
from typing import Iterable

from datastore.entry_store import EntryStore
from models.records import Room
from services.ordering import compare


def check_order(store: EntryStore) -> bool:
    """True when every adjacent pair of store entries is non-decreasing."""
    entries = store.entries()
    return all(compare(earlier, later) <= 0 for earlier, later in zip(entries, entries[1:]))


def check_rooms(store: EntryStore, rooms: Iterable[Room]) -> bool:
    """True when store entries and room-view handles correspond one-to-one.

    Every store entry must be referenced exactly once across all rooms, by the
    room that owns it, and every room handle must resolve to a live entry.
    Each room's view must also follow the store's relative order.
    """

    references: Counter = Counter()
    for room in rooms:
        previous = None
        for handle in room.handles:
            entry = store.resolve(handle)
            if entry is None or entry.room is not room:
                return False
            if previous is not None and store.position_of(handle) < previous:
                return False
            previous = store.position_of(handle)
            references[handle] += 1

    for handle in store.handles():
        if references.pop(handle, 0) != 1:
            return False

    # Anything left over is a room reference no store entry accounted for.
    return not references

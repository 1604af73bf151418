"""Single-writer façade over the room registry and the entry store."""

from __future__ import annotations

import logging
from functools import lru_cache
from threading import Lock
from typing import List, Optional, Tuple

from datastore.entry_store import EntryStore, build_store
from datastore.room_registry import RoomRegistry, build_registry
from models.outcome import Outcome, Status
from models.records import Entry, EntryHandle, Room
from services import checks
from services.sample_data import load_sample

logger = logging.getLogger(__name__)


class ReadingLogService:
    """Coordinates room creation, reading insertion and verification.

    Every call runs under one lock, so concurrent callers (API worker
    threads) never observe a partially inserted entry.
    """

    def __init__(self, registry: RoomRegistry, store: EntryStore) -> None:
        self.registry = registry
        self.store = store
        self._lock = Lock()

    def add_room(self, name: Optional[str]) -> Outcome[Room]:
        with self._lock:
            outcome = self.registry.add(name)
            room_count = len(self.registry)
        if outcome.ok:
            logger.info("Room added", extra={"room": outcome.value.name, "room_count": room_count})
        else:
            logger.warning(
                "Room rejected",
                extra={"room": name, "status": outcome.status, "room_count": room_count},
            )
        return outcome

    def find_room(self, name: str) -> Optional[Room]:
        with self._lock:
            return self.registry.find(name)

    def record(
        self,
        room_name: Optional[str],
        kind: object,
        value: object,
        timestamp: object,
    ) -> Outcome[EntryHandle]:
        """Insert a reading for a room looked up by name."""
        with self._lock:
            room = self.registry.find(room_name)
            if room is None:
                outcome: Outcome[EntryHandle] = Outcome.failure(
                    Status.null_reference if room_name is None else Status.not_found
                )
            else:
                outcome = self.store.create(room, kind, value, timestamp)
            entry_count = len(self.store)

        context = {
            "room": room_name,
            "kind": kind,
            "timestamp": timestamp,
            "entry_count": entry_count,
        }
        if outcome.ok:
            logger.info("Reading recorded", extra=context)
        else:
            logger.warning("Reading rejected", extra={**context, "status": outcome.status})
        return outcome

    def load_sample(self) -> Status:
        with self._lock:
            status = load_sample(self.registry, self.store)
            entry_count = len(self.store)
            room_count = len(self.registry)
        log = logger.info if status is Status.ok else logger.warning
        log(
            "Sample data load finished",
            extra={"status": status, "entry_count": entry_count, "room_count": room_count},
        )
        return status

    def resolve(self, handle: EntryHandle) -> Optional[Entry]:
        with self._lock:
            return self.store.resolve(handle)

    def rooms(self) -> List[Room]:
        with self._lock:
            return list(self.registry)

    def entries(self) -> List[Entry]:
        with self._lock:
            return self.store.entries()

    def entries_for(self, room: Room) -> List[Entry]:
        with self._lock:
            return self.store.entries_for(room)

    def room_snapshot(self, name: str) -> Optional[Tuple[Room, List[Entry]]]:
        """Look up a room and read its entries under one lock acquisition."""
        with self._lock:
            room = self.registry.find(name)
            if room is None:
                return None
            return room, self.store.entries_for(room)

    def room_snapshots(self) -> List[Tuple[Room, List[Entry]]]:
        with self._lock:
            return [(room, self.store.entries_for(room)) for room in self.registry]

    def check_order(self) -> bool:
        with self._lock:
            passed = checks.check_order(self.store)
        logger.info("Consistency check finished", extra={"check": "order", "status": passed})
        return passed

    def check_rooms(self) -> bool:
        with self._lock:
            passed = checks.check_rooms(self.store, self.registry)
        logger.info("Consistency check finished", extra={"check": "rooms", "status": passed})
        return passed


@lru_cache
def build_default_service() -> ReadingLogService:
    """Factory that wires the service with collections sized from settings."""
    return ReadingLogService(registry=build_registry(), store=build_store())

from __future__ import annotations

from typing import Iterator, List, Optional

from models.outcome import Outcome, Status
from models.records import Room
from settings import get_settings


class RoomRegistry:
    """Insertion-ordered, capacity-bounded set of uniquely named rooms."""

    def __init__(self, capacity: int, max_name_length: int, room_capacity: int) -> None:
        self.capacity = capacity
        self.max_name_length = max_name_length
        self.room_capacity = room_capacity
        self._rooms: List[Room] = []

    def find(self, name: Optional[str]) -> Optional[Room]:
        if name is None:
            return None
        candidate = self.normalize_name(name)
        for room in self._rooms:
            if room.name == candidate:
                return room
        return None

    def add(self, name: Optional[str]) -> Outcome[Room]:
        if name is None:
            return Outcome.failure(Status.null_reference)
        if self.is_full:
            return Outcome.failure(Status.full)
        if self.find(name) is not None:
            return Outcome.failure(Status.duplicate_name)

        room = Room(name=self.normalize_name(name), capacity=self.room_capacity)
        self._rooms.append(room)
        return Outcome.success(room)

    def normalize_name(self, name: str) -> str:
        # One slot of the configured length is reserved for the terminator.
        return name[: self.max_name_length - 1]

    @property
    def is_full(self) -> bool:
        return len(self._rooms) >= self.capacity

    def __contains__(self, room: object) -> bool:
        return any(existing is room for existing in self._rooms)

    def __iter__(self) -> Iterator[Room]:
        return iter(list(self._rooms))

    def __len__(self) -> int:
        return len(self._rooms)


def build_registry() -> RoomRegistry:
    settings = get_settings()
    return RoomRegistry(
        capacity=settings.max_rooms,
        max_name_length=settings.max_name_length,
        room_capacity=settings.max_room_entries,
    )

"""Pydantic schemas for the HTTP API layer."""

from __future__ import annotations

from typing import List, Optional, Tuple, Union

from pydantic import BaseModel, Field, StrictFloat, StrictInt

from models.records import Entry, MotionReading, ReadingKind, Room, SoundReading, TemperatureReading


class RoomCreate(BaseModel):
    """Request body for registering a room."""

    name: str = Field(..., min_length=1, description="Room name; long names are truncated.")


class EntryCreate(BaseModel):
    """Request body for recording a reading against a room."""

    kind: StrictInt = Field(..., description="1=temperature, 2=sound level, 3=motion.")
    value: Union[StrictInt, StrictFloat, List[StrictInt]] = Field(
        ..., description="Number for temperature/sound, three 0/1 flags for motion."
    )
    timestamp: StrictInt

    def reading_value(self) -> object:
        if isinstance(self.value, list):
            return tuple(self.value)
        return self.value


class EntryOut(BaseModel):
    """A stored entry as exposed by the API."""

    room: str
    timestamp: int
    kind: ReadingKind
    label: str
    temperature: Optional[float] = None
    decibels: Optional[int] = None
    motion: Optional[Tuple[int, int, int]] = None

    @classmethod
    def from_entry(cls, entry: Entry) -> "EntryOut":
        reading = entry.reading
        payload = {
            "room": entry.room.name if entry.room is not None else "",
            "timestamp": entry.timestamp,
            "kind": entry.kind,
            "label": entry.kind.label,
        }
        if isinstance(reading, TemperatureReading):
            payload["temperature"] = reading.celsius
        elif isinstance(reading, SoundReading):
            payload["decibels"] = reading.decibels
        elif isinstance(reading, MotionReading):
            payload["motion"] = reading.flags
        return cls(**payload)


class RoomOut(BaseModel):
    """A room with its entries in room-view order."""

    name: str
    entry_count: int = Field(..., ge=0)
    entries: List[EntryOut] = Field(default_factory=list)

    @classmethod
    def from_room(cls, room: Room, entries: List[Entry]) -> "RoomOut":
        return cls(
            name=room.name,
            entry_count=len(entries),
            entries=[EntryOut.from_entry(entry) for entry in entries],
        )


class CheckReport(BaseModel):
    """Outcome of both consistency checks."""

    order: bool
    rooms: bool

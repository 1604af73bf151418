"""Domain models shared across services."""

from __future__ import annotations

import math
import struct
from dataclasses import dataclass, field
from enum import IntEnum
from typing import List, Optional, Sequence, Tuple, Union

INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1


class ReadingKind(IntEnum):
    """Kind codes; the numeric order is part of the entry ordering."""

    TEMPERATURE = 1
    SOUND = 2
    MOTION = 3

    @property
    def label(self) -> str:
        return _KIND_LABELS[self]


_KIND_LABELS = {
    ReadingKind.TEMPERATURE: "TEMP",
    ReadingKind.SOUND: "DB",
    ReadingKind.MOTION: "MOTION",
}


def _to_float32(value: float) -> float:
    return struct.unpack("<f", struct.pack("<f", value))[0]


def is_int32(value: object) -> bool:
    return (
        isinstance(value, int)
        and not isinstance(value, bool)
        and INT32_MIN <= value <= INT32_MAX
    )


@dataclass(frozen=True, slots=True)
class TemperatureReading:
    """Temperature in degrees Celsius, stored at single precision."""

    celsius: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "celsius", _to_float32(self.celsius))

    @property
    def kind(self) -> ReadingKind:
        return ReadingKind.TEMPERATURE


@dataclass(frozen=True, slots=True)
class SoundReading:
    """Sound level in decibels."""

    decibels: int

    @property
    def kind(self) -> ReadingKind:
        return ReadingKind.SOUND


@dataclass(frozen=True, slots=True)
class MotionReading:
    """Left/forward/right motion flags, each 0 or 1."""

    left: int
    forward: int
    right: int

    @property
    def kind(self) -> ReadingKind:
        return ReadingKind.MOTION

    @property
    def flags(self) -> Tuple[int, int, int]:
        return (self.left, self.forward, self.right)


Reading = Union[TemperatureReading, SoundReading, MotionReading]


def build_reading(kind: object, value: object) -> Optional[Reading]:
    """Build the reading variant for ``kind`` or return None when invalid.

    ``value`` is a number for temperature and sound readings and a sequence
    of three 0/1 flags for motion readings.
    """

    try:
        reading_kind = ReadingKind(kind)
    except ValueError:
        return None

    if reading_kind is ReadingKind.TEMPERATURE:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return None
        try:
            celsius = _to_float32(float(value))
        except (OverflowError, struct.error):
            return None
        if not math.isfinite(celsius):
            return None
        return TemperatureReading(celsius=celsius)

    if reading_kind is ReadingKind.SOUND:
        if not is_int32(value):
            return None
        return SoundReading(decibels=value)

    if isinstance(value, (str, bytes)) or not isinstance(value, Sequence):
        return None
    if len(value) != 3:
        return None
    if any(isinstance(flag, bool) or flag not in (0, 1) for flag in value):
        return None
    left, forward, right = (int(flag) for flag in value)
    return MotionReading(left=left, forward=forward, right=right)


@dataclass(frozen=True, slots=True)
class EntryHandle:
    """Stable reference to an entry slot inside one EntryStore."""

    slot: int
    generation: int


@dataclass(eq=False)
class Room:
    """A named room and its ordered view of entry handles.

    Rooms compare by identity. The handle list only grows, through
    EntryStore insertion.
    """

    name: str
    capacity: int
    _handles: List[EntryHandle] = field(default_factory=list, init=False, repr=False)

    @property
    def handles(self) -> Tuple[EntryHandle, ...]:
        return tuple(self._handles)

    @property
    def is_full(self) -> bool:
        return len(self._handles) >= self.capacity

    def __len__(self) -> int:
        return len(self._handles)

    def attach(self, position: int, handle: EntryHandle) -> None:
        """Insert a handle at ``position``; only EntryStore calls this."""
        self._handles.insert(position, handle)


@dataclass(frozen=True, slots=True)
class Entry:
    """A single reading recorded against a room."""

    reading: Reading
    timestamp: int
    room: Optional[Room]

    @property
    def kind(self) -> ReadingKind:
        return self.reading.kind

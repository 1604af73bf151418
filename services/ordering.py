"""Total order over entries: room name, then reading kind, then timestamp."""

from __future__ import annotations

from typing import Optional, Tuple

from models.records import Entry

SortKey = Tuple[bytes, int, int]


def sort_key(entry: Entry) -> SortKey:
    """Key for owned entries; room names compare as UTF-8 bytes, case-sensitive."""
    if entry.room is None:
        raise ValueError("entry has no room")
    return (entry.room.name.encode("utf-8"), int(entry.kind), entry.timestamp)


def compare(a: Optional[Entry], b: Optional[Entry]) -> int:
    """Return -1, 0 or 1 as ``a`` sorts before, with, or after ``b``.

    Entries missing a room (or missing altogether) are order-equivalent to
    anything.
    """

    if a is None or b is None or a.room is None or b.room is None:
        return 0
    key_a = sort_key(a)
    key_b = sort_key(b)
    if key_a < key_b:
        return -1
    if key_a > key_b:
        return 1
    return 0

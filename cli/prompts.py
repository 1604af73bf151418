"""Line parsing for the interactive menu. Parsers return None on bad input."""

from __future__ import annotations

import re
from typing import Optional, Tuple

import typer

from models.records import ReadingKind

_MOTION_SEPARATOR = re.compile(r"[\s,]+")


def parse_int(text: str) -> Optional[int]:
    candidate = text.strip()
    if not candidate:
        return None
    try:
        return int(candidate)
    except ValueError:
        return None


def parse_float(text: str) -> Optional[float]:
    candidate = text.strip()
    if not candidate:
        return None
    try:
        return float(candidate)
    except ValueError:
        return None


def parse_kind(text: str) -> Optional[ReadingKind]:
    code = parse_int(text)
    if code is None:
        return None
    try:
        return ReadingKind(code)
    except ValueError:
        return None


def parse_motion(text: str) -> Optional[Tuple[int, int, int]]:
    """Accept ``"1 0 1"`` or ``"1,0,1"``; each flag must be 0 or 1."""
    parts = [part for part in _MOTION_SEPARATOR.split(text.strip().strip("[]")) if part]
    if len(parts) != 3:
        return None
    flags = [parse_int(part) for part in parts]
    if any(flag not in (0, 1) for flag in flags):
        return None
    left, forward, right = flags
    return (left, forward, right)


def parse_value(kind: ReadingKind, text: str) -> Optional[object]:
    if kind is ReadingKind.TEMPERATURE:
        return parse_float(text)
    if kind is ReadingKind.SOUND:
        return parse_int(text)
    return parse_motion(text)


_VALUE_PROMPTS = {
    ReadingKind.TEMPERATURE: "Enter temperature (float)",
    ReadingKind.SOUND: "Enter decibels (int)",
    ReadingKind.MOTION: "Enter motion values (3 integers 0 or 1)",
}


def ask(text: str) -> str:
    return typer.prompt(text, default="", show_default=False)


def read_room_name(max_name_length: int) -> str:
    return ask("Enter room name")[: max_name_length - 1]


def read_entry_data() -> Optional[Tuple[int, ReadingKind, object]]:
    """Prompt for timestamp, kind and value; None when any part is invalid."""
    timestamp = parse_int(ask("Enter timestamp"))
    kind = parse_kind(ask("Enter type (1=TEMP, 2=DB, 3=MOTION)"))
    if timestamp is None or kind is None:
        return None
    value = parse_value(kind, ask(_VALUE_PROMPTS[kind]))
    if value is None:
        return None
    return timestamp, kind, value

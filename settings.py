from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache


_MAX_ROOMS_ENV = "ROOMLOG_MAX_ROOMS"
_MAX_ENTRIES_ENV = "ROOMLOG_MAX_ENTRIES"
_MAX_NAME_LENGTH_ENV = "ROOMLOG_MAX_NAME_LENGTH"
_LOG_LEVEL_ENV = "LOG_LEVEL"

DEFAULT_MAX_ROOMS = 16
DEFAULT_MAX_ENTRIES = 16
DEFAULT_MAX_NAME_LENGTH = 32


@dataclass(frozen=True)
class Settings:
    max_rooms: int
    max_entries: int
    max_name_length: int
    log_level: str

    @property
    def max_room_entries(self) -> int:
        # A room view can never hold more than the canonical store.
        return self.max_entries


def _read_positive_int(name: str, default: int, minimum: int = 1) -> int:
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    try:
        parsed = int(candidate)
    except ValueError:
        return default
    return parsed if parsed >= minimum else default


def _read_log_level(default: str) -> str:
    value = os.getenv(_LOG_LEVEL_ENV)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    return candidate.upper()


@lru_cache
def get_settings() -> Settings:
    return Settings(
        max_rooms=_read_positive_int(_MAX_ROOMS_ENV, DEFAULT_MAX_ROOMS),
        max_entries=_read_positive_int(_MAX_ENTRIES_ENV, DEFAULT_MAX_ENTRIES),
        max_name_length=_read_positive_int(
            _MAX_NAME_LENGTH_ENV, DEFAULT_MAX_NAME_LENGTH, minimum=2
        ),
        log_level=_read_log_level("INFO"),
    )

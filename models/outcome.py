"""Status values returned by registry and store operations."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class Status(str, Enum):
    """Result codes; failures are ordinary outcomes, never raised."""

    ok = "ok"
    null_reference = "null_reference"
    full = "full"
    not_found = "not_found"
    duplicate_name = "duplicate_name"
    invalid_input = "invalid_input"
    not_implemented = "not_implemented"


@dataclass(frozen=True)
class Outcome(Generic[T]):
    status: Status
    value: Optional[T] = None

    @property
    def ok(self) -> bool:
        return self.status is Status.ok

    @classmethod
    def success(cls, value: T) -> "Outcome[T]":
        return cls(status=Status.ok, value=value)

    @classmethod
    def failure(cls, status: Status) -> "Outcome[T]":
        return cls(status=status)

"""Process-wide logging for the reading log service, CLI and API.

Service calls attach context such as the room, reading kind and outcome status
through ``extra``; :class:`ReadingLogFormatter` appends those fields to the
message as ``key=value`` pairs.
"""

from __future__ import annotations

import logging
from enum import Enum
from logging.config import dictConfig
from typing import Iterable, Sequence

from settings import get_settings

CONTEXT_FIELDS = (
    "room",
    "kind",
    "timestamp",
    "status",
    "entry_count",
    "room_count",
    "check",
)

_configured = False


def _render(value: object) -> str:
    if isinstance(value, Enum):
        return value.name
    if isinstance(value, str) and " " in value:
        return repr(value)
    return str(value)


class ReadingLogFormatter(logging.Formatter):
    """Formatter that appends reading context fields present on the record."""

    def __init__(
        self,
        fmt: str | None = None,
        datefmt: str | None = None,
        style: str = "%",
        fields: Iterable[str] | None = None,
    ) -> None:
        super().__init__(fmt=fmt, datefmt=datefmt, style=style)
        self._fields: Sequence[str] = tuple(fields or CONTEXT_FIELDS)

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        context = [
            f"{name}={_render(getattr(record, name))}"
            for name in self._fields
            if getattr(record, name, None) is not None
        ]
        if not context:
            return message
        return f"{message} | {' '.join(context)}"


def configure_logging(level: str | int | None = None) -> None:
    """Install the stderr handler once; stdout stays free for menu output."""
    global _configured
    if _configured:
        return

    log_level = level if level is not None else get_settings().log_level

    dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "reading_log": {
                    "()": "logging_config.ReadingLogFormatter",
                    "fmt": "%(asctime)s %(levelname)-7s %(name)s: %(message)s",
                    "datefmt": "%Y-%m-%dT%H:%M:%S",
                    "fields": list(CONTEXT_FIELDS),
                }
            },
            "handlers": {
                "stderr": {
                    "class": "logging.StreamHandler",
                    "stream": "ext://sys.stderr",
                    "level": log_level,
                    "formatter": "reading_log",
                }
            },
            "root": {"handlers": ["stderr"], "level": log_level},
        }
    )

    _configured = True

from __future__ import annotations

from typing import Iterable

import typer

from models.records import Entry, Room
from services.presentation import format_room, format_table
from services.reading_log import ReadingLogService

MENU_OPTIONS = (
    (1, "Load sample data"),
    (2, "Print entries"),
    (3, "Print rooms"),
    (4, "Add room"),
    (5, "Add entry"),
    (6, "Test order"),
    (7, "Test room entries"),
    (0, "Exit"),
)


def echo_heading(text: str) -> None:
    typer.secho(text, bold=True)


def echo_lines(lines: Iterable[str]) -> None:
    for line in lines:
        typer.echo(line)


def echo_error(text: str) -> None:
    typer.secho(text, fg=typer.colors.RED)


def render_menu() -> None:
    typer.echo()
    echo_heading("MAIN MENU")
    for number, label in MENU_OPTIONS:
        typer.echo(f"  ({number}) {label}")
    typer.echo()


def render_entries(entries: list[Entry]) -> None:
    typer.echo()
    echo_heading("All Entries (sorted):")
    echo_lines(format_table(entries))


def render_rooms(service: ReadingLogService) -> None:
    typer.echo()
    echo_heading("All Rooms:")
    rooms: list[Room] = service.rooms()
    if not rooms:
        typer.echo("  (No rooms)")
        return
    for room in rooms:
        typer.echo()
        echo_lines(format_room(room, service.store))


def render_check(label: str, passed: bool) -> None:
    if passed:
        typer.secho(f"{label} test PASSED.", fg=typer.colors.GREEN)
    else:
        typer.secho(f"{label} test FAILED.", fg=typer.colors.RED)

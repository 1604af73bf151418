from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Optional

import typer

from cli.prompts import ask, parse_int, read_entry_data, read_room_name
from cli.render import (
    MENU_OPTIONS,
    echo_error,
    render_check,
    render_entries,
    render_menu,
    render_rooms,
)
from logging_config import configure_logging
from models.outcome import Status
from services.reading_log import ReadingLogService, build_default_service


@dataclass
class CLIState:
    service: ReadingLogService


app = typer.Typer(
    help="Record room sensor readings and inspect the sorted log.",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def _get_state(ctx: typer.Context) -> CLIState:
    state = ctx.obj
    if not isinstance(state, CLIState):
        raise typer.Exit(code=1)
    return state


@app.callback()
def main(
    ctx: typer.Context,
    log_level: str = typer.Option(
        "WARNING",
        "--log-level",
        "-l",
        help="Log level for diagnostics written to stderr.",
    ),
) -> None:
    """Entry point for the CLI."""
    configure_logging(log_level.upper())
    ctx.obj = CLIState(service=build_default_service())


def handle_load_sample(service: ReadingLogService) -> None:
    if service.load_sample() is Status.ok:
        typer.echo("Sample data loaded successfully.")
    else:
        echo_error("Error loading sample data.")


def handle_print_entries(service: ReadingLogService) -> None:
    render_entries(service.entries())


def handle_print_rooms(service: ReadingLogService) -> None:
    render_rooms(service)


def handle_add_room(service: ReadingLogService) -> None:
    name = read_room_name(service.registry.max_name_length)
    if not name.strip():
        echo_error("Error: Room name cannot be empty.")
        return

    outcome = service.add_room(name)
    if outcome.ok:
        typer.echo(f"Room '{outcome.value.name}' added successfully.")
    elif outcome.status is Status.duplicate_name:
        echo_error(f"Error: Room '{name}' already exists.")
    elif outcome.status is Status.full:
        echo_error(f"Error: Cannot add more rooms (maximum {service.registry.capacity} reached).")
    else:
        echo_error("Error adding room.")


def handle_add_entry(service: ReadingLogService) -> None:
    name = read_room_name(service.registry.max_name_length)
    if service.find_room(name) is None:
        echo_error(f"Error: Room '{name}' not found.")
        return

    data = read_entry_data()
    if data is None:
        echo_error("Error: Invalid entry data.")
        return

    timestamp, kind, value = data
    outcome = service.record(name, kind, value, timestamp)
    if outcome.ok:
        typer.echo("Entry added successfully.")
    elif outcome.status is Status.full:
        echo_error("Error: Cannot add more entries (maximum reached).")
    elif outcome.status is Status.invalid_input:
        echo_error("Error: Invalid entry data.")
    elif outcome.status is Status.not_found:
        echo_error(f"Error: Room '{name}' not found.")
    else:
        echo_error("Error adding entry.")


def handle_test_order(service: ReadingLogService) -> None:
    render_check("Order", service.check_order())


def handle_test_rooms(service: ReadingLogService) -> None:
    render_check("Room entries", service.check_rooms())


HANDLERS: Dict[int, Callable[[ReadingLogService], None]] = {
    1: handle_load_sample,
    2: handle_print_entries,
    3: handle_print_rooms,
    4: handle_add_room,
    5: handle_add_entry,
    6: handle_test_order,
    7: handle_test_rooms,
}


def read_choice() -> int:
    valid = {number for number, _label in MENU_OPTIONS}
    while True:
        choice: Optional[int] = parse_int(ask("Please enter a valid selection"))
        if choice in valid:
            return choice


@app.command("menu")
def menu_command(ctx: typer.Context) -> None:
    """Run the interactive menu until Exit is chosen."""
    state = _get_state(ctx)
    while True:
        render_menu()
        try:
            choice = read_choice()
            if choice != 0:
                HANDLERS[choice](state.service)
                continue
        except typer.Abort:
            # End of input behaves like choosing Exit.
            typer.echo()
        typer.echo("Exiting program.")
        return


@app.command("sample")
def sample_command(ctx: typer.Context) -> None:
    """Load the bundled sample data and print a full report."""
    state = _get_state(ctx)
    handle_load_sample(state.service)
    handle_print_entries(state.service)
    handle_print_rooms(state.service)
    typer.echo()
    handle_test_order(state.service)
    handle_test_rooms(state.service)

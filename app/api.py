"""HTTP route definitions for the service."""

from __future__ import annotations

from typing import List, NoReturn

from fastapi import APIRouter, Depends, HTTPException, status

from app.schemas import CheckReport, EntryCreate, EntryOut, RoomCreate, RoomOut
from models.outcome import Status
from services.reading_log import ReadingLogService, build_default_service

router = APIRouter()

_HTTP_STATUS = {
    Status.null_reference: status.HTTP_400_BAD_REQUEST,
    Status.not_found: status.HTTP_404_NOT_FOUND,
    Status.duplicate_name: status.HTTP_409_CONFLICT,
    Status.full: status.HTTP_409_CONFLICT,
    Status.invalid_input: status.HTTP_422_UNPROCESSABLE_ENTITY,
    Status.not_implemented: status.HTTP_501_NOT_IMPLEMENTED,
}

_DETAIL = {
    Status.null_reference: "Room reference is missing.",
    Status.not_found: "Room {room!r} was not found.",
    Status.duplicate_name: "Room {room!r} already exists.",
    Status.full: "Capacity exhausted.",
    Status.invalid_input: "Invalid entry data.",
    Status.not_implemented: "Operation not implemented.",
}


def get_service() -> ReadingLogService:
    return build_default_service()


def _raise_for(outcome_status: Status, room: str = "") -> NoReturn:
    raise HTTPException(
        status_code=_HTTP_STATUS.get(outcome_status, status.HTTP_500_INTERNAL_SERVER_ERROR),
        detail=_DETAIL.get(outcome_status, "Unexpected failure.").format(room=room),
    )


@router.get("/rooms", response_model=List[RoomOut], summary="List rooms with their entries.")
async def list_rooms(service: ReadingLogService = Depends(get_service)) -> List[RoomOut]:
    return [RoomOut.from_room(room, entries) for room, entries in service.room_snapshots()]


@router.post(
    "/rooms",
    status_code=status.HTTP_201_CREATED,
    response_model=RoomOut,
    summary="Register a new room.",
)
async def create_room(
    payload: RoomCreate,
    service: ReadingLogService = Depends(get_service),
) -> RoomOut:
    outcome = service.add_room(payload.name)
    if not outcome.ok:
        _raise_for(outcome.status, payload.name)
    return RoomOut.from_room(outcome.value, [])


@router.get("/rooms/{name}", response_model=RoomOut, summary="Fetch one room.")
async def get_room(name: str, service: ReadingLogService = Depends(get_service)) -> RoomOut:
    snapshot = service.room_snapshot(name)
    if snapshot is None:
        _raise_for(Status.not_found, name)
    room, entries = snapshot
    return RoomOut.from_room(room, entries)


@router.post(
    "/rooms/{name}/entries",
    status_code=status.HTTP_201_CREATED,
    response_model=EntryOut,
    summary="Record a reading for a room.",
)
async def create_entry(
    name: str,
    payload: EntryCreate,
    service: ReadingLogService = Depends(get_service),
) -> EntryOut:
    outcome = service.record(name, payload.kind, payload.reading_value(), payload.timestamp)
    if not outcome.ok:
        _raise_for(outcome.status, name)
    entry = service.resolve(outcome.value)
    return EntryOut.from_entry(entry)


@router.get("/entries", response_model=List[EntryOut], summary="All entries in sorted order.")
async def list_entries(service: ReadingLogService = Depends(get_service)) -> List[EntryOut]:
    return [EntryOut.from_entry(entry) for entry in service.entries()]


@router.get("/checks", response_model=CheckReport, summary="Run both consistency checks.")
async def run_checks(service: ReadingLogService = Depends(get_service)) -> CheckReport:
    return CheckReport(order=service.check_order(), rooms=service.check_rooms())


@router.post(
    "/sample",
    status_code=status.HTTP_201_CREATED,
    summary="Load the bundled sample data into empty collections.",
)
async def load_sample(service: ReadingLogService = Depends(get_service)) -> dict[str, str]:
    outcome_status = service.load_sample()
    if outcome_status is Status.invalid_input:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Sample data can only be loaded into an empty log.",
        )
    if outcome_status is not Status.ok:
        _raise_for(outcome_status)
    return {"status": outcome_status.value}


@router.get(
    "/health",
    summary="Health check endpoint.",
    status_code=status.HTTP_200_OK,
)
async def healthcheck() -> dict[str, str]:
    return {"status": "ok"}


@router.get(
    "/",
    summary="Root endpoint mirrors health information.",
    status_code=status.HTTP_200_OK,
)
async def root() -> dict[str, str]:
    return {"status": "ok", "detail": "See /health for service status."}

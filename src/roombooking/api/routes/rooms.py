"""Rooms endpoints.

GET /rooms                               → room directory
GET /rooms/available?date=...&time=...   → rooms free for the one-hour slot at date/time
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from roombooking.api.deps import get_storage
from roombooking.domain.availability import list_all_rooms, list_available_rooms
from roombooking.infra.db import Storage

router = APIRouter(prefix="/rooms", tags=["rooms"])


@router.get("")
def list_rooms(storage: Storage = Depends(get_storage)) -> dict:
    """List every room."""
    return {"rooms": [room.to_dict() for room in list_all_rooms(storage)]}


@router.get("/available")
def available_rooms(
    date: str = Query(..., description="Date, YYYY-MM-DD"),
    time: str = Query(..., description="Slot start, HH:MM"),
    storage: Storage = Depends(get_storage),
) -> dict:
    """List rooms with no reservation overlapping [time, time + 1h) on date.

    Malformed date or time returns 422.
    """
    rooms = list_available_rooms(storage, date=date, time=time)
    return {"rooms": [room.to_dict() for room in rooms]}

"""Reservations endpoints.

POST   /reservations                          → create (201)
DELETE /reservations/{id}                     → cancel
GET    /reservations?room_name=...&date=...   → list, both filters optional
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Path, Query
from pydantic import BaseModel, ConfigDict

from roombooking.api.deps import get_storage
from roombooking.domain.listing import list_reservations
from roombooking.domain.reservations import cancel_reservation, create_reservation
from roombooking.infra.db import Storage


class CreateReservationRequest(BaseModel):
    """Request body for create.

    Date and times stay strings here; the domain parser owns their format.
    """

    model_config = ConfigDict(extra="forbid")

    room_name: str
    date: str
    start_time: str
    end_time: str


router = APIRouter(prefix="/reservations", tags=["reservations"])


@router.post("", status_code=201)
def create(
    body: CreateReservationRequest,
    storage: Storage = Depends(get_storage),
) -> dict:
    """Book a room.

    Returns 422 on malformed input, 404 for an unknown room and 409 when
    the interval overlaps an existing reservation.
    """
    reservation = create_reservation(
        storage,
        room_name=body.room_name,
        date=body.date,
        start_time=body.start_time,
        end_time=body.end_time,
    )
    return reservation.to_dict()


@router.delete("/{reservation_id}")
def cancel(
    reservation_id: int = Path(..., description="Reservation id"),
    storage: Storage = Depends(get_storage),
) -> dict:
    """Cancel a reservation. Unknown ids return 404."""
    cancelled_id = cancel_reservation(storage, reservation_id)
    return {"status": "cancelled", "id": cancelled_id}


@router.get("")
def list_(
    room_name: str | None = Query(None, description="Exact room name"),
    date: str | None = Query(None, description="Date, YYYY-MM-DD"),
    storage: Storage = Depends(get_storage),
) -> dict:
    """List reservations joined with room names."""
    reservations = list_reservations(storage, room_name=room_name, date=date)
    return {"reservations": [r.to_dict() for r in reservations]}

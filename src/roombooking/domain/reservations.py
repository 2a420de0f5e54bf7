"""Reservation lifecycle - transactional create and cancel.

Create runs inside a single DB transaction:
validate input -> resolve + lock room -> conflict check -> insert.
Input validation happens before a connection is taken from the pool.
"""

from __future__ import annotations

from psycopg2 import errors as pg_errors

from roombooking.domain.errors import ConflictError, ReservationNotFoundError, RoomNotFoundError
from roombooking.domain.models import Reservation
from roombooking.domain.parsing import parse_date, parse_interval
from roombooking.domain.room_conflict import assert_no_room_conflict
from roombooking.infra.db import Storage
from roombooking.infra.repositories.reservations_repository import (
    delete_reservation,
    insert_reservation,
    lock_reservation,
)
from roombooking.infra.repositories.rooms_repository import get_room_id_by_name
from roombooking.observability.logging import get_logger

logger = get_logger(__name__)


def create_reservation(
    storage: Storage,
    *,
    room_name: str,
    date: str,
    start_time: str,
    end_time: str,
) -> Reservation:
    """Book a room for [start_time, end_time) on date.

    Args:
        storage: Storage handle.
        room_name: Name of the room to book.
        date: Calendar date, YYYY-MM-DD.
        start_time: Start time, HH:MM (inclusive).
        end_time: End time, HH:MM (exclusive).

    Returns:
        The persisted reservation, including its new id.

    Raises:
        ValidationError: Malformed date/time or start_time >= end_time.
        RoomNotFoundError: No room with that name.
        ConflictError: The interval overlaps an existing reservation.
        StorageError: The store is unreachable or a query failed.
    """
    on_date = parse_date(date)
    start, end = parse_interval(start_time, end_time)

    with storage.txn() as cur:
        # Lock the room row so concurrent bookings of this room serialize
        # between the conflict check and the insert.
        room_id = get_room_id_by_name(cur, room_name, lock=True)
        if room_id is None:
            raise RoomNotFoundError(room_name)

        assert_no_room_conflict(cur, room_id=room_id, on_date=on_date, start=start, end=end)

        try:
            reservation = insert_reservation(
                cur,
                room_id=room_id,
                on_date=on_date,
                start_time=start,
                end_time=end,
            )
        except pg_errors.ExclusionViolation as exc:
            raise ConflictError(room_id=room_id, on_date=on_date, start=start, end=end) from exc

    logger.info(
        "reservation created",
        extra={
            "extra_fields": {
                "reservation_id": reservation.id,
                "room_id": room_id,
                "date": on_date.isoformat(),
                "start_time": start.isoformat(),
                "end_time": end.isoformat(),
            },
        },
    )
    return reservation


def cancel_reservation(storage: Storage, reservation_id: int) -> int:
    """Cancel (delete) a reservation.

    Returns:
        The cancelled reservation id.

    Raises:
        ReservationNotFoundError: No reservation with that id.
        StorageError: The store is unreachable or a query failed.
    """
    with storage.txn() as cur:
        if not lock_reservation(cur, reservation_id):
            raise ReservationNotFoundError(reservation_id)
        delete_reservation(cur, reservation_id)

    logger.info(
        "reservation cancelled",
        extra={"extra_fields": {"reservation_id": reservation_id}},
    )
    return reservation_id

"""Room conflict detection.

Decides whether a room already has a reservation overlapping a proposed
half-open [start, end) interval on a given date.

Overlap formula:  (existing.start_time < new_end) AND (existing.end_time > new_start)
Strict inequality allows end == start (back-to-back bookings are OK).

The same rule is enforced in the schema by the no_reservation_overlap
exclusion constraint.
"""

from __future__ import annotations

import logging
from datetime import date, time

from psycopg2.extensions import cursor as PgCursor

from roombooking.domain.errors import ConflictError

logger = logging.getLogger(__name__)


def check_room_conflict(
    cur: PgCursor,
    *,
    room_id: int,
    on_date: date,
    start: time,
    end: time,
) -> int | None:
    """Return the first reservation overlapping [start, end), if any.

    Args:
        cur: Database cursor (should be within a transaction).
        room_id: Room identifier.
        on_date: Reservation date.
        start: Requested start time (inclusive).
        end: Requested end time (exclusive).

    Callers that need the answer to hold until commit lock the room row
    first (see create_reservation).

    Returns:
        The id of the first conflicting reservation, or None if the room is free.
    """
    query = """
        SELECT id, start_time, end_time
        FROM reservations
        WHERE room_id = %s
          AND date = %s
          AND start_time < %s
          AND end_time > %s
        ORDER BY start_time
        LIMIT 1
    """

    cur.execute(query, (room_id, on_date, end, start))
    row = cur.fetchone()

    if row is None:
        return None

    conflicting_id = row[0]
    logger.warning(
        "room conflict detected",
        extra={
            "extra_fields": {
                "room_id": room_id,
                "date": on_date.isoformat(),
                "requested_start": start.isoformat(),
                "requested_end": end.isoformat(),
                "conflicting_reservation_id": conflicting_id,
                "existing_start": row[1].isoformat(),
                "existing_end": row[2].isoformat(),
            },
        },
    )
    return conflicting_id


def is_conflicting(
    cur: PgCursor,
    *,
    room_id: int,
    on_date: date,
    start: time,
    end: time,
) -> bool:
    """True if any reservation for the room/date overlaps [start, end)."""
    return (
        check_room_conflict(cur, room_id=room_id, on_date=on_date, start=start, end=end)
        is not None
    )


def assert_no_room_conflict(
    cur: PgCursor,
    *,
    room_id: int,
    on_date: date,
    start: time,
    end: time,
) -> None:
    """Raise ConflictError if the room has an overlapping reservation.

    Used by transactional flows where a conflict must abort the operation.
    """
    conflicting_id = check_room_conflict(
        cur,
        room_id=room_id,
        on_date=on_date,
        start=start,
        end=end,
    )
    if conflicting_id is not None:
        raise ConflictError(
            room_id=room_id,
            on_date=on_date,
            start=start,
            end=end,
            conflicting_reservation_id=conflicting_id,
        )

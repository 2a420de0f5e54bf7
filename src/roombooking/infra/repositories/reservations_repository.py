"""Reservations repository - persistence for reservation records.

Uses raw SQL with psycopg2 (no ORM).
"""

from datetime import date, time

from psycopg2.extensions import cursor as PgCursor

from roombooking.domain.models import Reservation, ReservationView
from roombooking.infra.db import for_update


def insert_reservation(
    cur: PgCursor,
    *,
    room_id: int,
    on_date: date,
    start_time: time,
    end_time: time,
) -> Reservation:
    """Insert a reservation row and return it with its new id.

    The caller is responsible for the conflict check; the exclusion
    constraint no_reservation_overlap rejects overlaps that slip through
    (psycopg2.errors.ExclusionViolation).
    """
    cur.execute(
        """
        INSERT INTO reservations (room_id, date, start_time, end_time)
        VALUES (%s, %s, %s, %s)
        RETURNING id
        """,
        (room_id, on_date, start_time, end_time),
    )
    row = cur.fetchone()
    return Reservation(
        id=row[0],
        room_id=room_id,
        date=on_date,
        start_time=start_time,
        end_time=end_time,
    )


def lock_reservation(cur: PgCursor, reservation_id: int) -> bool:
    """Lock a reservation row (FOR UPDATE).

    Returns:
        True if the reservation exists, False otherwise.
    """
    row = for_update(cur, "SELECT id FROM reservations WHERE id = %s", (reservation_id,))
    return row is not None


def delete_reservation(cur: PgCursor, reservation_id: int) -> int:
    """Delete a reservation row. Returns the number of rows deleted."""
    cur.execute("DELETE FROM reservations WHERE id = %s", (reservation_id,))
    return cur.rowcount


def list_reservations(
    cur: PgCursor,
    *,
    room_name: str | None = None,
    on_date: date | None = None,
) -> list[ReservationView]:
    """List reservations joined with room names.

    Ordered by date then start time when filtering on a room, otherwise by
    room name first.
    """
    conditions: list[str] = []
    params: list = []

    if room_name is not None:
        conditions.append("ro.name = %s")
        params.append(room_name)

    if on_date is not None:
        conditions.append("r.date = %s")
        params.append(on_date)

    where_clause = f"WHERE {' AND '.join(conditions)}" if conditions else ""
    order_by = "r.date, r.start_time" if room_name is not None else "ro.name, r.date, r.start_time"

    cur.execute(
        f"""
        SELECT r.id, ro.name, r.date, r.start_time, r.end_time
        FROM reservations r
        INNER JOIN rooms ro ON r.room_id = ro.id
        {where_clause}
        ORDER BY {order_by}
        """,
        params,
    )
    return [
        ReservationView(
            id=row[0],
            room_name=row[1],
            date=row[2],
            start_time=row[3],
            end_time=row[4],
        )
        for row in cur.fetchall()
    ]

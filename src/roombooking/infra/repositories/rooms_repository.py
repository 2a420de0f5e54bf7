"""Rooms repository - read access to the room directory.

Rooms are reference data; this service never creates or deletes them
(see roombooking.operations.seed_rooms for seeding).
"""

from psycopg2.extensions import cursor as PgCursor

from roombooking.domain.models import Room
from roombooking.infra.db import fetchone, for_update


def list_rooms(cur: PgCursor) -> list[Room]:
    """Return every room in directory order (by id)."""
    cur.execute("SELECT id, name, capacity FROM rooms ORDER BY id")
    return [Room(id=row[0], name=row[1], capacity=row[2]) for row in cur.fetchall()]


def get_room_id_by_name(cur: PgCursor, name: str, *, lock: bool = False) -> int | None:
    """Resolve a room name to its id.

    Args:
        cur: Database cursor.
        name: Exact room name.
        lock: If True, lock the room row (FOR UPDATE) until the transaction
            ends. Concurrent bookings of the same room then serialize.

    Returns:
        Room id, or None if no room has that name.
    """
    query = "SELECT id FROM rooms WHERE name = %s"
    row = for_update(cur, query, (name,)) if lock else fetchone(cur, query, (name,))
    return row[0] if row is not None else None

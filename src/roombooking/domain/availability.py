"""Availability query - rooms free at a given date and time.

Every query checks a fixed one-hour slot starting at the requested time
(see parsing.availability_window).
"""

from __future__ import annotations

from roombooking.domain.models import Room
from roombooking.domain.parsing import availability_window, parse_date, parse_time
from roombooking.domain.room_conflict import is_conflicting
from roombooking.infra.db import Storage
from roombooking.infra.repositories.rooms_repository import list_rooms


def list_all_rooms(storage: Storage) -> list[Room]:
    """Return the whole room directory."""
    with storage.txn() as cur:
        return list_rooms(cur)


def list_available_rooms(storage: Storage, *, date: str, time: str) -> list[Room]:
    """List rooms with no reservation overlapping the slot at date/time.

    Args:
        storage: Storage handle.
        date: Calendar date, YYYY-MM-DD.
        time: Slot start, HH:MM.

    Returns:
        Free rooms in directory order. Empty when nothing is free.

    Raises:
        ValidationError: Malformed date or time.
        StorageError: The store is unreachable or a query failed.
    """
    on_date = parse_date(date)
    start, end = availability_window(on_date, parse_time(time))

    with storage.txn() as cur:
        return [
            room
            for room in list_rooms(cur)
            if not is_conflicting(cur, room_id=room.id, on_date=on_date, start=start, end=end)
        ]

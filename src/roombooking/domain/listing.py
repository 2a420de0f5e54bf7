"""Reservation listing filtered by room name and/or date."""

from __future__ import annotations

from roombooking.domain.models import ReservationView
from roombooking.domain.parsing import parse_date
from roombooking.infra.db import Storage
from roombooking.infra.repositories import reservations_repository


def list_reservations(
    storage: Storage,
    *,
    room_name: str | None = None,
    date: str | None = None,
) -> list[ReservationView]:
    """List reservations, optionally filtered.

    Empty-string filters count as absent. With a room filter results are
    ordered by date and start time, otherwise by room name first.

    Raises:
        ValidationError: Malformed date filter.
        StorageError: The store is unreachable or a query failed.
    """
    room_filter = room_name or None
    date_filter = parse_date(date) if date else None

    with storage.txn() as cur:
        return reservations_repository.list_reservations(
            cur, room_name=room_filter, on_date=date_filter
        )

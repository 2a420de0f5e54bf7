"""Error kinds raised by the booking core.

Each kind maps to a distinct HTTP status in the API layer:
ValidationError -> 422, NotFoundError -> 404, ConflictError -> 409,
StorageError -> 503.
"""

from __future__ import annotations

from datetime import date, time


class BookingError(Exception):
    """Base class for all booking errors."""

    code = "booking_error"


class ValidationError(BookingError):
    """Raised when user input is malformed (date, time, interval)."""

    code = "validation_error"


class NotFoundError(BookingError):
    """Raised when a referenced entity does not exist."""

    code = "not_found"


class RoomNotFoundError(NotFoundError):
    """Raised when a room name does not resolve to a room."""

    code = "room_not_found"

    def __init__(self, room_name: str) -> None:
        self.room_name = room_name
        super().__init__(f"Room '{room_name}' not found")


class ReservationNotFoundError(NotFoundError):
    """Raised when a reservation id does not exist."""

    code = "reservation_not_found"

    def __init__(self, reservation_id: int) -> None:
        self.reservation_id = reservation_id
        super().__init__(f"Reservation {reservation_id} not found")


class ConflictError(BookingError):
    """Raised when a requested interval overlaps an existing reservation."""

    code = "conflict"

    def __init__(
        self,
        room_id: int,
        on_date: date,
        start: time,
        end: time,
        conflicting_reservation_id: int | None = None,
    ) -> None:
        self.room_id = room_id
        self.on_date = on_date
        self.start = start
        self.end = end
        self.conflicting_reservation_id = conflicting_reservation_id
        super().__init__(
            f"Room {room_id} is not available on {on_date.isoformat()} "
            f"from {start.strftime('%H:%M')} to {end.strftime('%H:%M')}"
        )


class StorageError(BookingError):
    """Raised when the underlying store is unreachable or a query fails."""

    code = "storage_error"

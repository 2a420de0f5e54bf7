"""Booking data models.

Rows are converted to these frozen dataclasses at the repository boundary.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import date, time
from typing import Any


def _hhmm(value: time) -> str:
    return value.strftime("%H:%M")


@dataclass(frozen=True)
class Room:
    """A bookable room. Reference data, seeded outside this service."""

    id: int
    name: str
    capacity: int

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class Reservation:
    """A confirmed booking of one room over a half-open [start, end) interval."""

    id: int
    room_id: int
    date: date
    start_time: time
    end_time: time

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "room_id": self.room_id,
            "date": self.date.isoformat(),
            "start_time": _hhmm(self.start_time),
            "end_time": _hhmm(self.end_time),
        }


@dataclass(frozen=True)
class ReservationView:
    """Reservation joined with its room's display name (listing result)."""

    id: int
    room_name: str
    date: date
    start_time: time
    end_time: time

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "room_name": self.room_name,
            "date": self.date.isoformat(),
            "start_time": _hhmm(self.start_time),
            "end_time": _hhmm(self.end_time),
        }

"""Tests for the reservation listing (filters, join, ordering)."""

from datetime import date, time

import pytest

from roombooking.domain.errors import ValidationError
from roombooking.domain.listing import list_reservations
from roombooking.domain.models import ReservationView

_ROWS = [
    (1, "Salle A", date(2025, 3, 10), time(9, 0), time(10, 0)),
    (2, "Salle B", date(2025, 3, 10), time(11, 0), time(12, 0)),
]


def _query_and_params(cur):
    query, params = cur.execute.call_args[0]
    return " ".join(query.split()), params


class TestFilters:
    def test_no_filter(self, storage, cur):
        cur.fetchall.return_value = _ROWS

        result = list_reservations(storage)

        query, params = _query_and_params(cur)
        assert "WHERE" not in query
        assert query.endswith("ORDER BY ro.name, r.date, r.start_time")
        assert params == []
        assert result == [
            ReservationView(1, "Salle A", date(2025, 3, 10), time(9, 0), time(10, 0)),
            ReservationView(2, "Salle B", date(2025, 3, 10), time(11, 0), time(12, 0)),
        ]

    def test_room_only(self, storage, cur):
        cur.fetchall.return_value = _ROWS[:1]

        list_reservations(storage, room_name="Salle A")

        query, params = _query_and_params(cur)
        assert "WHERE ro.name = %s" in query
        assert "r.date = %s" not in query
        assert query.endswith("ORDER BY r.date, r.start_time")
        assert params == ["Salle A"]

    def test_date_only(self, storage, cur):
        cur.fetchall.return_value = _ROWS

        list_reservations(storage, date="2025-03-10")

        query, params = _query_and_params(cur)
        assert "WHERE r.date = %s" in query
        assert "ro.name = %s" not in query
        assert query.endswith("ORDER BY ro.name, r.date, r.start_time")
        assert params == [date(2025, 3, 10)]

    def test_room_and_date(self, storage, cur):
        cur.fetchall.return_value = []

        assert list_reservations(storage, room_name="Salle B", date="2025-03-10") == []

        query, params = _query_and_params(cur)
        assert "WHERE ro.name = %s AND r.date = %s" in query
        assert query.endswith("ORDER BY r.date, r.start_time")
        assert params == ["Salle B", date(2025, 3, 10)]

    def test_empty_strings_mean_no_filter(self, storage, cur):
        cur.fetchall.return_value = []

        list_reservations(storage, room_name="", date="")

        query, params = _query_and_params(cur)
        assert "WHERE" not in query
        assert params == []

    def test_join_with_rooms(self, storage, cur):
        cur.fetchall.return_value = []

        list_reservations(storage)

        query, _ = _query_and_params(cur)
        assert "INNER JOIN rooms ro ON r.room_id = ro.id" in query


class TestValidation:
    def test_invalid_date_filter_never_reaches_storage(self, storage):
        with pytest.raises(ValidationError):
            list_reservations(storage, date="2024-13-40")

        assert storage.txn_calls == 0


class TestSerialization:
    def test_view_to_dict(self):
        view = ReservationView(3, "Salle C", date(2025, 1, 2), time(8, 5), time(9, 0))

        assert view.to_dict() == {
            "id": 3,
            "room_name": "Salle C",
            "date": "2025-01-02",
            "start_time": "08:05",
            "end_time": "09:00",
        }

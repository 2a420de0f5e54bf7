"""Tests for the availability query."""

from datetime import time

import pytest

from roombooking.domain.availability import list_all_rooms, list_available_rooms
from roombooking.domain.errors import StorageError, ValidationError
from roombooking.domain.models import Room

from .helpers import BrokenStorage

_ROOMS = [(1, "Salle A", 4), (2, "Salle B", 8), (3, "Salle C", 12)]


class TestListAvailableRooms:
    def test_excludes_only_conflicting_rooms(self, storage, cur):
        cur.fetchall.return_value = _ROOMS
        # Per room conflict check: A free, B busy, C free
        cur.fetchone.side_effect = [None, (10, time(9, 0), time(10, 0)), None]

        rooms = list_available_rooms(storage, date="2025-03-10", time="09:30")

        assert rooms == [Room(1, "Salle A", 4), Room(3, "Salle C", 12)]

    def test_checks_one_hour_slot(self, storage, cur):
        cur.fetchall.return_value = [(1, "Salle A", 4)]
        cur.fetchone.return_value = None

        list_available_rooms(storage, date="2025-03-10", time="09:30")

        _, params = cur.execute.call_args_list[-1][0]
        # (room_id, date, slot_end, slot_start)
        assert params[2] == time(10, 30)
        assert params[3] == time(9, 30)

    def test_all_rooms_busy_returns_empty(self, storage, cur):
        cur.fetchall.return_value = _ROOMS[:2]
        cur.fetchone.return_value = (10, time(9, 0), time(10, 0))

        assert list_available_rooms(storage, date="2025-03-10", time="09:00") == []

    def test_no_rooms_at_all_returns_empty(self, storage, cur):
        cur.fetchall.return_value = []

        assert list_available_rooms(storage, date="2025-03-10", time="09:00") == []
        cur.fetchone.assert_not_called()

    @pytest.mark.parametrize("date,slot", [("2024-13-40", "09:00"), ("2025-03-10", "25:99")])
    def test_invalid_input_never_reaches_storage(self, storage, date, slot):
        with pytest.raises(ValidationError):
            list_available_rooms(storage, date=date, time=slot)

        assert storage.txn_calls == 0

    def test_storage_error_propagates(self):
        with pytest.raises(StorageError):
            list_available_rooms(BrokenStorage(), date="2025-03-10", time="09:00")


class TestListAllRooms:
    def test_returns_directory_in_order(self, storage, cur):
        cur.fetchall.return_value = _ROOMS

        rooms = list_all_rooms(storage)

        assert [r.name for r in rooms] == ["Salle A", "Salle B", "Salle C"]
        assert "ORDER BY id" in cur.execute.call_args[0][0]

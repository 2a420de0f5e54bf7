"""Shared test helpers for the booking tests.

These are NOT fixtures - they are regular functions and classes that can be
imported by conftest.py and individual test files.
"""

from __future__ import annotations

from contextlib import contextmanager
from unittest.mock import MagicMock

from roombooking.domain.errors import StorageError


class FakeStorage:
    """Storage stand-in whose transactions all yield the same mocked cursor."""

    def __init__(self, cur: MagicMock | None = None) -> None:
        self.cur = cur if cur is not None else MagicMock()
        self.txn_calls = 0
        self.closed = False

    @contextmanager
    def txn(self):
        self.txn_calls += 1
        yield self.cur

    def close(self) -> None:
        self.closed = True


class BrokenStorage(FakeStorage):
    """Storage whose every transaction fails as if the database were down."""

    @contextmanager
    def txn(self):
        self.txn_calls += 1
        raise StorageError("Storage unavailable")
        yield self.cur  # pragma: no cover

"""Shared pytest fixtures for the booking tests."""
import sys
sys.dont_write_bytecode = True

from unittest.mock import MagicMock  # noqa: E402

import pytest  # noqa: E402

from roombooking.observability.logging import configure_logging  # noqa: E402

from .helpers import FakeStorage  # noqa: E402


@pytest.fixture
def cur():
    """Mocked psycopg2 cursor."""
    return MagicMock()


@pytest.fixture
def storage(cur):
    """Fake storage handle yielding the mocked cursor."""
    return FakeStorage(cur)


@pytest.fixture
def booking_caplog(caplog):
    """caplog attached to the package logger, which does not propagate to root."""
    logger = configure_logging()
    logger.addHandler(caplog.handler)
    try:
        yield caplog
    finally:
        logger.removeHandler(caplog.handler)

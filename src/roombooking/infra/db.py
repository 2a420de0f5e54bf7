"""Database access layer using psycopg2.

Provides:
- Storage: pooled storage handle owned by the composition root
- get_conn(): Get a standalone connection from the configured settings
- txn(): Context manager for short, safe transactions
- fetchone(): Query helper
- for_update(): SELECT ... FOR UPDATE helper
"""

from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Any, Iterator, Sequence

import psycopg2
from psycopg2.extensions import connection as PgConnection, cursor as PgCursor
from psycopg2.pool import ThreadedConnectionPool

from roombooking.domain.errors import StorageError
from roombooking.infra.settings import DatabaseSettings, load_database_settings
from roombooking.observability.logging import get_logger

logger = get_logger(__name__)


def get_conn(settings: DatabaseSettings | None = None) -> PgConnection:
    """Get a new database connection.

    Args:
        settings: Connection settings. Resolved from the environment if None.

    Returns:
        psycopg2 connection object.

    Raises:
        RuntimeError: If no database configuration is available.
        psycopg2.Error: On connection failure.
    """
    if settings is None:
        settings = load_database_settings()
    return psycopg2.connect(settings.dsn, **settings.connect_kwargs())


@contextmanager
def txn(conn: PgConnection | None = None) -> Iterator[PgCursor]:
    """Context manager for a short, safe transaction.

    If conn is None, creates a new connection that is closed on exit.
    Commits on successful exit, rolls back on exception.

    Example:
        with txn(conn) as cur:
            cur.execute("DELETE FROM reservations WHERE id = %s", (1,))
    """
    owns_conn = conn is None
    if owns_conn:
        conn = get_conn()

    try:
        with conn.cursor() as cur:
            yield cur
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        if owns_conn:
            conn.close()


class Storage:
    """Pooled handle on the reservation store.

    Created once by the composition root and passed explicitly to every
    domain operation. The pool is opened lazily on first use so that
    constructing the handle never touches the network.

    ThreadedConnectionPool.getconn() fails immediately when every connection
    is checked out; a semaphore sized to pool_max makes callers wait for a
    free connection instead.
    """

    def __init__(self, settings: DatabaseSettings | None = None) -> None:
        self._settings = settings
        self._pool: ThreadedConnectionPool | None = None
        self._slots: threading.BoundedSemaphore | None = None
        self._lock = threading.Lock()

    def _get_pool(self) -> tuple[ThreadedConnectionPool, threading.BoundedSemaphore]:
        with self._lock:
            if self._pool is None:
                settings = self._settings or load_database_settings()
                try:
                    self._pool = ThreadedConnectionPool(
                        settings.pool_min,
                        settings.pool_max,
                        settings.dsn,
                        **settings.connect_kwargs(),
                    )
                except psycopg2.Error as exc:
                    logger.exception("database pool initialisation failed")
                    raise StorageError("Storage unavailable") from exc
                self._slots = threading.BoundedSemaphore(settings.pool_max)
                self._settings = settings
            return self._pool, self._slots

    @contextmanager
    def txn(self) -> Iterator[PgCursor]:
        """Run a transaction on a pooled connection.

        Blocks while all pool_max connections are in use. Database errors
        are rolled back and re-raised as StorageError; any other exception
        is rolled back and propagated unchanged.
        """
        pool, slots = self._get_pool()
        slots.acquire()
        try:
            conn = pool.getconn()
        except psycopg2.Error as exc:
            slots.release()
            logger.exception("could not acquire database connection")
            raise StorageError("Storage unavailable") from exc

        try:
            with txn(conn) as cur:
                yield cur
        except psycopg2.Error as exc:
            logger.exception(
                "storage operation failed",
                extra={"extra_fields": {"pgcode": getattr(exc, "pgcode", None)}},
            )
            raise StorageError("Storage operation failed") from exc
        finally:
            pool.putconn(conn, close=bool(conn.closed))
            slots.release()

    def close(self) -> None:
        """Close every pooled connection."""
        with self._lock:
            if self._pool is not None:
                self._pool.closeall()
                self._pool = None
                self._slots = None


def fetchone(
    cur: PgCursor,
    query: str,
    params: Sequence[Any] | None = None,
) -> tuple[Any, ...] | None:
    """Execute query and fetch one row (None if no results)."""
    cur.execute(query, params)
    return cur.fetchone()


def for_update(
    cur: PgCursor,
    query: str,
    params: Sequence[Any] | None = None,
) -> tuple[Any, ...] | None:
    """Execute SELECT ... FOR UPDATE and fetch one row.

    Use within a transaction to lock the selected row until commit/rollback.
    """
    full_query = query.rstrip().rstrip(";") + " FOR UPDATE"
    cur.execute(full_query, params)
    return cur.fetchone()

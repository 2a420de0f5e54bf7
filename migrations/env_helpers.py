"""Database URL helpers for Alembic migrations.

Extracted so they can be tested without triggering alembic.context at import time.
"""

from __future__ import annotations

from psycopg2.extensions import parse_dsn
from sqlalchemy.engine import URL

from roombooking.infra.settings import load_database_settings


def dsn_to_url(dsn: str, password: str | None = None) -> str:
    """Convert a libpq DSN (key=value or postgres:// URL) to a SQLAlchemy URL.

    Unix-socket hosts (host=/path) are passed as a query parameter.
    password is used only when the DSN has none.
    """
    params = parse_dsn(dsn)
    if password and not params.get("password"):
        params["password"] = password

    host = params.get("host") or None
    query: dict[str, str] = {}
    if host and host.startswith("/"):
        query["host"] = host
        host = None

    url = URL.create(
        "postgresql+psycopg2",
        username=params.get("user") or None,
        password=params.get("password") or None,
        host=host,
        port=int(params["port"]) if params.get("port") else None,
        database=params.get("dbname") or None,
        query=query,
    )
    return url.render_as_string(hide_password=False)


def get_database_url() -> str:
    """SQLAlchemy URL for the configured reservation store."""
    settings = load_database_settings()
    return dsn_to_url(settings.dsn, settings.password)

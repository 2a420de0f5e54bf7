"""Runtime configuration.

Database connection settings come from the environment:

1. DATABASE_URL (libpq DSN or postgres:// URL), with DB_PASSWORD injected
   when the DSN carries no password.
2. Otherwise a JSON config file (ROOMBOOKING_CONFIG, default config.json)
   with dbUser / dbPassword / dbName and optional dbHost / dbPort.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from psycopg2.extensions import make_dsn, parse_dsn

DEFAULT_CONFIG_FILE = "config.json"


@dataclass(frozen=True)
class DatabaseSettings:
    """Connection settings for the reservation store."""

    dsn: str
    password: str | None = None
    pool_min: int = 1
    pool_max: int = 10

    def connect_kwargs(self) -> dict[str, str]:
        """Extra keyword arguments for psycopg2.connect().

        DB_PASSWORD only applies when the DSN itself has no password.
        """
        if not self.password or parse_dsn(self.dsn).get("password"):
            return {}
        return {"password": self.password}


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise RuntimeError(f"{name} must be an integer, got {raw!r}")


def load_config_file(path: str | Path) -> dict[str, Any]:
    """Read the JSON config file.

    Raises:
        RuntimeError: If the file is not a JSON object or misses required keys.
    """
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise RuntimeError(f"Config file {path} must contain a JSON object")
    missing = [k for k in ("dbUser", "dbName") if not data.get(k)]
    if missing:
        raise RuntimeError(f"Config file {path} is missing: {', '.join(missing)}")
    return data


def dsn_from_config(config: dict[str, Any]) -> str:
    """Build a libpq DSN from the config file keys."""
    params: dict[str, Any] = {
        "user": config["dbUser"],
        "dbname": config["dbName"],
        "host": config.get("dbHost", "localhost"),
    }
    if config.get("dbPassword"):
        params["password"] = config["dbPassword"]
    if config.get("dbPort"):
        params["port"] = config["dbPort"]
    return make_dsn(**params)


def load_database_settings() -> DatabaseSettings:
    """Resolve database settings from the environment.

    Raises:
        RuntimeError: If neither DATABASE_URL nor a config file is available.
    """
    dsn = os.environ.get("DATABASE_URL")
    if not dsn:
        config_path = Path(os.environ.get("ROOMBOOKING_CONFIG", DEFAULT_CONFIG_FILE))
        if not config_path.is_file():
            raise RuntimeError(
                "DATABASE_URL environment variable not set "
                f"and config file {config_path} not found"
            )
        dsn = dsn_from_config(load_config_file(config_path))

    pool_min = _env_int("DB_POOL_MIN", 1)
    pool_max = _env_int("DB_POOL_MAX", 10)
    if pool_min < 0 or pool_max < max(pool_min, 1):
        raise RuntimeError(
            f"Invalid pool bounds DB_POOL_MIN={pool_min} DB_POOL_MAX={pool_max}"
        )

    return DatabaseSettings(
        dsn=dsn,
        password=os.environ.get("DB_PASSWORD") or None,
        pool_min=pool_min,
        pool_max=pool_max,
    )

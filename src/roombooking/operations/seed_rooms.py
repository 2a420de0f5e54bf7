"""Seed the room directory (idempotent).

Usage:
    roombooking-seed-rooms [ROOMS_FILE]

ROOMS_FILE (default: SEED_ROOMS_FILE env, then rooms.json) holds a JSON list
of {"name": str, "capacity": int}. Existing room names are left untouched.
"""

import json
import os
import sys
from pathlib import Path
from typing import Any

from roombooking.infra.db import txn


def load_rooms(path: str | Path) -> list[tuple[str, int]]:
    """Read and validate the rooms file.

    Raises:
        RuntimeError: If an entry has no name or a non-positive capacity.
    """
    entries: Any = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(entries, list):
        raise RuntimeError(f"{path} must contain a JSON list")

    rooms: list[tuple[str, int]] = []
    for i, entry in enumerate(entries):
        name = str(entry.get("name", "")).strip() if isinstance(entry, dict) else ""
        capacity = entry.get("capacity") if isinstance(entry, dict) else None
        if not name:
            raise RuntimeError(f"room #{i} has no name")
        if not isinstance(capacity, int) or isinstance(capacity, bool) or capacity <= 0:
            raise RuntimeError(f"room {name!r} needs a positive integer capacity")
        rooms.append((name, capacity))
    return rooms


def seed_rooms(cur, rooms: list[tuple[str, int]]) -> int:
    """Insert rooms, skipping names that already exist. Returns rows inserted."""
    inserted = 0
    for name, capacity in rooms:
        cur.execute(
            """
            INSERT INTO rooms (name, capacity)
            VALUES (%s, %s)
            ON CONFLICT (name) DO NOTHING
            """,
            (name, capacity),
        )
        inserted += cur.rowcount
    return inserted


def main(argv: list[str] | None = None) -> int:
    args = sys.argv[1:] if argv is None else argv
    path = args[0] if args else os.getenv("SEED_ROOMS_FILE", "rooms.json")

    rooms = load_rooms(path)
    with txn() as cur:
        inserted = seed_rooms(cur, rooms)

    print("seed ok:", {"file": str(path), "rooms": len(rooms), "inserted": inserted})
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

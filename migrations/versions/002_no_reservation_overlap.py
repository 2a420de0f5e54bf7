"""DB-level exclusion constraint against overlapping reservations.

Second layer behind the application-level conflict check: even if two
concurrent bookings both pass the check, only one insert can commit.

Revision ID: 002_no_reservation_overlap
Revises: 001_initial_schema
Create Date: 2026-10-19
"""
from __future__ import annotations

from pathlib import Path

from alembic import op

revision = "002_no_reservation_overlap"
down_revision = "001_initial_schema"
branch_labels = None
depends_on = None

_SQL_FILE = Path(__file__).resolve().parent.parent / "sql" / "002_no_reservation_overlap.sql"


def upgrade() -> None:
    op.get_bind().exec_driver_sql(_SQL_FILE.read_text(encoding="utf-8"))


def downgrade() -> None:
    op.execute("ALTER TABLE reservations DROP CONSTRAINT IF EXISTS no_reservation_overlap")
    # btree_gist is kept: other indexes may depend on it.

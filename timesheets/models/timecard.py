"""Timecard ORM — persists one timecard aggregate per row.

Invariants:
    - id is the aggregate's own UUID (assigned by the core, not the database)
    - employee and opened are written once on insert
    - lines / transitions hold the snapshot lists from core/timecard_snapshot.py
    - No status column: status is re-derived from transitions on every load
    - is_active=False marks a deleted timecard; the row is never physically removed

Design Decisions:
    - JSON columns for lines and transitions: the aggregate is always loaded and
      saved as a whole, nothing queries into individual lines
    - employee/opened/is_active as real columns: catalog listing filters and sorts on them
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Boolean, DateTime, Integer, JSON, String
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from timesheets.db.base import Base


class TimecardRecord(Base):
    """Timecard aggregate row — lines and ledger embedded as JSON."""
    __tablename__ = "timecards"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True,
    )
    employee: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    opened: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    is_active: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True,
    )
    version: Mapped[str] = mapped_column(
        String(20), nullable=False, default="timecard-0.1",
    )
    lines: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    transitions: Mapped[list] = mapped_column(
        JSON, nullable=False, default=list,
    )

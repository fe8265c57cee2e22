"""Timecard Repository — SQLAlchemy implementation of core TimecardRepository.

Invariants:
    - Aggregates are saved and loaded whole (row <-> snapshot dict)
    - find() returns deleted timecards too; only list_active() hides them
    - remove() never issues a DELETE: it clears is_active and keeps the row
    - Every write commits: one command = one unit of work

Design Decisions:
    - Snapshot codec from core/timecard_snapshot.py: the ORM row never holds
      domain objects, and the core never sees ORM rows
    - Datetimes read back without tzinfo (SQLite) are treated as UTC
"""

import logging
from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from timesheets.core.domain_types import TimecardId
from timesheets.core.errors import ErrorContext, ResourceNotFoundError
from timesheets.core.timecard import TimecardAggregate
from timesheets.core.timecard_snapshot import (
    timecard_from_snapshot, timecard_to_snapshot,
)
from timesheets.models.timecard import TimecardRecord

logger = logging.getLogger(__name__)


def _as_utc(value: datetime) -> datetime:
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


def _to_aggregate(record: TimecardRecord) -> TimecardAggregate:
    return timecard_from_snapshot({
        "id": str(record.id),
        "employee": record.employee,
        "opened": _as_utc(record.opened).isoformat(),
        "version": record.version,
        "lines": record.lines,
        "transitions": record.transitions,
    })


class SqlTimecardRepository:
    """Timecard persistence over an AsyncSession."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def find(self, timecard_id: TimecardId) -> TimecardAggregate | None:
        record = await self.db.get(TimecardRecord, timecard_id)
        return _to_aggregate(record) if record else None

    async def add(self, timecard: TimecardAggregate) -> None:
        snapshot = timecard_to_snapshot(timecard)
        self.db.add(TimecardRecord(
            id=timecard.id,
            employee=timecard.employee,
            opened=timecard.opened,
            is_active=timecard.is_active,
            version=timecard.version,
            lines=snapshot["lines"],
            transitions=snapshot["transitions"],
        ))
        await self.db.commit()

    async def update(self, timecard: TimecardAggregate) -> None:
        record = await self._get_record(timecard.id, "update")
        snapshot = timecard_to_snapshot(timecard)
        record.lines = snapshot["lines"]
        record.transitions = snapshot["transitions"]
        record.is_active = timecard.is_active
        await self.db.commit()

    async def remove(self, timecard_id: TimecardId) -> None:
        record = await self._get_record(timecard_id, "remove")
        record.is_active = False
        await self.db.commit()
        logger.info(
            f"Timecard {timecard_id} removed from active catalog",
            extra={"timecard_id": str(timecard_id)},
        )

    async def list_active(self) -> list[TimecardAggregate]:
        result = await self.db.execute(
            select(TimecardRecord)
            .where(TimecardRecord.is_active.is_(True))
            .order_by(TimecardRecord.opened.asc()),
        )
        return [_to_aggregate(r) for r in result.scalars().all()]

    async def _get_record(
        self, timecard_id: TimecardId, operation: str,
    ) -> TimecardRecord:
        record = await self.db.get(TimecardRecord, timecard_id)
        if record is None:
            raise ResourceNotFoundError(
                "Timecard", str(timecard_id),
                ErrorContext(timecard_id=str(timecard_id), operation=operation),
            )
        return record

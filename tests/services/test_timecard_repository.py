"""SqlTimecardRepository — tests against in-memory SQLite.

Tests cover:
    - add/find round-trips the aggregate (status derived on load)
    - update persists new lines and transitions
    - remove() soft-deletes: find() still works, list_active() hides it
    - list_active() is ordered by opened
    - Unknown ids: find() -> None, update()/remove() -> ResourceNotFoundError
"""

from datetime import date
from uuid import uuid4

import pytest

from timesheets.core.domain_types import PersonId, TimecardId, TimecardStatus
from timesheets.core.errors import ResourceNotFoundError
from timesheets.core.lines import LineFields
from timesheets.core.timecard import TimecardAggregate
from timesheets.core.transitions import Deletion, Submittal
from timesheets.infrastructure.timecard_repository import SqlTimecardRepository
from timesheets.models.timecard import TimecardRecord

EMPLOYEE = PersonId(42)


async def test_add_then_find(test_db, clock):
    repo = SqlTimecardRepository(test_db)
    timecard = TimecardAggregate.create(EMPLOYEE, clock=clock)
    await repo.add(timecard)

    loaded = await repo.find(timecard.id)
    assert loaded.id == timecard.id
    assert loaded.employee == EMPLOYEE
    assert loaded.status == TimecardStatus.DRAFT
    assert loaded.opened == timecard.opened


async def test_find_unknown_returns_none(test_db):
    assert await SqlTimecardRepository(test_db).find(TimecardId(uuid4())) is None


async def test_update_persists_lines_and_transitions(test_db, clock):
    repo = SqlTimecardRepository(test_db)
    timecard = TimecardAggregate.create(EMPLOYEE, clock=clock)
    await repo.add(timecard)

    line = timecard.add_line(date(2026, 3, 2), LineFields("atlas", 8.0, task="build"))
    timecard.submit(Submittal(EMPLOYEE))
    await repo.update(timecard)

    loaded = await repo.find(timecard.id)
    assert loaded.status == TimecardStatus.SUBMITTED
    assert loaded.has_line(line.id)
    assert loaded.lines.get(line.id).fields.task == "build"
    assert len(loaded.transitions) == 2


async def test_remove_is_soft_delete(test_db, clock):
    repo = SqlTimecardRepository(test_db)
    timecard = TimecardAggregate.create(EMPLOYEE, clock=clock)
    await repo.add(timecard)
    timecard.delete(Deletion(EMPLOYEE))
    await repo.update(timecard)
    await repo.remove(timecard.id)

    assert await repo.list_active() == []
    loaded = await repo.find(timecard.id)
    assert loaded.status == TimecardStatus.DELETED
    record = await test_db.get(TimecardRecord, timecard.id)
    assert record.is_active is False


async def test_list_active_ordered_by_opened(test_db, clock):
    repo = SqlTimecardRepository(test_db)
    first = TimecardAggregate.create(EMPLOYEE, clock=clock)
    second = TimecardAggregate.create(PersonId(7), clock=clock)
    await repo.add(second)
    await repo.add(first)
    assert [tc.id for tc in await repo.list_active()] == [first.id, second.id]


async def test_update_and_remove_unknown(test_db, clock):
    repo = SqlTimecardRepository(test_db)
    with pytest.raises(ResourceNotFoundError):
        await repo.update(TimecardAggregate.create(EMPLOYEE, clock=clock))
    with pytest.raises(ResourceNotFoundError):
        await repo.remove(TimecardId(uuid4()))

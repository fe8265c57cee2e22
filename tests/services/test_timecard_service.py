"""Timecard Service — tests for command orchestration over a repository.

Tests cover:
    - Unknown ids raise ResourceNotFoundError, never a rule error
    - Successful commands persist; rejected commands persist nothing
    - Delete persists the tombstone, then removes from the active catalog
    - Queries: ordered lines, chronological transitions, transition by kind
"""

from datetime import date
from uuid import uuid4

import pytest

from timesheets.core.domain_types import DocumentKind, PersonId, TimecardId, TimecardStatus
from timesheets.core.errors import (
    EmptyTimecardError, InvalidStateError, InvalidSubmitterError,
    MissingTransitionError, ResourceNotFoundError,
)
from timesheets.core.lines import LineFields
from timesheets.core.transitions import (
    Approval, Cancellation, Deletion, Returned, Submittal,
)
from timesheets.services.timecard_service import TimecardService

EMPLOYEE = PersonId(42)
APPROVER = PersonId(99)
FIELDS = LineFields(project="atlas", hours=8.0)


@pytest.fixture
def service(memory_repository, clock):
    return TimecardService(memory_repository, clock=clock)


async def test_get_unknown_timecard(service):
    with pytest.raises(ResourceNotFoundError) as exc:
        await service.get(TimecardId(uuid4()))
    assert exc.value.http_status == 404


async def test_commands_on_unknown_timecard_are_not_found(service):
    missing = TimecardId(uuid4())
    with pytest.raises(ResourceNotFoundError):
        await service.submit(missing, Submittal(EMPLOYEE))
    with pytest.raises(ResourceNotFoundError):
        await service.add_line(missing, date(2026, 3, 2), FIELDS)
    with pytest.raises(ResourceNotFoundError):
        await service.delete(missing, Deletion(EMPLOYEE))


async def test_create_persists_draft(service, memory_repository):
    timecard = await service.create(EMPLOYEE)
    loaded = await service.get(timecard.id)
    assert loaded.status == TimecardStatus.DRAFT
    assert loaded.employee == EMPLOYEE
    assert memory_repository.writes == ["add"]


async def test_successful_command_is_persisted(service):
    timecard = await service.create(EMPLOYEE)
    await service.add_line(timecard.id, date(2026, 3, 2), FIELDS)
    await service.submit(timecard.id, Submittal(EMPLOYEE))
    loaded = await service.get(timecard.id)
    assert loaded.status == TimecardStatus.SUBMITTED
    assert loaded.line_count == 1


async def test_rejected_command_persists_nothing(service, memory_repository):
    timecard = await service.create(EMPLOYEE)
    with pytest.raises(EmptyTimecardError):
        await service.submit(timecard.id, Submittal(EMPLOYEE))
    assert memory_repository.writes == ["add"]
    assert (await service.get(timecard.id)).status == TimecardStatus.DRAFT


async def test_self_approval_leaves_timecard_submitted(service):
    timecard = await service.create(EMPLOYEE)
    await service.add_line(timecard.id, date(2026, 3, 2), FIELDS)
    await service.submit(timecard.id, Submittal(EMPLOYEE))
    with pytest.raises(InvalidSubmitterError):
        await service.approve(timecard.id, Approval(EMPLOYEE))
    assert (await service.get(timecard.id)).status == TimecardStatus.SUBMITTED
    await service.approve(timecard.id, Approval(APPROVER))
    assert (await service.get(timecard.id)).status == TimecardStatus.APPROVED


async def test_delete_tombstones_and_removes(service, memory_repository):
    timecard = await service.create(EMPLOYEE)
    await service.cancel(timecard.id, Cancellation(EMPLOYEE))
    await service.delete(timecard.id, Deletion(EMPLOYEE))

    assert memory_repository.writes[-2:] == ["update", "remove"]
    assert not memory_repository.is_active(timecard.id)
    assert await service.list_timecards() == []

    # still addressable by id, but every command is now illegal
    deleted = await service.get(timecard.id)
    assert deleted.status == TimecardStatus.DELETED
    with pytest.raises(InvalidStateError):
        await service.delete(timecard.id, Deletion(EMPLOYEE))


async def test_list_timecards_only_active(service):
    kept = await service.create(EMPLOYEE)
    dropped = await service.create(PersonId(7))
    await service.delete(dropped.id, Deletion(PersonId(7)))
    assert [tc.id for tc in await service.list_timecards()] == [kept.id]


async def test_line_and_transition_queries(service):
    timecard = await service.create(EMPLOYEE)
    later = await service.add_line(timecard.id, date(2026, 3, 4), FIELDS)
    earlier = await service.add_line(timecard.id, date(2026, 3, 2), FIELDS)
    assert [line.id for line in await service.lines(timecard.id)] == [earlier.id, later.id]

    await service.submit(timecard.id, Submittal(EMPLOYEE))
    await service.return_(timecard.id, Returned(APPROVER, reason="wrong project"))
    kinds = [t.document.kind for t in await service.transitions(timecard.id)]
    assert kinds == [DocumentKind.ENTERED, DocumentKind.SUBMITTAL, DocumentKind.RETURNED]

    returned = await service.transition_of(timecard.id, DocumentKind.RETURNED)
    assert returned.document.reason == "wrong project"
    with pytest.raises(MissingTransitionError):
        await service.transition_of(timecard.id, DocumentKind.SUBMITTAL)


async def test_replace_and_update_line(service):
    timecard = await service.create(EMPLOYEE)
    line = await service.add_line(timecard.id, date(2026, 3, 2), FIELDS)
    updated = await service.update_line(
        timecard.id, line.id, date(2026, 3, 2), LineFields("atlas", 4.0),
    )
    assert updated.id == line.id
    replaced = await service.replace_line(
        timecard.id, line.id, date(2026, 3, 3), LineFields("zephyr", 2.0),
    )
    assert replaced.id != line.id
    lines = await service.lines(timecard.id)
    assert [ln.id for ln in lines] == [replaced.id]

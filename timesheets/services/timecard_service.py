"""Timecard Service — one unit of work per command against a timecard aggregate.

Invariants:
    - Every command: find -> one aggregate operation -> persist (only on success)
    - Unknown ids raise ResourceNotFoundError (404), separate from rule errors (409)
    - Rule errors from the aggregate propagate unchanged; nothing is persisted
    - Delete persists the tombstone transition, then removes from the active catalog

Design Decisions:
    - Follows impureim sandwich: IO (repository) wraps the pure aggregate call
    - Depends on the TimecardRepository Protocol so tests can swap storage
"""

import logging
from datetime import date
from typing import Callable, TypeVar

from timesheets.core.domain_types import DocumentKind, LineId, PersonId, TimecardId
from timesheets.core.errors import ErrorContext, ResourceNotFoundError
from timesheets.core.lines import LineFields, TimecardLine
from timesheets.core.repository_protocols import TimecardRepository
from timesheets.core.timecard import Clock, TimecardAggregate, utc_now
from timesheets.core.transitions import (
    Approval, Cancellation, Deletion, Rejection, Returned, Submittal, Transition,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


class TimecardService:
    """Maps commands onto TimecardAggregate operations."""

    def __init__(self, repository: TimecardRepository, clock: Clock = utc_now):
        self.repository = repository
        self.clock = clock

    # ─── Queries ─────────────────────────────────────────────────

    async def list_timecards(self) -> list[TimecardAggregate]:
        return await self.repository.list_active()

    async def get(self, timecard_id: TimecardId) -> TimecardAggregate:
        logger.info(
            f"Looking for timesheet {timecard_id}",
            extra={"timecard_id": str(timecard_id)},
        )
        timecard = await self.repository.find(timecard_id)
        if timecard is None:
            raise ResourceNotFoundError(
                "Timecard", str(timecard_id),
                ErrorContext(timecard_id=str(timecard_id)),
            )
        return timecard

    async def lines(self, timecard_id: TimecardId) -> list[TimecardLine]:
        timecard = await self.get(timecard_id)
        return timecard.ordered_lines()

    async def transitions(self, timecard_id: TimecardId) -> list[Transition]:
        timecard = await self.get(timecard_id)
        return timecard.transitions.all()

    async def transition_of(
        self, timecard_id: TimecardId, kind: DocumentKind,
    ) -> Transition:
        timecard = await self.get(timecard_id)
        return timecard.transition_of(kind)

    # ─── Commands ────────────────────────────────────────────────

    async def create(self, person: PersonId) -> TimecardAggregate:
        timecard = TimecardAggregate.create(person, clock=self.clock)
        logger.info(
            f"Creating timesheet for person {person}",
            extra={"timecard_id": str(timecard.id), "operation": "create"},
        )
        await self.repository.add(timecard)
        return timecard

    async def add_line(
        self, timecard_id: TimecardId, work_date: date, fields: LineFields,
    ) -> TimecardLine:
        return await self._execute(
            timecard_id, "add_line",
            lambda tc: tc.add_line(work_date, fields),
        )

    async def replace_line(
        self,
        timecard_id: TimecardId,
        line_id: LineId,
        work_date: date,
        fields: LineFields,
    ) -> TimecardLine:
        return await self._execute(
            timecard_id, "replace_line",
            lambda tc: tc.replace_line(line_id, work_date, fields),
        )

    async def update_line(
        self,
        timecard_id: TimecardId,
        line_id: LineId,
        work_date: date,
        fields: LineFields,
    ) -> TimecardLine:
        return await self._execute(
            timecard_id, "update_line",
            lambda tc: tc.update_line(line_id, work_date, fields),
        )

    async def submit(self, timecard_id: TimecardId, submittal: Submittal) -> Transition:
        return await self._execute(timecard_id, "submit", lambda tc: tc.submit(submittal))

    async def return_(self, timecard_id: TimecardId, returned: Returned) -> Transition:
        return await self._execute(timecard_id, "return", lambda tc: tc.return_(returned))

    async def approve(self, timecard_id: TimecardId, approval: Approval) -> Transition:
        return await self._execute(timecard_id, "approve", lambda tc: tc.approve(approval))

    async def reject(self, timecard_id: TimecardId, rejection: Rejection) -> Transition:
        return await self._execute(timecard_id, "reject", lambda tc: tc.reject(rejection))

    async def cancel(
        self, timecard_id: TimecardId, cancellation: Cancellation,
    ) -> Transition:
        return await self._execute(
            timecard_id, "cancel", lambda tc: tc.cancel(cancellation),
        )

    async def delete(
        self, timecard_id: TimecardId, deletion: Deletion,
    ) -> TimecardAggregate:
        timecard = await self.get(timecard_id)
        transition = timecard.delete(deletion)
        self._log_transition(timecard, "delete", transition)
        await self.repository.update(timecard)
        await self.repository.remove(timecard.id)
        return timecard

    # ─── Internals ───────────────────────────────────────────────

    async def _execute(
        self,
        timecard_id: TimecardId,
        operation: str,
        command: Callable[[TimecardAggregate], T],
    ) -> T:
        timecard = await self.get(timecard_id)
        result = command(timecard)
        if isinstance(result, Transition):
            self._log_transition(timecard, operation, result)
        await self.repository.update(timecard)
        return result

    @staticmethod
    def _log_transition(
        timecard: TimecardAggregate, operation: str, transition: Transition,
    ) -> None:
        logger.info(
            f"Adding {transition.document.kind.value} transition to timesheet {timecard.id}",
            extra={
                "timecard_id": str(timecard.id),
                "operation": operation,
                "status": transition.transitioned_to.value,
            },
        )

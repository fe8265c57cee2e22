"""Timecard Aggregate — the state machine over a ledger of transitions and a set of lines.

Invariants:
    - The ledger is never empty: create() appends Entered -> Draft
    - Status is derived from the ledger, never assigned
    - Lines mutate only while Draft
    - Submit checks InvalidState before EmptyTimecard; Approve checks InvalidState
      before InvalidSubmitter
    - A rejected command leaves the aggregate untouched
    - occurred_at is monotonically non-decreasing with append order
    - employee, id and opened never change after creation

Design Decisions:
    - Legality is a table (_ALLOWED_FROM) keyed by document kind, so every
      transition goes through one code path (_transition)
    - Clock is injected: timestamps are assigned here, never by callers
    - Delete is a tombstone transition: the aggregate becomes inactive but keeps
      its full history
"""

import uuid
from datetime import date, datetime, timezone
from typing import Callable, Iterable

from timesheets.core.affordances import (
    ActionLink, DocumentLink, actions_for, documents_for,
)
from timesheets.core.domain_types import (
    DocumentKind, LineId, PersonId, TimecardId, TimecardStatus, TIMECARD_VERSION,
)
from timesheets.core.errors import (
    EmptyTimecardError, ErrorContext, InvalidStateError, InvalidSubmitterError,
    LineNotFoundError, MissingTransitionError,
)
from timesheets.core.ledger import TransitionLedger
from timesheets.core.lines import LineFields, LineSet, TimecardLine
from timesheets.core.transitions import (
    Approval, Cancellation, Deletion, Entered, Rejection, Returned, Submittal,
    Transition, TransitionDocument, RESULTING_STATUS,
)

Clock = Callable[[], datetime]

_ALLOWED_FROM: dict[DocumentKind, frozenset[TimecardStatus]] = {
    DocumentKind.SUBMITTAL: frozenset({TimecardStatus.DRAFT}),
    DocumentKind.RETURNED: frozenset({TimecardStatus.SUBMITTED}),
    DocumentKind.APPROVAL: frozenset({TimecardStatus.SUBMITTED}),
    DocumentKind.REJECTION: frozenset({TimecardStatus.SUBMITTED}),
    DocumentKind.CANCELLATION: frozenset({
        TimecardStatus.DRAFT, TimecardStatus.SUBMITTED,
    }),
    DocumentKind.DELETION: frozenset({
        TimecardStatus.DRAFT, TimecardStatus.CANCELLED,
    }),
}


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class TimecardAggregate:
    """One employee's timecard: identity, lines and transition history."""

    def __init__(
        self,
        id: TimecardId,
        employee: PersonId,
        opened: datetime,
        lines: Iterable[TimecardLine] = (),
        transitions: Iterable[Transition] = (),
        clock: Clock = utc_now,
        version: str = TIMECARD_VERSION,
    ):
        self._id = id
        self._employee = employee
        self._opened = opened
        self._clock = clock
        self.version = version
        self.lines = LineSet(clock, lines)
        self.transitions = TransitionLedger(transitions)

    @classmethod
    def create(
        cls,
        employee: PersonId,
        clock: Clock = utc_now,
        timecard_id: TimecardId | None = None,
    ) -> "TimecardAggregate":
        """Open a new Draft timecard for `employee`."""
        opened = clock()
        timecard = cls(
            id=timecard_id or TimecardId(uuid.uuid4()),
            employee=employee,
            opened=opened,
            clock=clock,
        )
        timecard.transitions.append(Transition.of(Entered(person=employee), opened))
        return timecard

    # ─── Identity & derived state ────────────────────────────────

    @property
    def id(self) -> TimecardId:
        return self._id

    @property
    def employee(self) -> PersonId:
        return self._employee

    @property
    def opened(self) -> datetime:
        return self._opened

    @property
    def status(self) -> TimecardStatus:
        return self.transitions.current_status()

    @property
    def is_active(self) -> bool:
        return self.status != TimecardStatus.DELETED

    @property
    def line_count(self) -> int:
        return self.lines.count()

    def has_line(self, line_id: LineId) -> bool:
        return self.lines.contains(line_id)

    def ordered_lines(self) -> list[TimecardLine]:
        return self.lines.ordered()

    def can_be_deleted(self) -> bool:
        return self.status in _ALLOWED_FROM[DocumentKind.DELETION]

    def actions(self) -> list[ActionLink]:
        return actions_for(self.status, self.line_count)

    def documents(self) -> list[DocumentLink]:
        return documents_for(self.status, self.line_count)

    # ─── Line operations (Draft only) ────────────────────────────

    def add_line(self, work_date: date, fields: LineFields) -> TimecardLine:
        self._require_draft("add_line")
        return self.lines.add(work_date, fields)

    def replace_line(
        self, line_id: LineId, work_date: date, fields: LineFields,
    ) -> TimecardLine:
        """Swap a line for a new one. The returned line has a NEW id."""
        self._require_draft("replace_line")
        self._require_line(line_id, "replace_line")
        return self.lines.replace(line_id, work_date, fields)

    def update_line(
        self, line_id: LineId, work_date: date, fields: LineFields,
    ) -> TimecardLine:
        """Edit a line in place. id and recorded are preserved."""
        self._require_draft("update_line")
        self._require_line(line_id, "update_line")
        return self.lines.update(line_id, work_date, fields)

    # ─── Transitions ─────────────────────────────────────────────

    def submit(self, submittal: Submittal) -> Transition:
        self._require_allowed(submittal)
        if self.line_count < 1:
            raise EmptyTimecardError(self._context("submit"))
        return self._append(submittal)

    def return_(self, returned: Returned) -> Transition:
        return self._transition(returned)

    def approve(self, approval: Approval) -> Transition:
        self._require_allowed(approval)
        if approval.person == self.employee:
            raise InvalidSubmitterError(self._context("approve"))
        return self._append(approval)

    def reject(self, rejection: Rejection) -> Transition:
        return self._transition(rejection)

    def cancel(self, cancellation: Cancellation) -> Transition:
        return self._transition(cancellation)

    def delete(self, deletion: Deletion) -> Transition:
        """Tombstone the timecard. Terminal; the history stays intact."""
        return self._transition(deletion)

    def transition_of(self, kind: DocumentKind) -> Transition:
        """Latest transition of `kind`, if it produced the current status."""
        status = self.status
        if status != RESULTING_STATUS[kind]:
            raise MissingTransitionError(self._context(f"get_{kind.value}"))
        transition = self.transitions.latest_of_status(status)
        if transition is None or transition.document.kind != kind:
            raise MissingTransitionError(self._context(f"get_{kind.value}"))
        return transition

    # ─── Internals ───────────────────────────────────────────────

    def _transition(self, document: TransitionDocument) -> Transition:
        self._require_allowed(document)
        return self._append(document)

    def _append(self, document: TransitionDocument) -> Transition:
        transition = Transition.of(document, self._stamp())
        self.transitions.append(transition)
        return transition

    def _stamp(self) -> datetime:
        now = self._clock()
        latest = self.transitions.latest()
        if latest is not None and latest.occurred_at > now:
            return latest.occurred_at
        return now

    def _require_allowed(self, document: TransitionDocument) -> None:
        if self.status not in _ALLOWED_FROM[document.kind]:
            raise InvalidStateError(self._context(document.kind.value))

    def _require_draft(self, operation: str) -> None:
        if self.status != TimecardStatus.DRAFT:
            raise InvalidStateError(self._context(operation))

    def _require_line(self, line_id: LineId, operation: str) -> None:
        if not self.lines.contains(line_id):
            raise LineNotFoundError(
                self._context(operation, line_id=str(line_id)),
            )

    def _context(self, operation: str, line_id: str | None = None) -> ErrorContext:
        return ErrorContext(
            timecard_id=str(self.id), line_id=line_id, operation=operation,
        )

    def __repr__(self) -> str:
        return (
            f"TimecardAggregate(id={self.id}, employee={self.employee}, "
            f"status={self.status.value}, lines={self.line_count})"
        )

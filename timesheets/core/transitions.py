"""Transition Documents — the closed set of causal documents behind every status change.

Invariants:
    - Exactly seven document variants; each carries the acting person
    - Every variant maps to exactly one resulting TimecardStatus (RESULTING_STATUS)
    - Transition records are frozen: never edited once appended

Design Decisions:
    - Tagged union of frozen dataclasses (TransitionDocument) instead of a class
      hierarchy: each variant holds only the fields it needs, `kind` is the tag
    - `kind` is a ClassVar so it never appears as a constructor argument
"""

from dataclasses import dataclass
from datetime import datetime
from typing import ClassVar, Union

from timesheets.core.domain_types import DocumentKind, PersonId, TimecardStatus


@dataclass(frozen=True)
class Entered:
    """Timecard opened by its employee."""
    kind: ClassVar[DocumentKind] = DocumentKind.ENTERED
    person: PersonId


@dataclass(frozen=True)
class Submittal:
    kind: ClassVar[DocumentKind] = DocumentKind.SUBMITTAL
    person: PersonId


@dataclass(frozen=True)
class Approval:
    """`person` is the approver — must differ from the timecard employee."""
    kind: ClassVar[DocumentKind] = DocumentKind.APPROVAL
    person: PersonId


@dataclass(frozen=True)
class Rejection:
    kind: ClassVar[DocumentKind] = DocumentKind.REJECTION
    person: PersonId
    reason: str | None = None


@dataclass(frozen=True)
class Returned:
    kind: ClassVar[DocumentKind] = DocumentKind.RETURNED
    person: PersonId
    reason: str | None = None


@dataclass(frozen=True)
class Cancellation:
    kind: ClassVar[DocumentKind] = DocumentKind.CANCELLATION
    person: PersonId
    reason: str | None = None


@dataclass(frozen=True)
class Deletion:
    kind: ClassVar[DocumentKind] = DocumentKind.DELETION
    person: PersonId
    reason: str | None = None


TransitionDocument = Union[
    Entered, Submittal, Approval, Rejection, Returned, Cancellation, Deletion,
]

DOCUMENT_TYPES: dict[DocumentKind, type] = {
    DocumentKind.ENTERED: Entered,
    DocumentKind.SUBMITTAL: Submittal,
    DocumentKind.APPROVAL: Approval,
    DocumentKind.REJECTION: Rejection,
    DocumentKind.RETURNED: Returned,
    DocumentKind.CANCELLATION: Cancellation,
    DocumentKind.DELETION: Deletion,
}

RESULTING_STATUS: dict[DocumentKind, TimecardStatus] = {
    DocumentKind.ENTERED: TimecardStatus.DRAFT,
    DocumentKind.SUBMITTAL: TimecardStatus.SUBMITTED,
    DocumentKind.APPROVAL: TimecardStatus.APPROVED,
    DocumentKind.REJECTION: TimecardStatus.REJECTED,
    DocumentKind.RETURNED: TimecardStatus.DRAFT,
    DocumentKind.CANCELLATION: TimecardStatus.CANCELLED,
    DocumentKind.DELETION: TimecardStatus.DELETED,
}


@dataclass(frozen=True)
class Transition:
    """One immutable, timestamped status change plus the document that caused it."""
    document: TransitionDocument
    transitioned_to: TimecardStatus
    occurred_at: datetime

    @classmethod
    def of(cls, document: TransitionDocument, occurred_at: datetime) -> "Transition":
        """Pair a document with the status it produces."""
        return cls(document, RESULTING_STATUS[document.kind], occurred_at)

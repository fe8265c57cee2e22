"""Timecard Schemas — Pydantic models for the timesheet REST boundary.

Invariants:
    - Wire names are camelCase (workDate, transitionedTo, occurredAt); Python names snake_case
    - Request bodies never carry timestamps: the core assigns them
    - LineRequest validates content (hours in (0, 24], non-blank project) — the core does not
    - Link hrefs are absolute paths under TIMESHEETS_PATH/{id}/
    - Rule error payload is exactly {errorCode, message}

Design Decisions:
    - One request model per transition document: each maps to exactly one core variant
    - Response models built from core objects via from_* classmethods (no ORM coupling)
"""

from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from timesheets.core.affordances import ActionLink, DocumentLink
from timesheets.core.domain_types import DocumentKind, PersonId, TimecardStatus
from timesheets.core.lines import LineFields, TimecardLine
from timesheets.core.timecard import TimecardAggregate
from timesheets.core.transitions import (
    Approval, Cancellation, Deletion, Rejection, Returned, Submittal, Transition,
)

TIMESHEETS_PATH = "/api/v1/timesheets"


class CamelModel(BaseModel):
    """Base for wire models: camelCase aliases, snake_case attributes."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ─── Requests ────────────────────────────────────────────────────

class PersonRequest(CamelModel):
    """Acting person — body of create, submittal and approval."""
    person: int = Field(ge=0)


class ReasonedRequest(PersonRequest):
    """Acting person plus optional free-text reason."""
    reason: str | None = Field(None, max_length=2000)


class SubmittalRequest(PersonRequest):
    def to_document(self) -> Submittal:
        return Submittal(person=PersonId(self.person))


class ApprovalRequest(PersonRequest):
    def to_document(self) -> Approval:
        return Approval(person=PersonId(self.person))


class RejectionRequest(ReasonedRequest):
    def to_document(self) -> Rejection:
        return Rejection(person=PersonId(self.person), reason=self.reason)


class ReturnedRequest(ReasonedRequest):
    def to_document(self) -> Returned:
        return Returned(person=PersonId(self.person), reason=self.reason)


class CancellationRequest(ReasonedRequest):
    def to_document(self) -> Cancellation:
        return Cancellation(person=PersonId(self.person), reason=self.reason)


class DeletionRequest(ReasonedRequest):
    def to_document(self) -> Deletion:
        return Deletion(person=PersonId(self.person), reason=self.reason)


class LineRequest(CamelModel):
    """One logged-work entry as submitted by the caller."""
    work_date: date
    project: str = Field(min_length=1, max_length=200)
    hours: float = Field(gt=0, le=24)
    task: str | None = Field(None, max_length=200)
    description: str | None = Field(None, max_length=2000)

    @field_validator("project")
    @classmethod
    def strip_project(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("project cannot be empty or whitespace")
        return v

    def to_fields(self) -> LineFields:
        return LineFields(
            project=self.project,
            hours=self.hours,
            task=self.task,
            description=self.description,
        )


# ─── Responses ───────────────────────────────────────────────────

class LinkResponse(CamelModel):
    """Hypermedia link — action or related document."""
    method: str
    type: str
    rel: str
    href: str

    @classmethod
    def from_link(
        cls, link: ActionLink | DocumentLink, timecard_id: UUID,
    ) -> "LinkResponse":
        return cls(
            method=link.method.value,
            type=link.content_type,
            rel=link.relationship.value,
            href=f"{TIMESHEETS_PATH}/{timecard_id}/{link.path}",
        )


class TimecardResponse(CamelModel):
    """Timecard representation with derived status and affordances."""
    self_link: str = Field(alias="_self")
    id: UUID
    employee: int
    opened: datetime
    status: TimecardStatus
    actions: list[LinkResponse]
    documents: list[LinkResponse]
    version: str

    @classmethod
    def from_aggregate(cls, timecard: TimecardAggregate) -> "TimecardResponse":
        return cls(
            self_link=f"{TIMESHEETS_PATH}/{timecard.id}",
            id=timecard.id,
            employee=timecard.employee,
            opened=timecard.opened,
            status=timecard.status,
            actions=[LinkResponse.from_link(a, timecard.id) for a in timecard.actions()],
            documents=[
                LinkResponse.from_link(d, timecard.id) for d in timecard.documents()
            ],
            version=timecard.version,
        )


class LineResponse(CamelModel):
    id: UUID
    work_date: date
    recorded: datetime
    project: str
    hours: float
    task: str | None = None
    description: str | None = None

    @classmethod
    def from_line(cls, line: TimecardLine) -> "LineResponse":
        return cls(
            id=line.id,
            work_date=line.work_date,
            recorded=line.recorded,
            project=line.fields.project,
            hours=line.fields.hours,
            task=line.fields.task,
            description=line.fields.description,
        )


class TransitionDocumentResponse(CamelModel):
    """Tagged transition document; `kind` is the discriminator."""
    kind: DocumentKind
    person: int
    reason: str | None = None


class TransitionResponse(CamelModel):
    document: TransitionDocumentResponse
    transitioned_to: TimecardStatus
    occurred_at: datetime

    @classmethod
    def from_transition(cls, transition: Transition) -> "TransitionResponse":
        document = transition.document
        return cls(
            document=TransitionDocumentResponse(
                kind=document.kind,
                person=document.person,
                reason=getattr(document, "reason", None),
            ),
            transitioned_to=transition.transitioned_to,
            occurred_at=transition.occurred_at,
        )


class RuleErrorResponse(CamelModel):
    """Wire shape of a rejected command (409)."""
    error_code: int
    message: str

"""Timesheets — REST resource for timecards, their lines and their transitions.

Invariants:
    - Every handler is a thin shell over TimecardService (no business rules here)
    - Unknown ids -> 404 (ResourceNotFoundError); rule violations -> 409 {errorCode, message}
    - Timecard listing excludes deleted timecards; GET by id still returns them
    - Lines listed by workDate then recorded; transitions by occurredAt

Design Decisions:
    - One POST/GET pair per transition document path (submittal, approval, ...),
      mirroring the affordance link paths in core/affordances.py
    - Service built per request from the request-scoped AsyncSession
"""

from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from timesheets.core.domain_types import (
    DocumentKind, LineId, PersonId, TimecardId,
)
from timesheets.infrastructure.database import get_db
from timesheets.infrastructure.timecard_repository import SqlTimecardRepository
from timesheets.schemas.timecard import (
    TIMESHEETS_PATH,
    ApprovalRequest, CancellationRequest, DeletionRequest, LineRequest,
    LineResponse, PersonRequest, RejectionRequest, ReturnedRequest,
    RuleErrorResponse, SubmittalRequest, TimecardResponse, TransitionResponse,
)
from timesheets.services.timecard_service import TimecardService

router = APIRouter(prefix=TIMESHEETS_PATH, tags=["timesheets"])

_CONFLICT = {409: {"model": RuleErrorResponse}}


def get_timecard_service(db: AsyncSession = Depends(get_db)) -> TimecardService:
    return TimecardService(SqlTimecardRepository(db))


# ─── Timecards ───────────────────────────────────────────────────

@router.get("", response_model=list[TimecardResponse])
async def list_timesheets(service: TimecardService = Depends(get_timecard_service)):
    """All active timecards, oldest first."""
    timecards = await service.list_timecards()
    return [TimecardResponse.from_aggregate(tc) for tc in timecards]


@router.post("", response_model=TimecardResponse)
async def create_timesheet(
    body: PersonRequest, service: TimecardService = Depends(get_timecard_service),
):
    timecard = await service.create(PersonId(body.person))
    return TimecardResponse.from_aggregate(timecard)


@router.get("/{timecard_id}", response_model=TimecardResponse)
async def get_timesheet(
    timecard_id: UUID, service: TimecardService = Depends(get_timecard_service),
):
    timecard = await service.get(TimecardId(timecard_id))
    return TimecardResponse.from_aggregate(timecard)


@router.delete(
    "/{timecard_id}/deletion", response_model=TimecardResponse, responses=_CONFLICT,
)
async def delete_timesheet(
    timecard_id: UUID,
    body: DeletionRequest,
    service: TimecardService = Depends(get_timecard_service),
):
    """Tombstone a Draft or Cancelled timecard. Terminal; history is kept."""
    timecard = await service.delete(TimecardId(timecard_id), body.to_document())
    return TimecardResponse.from_aggregate(timecard)


@router.get(
    "/{timecard_id}/deletion", response_model=TransitionResponse, responses=_CONFLICT,
)
async def get_deletion(
    timecard_id: UUID, service: TimecardService = Depends(get_timecard_service),
):
    transition = await service.transition_of(TimecardId(timecard_id), DocumentKind.DELETION)
    return TransitionResponse.from_transition(transition)


# ─── Lines ───────────────────────────────────────────────────────

@router.get("/{timecard_id}/lines", response_model=list[LineResponse])
async def get_lines(
    timecard_id: UUID, service: TimecardService = Depends(get_timecard_service),
):
    lines = await service.lines(TimecardId(timecard_id))
    return [LineResponse.from_line(line) for line in lines]


@router.post(
    "/{timecard_id}/lines", response_model=LineResponse, responses=_CONFLICT,
)
async def add_line(
    timecard_id: UUID,
    body: LineRequest,
    service: TimecardService = Depends(get_timecard_service),
):
    line = await service.add_line(
        TimecardId(timecard_id), body.work_date, body.to_fields(),
    )
    return LineResponse.from_line(line)


@router.post(
    "/{timecard_id}/lines/{line_id}/replace",
    response_model=LineResponse, responses=_CONFLICT,
)
async def replace_line(
    timecard_id: UUID,
    line_id: UUID,
    body: LineRequest,
    service: TimecardService = Depends(get_timecard_service),
):
    """Remove the line and record a new one in its place (new line id)."""
    line = await service.replace_line(
        TimecardId(timecard_id), LineId(line_id), body.work_date, body.to_fields(),
    )
    return LineResponse.from_line(line)


@router.patch(
    "/{timecard_id}/lines/{line_id}/update",
    response_model=LineResponse, responses=_CONFLICT,
)
async def update_line(
    timecard_id: UUID,
    line_id: UUID,
    body: LineRequest,
    service: TimecardService = Depends(get_timecard_service),
):
    """Edit the line in place (same line id)."""
    line = await service.update_line(
        TimecardId(timecard_id), LineId(line_id), body.work_date, body.to_fields(),
    )
    return LineResponse.from_line(line)


# ─── Transitions ─────────────────────────────────────────────────

@router.get("/{timecard_id}/transitions", response_model=list[TransitionResponse])
async def get_transitions(
    timecard_id: UUID, service: TimecardService = Depends(get_timecard_service),
):
    transitions = await service.transitions(TimecardId(timecard_id))
    return [TransitionResponse.from_transition(t) for t in transitions]


@router.post(
    "/{timecard_id}/submittal", response_model=TransitionResponse, responses=_CONFLICT,
)
async def submit(
    timecard_id: UUID,
    body: SubmittalRequest,
    service: TimecardService = Depends(get_timecard_service),
):
    transition = await service.submit(TimecardId(timecard_id), body.to_document())
    return TransitionResponse.from_transition(transition)


@router.get(
    "/{timecard_id}/submittal", response_model=TransitionResponse, responses=_CONFLICT,
)
async def get_submittal(
    timecard_id: UUID, service: TimecardService = Depends(get_timecard_service),
):
    transition = await service.transition_of(TimecardId(timecard_id), DocumentKind.SUBMITTAL)
    return TransitionResponse.from_transition(transition)


@router.post(
    "/{timecard_id}/returned", response_model=TransitionResponse, responses=_CONFLICT,
)
async def return_timesheet(
    timecard_id: UUID,
    body: ReturnedRequest,
    service: TimecardService = Depends(get_timecard_service),
):
    transition = await service.return_(TimecardId(timecard_id), body.to_document())
    return TransitionResponse.from_transition(transition)


@router.get(
    "/{timecard_id}/returned", response_model=TransitionResponse, responses=_CONFLICT,
)
async def get_returned(
    timecard_id: UUID, service: TimecardService = Depends(get_timecard_service),
):
    transition = await service.transition_of(TimecardId(timecard_id), DocumentKind.RETURNED)
    return TransitionResponse.from_transition(transition)


@router.post(
    "/{timecard_id}/cancellation", response_model=TransitionResponse, responses=_CONFLICT,
)
async def cancel(
    timecard_id: UUID,
    body: CancellationRequest,
    service: TimecardService = Depends(get_timecard_service),
):
    transition = await service.cancel(TimecardId(timecard_id), body.to_document())
    return TransitionResponse.from_transition(transition)


@router.get(
    "/{timecard_id}/cancellation", response_model=TransitionResponse, responses=_CONFLICT,
)
async def get_cancellation(
    timecard_id: UUID, service: TimecardService = Depends(get_timecard_service),
):
    transition = await service.transition_of(
        TimecardId(timecard_id), DocumentKind.CANCELLATION,
    )
    return TransitionResponse.from_transition(transition)


@router.post(
    "/{timecard_id}/rejection", response_model=TransitionResponse, responses=_CONFLICT,
)
async def reject(
    timecard_id: UUID,
    body: RejectionRequest,
    service: TimecardService = Depends(get_timecard_service),
):
    transition = await service.reject(TimecardId(timecard_id), body.to_document())
    return TransitionResponse.from_transition(transition)


@router.get(
    "/{timecard_id}/rejection", response_model=TransitionResponse, responses=_CONFLICT,
)
async def get_rejection(
    timecard_id: UUID, service: TimecardService = Depends(get_timecard_service),
):
    transition = await service.transition_of(TimecardId(timecard_id), DocumentKind.REJECTION)
    return TransitionResponse.from_transition(transition)


@router.post(
    "/{timecard_id}/approval", response_model=TransitionResponse, responses=_CONFLICT,
)
async def approve(
    timecard_id: UUID,
    body: ApprovalRequest,
    service: TimecardService = Depends(get_timecard_service),
):
    transition = await service.approve(TimecardId(timecard_id), body.to_document())
    return TransitionResponse.from_transition(transition)


@router.get(
    "/{timecard_id}/approval", response_model=TransitionResponse, responses=_CONFLICT,
)
async def get_approval(
    timecard_id: UUID, service: TimecardService = Depends(get_timecard_service),
):
    transition = await service.transition_of(TimecardId(timecard_id), DocumentKind.APPROVAL)
    return TransitionResponse.from_transition(transition)

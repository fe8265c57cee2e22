"""Affordances — currently valid follow-on actions and related documents.

Invariants:
    - actions_for / documents_for are PURE functions of (status, line_count)
    - Equal inputs always produce equal lists (same links, same order)
    - Approved, Rejected and Deleted advertise no actions
    - Transitions document is always present; Lines iff line_count > 0;
      Submittal iff status is Submitted

Design Decisions:
    - Link paths are relative to the timecard resource ("submittal", "lines"):
      the API layer resolves them, so no timecard id leaks into the policy
    - Policy tables are module constants, not branches (single source of truth)
"""

from dataclasses import dataclass

from timesheets.core.domain_types import (
    ActionRelationship, ContentTypes, DocumentRelationship, Method, TimecardStatus,
)


@dataclass(frozen=True)
class ActionLink:
    """A command the caller may issue next."""
    method: Method
    content_type: str
    relationship: ActionRelationship
    path: str


@dataclass(frozen=True)
class DocumentLink:
    """A related sub-document the caller may read."""
    method: Method
    content_type: str
    relationship: DocumentRelationship
    path: str


_CANCEL = ActionLink(
    Method.POST, ContentTypes.CANCELLATION, ActionRelationship.CANCEL, "cancellation",
)
_SUBMIT = ActionLink(
    Method.POST, ContentTypes.SUBMITTAL, ActionRelationship.SUBMIT, "submittal",
)
_RECORD_LINE = ActionLink(
    Method.POST, ContentTypes.TIMESHEET_LINE, ActionRelationship.RECORD_LINE, "lines",
)
_DELETE = ActionLink(
    Method.DELETE, ContentTypes.DELETION, ActionRelationship.DELETE, "deletion",
)
_REJECT = ActionLink(
    Method.POST, ContentTypes.REJECTION, ActionRelationship.REJECT, "rejection",
)
_APPROVE = ActionLink(
    Method.POST, ContentTypes.APPROVAL, ActionRelationship.APPROVE, "approval",
)
_RETURN = ActionLink(
    Method.POST, ContentTypes.RETURNED, ActionRelationship.RETURN, "returned",
)

_ACTIONS: dict[TimecardStatus, tuple[ActionLink, ...]] = {
    TimecardStatus.DRAFT: (_CANCEL, _SUBMIT, _RECORD_LINE, _DELETE),
    TimecardStatus.SUBMITTED: (_CANCEL, _REJECT, _APPROVE, _RETURN),
    TimecardStatus.APPROVED: (),
    TimecardStatus.CANCELLED: (_DELETE,),
    TimecardStatus.REJECTED: (),
    TimecardStatus.DELETED: (),
}

_TRANSITIONS_DOC = DocumentLink(
    Method.GET, ContentTypes.TRANSITIONS, DocumentRelationship.TRANSITIONS, "transitions",
)
_LINES_DOC = DocumentLink(
    Method.GET, ContentTypes.TIMESHEET_LINES, DocumentRelationship.LINES, "lines",
)
_SUBMITTAL_DOC = DocumentLink(
    Method.GET, ContentTypes.TRANSITION, DocumentRelationship.SUBMITTAL, "submittal",
)


def actions_for(status: TimecardStatus, line_count: int) -> list[ActionLink]:
    """Actions valid from `status`. line_count is accepted for a uniform signature."""
    return list(_ACTIONS[status])


def documents_for(status: TimecardStatus, line_count: int) -> list[DocumentLink]:
    """Related documents readable for a timecard in `status` with `line_count` lines."""
    links = [_TRANSITIONS_DOC]
    if line_count > 0:
        links.append(_LINES_DOC)
    if status == TimecardStatus.SUBMITTED:
        links.append(_SUBMITTAL_DOC)
    return links

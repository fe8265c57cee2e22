"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - TimecardId, LineId wrap UUIDs — never use bare UUID in domain logic
    - PersonId wraps int (employee / approver identifiers)
    - All valid states encoded as Enums — no raw string matching
    - Draft is the initial status; Approved and Deleted are terminal

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from enum import Enum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

TimecardId = NewType("TimecardId", UUID)
LineId = NewType("LineId", UUID)
PersonId = NewType("PersonId", int)


# ─── Constants ───────────────────────────────────────────────────

TIMECARD_VERSION: str = "timecard-0.1"


# ─── Enums ───────────────────────────────────────────────────────

class TimecardStatus(str, Enum):
    """Timecard lifecycle states — derived from the transition ledger, never stored."""
    DRAFT = "draft"
    SUBMITTED = "submitted"
    APPROVED = "approved"
    REJECTED = "rejected"
    CANCELLED = "cancelled"
    DELETED = "deleted"


class DocumentKind(str, Enum):
    """Discriminator for the seven transition document variants."""
    ENTERED = "entered"
    SUBMITTAL = "submittal"
    APPROVAL = "approval"
    REJECTION = "rejection"
    RETURNED = "returned"
    CANCELLATION = "cancellation"
    DELETION = "deletion"


class Method(str, Enum):
    """HTTP method advertised by a hypermedia link."""
    GET = "GET"
    POST = "POST"
    PATCH = "PATCH"
    DELETE = "DELETE"


class ActionRelationship(str, Enum):
    """Relationship names for follow-on actions."""
    CANCEL = "cancel"
    SUBMIT = "submit"
    RECORD_LINE = "record-line"
    DELETE = "delete"
    REJECT = "reject"
    APPROVE = "approve"
    RETURN = "return"


class DocumentRelationship(str, Enum):
    """Relationship names for related sub-documents."""
    TRANSITIONS = "transitions"
    LINES = "lines"
    SUBMITTAL = "submittal"


class ContentTypes:
    """Vendor media types for timesheet resources."""
    _PREFIX = "application/com.my-company.my-product"

    TIMESHEETS = f"{_PREFIX}.timesheets+json"
    TIMESHEET = f"{_PREFIX}.timesheet+json"
    TIMESHEET_LINE = f"{_PREFIX}.timesheet-line+json"
    TIMESHEET_LINES = f"{_PREFIX}.timesheet-lines+json"
    TRANSITION = f"{_PREFIX}.timesheet-transition+json"
    TRANSITIONS = f"{_PREFIX}.timesheet-transitions+json"
    SUBMITTAL = f"{_PREFIX}.timesheet-submittal+json"
    APPROVAL = f"{_PREFIX}.timesheet-approval+json"
    REJECTION = f"{_PREFIX}.timesheet-rejection+json"
    CANCELLATION = f"{_PREFIX}.timesheet-cancellation+json"
    RETURNED = f"{_PREFIX}.timesheet-returned+json"
    DELETION = f"{_PREFIX}.timesheet-deletion+json"

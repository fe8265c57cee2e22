"""Domain Types — verifies rich type definitions and enum values.

Tests:
    - NewType wrappers exist and are callable
    - TimecardStatus is the closed six-state set
    - Enums serialize to their wire strings
"""

from uuid import uuid4

from timesheets.core.domain_types import (
    TimecardId, LineId, PersonId,
    TimecardStatus, DocumentKind, ActionRelationship, DocumentRelationship,
    ContentTypes, TIMECARD_VERSION,
)


def test_identity_types_wrap_primitives():
    uid = uuid4()
    assert TimecardId(uid) == uid
    assert LineId(uid) == uid
    assert PersonId(42) == 42


def test_timecard_status_has_six_states():
    assert set(TimecardStatus) == {
        TimecardStatus.DRAFT,
        TimecardStatus.SUBMITTED,
        TimecardStatus.APPROVED,
        TimecardStatus.REJECTED,
        TimecardStatus.CANCELLED,
        TimecardStatus.DELETED,
    }


def test_document_kind_has_seven_variants():
    assert len(DocumentKind) == 7
    assert DocumentKind.RETURNED.value == "returned"


def test_enums_serialize_to_string():
    assert TimecardStatus.DRAFT.value == "draft"
    assert ActionRelationship.RECORD_LINE.value == "record-line"
    assert DocumentRelationship.TRANSITIONS.value == "transitions"


def test_content_types_share_vendor_prefix():
    assert ContentTypes.TIMESHEET.startswith("application/com.my-company.my-product")
    assert ContentTypes.TIMESHEET_LINE.endswith("timesheet-line+json")


def test_timecard_version_tag():
    assert TIMECARD_VERSION == "timecard-0.1"

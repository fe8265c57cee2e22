"""Timecard Snapshot — tests for the JSON-safe persistence codec.

Tests cover:
    - Snapshot is JSON-serializable and carries no derived status
    - Restored aggregate derives the same status, lines and history
    - Restored aggregate keeps enforcing the state machine
    - Unknown document kinds are rejected
"""

import json
from datetime import date

import pytest

from timesheets.core.domain_types import DocumentKind, PersonId, TimecardStatus
from timesheets.core.errors import InvalidStateError
from timesheets.core.lines import LineFields
from timesheets.core.timecard import TimecardAggregate
from timesheets.core.timecard_snapshot import (
    document_from_dict, timecard_from_snapshot, timecard_to_snapshot,
)
from timesheets.core.transitions import Approval, Rejection, Returned, Submittal

EMPLOYEE = PersonId(42)
APPROVER = PersonId(99)


def _worked_timecard(clock) -> TimecardAggregate:
    timecard = TimecardAggregate.create(EMPLOYEE, clock=clock)
    timecard.add_line(date(2026, 3, 3), LineFields("atlas", 7.5, task="design"))
    timecard.add_line(date(2026, 3, 2), LineFields("zephyr", 1.0, description="standup"))
    timecard.submit(Submittal(EMPLOYEE))
    timecard.return_(Returned(APPROVER, reason="add tuesday"))
    timecard.submit(Submittal(EMPLOYEE))
    return timecard


def test_snapshot_is_json_safe(clock):
    snapshot = timecard_to_snapshot(_worked_timecard(clock))
    assert json.loads(json.dumps(snapshot)) == snapshot
    assert "status" not in snapshot
    assert snapshot["employee"] == 42


def test_roundtrip_preserves_state(clock):
    original = _worked_timecard(clock)
    restored = timecard_from_snapshot(timecard_to_snapshot(original), clock=clock)

    assert restored.id == original.id
    assert restored.opened == original.opened
    assert restored.status == TimecardStatus.SUBMITTED
    assert [line.id for line in restored.ordered_lines()] == [
        line.id for line in original.ordered_lines()
    ]
    assert list(restored.transitions) == list(original.transitions)
    returned = [t for t in restored.transitions if t.document.kind == DocumentKind.RETURNED]
    assert returned[0].document.reason == "add tuesday"


def test_restored_aggregate_enforces_rules(clock):
    restored = timecard_from_snapshot(
        timecard_to_snapshot(_worked_timecard(clock)), clock=clock,
    )
    restored.reject(Rejection(APPROVER))
    with pytest.raises(InvalidStateError):
        restored.approve(Approval(APPROVER))


def test_unknown_document_kind_rejected():
    with pytest.raises(ValueError):
        document_from_dict({"kind": "escalation", "person": 1})
    with pytest.raises(ValueError):
        document_from_dict({"person": 1})

"""Timecard Snapshot — serialization / deserialization for TimecardAggregate.

Invariants:
    - timecard_to_snapshot produces a JSON-safe dict (no UUIDs, datetimes, Enums)
    - timecard_from_snapshot reconstructs lines and ledger in their stored order
    - Rehydration never re-runs state-machine validation
    - Unknown document kinds raise ValueError (no silent drops from history)

Design Decisions:
    - Status is NOT part of the snapshot: it is re-derived from the ledger on load
    - Document fields serialized from the dataclass, tagged with `kind`
"""

from dataclasses import asdict
from datetime import date, datetime
from uuid import UUID

from timesheets.core.domain_types import (
    DocumentKind, LineId, PersonId, TimecardId, TimecardStatus, TIMECARD_VERSION,
)
from timesheets.core.lines import LineFields, TimecardLine
from timesheets.core.timecard import Clock, TimecardAggregate, utc_now
from timesheets.core.transitions import (
    DOCUMENT_TYPES, Transition, TransitionDocument,
)


# ─── Documents ───────────────────────────────────────────────────

def document_to_dict(document: TransitionDocument) -> dict:
    return {"kind": document.kind.value, **asdict(document)}


def document_from_dict(data: dict) -> TransitionDocument:
    try:
        kind = DocumentKind(data["kind"])
    except (KeyError, ValueError) as e:
        raise ValueError(f"Unknown transition document: {data!r}") from e
    fields = {k: v for k, v in data.items() if k != "kind"}
    fields["person"] = PersonId(int(fields["person"]))
    return DOCUMENT_TYPES[kind](**fields)


# ─── Lines & transitions ─────────────────────────────────────────

def line_to_dict(line: TimecardLine) -> dict:
    return {
        "id": str(line.id),
        "work_date": line.work_date.isoformat(),
        "recorded": line.recorded.isoformat(),
        "fields": asdict(line.fields),
    }


def line_from_dict(data: dict) -> TimecardLine:
    return TimecardLine(
        id=LineId(UUID(data["id"])),
        work_date=date.fromisoformat(data["work_date"]),
        recorded=datetime.fromisoformat(data["recorded"]),
        fields=LineFields(**data["fields"]),
    )


def transition_to_dict(transition: Transition) -> dict:
    return {
        "document": document_to_dict(transition.document),
        "transitioned_to": transition.transitioned_to.value,
        "occurred_at": transition.occurred_at.isoformat(),
    }


def transition_from_dict(data: dict) -> Transition:
    return Transition(
        document=document_from_dict(data["document"]),
        transitioned_to=TimecardStatus(data["transitioned_to"]),
        occurred_at=datetime.fromisoformat(data["occurred_at"]),
    )


# ─── Aggregate ───────────────────────────────────────────────────

def timecard_to_snapshot(timecard: TimecardAggregate) -> dict:
    """Serialize a TimecardAggregate to a JSON-safe dict. Pure, no IO."""
    return {
        "id": str(timecard.id),
        "employee": timecard.employee,
        "opened": timecard.opened.isoformat(),
        "version": timecard.version,
        "lines": [line_to_dict(line) for line in timecard.lines],
        "transitions": [transition_to_dict(t) for t in timecard.transitions],
    }


def timecard_from_snapshot(data: dict, clock: Clock = utc_now) -> TimecardAggregate:
    """Reconstruct a TimecardAggregate from a snapshot dict. Pure, no IO."""
    return TimecardAggregate(
        id=TimecardId(UUID(data["id"])),
        employee=PersonId(int(data["employee"])),
        opened=datetime.fromisoformat(data["opened"]),
        lines=[line_from_dict(line) for line in data.get("lines", [])],
        transitions=[transition_from_dict(t) for t in data.get("transitions", [])],
        clock=clock,
        version=data.get("version", TIMECARD_VERSION),
    )

"""Line Set — logged-work line items owned by a timecard.

Invariants:
    - Line ids are unique within the set; iteration yields insertion order
    - replace() always yields a NEW line id; update() keeps id AND recorded
    - ordered() sorts by work_date, then recorded (stable for equal keys)
    - No status gating here — TimecardAggregate only calls in while Draft

Design Decisions:
    - LineFields is opaque to the state machine: content validation lives in the
      API schemas, the core only tracks identity and ownership
    - update() preserves `recorded` so edits never reorder line history
"""

import uuid
from dataclasses import dataclass
from datetime import date, datetime
from typing import Callable, Iterable, Iterator

from timesheets.core.domain_types import LineId


@dataclass(frozen=True)
class LineFields:
    """Work-record payload of one line."""
    project: str
    hours: float
    task: str | None = None
    description: str | None = None


@dataclass
class TimecardLine:
    """One logged-work entry. Mutable only through LineSet.update."""
    id: LineId
    work_date: date
    recorded: datetime
    fields: LineFields


class LineSet:
    """Insertion-ordered collection of TimecardLine, unique by id."""

    def __init__(
        self,
        clock: Callable[[], datetime],
        lines: Iterable[TimecardLine] = (),
    ):
        self._clock = clock
        self._lines: list[TimecardLine] = list(lines)

    def add(self, work_date: date, fields: LineFields) -> TimecardLine:
        line = TimecardLine(
            id=LineId(uuid.uuid4()),
            work_date=work_date,
            recorded=self._clock(),
            fields=fields,
        )
        self._lines.append(line)
        return line

    def replace(
        self, line_id: LineId, work_date: date, fields: LineFields,
    ) -> TimecardLine:
        """Drop `line_id` (no-op if absent) and record a fresh line in its place."""
        self._lines = [line for line in self._lines if line.id != line_id]
        return self.add(work_date, fields)

    def update(
        self, line_id: LineId, work_date: date, fields: LineFields,
    ) -> TimecardLine | None:
        line = self.get(line_id)
        if line is None:
            return None
        line.work_date = work_date
        line.fields = fields
        return line

    def get(self, line_id: LineId) -> TimecardLine | None:
        return next((line for line in self._lines if line.id == line_id), None)

    def contains(self, line_id: LineId) -> bool:
        return self.get(line_id) is not None

    def count(self) -> int:
        return len(self._lines)

    def ordered(self) -> list[TimecardLine]:
        return sorted(self._lines, key=lambda line: (line.work_date, line.recorded))

    def __len__(self) -> int:
        return len(self._lines)

    def __iter__(self) -> Iterator[TimecardLine]:
        return iter(self._lines)

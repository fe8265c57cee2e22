"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Implementations provided by shell via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Async in Protocol: boundary methods are async because implementations do IO,
      but the aggregate operations that run between find() and update() are never
      async themselves — the shell orchestrates the calls around the pure logic
    - remove() is a soft delete: history must remain retrievable by id
"""

from typing import Protocol

from timesheets.core.domain_types import TimecardId
from timesheets.core.timecard import TimecardAggregate


class TimecardRepository(Protocol):
    """Contract for timecard persistence — implemented by shell."""
    async def find(self, timecard_id: TimecardId) -> TimecardAggregate | None: ...
    async def add(self, timecard: TimecardAggregate) -> None: ...
    async def update(self, timecard: TimecardAggregate) -> None: ...
    async def remove(self, timecard_id: TimecardId) -> None: ...
    async def list_active(self) -> list[TimecardAggregate]: ...

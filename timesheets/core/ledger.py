"""Transition Ledger — append-only history that derives the current timecard status.

Invariants:
    - Entries are only ever appended; never reordered, edited or removed
    - current_status() = transitioned_to of the entry with the latest occurred_at
    - Ties on occurred_at are broken by append order (later append wins)
    - append() does no validation — the aggregate checks legality first

Design Decisions:
    - Status is a query over the log, never a stored field (tamper-evident history)
    - Ordering key is (occurred_at, append position): physical order is authoritative
"""

from typing import Iterable, Iterator

from timesheets.core.domain_types import TimecardStatus
from timesheets.core.transitions import Transition


def _latest(transitions: Iterable[Transition]) -> Transition | None:
    best: Transition | None = None
    for transition in transitions:
        # >= so the later append wins a timestamp tie
        if best is None or transition.occurred_at >= best.occurred_at:
            best = transition
    return best


class TransitionLedger:
    """Ordered, append-only sequence of Transition records."""

    def __init__(self, transitions: Iterable[Transition] = ()):
        self._entries: list[Transition] = list(transitions)

    def append(self, transition: Transition) -> None:
        self._entries.append(transition)

    def latest(self) -> Transition | None:
        return _latest(self._entries)

    def current_status(self) -> TimecardStatus:
        """Status produced by the most recent transition.

        Raises LookupError on an empty ledger; an aggregate never has one.
        """
        latest = self.latest()
        if latest is None:
            raise LookupError("Ledger is empty")
        return latest.transitioned_to

    def latest_of_status(self, status: TimecardStatus) -> Transition | None:
        """Most recent transition into `status`, or None."""
        return _latest(t for t in self._entries if t.transitioned_to == status)

    def all(self) -> list[Transition]:
        """Full history, occurred_at ascending (stable: ties keep append order)."""
        return sorted(self._entries, key=lambda t: t.occurred_at)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[Transition]:
        return iter(self._entries)

"""Transition Ledger — tests for append-only history and status derivation.

Tests cover:
    - current_status follows the latest occurred_at
    - Timestamp ties resolved by append order
    - latest_of_status picks the most recent matching entry
    - all() is ordered by occurred_at, stable on ties
    - Empty ledger has no status
"""

from datetime import datetime, timedelta, timezone

import pytest

from timesheets.core.domain_types import PersonId, TimecardStatus
from timesheets.core.ledger import TransitionLedger
from timesheets.core.transitions import (
    Entered, Returned, Submittal, Transition,
)

T0 = datetime(2026, 3, 2, 9, 0, tzinfo=timezone.utc)
EMPLOYEE = PersonId(42)


def _at(seconds: int) -> datetime:
    return T0 + timedelta(seconds=seconds)


def test_status_is_latest_transition():
    ledger = TransitionLedger()
    ledger.append(Transition.of(Entered(EMPLOYEE), _at(0)))
    ledger.append(Transition.of(Submittal(EMPLOYEE), _at(1)))
    assert ledger.current_status() == TimecardStatus.SUBMITTED


def test_status_uses_timestamp_not_only_position():
    ledger = TransitionLedger([
        Transition.of(Submittal(EMPLOYEE), _at(5)),
        Transition.of(Entered(EMPLOYEE), _at(0)),
    ])
    assert ledger.current_status() == TimecardStatus.SUBMITTED


def test_timestamp_tie_broken_by_append_order():
    ledger = TransitionLedger()
    ledger.append(Transition.of(Entered(EMPLOYEE), _at(0)))
    ledger.append(Transition.of(Submittal(EMPLOYEE), _at(0)))
    assert ledger.current_status() == TimecardStatus.SUBMITTED
    ledger.append(Transition.of(Returned(PersonId(99)), _at(0)))
    assert ledger.current_status() == TimecardStatus.DRAFT


def test_latest_of_status_returns_most_recent_match():
    first = Transition.of(Submittal(EMPLOYEE), _at(1))
    second = Transition.of(Submittal(EMPLOYEE), _at(3))
    ledger = TransitionLedger([
        Transition.of(Entered(EMPLOYEE), _at(0)),
        first,
        Transition.of(Returned(PersonId(99)), _at(2)),
        second,
    ])
    assert ledger.latest_of_status(TimecardStatus.SUBMITTED) is second


def test_latest_of_status_none_when_absent():
    ledger = TransitionLedger([Transition.of(Entered(EMPLOYEE), _at(0))])
    assert ledger.latest_of_status(TimecardStatus.APPROVED) is None


def test_all_orders_by_occurred_at_and_keeps_ties_in_append_order():
    a = Transition.of(Entered(EMPLOYEE), _at(0))
    b = Transition.of(Submittal(EMPLOYEE), _at(2))
    c = Transition.of(Returned(PersonId(99)), _at(2))
    ledger = TransitionLedger([b, a, c])
    assert ledger.all() == [a, b, c]


def test_append_never_reorders_storage():
    a = Transition.of(Entered(EMPLOYEE), _at(0))
    b = Transition.of(Submittal(EMPLOYEE), _at(1))
    ledger = TransitionLedger()
    ledger.append(a)
    ledger.append(b)
    assert list(ledger) == [a, b]
    assert len(ledger) == 2


def test_empty_ledger_has_no_status():
    with pytest.raises(LookupError):
        TransitionLedger().current_status()


def test_transitions_are_immutable():
    transition = Transition.of(Entered(EMPLOYEE), _at(0))
    with pytest.raises(AttributeError):
        transition.transitioned_to = TimecardStatus.APPROVED

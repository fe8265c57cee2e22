"""Root conftest — shared test configuration."""

import os
from datetime import datetime, timedelta, timezone

import pytest

# Ensure tests never reach a real database
os.environ.setdefault(
    "DATABASE_URL",
    "sqlite+aiosqlite:///test.db",
)


class StepClock:
    """Deterministic clock: every call returns the current instant, then advances."""

    def __init__(
        self,
        start: datetime = datetime(2026, 3, 2, 9, 0, tzinfo=timezone.utc),
        step: timedelta = timedelta(seconds=1),
    ):
        self.now = start
        self.step = step

    def __call__(self) -> datetime:
        current = self.now
        self.now = self.now + self.step
        return current


@pytest.fixture
def clock() -> StepClock:
    return StepClock()


@pytest.fixture
def frozen_clock() -> StepClock:
    """Clock that never advances — every timestamp ties."""
    return StepClock(step=timedelta(0))

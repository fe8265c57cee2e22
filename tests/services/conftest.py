"""Service test fixtures — async DB + FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use test DB session
    - db_manager patched so the readiness probe sees the test engine

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for route tests
      (PostgreSQL-specific column types degrade to generic ones here)
    - InMemoryTimecardRepository: service tests exercise orchestration without SQL
"""

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from httpx import ASGITransport, AsyncClient

from timesheets.core.errors import ResourceNotFoundError
from timesheets.core.timecard import TimecardAggregate
from timesheets.core.timecard_snapshot import (
    timecard_from_snapshot, timecard_to_snapshot,
)
from timesheets.db.base import Base
from timesheets.infrastructure.database import get_db, DatabaseSessionManager
import timesheets.infrastructure.database as db_module
import timesheets.models  # noqa: F401  (registers tables on Base.metadata)
from timesheets.main import app


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
async def client(test_engine, test_session_factory):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


class InMemoryTimecardRepository:
    """TimecardRepository backed by snapshots in a dict.

    Stores snapshots rather than live aggregates so a command that fails
    after mutating its copy can never leak into stored state.
    """

    def __init__(self, clock):
        self._clock = clock
        self._rows: dict = {}
        self.writes: list[str] = []

    async def find(self, timecard_id):
        row = self._rows.get(timecard_id)
        if row is None:
            return None
        return timecard_from_snapshot(row["snapshot"], clock=self._clock)

    async def add(self, timecard: TimecardAggregate) -> None:
        self._rows[timecard.id] = {
            "snapshot": timecard_to_snapshot(timecard), "is_active": True,
        }
        self.writes.append("add")

    async def update(self, timecard: TimecardAggregate) -> None:
        if timecard.id not in self._rows:
            raise ResourceNotFoundError("Timecard", str(timecard.id))
        self._rows[timecard.id]["snapshot"] = timecard_to_snapshot(timecard)
        self.writes.append("update")

    async def remove(self, timecard_id) -> None:
        if timecard_id not in self._rows:
            raise ResourceNotFoundError("Timecard", str(timecard_id))
        self._rows[timecard_id]["is_active"] = False
        self.writes.append("remove")

    async def list_active(self) -> list[TimecardAggregate]:
        return [
            timecard_from_snapshot(row["snapshot"], clock=self._clock)
            for row in self._rows.values() if row["is_active"]
        ]

    def is_active(self, timecard_id) -> bool:
        return self._rows[timecard_id]["is_active"]


@pytest.fixture
def memory_repository(clock):
    return InMemoryTimecardRepository(clock)

"""Service test fixtures — async DB, repository, service, and FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use the test engine
    - app.state.db_manager points at the test engine for health/warm-up routes

Design Decisions:
    - SQLite in-memory via StaticPool: every session sees the same database
    - db_manager built with __new__: reuses the test engine instead of creating one
"""

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.pool import StaticPool
from httpx import ASGITransport, AsyncClient

from shiptrack.db.base import Base
from shiptrack.infrastructure.database import get_db, DatabaseSessionManager
from shiptrack.infrastructure.shipment_repository import SqlShipmentRepository
from shiptrack.main import app
from shiptrack.services.shipment_service import ShipmentService
import shiptrack.models  # noqa: F401


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False, poolclass=StaticPool,
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
def repository(test_db):
    return SqlShipmentRepository(test_db)


@pytest.fixture
def service(repository):
    return ShipmentService(repository)


@pytest.fixture
def test_manager(test_engine, test_session_factory):
    manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    manager.engine = test_engine
    manager._session_factory = test_session_factory
    manager._connected = False
    manager._connecting = None
    return manager


@pytest.fixture
async def client(test_session_factory, test_manager):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    original_manager = getattr(app.state, "db_manager", None)
    app.state.db_manager = test_manager

    async with AsyncClient(
        transport=ASGITransport(app=app, raise_app_exceptions=False),
        base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    app.state.db_manager = original_manager

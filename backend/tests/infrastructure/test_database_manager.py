"""Database Session Manager — shared connect, retry after failure, health and shutdown.

Tests cover:
    - Concurrent connect() calls share a single in-flight attempt
    - A failed attempt raises DatabaseError and is forgotten (next call retries)
    - A connected manager does not probe again
    - Failed health checks mark the manager disconnected
    - Real SQLite engine connects, serves sessions and closes
"""

import asyncio

import pytest
from sqlalchemy import text
from sqlalchemy.exc import OperationalError

from shiptrack.core.errors import DatabaseError
from shiptrack.infrastructure.database import DatabaseSessionManager, init_db


SQLITE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture
async def manager():
    m = init_db(SQLITE_URL)
    yield m
    await m.close()


class _CountingProbe:
    def __init__(self, failures: int = 0, delay: float = 0.01):
        self.calls = 0
        self.failures = failures
        self.delay = delay

    async def __call__(self):
        self.calls += 1
        await asyncio.sleep(self.delay)
        if self.calls <= self.failures:
            raise OperationalError("SELECT 1", {}, ConnectionRefusedError())


async def test_concurrent_connects_share_one_attempt(manager):
    probe = _CountingProbe()
    manager._probe = probe

    await asyncio.gather(*(manager.connect() for _ in range(5)))

    assert probe.calls == 1
    assert manager.connected
    assert manager._connecting is None


async def test_connected_manager_does_not_probe_again(manager):
    probe = _CountingProbe()
    manager._probe = probe

    await manager.connect()
    await manager.connect()

    assert probe.calls == 1


async def test_failed_connect_is_retried(manager):
    probe = _CountingProbe(failures=1)
    manager._probe = probe

    with pytest.raises(DatabaseError) as exc_info:
        await manager.connect()
    assert exc_info.value.http_status == 500
    assert not manager.connected
    assert manager._connecting is None

    await manager.connect()
    assert probe.calls == 2
    assert manager.connected


async def test_concurrent_callers_all_see_the_failure(manager):
    manager._probe = _CountingProbe(failures=1)

    results = await asyncio.gather(
        manager.connect(), manager.connect(), return_exceptions=True,
    )

    assert all(isinstance(r, DatabaseError) for r in results)


async def test_real_sqlite_connect_and_session(manager):
    await manager.connect()
    assert manager.connected

    async with manager.session() as db:
        result = await db.execute(text("SELECT 1"))
        assert result.scalar() == 1


async def test_health_check_success(manager):
    assert await manager.health_check() is True


async def test_failed_health_check_marks_disconnected(manager):
    await manager.connect()

    async def broken_session():
        raise OperationalError("SELECT 1", {}, ConnectionResetError())

    manager._session_factory = broken_session
    assert await manager.health_check() is False
    assert not manager.connected


async def test_operational_error_in_session_marks_disconnected(manager):
    await manager.connect()
    with pytest.raises(DatabaseError, match="execute failed"):
        async with manager.session():
            raise OperationalError("UPDATE shipments", {}, ConnectionResetError())
    assert not manager.connected


async def test_close_allows_reconnect(manager):
    await manager.connect()
    await manager.close()
    assert not manager.connected

    await manager.connect()
    assert manager.connected

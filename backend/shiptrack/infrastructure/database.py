"""Database Session Manager — async connection pool with shared connect, rollback, and health checks.

Invariants:
    - One manager per process, created in the app lifespan and held on app.state
    - At most one connection attempt in flight; concurrent callers await the same task
    - A failed attempt is forgotten so the next caller retries
    - Every session auto-rolls-back on exception (no partial commits leak)
    - All SQLAlchemy exceptions mapped to DatabaseError (core/errors.py)
    - Operational failures mark the manager disconnected; connect() re-establishes

Design Decisions:
    - expire_on_commit=False: prevents lazy-load issues in async context
    - pool_pre_ping replaces stale pooled connections transparently
    - SQLite URLs (tests) skip the queue-pool sizing arguments
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import Depends, Request
from sqlalchemy import text
from sqlalchemy.exc import (
    IntegrityError, OperationalError, DBAPIError, SQLAlchemyError,
)
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)

from shiptrack.core.errors import DatabaseError

logger = logging.getLogger(__name__)


class DatabaseSessionManager:
    """Owns the engine, the pool and the shared connection attempt."""

    def __init__(
        self,
        database_url: str,
        pool_size: int = 10,
        max_overflow: int = 10,
        pool_recycle: int = 3600,
        connect_timeout_seconds: int = 5,
    ):
        engine_kwargs: dict = {"pool_pre_ping": True}
        if not database_url.startswith("sqlite"):
            engine_kwargs.update(
                pool_size=pool_size,
                max_overflow=max_overflow,
                pool_recycle=pool_recycle,
                connect_args={"timeout": connect_timeout_seconds},
            )
        self.engine = create_async_engine(database_url, **engine_kwargs)
        self._session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )
        self._connected = False
        self._connecting: asyncio.Task | None = None

    @property
    def connected(self) -> bool:
        return self._connected

    async def connect(self) -> None:
        """Establish connectivity once; concurrent callers share the attempt."""
        if self._connected:
            return
        if self._connecting is None:
            logger.info("Creating new database connection")
            self._connecting = asyncio.ensure_future(self._establish())
        else:
            logger.info("Waiting for pending database connection")
        task = self._connecting
        try:
            await asyncio.shield(task)
        finally:
            if task.done() and self._connecting is task:
                self._connecting = None

    async def _establish(self) -> None:
        try:
            await self._probe()
        except (SQLAlchemyError, OSError, TimeoutError) as e:
            logger.error(f"DB connection failed: {e}")
            raise DatabaseError("Connection or operational error", "connect") from e
        self._connected = True
        logger.info("New database connection established")

    async def _probe(self) -> None:
        async with self.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Provide session with auto-rollback on exception."""
        session = self._session_factory()
        try:
            yield session
        except IntegrityError as e:
            await session.rollback()
            logger.error(f"DB integrity error: {e}")
            raise DatabaseError("Integrity constraint violated", "commit")
        except OperationalError as e:
            await session.rollback()
            self._connected = False
            logger.error(f"DB operational error: {e}")
            raise DatabaseError("Connection or operational error", "execute")
        except DBAPIError as e:
            await session.rollback()
            logger.error(f"DB driver error: {e}")
            raise DatabaseError("Database driver error", "query")
        except SQLAlchemyError as e:
            await session.rollback()
            logger.error(f"SQLAlchemy error: {e}")
            raise DatabaseError("Database operation failed", "unknown")
        finally:
            await session.close()

    async def health_check(self) -> bool:
        """Check database connectivity (for readiness probes)."""
        try:
            async with self.session() as db:
                await db.execute(text("SELECT 1"))
            return True
        except Exception as e:
            self._connected = False
            logger.error(f"DB health check failed: {e}")
            return False

    async def close(self) -> None:
        """Dispose the pool. The manager can reconnect afterwards."""
        await self.engine.dispose()
        self._connected = False
        logger.info("Database connection closed")


def init_db(database_url: str, **kwargs) -> DatabaseSessionManager:
    return DatabaseSessionManager(database_url, **kwargs)


def get_db_manager(request: Request) -> DatabaseSessionManager:
    """FastAPI dependency for the process-wide session manager."""
    manager = getattr(request.app.state, "db_manager", None)
    if manager is None:
        raise RuntimeError("Database not initialized")
    return manager


async def get_db(
    manager: DatabaseSessionManager = Depends(get_db_manager),
) -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency for database sessions."""
    await manager.connect()
    async with manager.session() as session:
        yield session

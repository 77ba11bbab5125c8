"""Shipment Tracker API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map TrackerError → structured JSON responses
    - DatabaseSessionManager created in the lifespan, held on app.state,
      connected on startup and disposed on shutdown

Design Decisions:
    - Lifespan over @app.on_event: cleaner startup/shutdown pairing
    - A failed startup connect is logged, not fatal: the first request or
      /api/v1/warmup retries through the shared connect()
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from shiptrack.api.error_handlers import register_error_handlers
from shiptrack.api.routes import health, job_webhook, location_webhook, query_location
from shiptrack.config import get_settings
from shiptrack.core.errors import DatabaseError
from shiptrack.infrastructure.database import init_db
from shiptrack.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    app.state.db_manager = init_db(
        settings.resolved_database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
        pool_recycle=settings.database_pool_recycle,
        connect_timeout_seconds=settings.database_connect_timeout_seconds,
    )
    try:
        await app.state.db_manager.connect()
    except DatabaseError as e:
        logger.error(f"Database unavailable at startup: {e.message}")
    logger.info(f"Shipment Tracker API started ({settings.environment})")
    yield
    await app.state.db_manager.close()
    logger.info("Shipment Tracker API shutting down")


app = FastAPI(
    title="Shipment Tracker API", version="1.0.0", lifespan=lifespan,
)

# Routes: explicit registration
app.include_router(health.router)
app.include_router(job_webhook.router)
app.include_router(location_webhook.router)
app.include_router(query_location.router)

register_error_handlers(app)

"""Application lifespan management.

Startup Order:
1. Core (logging)
2. Database connectivity check
3. Rate-limit sweeper task

Shutdown Order: Reverse of startup (what starts first, shuts down last)
"""

from __future__ import annotations

import asyncio
import contextlib
from contextlib import asynccontextmanager
import logging
from typing import TYPE_CHECKING

from capability_service.core.settings import (
    get_app_settings,
    get_graphql_settings,
    get_logging_settings,
)
from capability_service.infra.database import close_database, init_database
from capability_service.infra.logging import setup_logging

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from fastapi import FastAPI

    from capability_service.infra.ratelimit import RateLimiter

logger = logging.getLogger(__name__)


async def _startup_core() -> None:
    """Configure logging before anything else logs."""
    app = get_app_settings()
    setup_logging(log_settings=get_logging_settings(), force=True)
    logger.info(
        "Application starting",
        extra={"service": app.service_name, "environment": app.environment},
    )


async def _startup_database() -> None:
    """Verify the database is reachable; startup fails when it is not."""
    try:
        await init_database()
    except Exception:
        logger.exception("Database unavailable, failing startup")
        raise


def _startup_sweeper(app: FastAPI) -> asyncio.Task[None] | None:
    limiter: RateLimiter | None = getattr(app.state, "rate_limiter", None)
    if limiter is None:
        return None

    interval = get_graphql_settings().rate_limit_sweep_interval
    task = asyncio.create_task(limiter.run_sweeper(interval), name="rate-limit-sweeper")
    logger.debug("Rate limit sweeper started", extra={"interval_seconds": interval})
    return task


async def _shutdown_sweeper(task: asyncio.Task[None] | None) -> None:
    if task is None:
        return
    task.cancel()
    with contextlib.suppress(asyncio.CancelledError):
        await task
    logger.debug("Rate limit sweeper stopped")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Start services on startup and stop them in reverse order on shutdown."""
    await _startup_core()
    await _startup_database()
    sweeper = _startup_sweeper(app)

    app_settings = get_app_settings()
    logger.info(
        "Application is LIVE and ready to serve requests on http://%s:%s",
        app_settings.host,
        app_settings.port,
        extra={
            "service": app_settings.service_name,
            "environment": app_settings.environment,
            "version": app_settings.version,
            "graphql_path": get_graphql_settings().path,
        },
    )

    try:
        yield
    finally:
        logger.info("Application shutting down", extra={"service": app_settings.service_name})
        await _shutdown_sweeper(sweeper)
        await close_database()
        logger.info("Application shutdown complete")


__all__ = ["lifespan"]

"""Database engine and session management.

The engine is created on first use from :class:`DatabaseSettings` so that
importing the application never opens a connection pool; tests swap the
session dependency for one bound to an in-memory SQLite engine instead.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from functools import lru_cache
from typing import TYPE_CHECKING

from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from capability_service.core.settings import get_app_settings, get_db_settings

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def get_engine() -> AsyncEngine:
    """Create (once) the async engine from settings."""
    db_settings = get_db_settings()
    engine_kwargs = db_settings.sqlalchemy_engine_kwargs()
    engine_kwargs["echo"] = db_settings.echo or get_app_settings().debug
    engine = create_async_engine(db_settings.database_url, **engine_kwargs)
    logger.info(
        "Database engine created",
        extra={"dialect": engine.dialect.name, "driver": engine.dialect.driver},
    )
    return engine


@lru_cache(maxsize=1)
def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Session factory bound to the process engine."""
    return async_sessionmaker(
        get_engine(),
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


@asynccontextmanager
async def get_async_session() -> AsyncGenerator[AsyncSession]:
    """Get async database session.

    Example:
        async with get_async_session() as session:
            result = await session.execute(select(Device))
    """
    async with get_session_factory()() as session:
        try:
            yield session
        finally:
            await session.close()


async def init_database() -> None:
    """Verify connectivity at startup.

    Raises:
        sqlalchemy.exc.OperationalError: If the database cannot be reached.
    """
    async with get_engine().connect() as conn:
        await conn.execute(text("SELECT 1"))
    logger.info("Database connection established successfully")


async def close_database() -> None:
    """Dispose the engine if it was ever created."""
    if get_engine.cache_info().currsize == 0:
        return
    logger.info("Closing database connection")
    await get_engine().dispose()
    get_session_factory.cache_clear()
    get_engine.cache_clear()
    logger.info("Database connection closed successfully")

"""Database dependencies for FastAPI route handlers.

`get_db_session()` wraps the infrastructure-level `get_async_session()` so the
session lifecycle is tied to the HTTP request. Tests override this dependency
with a session bound to an in-memory engine.

Usage:
    from capability_service.core.dependencies.database import get_db_session

    async def get_graphql_context(session: AsyncSession = Depends(get_db_session)):
        ...
"""

from collections.abc import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession

from capability_service.infra.database import get_async_session


async def get_db_session() -> AsyncGenerator[AsyncSession]:
    """FastAPI dependency for database session.

    Yields:
        Database session that is automatically closed after request.
    """
    async with get_async_session() as session:
        yield session

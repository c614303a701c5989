"""GraphQL router for FastAPI integration.

Provides:
- GraphQL endpoint (POST/GET) at the configured path
- Optional GraphQL IDE (GraphiQL, Apollo Sandbox or Pathfinder)
- Request context with session, capability resolver and DataLoaders
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Annotated, Any, cast

from fastapi import APIRouter, BackgroundTasks, Depends, Request, Response
from sqlalchemy.ext.asyncio import AsyncSession  # noqa: TC002
from strawberry.fastapi import GraphQLRouter

from capability_service.core.dependencies.database import get_db_session
from capability_service.core.settings import get_graphql_settings
from capability_service.features.capabilities import CapabilityResolver
from capability_service.features.graphql.context import GraphQLContext
from capability_service.features.graphql.dataloaders import create_dataloaders
from capability_service.features.graphql.schema import create_schema

if TYPE_CHECKING:
    import strawberry

    from capability_service.core.settings import GraphQLSettings

logger = logging.getLogger(__name__)


async def get_graphql_context(
    request: Request,
    response: Response,
    background_tasks: BackgroundTasks,
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> GraphQLContext:
    """Create GraphQL context from FastAPI dependencies.

    Following Strawberry's FastAPI integration pattern, this provides
    the standard context fields (request, response, background_tasks)
    plus a resolver and DataLoaders bound to the request's session.

    Args:
        request: FastAPI request
        response: FastAPI response (for setting headers/cookies)
        background_tasks: FastAPI background tasks
        session: Database session from dependency

    Returns:
        GraphQLContext for use in resolvers
    """
    resolver = CapabilityResolver(session)
    return GraphQLContext(
        request=request,
        response=response,
        background_tasks=background_tasks,
        session=session,
        loaders=create_dataloaders(session, resolver),
        resolver=resolver,
    )


def create_graphql_router(
    settings: GraphQLSettings | None = None,
    schema: strawberry.Schema | None = None,
) -> APIRouter:
    """Create GraphQL router with settings-based configuration.

    The endpoint is served at ``settings.path``; include the router without a
    prefix.
    """
    settings = settings or get_graphql_settings()
    schema = schema or create_schema(settings)

    graphql_app = GraphQLRouter(
        schema,
        context_getter=cast("Any", get_graphql_context),
        graphql_ide=settings.graphql_ide or None,
        path=settings.path,
    )

    router = APIRouter()
    router.include_router(graphql_app, prefix="")

    logger.info(
        "GraphQL router created",
        extra={"path": settings.path, "graphql_ide": settings.graphql_ide or None},
    )
    return router


__all__ = ["create_graphql_router", "get_graphql_context"]

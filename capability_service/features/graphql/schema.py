"""GraphQL schema assembly.

Combines the Query and Mutation roots into a single schema with the query
guards configured from :class:`GraphQLSettings`: the depth limiter runs
first, then the complexity limiter, both before any resolver.
"""

from __future__ import annotations

from functools import partial
import logging
from typing import TYPE_CHECKING

import strawberry

from capability_service.core.settings import get_graphql_settings
from capability_service.features.graphql.extensions import ComplexityLimiter, QueryDepthLimiter
from capability_service.features.graphql.resolvers import Mutation, Query

if TYPE_CHECKING:
    from collections.abc import Callable

    from strawberry.extensions import SchemaExtension

    from capability_service.core.settings import GraphQLSettings

logger = logging.getLogger(__name__)


def get_extensions(
    settings: GraphQLSettings | None = None,
) -> list[Callable[..., SchemaExtension]]:
    """Get extension factories; Strawberry builds a fresh extension per request."""
    settings = settings or get_graphql_settings()
    extensions: list[Callable[..., SchemaExtension]] = [
        partial(QueryDepthLimiter, max_depth=settings.max_depth),
        partial(ComplexityLimiter, max_complexity=settings.max_complexity),
    ]

    logger.debug(
        "GraphQL extensions configured",
        extra={"max_depth": settings.max_depth, "max_complexity": settings.max_complexity},
    )
    return extensions


def create_schema(settings: GraphQLSettings | None = None) -> strawberry.Schema:
    return strawberry.Schema(
        query=Query,
        mutation=Mutation,
        extensions=get_extensions(settings),
    )


schema = create_schema()

__all__ = ["create_schema", "get_extensions", "schema"]

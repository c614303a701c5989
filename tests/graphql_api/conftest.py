"""GraphQL test fixtures.

Provides:
- GraphQL context bound to the in-memory test session
- An ``execute`` helper running documents against the application schema
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import pytest

from capability_service.features.capabilities import CapabilityResolver
from capability_service.features.graphql.context import GraphQLContext
from capability_service.features.graphql.dataloaders import create_dataloaders
from capability_service.features.graphql.schema import schema

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from sqlalchemy.ext.asyncio import AsyncSession
    from strawberry.types import ExecutionResult


@pytest.fixture
def graphql_context(db_session: AsyncSession) -> GraphQLContext:
    """Create a fresh GraphQL context with DataLoaders for one operation."""
    resolver = CapabilityResolver(db_session)
    return GraphQLContext(
        session=db_session,
        loaders=create_dataloaders(db_session, resolver),
        resolver=resolver,
    )


@pytest.fixture
def execute(
    graphql_context: GraphQLContext,
) -> Callable[..., Awaitable[ExecutionResult]]:
    """Run a document against the schema with the test context."""

    async def _execute(query: str, **variables: Any) -> ExecutionResult:
        return await schema.execute(
            query,
            variable_values=variables or None,
            context_value=graphql_context,
        )

    return _execute

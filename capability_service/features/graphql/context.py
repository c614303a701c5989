"""GraphQL context for request-scoped dependencies.

The context is created fresh for each GraphQL request and provides:
- Database session (for queries)
- DataLoaders (for N+1 prevention)
- Capability resolver bound to the same session

Following Strawberry's FastAPI integration pattern:
https://strawberry.rocks/docs/integrations/fastapi#context_getter
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from strawberry.fastapi import BaseContext

if TYPE_CHECKING:
    import asyncio

    from sqlalchemy.ext.asyncio import AsyncSession
    from starlette.background import BackgroundTasks
    from starlette.requests import Request
    from starlette.responses import Response
    from starlette.websockets import WebSocket

    from capability_service.features.capabilities import CapabilityResolver
    from capability_service.features.graphql.dataloaders import DataLoaders


@dataclass
class GraphQLContext(BaseContext):
    """Request context for GraphQL operations.

    Standard fields (per Strawberry docs):
    - request: The HTTP request (or None for WebSocket)
    - response: The HTTP response (for setting headers/cookies)
    - background_tasks: FastAPI BackgroundTasks for async operations

    Custom fields:
    - session: Database session (request-scoped)
    - loaders: DataLoaders (request-scoped, tied to session)
    - resolver: CapabilityResolver (request-scoped, tied to session)

    Example usage in resolver:
        @strawberry.field
        async def device(self, info: Info[GraphQLContext, None], id: strawberry.ID) -> Device | None:
            device = await info.context.loaders.device.load(int(id))
            return Device.from_model(device) if device else None
    """

    request: Request | WebSocket | None = None
    response: Response | None = None
    background_tasks: BackgroundTasks | None = None

    session: AsyncSession = field(default=None)  # type: ignore[assignment]
    loaders: DataLoaders = field(default=None)  # type: ignore[assignment]
    resolver: CapabilityResolver = field(default=None)  # type: ignore[assignment]

    @property
    def session_lock(self) -> asyncio.Lock:
        """Lock serializing use of :attr:`session` across concurrent resolvers.

        Never await a DataLoader while holding it.
        """
        return self.loaders.lock


__all__ = ["GraphQLContext"]

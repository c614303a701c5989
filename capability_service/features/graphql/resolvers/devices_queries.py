"""Device and software query resolvers.

- device(id): Get a single device by ID
- devices(...): Search devices by partial vendor/model/market name and release window
- software(id): Get a single software build by ID
- deviceCount: Number of devices in the catalog
"""

from __future__ import annotations

from datetime import date  # noqa: TC003
import logging
from typing import Annotated

import strawberry
from strawberry.types import Info  # noqa: TC002

from capability_service.features.capabilities import DeviceRepository
from capability_service.features.graphql.context import GraphQLContext  # noqa: TC001
from capability_service.features.graphql.types import DeviceType, SoftwareType
from capability_service.features.graphql.utils import parse_id

logger = logging.getLogger(__name__)

LimitArg = Annotated[int, strawberry.argument(description="Maximum number of devices to return")]
OffsetArg = Annotated[int, strawberry.argument(description="Number of devices to skip")]
PartialMatchArg = Annotated[str | None, strawberry.argument(description="Partial, case-sensitive match")]
DateArg = Annotated[date | None, strawberry.argument(description="Inclusive release date bound")]


@strawberry.type
class DeviceQueries:
    @strawberry.field(description="Get a single device by ID")
    async def device(self, info: Info[GraphQLContext, None], id: strawberry.ID) -> DeviceType | None:  # noqa: A002
        pk = parse_id(id)
        if pk is None:
            return None
        device = await info.context.loaders.device.load(pk)
        return DeviceType.from_model(device) if device else None

    @strawberry.field(description="Search devices, ordered by release date")
    async def devices(
        self,
        info: Info[GraphQLContext, None],
        vendor: PartialMatchArg = None,
        model_num: PartialMatchArg = None,
        market_name: PartialMatchArg = None,
        released_after: DateArg = None,
        released_before: DateArg = None,
        limit: LimitArg = 50,
        offset: OffsetArg = 0,
    ) -> list[DeviceType]:
        """Search devices.

        Every filter is optional; text filters match anywhere in the value.
        """
        ctx = info.context
        async with ctx.session_lock:
            devices = await DeviceRepository().search(
                ctx.session,
                vendor=vendor,
                model_num=model_num,
                market_name=market_name,
                released_after=released_after,
                released_before=released_before,
                limit=max(limit, 0),
                offset=max(offset, 0),
            )
        return [DeviceType.from_model(d) for d in devices]

    @strawberry.field(description="Get a single software build by ID")
    async def software(self, info: Info[GraphQLContext, None], id: strawberry.ID) -> SoftwareType | None:  # noqa: A002
        pk = parse_id(id)
        if pk is None:
            return None
        software = await info.context.loaders.software.load(pk)
        return SoftwareType.from_model(software) if software else None

    @strawberry.field(description="Number of devices in the catalog")
    async def device_count(self, info: Info[GraphQLContext, None]) -> int:
        ctx = info.context
        async with ctx.session_lock:
            return await DeviceRepository().count(ctx.session)


__all__ = ["DeviceQueries"]

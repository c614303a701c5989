"""GraphQL types for capability lookups (devices supporting a band, combo or feature)."""

from __future__ import annotations

from typing import TYPE_CHECKING

import strawberry
from strawberry.types import Info  # noqa: TC002

from capability_service.features.capabilities import SupportStatus, hydrate_providers
from capability_service.features.graphql.context import GraphQLContext  # noqa: TC001
from capability_service.features.graphql.types.catalog import (
    DeviceType,
    ProviderType,
    SoftwareType,
)

if TYPE_CHECKING:
    from capability_service.features.capabilities import CapabilityResult
    from capability_service.features.graphql.dataloaders import CapabilityQuery
    from capability_service.features.graphql.dataloaders.capabilities import (
        DevicesByCapabilityDataLoader,
    )

SupportStatusEnum = strawberry.enum(
    SupportStatus,
    name="SupportStatus",
    description="Whether support is granted globally or by a specific provider",
)


@strawberry.type(name="CapabilityResult", description="A device supporting a capability")
class CapabilityResultType:
    device: DeviceType
    software: list[SoftwareType] = strawberry.field(
        description="Builds of the device carrying the capability"
    )
    support_status: SupportStatusEnum
    provider: ProviderType | None = strawberry.field(
        description="Granting provider; null for global support"
    )

    @classmethod
    def from_result(cls, result: CapabilityResult) -> CapabilityResultType:
        return cls(
            device=DeviceType.from_model(result.device),
            software=[SoftwareType.from_model(s) for s in result.software],
            support_status=result.support_status,
            provider=ProviderType.from_model(result.provider) if result.provider else None,
        )


async def resolve_devices(
    info: Info[GraphQLContext, None],
    loader: DevicesByCapabilityDataLoader,
    query: CapabilityQuery,
) -> list[CapabilityResultType]:
    """Load capability matches and hydrate their providers."""
    matches = await loader.load(query)
    results = await hydrate_providers(matches, info.context.loaders.provider)
    return [CapabilityResultType.from_result(r) for r in results]


__all__ = ["CapabilityResultType", "SupportStatusEnum", "resolve_devices"]

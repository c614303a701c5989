"""Capability lookup resolvers: devices supporting a band, combo or feature.

Without ``providerId`` the global grants are read and results are tagged
``GLOBAL``; with it, only that provider's grants count and results carry the
provider. Unknown capabilities yield an empty list.
"""

from __future__ import annotations

import logging
from typing import Annotated

import strawberry
from strawberry.types import Info  # noqa: TC002

from capability_service.features.graphql.context import GraphQLContext  # noqa: TC001
from capability_service.features.graphql.dataloaders import CapabilityQuery
from capability_service.features.graphql.types import CapabilityResultType, resolve_devices
from capability_service.features.graphql.utils import parse_id

logger = logging.getLogger(__name__)

ProviderIdArg = Annotated[
    strawberry.ID | None,
    strawberry.argument(description="Provider granting support; global support when omitted"),
]
TechnologyArg = Annotated[
    str | None, strawberry.argument(description="Only match when the capability has this technology")
]


def _query(
    capability_id: strawberry.ID,
    provider_id: strawberry.ID | None,
    technology: str | None = None,
) -> CapabilityQuery | None:
    capability = parse_id(capability_id)
    provider = parse_id(provider_id)
    if capability is None or (provider_id is not None and provider is None):
        return None
    return CapabilityQuery(capability, provider, technology)


@strawberry.type
class CapabilityQueries:
    @strawberry.field(description="Devices supporting a band, globally or for one provider")
    async def devices_by_band(
        self,
        info: Info[GraphQLContext, None],
        band_id: strawberry.ID,
        provider_id: ProviderIdArg = None,
        technology: TechnologyArg = None,
    ) -> list[CapabilityResultType]:
        query = _query(band_id, provider_id, technology)
        if query is None:
            return []
        return await resolve_devices(info, info.context.loaders.devices_by_band, query)

    @strawberry.field(description="Devices supporting a combo, globally or for one provider")
    async def devices_by_combo(
        self,
        info: Info[GraphQLContext, None],
        combo_id: strawberry.ID,
        provider_id: ProviderIdArg = None,
        technology: TechnologyArg = None,
    ) -> list[CapabilityResultType]:
        query = _query(combo_id, provider_id, technology)
        if query is None:
            return []
        return await resolve_devices(info, info.context.loaders.devices_by_combo, query)

    @strawberry.field(description="Devices supporting a feature, for any provider or for one")
    async def devices_by_feature(
        self,
        info: Info[GraphQLContext, None],
        feature_id: strawberry.ID,
        provider_id: ProviderIdArg = None,
    ) -> list[CapabilityResultType]:
        query = _query(feature_id, provider_id)
        if query is None:
            return []
        return await resolve_devices(info, info.context.loaders.devices_by_feature, query)

    @strawberry.field(description="Devices supporting every listed capability (not yet supported)")
    async def devices_by_capabilities(
        self,
        band_ids: list[strawberry.ID] | None = None,
        combo_ids: list[strawberry.ID] | None = None,
        feature_ids: list[strawberry.ID] | None = None,
        provider_id: ProviderIdArg = None,
    ) -> list[CapabilityResultType]:
        logger.debug(
            "devicesByCapabilities is not implemented; returning no results",
            extra={
                "band_ids": band_ids,
                "combo_ids": combo_ids,
                "feature_ids": feature_ids,
                "provider_id": provider_id,
            },
        )
        return []


__all__ = ["CapabilityQueries"]

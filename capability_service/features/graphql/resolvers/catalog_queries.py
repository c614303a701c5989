"""Band, combo, feature and provider query resolvers."""

from __future__ import annotations

from typing import Annotated

import strawberry
from strawberry.types import Info  # noqa: TC002

from capability_service.features.capabilities import (
    BandRepository,
    ComboRepository,
    FeatureRepository,
    ProviderRepository,
)
from capability_service.features.graphql.context import GraphQLContext  # noqa: TC001
from capability_service.features.graphql.types import (
    BandType,
    ComboType,
    FeatureType,
    ProviderType,
)
from capability_service.features.graphql.utils import parse_id

TechnologyArg = Annotated[str | None, strawberry.argument(description="Exact technology")]
PartialMatchArg = Annotated[str | None, strawberry.argument(description="Partial, case-sensitive match")]


@strawberry.type
class CatalogQueries:
    @strawberry.field(description="Get a single band by ID")
    async def band(self, info: Info[GraphQLContext, None], id: strawberry.ID) -> BandType | None:  # noqa: A002
        pk = parse_id(id)
        band = await info.context.loaders.band.load(pk) if pk is not None else None
        return BandType.from_model(band) if band else None

    @strawberry.field(description="List bands, ordered by technology then band number")
    async def bands(
        self,
        info: Info[GraphQLContext, None],
        technology: TechnologyArg = None,
        band_number: PartialMatchArg = None,
    ) -> list[BandType]:
        ctx = info.context
        async with ctx.session_lock:
            bands = await BandRepository().search(
                ctx.session, technology=technology, band_number=band_number
            )
        return [BandType.from_model(b) for b in bands]

    @strawberry.field(description="Get a single combo by ID")
    async def combo(self, info: Info[GraphQLContext, None], id: strawberry.ID) -> ComboType | None:  # noqa: A002
        pk = parse_id(id)
        combo = await info.context.loaders.combo.load(pk) if pk is not None else None
        return ComboType.from_model(combo) if combo else None

    @strawberry.field(description="List combos, ordered by technology then name")
    async def combos(
        self,
        info: Info[GraphQLContext, None],
        technology: TechnologyArg = None,
        name: PartialMatchArg = None,
    ) -> list[ComboType]:
        ctx = info.context
        async with ctx.session_lock:
            combos = await ComboRepository().search(ctx.session, technology=technology, name=name)
        return [ComboType.from_model(c) for c in combos]

    @strawberry.field(description="Get a single feature by ID")
    async def feature(self, info: Info[GraphQLContext, None], id: strawberry.ID) -> FeatureType | None:  # noqa: A002
        pk = parse_id(id)
        feature = await info.context.loaders.feature.load(pk) if pk is not None else None
        return FeatureType.from_model(feature) if feature else None

    @strawberry.field(description="List features, ordered by name")
    async def features(
        self,
        info: Info[GraphQLContext, None],
        name: PartialMatchArg = None,
    ) -> list[FeatureType]:
        ctx = info.context
        async with ctx.session_lock:
            features = await FeatureRepository().search(ctx.session, name=name)
        return [FeatureType.from_model(f) for f in features]

    @strawberry.field(description="Get a single provider by ID")
    async def provider(self, info: Info[GraphQLContext, None], id: strawberry.ID) -> ProviderType | None:  # noqa: A002
        pk = parse_id(id)
        provider = await info.context.loaders.provider.load(pk) if pk is not None else None
        return ProviderType.from_model(provider) if provider else None

    @strawberry.field(description="List all providers, ordered by name")
    async def providers(self, info: Info[GraphQLContext, None]) -> list[ProviderType]:
        ctx = info.context
        async with ctx.session_lock:
            providers = await ProviderRepository().find_all(ctx.session)
        return [ProviderType.from_model(p) for p in providers]


__all__ = ["CatalogQueries"]

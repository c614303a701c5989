"""GraphQL types for the device capability catalog.

Maps the SQLAlchemy catalog models to Strawberry types. Relationship fields
(a device's software and supported capabilities, a band's or combo's
supporting devices) resolve through the request's DataLoaders so lists of
objects never fan out into one query per object.
"""

from __future__ import annotations

from datetime import date, datetime  # noqa: TC003
from typing import TYPE_CHECKING, Annotated

import strawberry
from strawberry.types import Info  # noqa: TC002

from capability_service.features.graphql.context import GraphQLContext  # noqa: TC001
from capability_service.features.graphql.dataloaders import (
    CapabilityKey,
    CapabilityQuery,
    SoftwareKey,
)
from capability_service.features.graphql.utils import parse_id, to_id

if TYPE_CHECKING:
    from capability_service.features.capabilities import (
        Band,
        Combo,
        Device,
        Feature,
        Provider,
        Software,
    )
    from capability_service.features.graphql.types.capabilities import CapabilityResultType

_CAPABILITIES_MODULE = "capability_service.features.graphql.types.capabilities"

CapabilityResultRef = Annotated["CapabilityResultType", strawberry.lazy(_CAPABILITIES_MODULE)]

TechnologyArg = Annotated[
    str | None, strawberry.argument(description="Filter by technology (GSM, HSPA, LTE, NR)")
]
ComboTechnologyArg = Annotated[
    str | None, strawberry.argument(description="Filter by technology (LTE CA, EN-DC, NR CA)")
]
SoftwareIdArg = Annotated[
    strawberry.ID | None, strawberry.argument(description="Filter by specific software version")
]
ProviderIdArg = Annotated[strawberry.ID, strawberry.argument(description="Provider granting support")]
OptionalProviderIdArg = Annotated[
    strawberry.ID | None,
    strawberry.argument(description="Provider granting support; global support when omitted"),
]


def _optional_id(value: strawberry.ID | None) -> tuple[bool, int | None]:
    """(valid, pk) for an optional id argument; a malformed id is invalid."""
    if value is None:
        return True, None
    pk = parse_id(value)
    return pk is not None, pk


@strawberry.type(name="Provider", description="Network provider (carrier)")
class ProviderType:
    id: strawberry.ID
    name: str
    country: str
    network_type: str

    @classmethod
    def from_model(cls, provider: Provider) -> ProviderType:
        return cls(
            id=to_id(provider.id),
            name=provider.name,
            country=provider.country,
            network_type=provider.network_type,
        )


@strawberry.type(name="Feature", description="Device feature such as VoLTE or VoNR")
class FeatureType:
    id: strawberry.ID
    name: str
    description: str | None

    @classmethod
    def from_model(cls, feature: Feature) -> FeatureType:
        return cls(id=to_id(feature.id), name=feature.name, description=feature.description)


@strawberry.type(name="Band", description="Radio band such as LTE band 7 or NR band n77")
class BandType:
    """GraphQL type for Band entity."""

    pk: strawberry.Private[int]
    id: strawberry.ID
    band_number: str = strawberry.field(description="Band designation such as '7' or 'n77'")
    technology: str = strawberry.field(description="GSM, HSPA, LTE or NR")
    dl_band_class: str | None
    ul_band_class: str | None

    @classmethod
    def from_model(cls, band: Band) -> BandType:
        return cls(
            pk=band.id,
            id=to_id(band.id),
            band_number=band.band_number,
            technology=band.technology,
            dl_band_class=band.dl_band_class,
            ul_band_class=band.ul_band_class,
        )

    @strawberry.field(description="Devices supporting this band, globally or for one provider")
    async def devices(
        self,
        info: Info[GraphQLContext, None],
        provider_id: OptionalProviderIdArg = None,
    ) -> list[CapabilityResultRef]:
        from capability_service.features.graphql.types.capabilities import resolve_devices

        valid, provider = _optional_id(provider_id)
        if not valid:
            return []
        return await resolve_devices(
            info, info.context.loaders.devices_by_band, CapabilityQuery(self.pk, provider)
        )


@strawberry.type(name="Combo", description="Carrier aggregation or dual-connectivity band combination")
class ComboType:
    """GraphQL type for Combo entity."""

    pk: strawberry.Private[int]
    id: strawberry.ID
    name: str
    technology: str = strawberry.field(description="LTE CA, EN-DC or NR CA")

    @classmethod
    def from_model(cls, combo: Combo) -> ComboType:
        return cls(pk=combo.id, id=to_id(combo.id), name=combo.name, technology=combo.technology)

    @strawberry.field(description="Component bands in combo order")
    async def bands(self, info: Info[GraphQLContext, None]) -> list[BandType]:
        bands = await info.context.loaders.bands_by_combo.load(self.pk)
        return [BandType.from_model(b) for b in bands]

    @strawberry.field(description="Devices supporting this combo, globally or for one provider")
    async def devices(
        self,
        info: Info[GraphQLContext, None],
        provider_id: OptionalProviderIdArg = None,
    ) -> list[CapabilityResultRef]:
        from capability_service.features.graphql.types.capabilities import resolve_devices

        valid, provider = _optional_id(provider_id)
        if not valid:
            return []
        return await resolve_devices(
            info, info.context.loaders.devices_by_combo, CapabilityQuery(self.pk, provider)
        )


@strawberry.type(name="Software", description="Software build shipped on one device")
class SoftwareType:
    """GraphQL type for Software entity."""

    device_pk: strawberry.Private[int]
    id: strawberry.ID
    name: str
    platform: str
    ptcrb: int | None
    svn: int | None
    build_number: str | None
    release_date: date
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_model(cls, software: Software) -> SoftwareType:
        return cls(
            device_pk=software.device_id,
            id=to_id(software.id),
            name=software.name,
            platform=software.platform,
            ptcrb=software.ptcrb,
            svn=software.svn,
            build_number=software.build_number,
            release_date=software.release_date,
            created_at=software.created_at,
            updated_at=software.updated_at,
        )

    @strawberry.field(description="Device this build ships on")
    async def device(self, info: Info[GraphQLContext, None]) -> DeviceType | None:
        device = await info.context.loaders.device.load(self.device_pk)
        return DeviceType.from_model(device) if device else None


@strawberry.type(name="Device", description="Mobile device model")
class DeviceType:
    """GraphQL type for Device entity.

    Capability fields take an optional ``softwareId``; without it every
    build of the device counts and each capability is listed once.
    """

    pk: strawberry.Private[int]
    id: strawberry.ID
    vendor: str
    model_num: str
    market_name: str | None
    release_date: date
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_model(cls, device: Device) -> DeviceType:
        return cls(
            pk=device.id,
            id=to_id(device.id),
            vendor=device.vendor,
            model_num=device.model_num,
            market_name=device.market_name,
            release_date=device.release_date,
            created_at=device.created_at,
            updated_at=device.updated_at,
        )

    @strawberry.field(description="All software versions for this device")
    async def software(
        self,
        info: Info[GraphQLContext, None],
        platform: Annotated[
            str | None, strawberry.argument(description="Filter by platform (iOS, Android)")
        ] = None,
        released_after: Annotated[
            date | None, strawberry.argument(description="Only builds released on or after")
        ] = None,
    ) -> list[SoftwareType]:
        builds = await info.context.loaders.software_by_device.load(
            SoftwareKey(self.pk, platform, released_after)
        )
        return [SoftwareType.from_model(s) for s in builds]

    @strawberry.field(description="Bands supported globally by this device")
    async def supported_bands(
        self,
        info: Info[GraphQLContext, None],
        technology: TechnologyArg = None,
        software_id: SoftwareIdArg = None,
    ) -> list[BandType]:
        valid, software = _optional_id(software_id)
        if not valid:
            return []
        bands = await info.context.loaders.bands_by_device_software.load(
            CapabilityKey(self.pk, software, None, technology)
        )
        return [BandType.from_model(b) for b in bands]

    @strawberry.field(description="Bands supported by this device for a specific provider")
    async def supported_bands_for_provider(
        self,
        info: Info[GraphQLContext, None],
        provider_id: ProviderIdArg,
        technology: TechnologyArg = None,
        software_id: SoftwareIdArg = None,
    ) -> list[BandType]:
        provider = parse_id(provider_id)
        valid, software = _optional_id(software_id)
        if provider is None or not valid:
            return []
        bands = await info.context.loaders.bands_by_device_software_provider.load(
            CapabilityKey(self.pk, software, provider, technology)
        )
        return [BandType.from_model(b) for b in bands]

    @strawberry.field(description="Combos supported globally by this device")
    async def supported_combos(
        self,
        info: Info[GraphQLContext, None],
        technology: ComboTechnologyArg = None,
        software_id: SoftwareIdArg = None,
    ) -> list[ComboType]:
        valid, software = _optional_id(software_id)
        if not valid:
            return []
        combos = await info.context.loaders.combos_by_device_software.load(
            CapabilityKey(self.pk, software, None, technology)
        )
        return [ComboType.from_model(c) for c in combos]

    @strawberry.field(description="Combos supported by this device for a specific provider")
    async def supported_combos_for_provider(
        self,
        info: Info[GraphQLContext, None],
        provider_id: ProviderIdArg,
        technology: ComboTechnologyArg = None,
        software_id: SoftwareIdArg = None,
    ) -> list[ComboType]:
        provider = parse_id(provider_id)
        valid, software = _optional_id(software_id)
        if provider is None or not valid:
            return []
        combos = await info.context.loaders.combos_by_device_software_provider.load(
            CapabilityKey(self.pk, software, provider, technology)
        )
        return [ComboType.from_model(c) for c in combos]

    @strawberry.field(description="Features supported by this device (any provider)")
    async def features(
        self,
        info: Info[GraphQLContext, None],
        software_id: SoftwareIdArg = None,
    ) -> list[FeatureType]:
        valid, software = _optional_id(software_id)
        if not valid:
            return []
        features = await info.context.loaders.features_by_device_software_provider.load(
            CapabilityKey(self.pk, software)
        )
        return [FeatureType.from_model(f) for f in features]

    @strawberry.field(description="Features supported by this device for a specific provider")
    async def features_for_provider(
        self,
        info: Info[GraphQLContext, None],
        provider_id: ProviderIdArg,
        software_id: SoftwareIdArg = None,
    ) -> list[FeatureType]:
        provider = parse_id(provider_id)
        valid, software = _optional_id(software_id)
        if provider is None or not valid:
            return []
        features = await info.context.loaders.features_by_device_software_provider.load(
            CapabilityKey(self.pk, software, provider)
        )
        return [FeatureType.from_model(f) for f in features]


__all__ = [
    "BandType",
    "ComboType",
    "DeviceType",
    "FeatureType",
    "ProviderType",
    "SoftwareType",
]

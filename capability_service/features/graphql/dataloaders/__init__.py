"""DataLoader container and factory.

DataLoaders batch and cache database lookups within a single request,
preventing N+1 query problems common in GraphQL resolvers.

Each GraphQL request gets its own DataLoader instances to ensure proper
batching boundaries and cache isolation. All loaders of a request share one
``asyncio.Lock`` because they share one ``AsyncSession``, which does not
allow concurrent operations.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import TYPE_CHECKING

from capability_service.features.capabilities import (
    Band,
    BandRepository,
    CapabilityResolver,
    Combo,
    ComboRepository,
    Device,
    DeviceRepository,
    Feature,
    FeatureRepository,
    Provider,
    ProviderRepository,
    Software,
    SoftwareRepository,
)
from capability_service.features.graphql.dataloaders.capabilities import (
    CapabilityQuery,
    DevicesByCapabilityDataLoader,
    devices_by_band,
    devices_by_combo,
    devices_by_feature,
)
from capability_service.features.graphql.dataloaders.entities import EntityDataLoader
from capability_service.features.graphql.dataloaders.relationships import (
    BandsByComboDataLoader,
    CapabilityKey,
    DeviceCapabilityDataLoader,
    SoftwareByDeviceDataLoader,
    SoftwareKey,
)

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession


@dataclass
class DataLoaders:
    """Container for all DataLoader instances.

    One instance created per GraphQL request.
    Provides typed access to loaders.

    Usage in resolver:
        ctx = info.context
        device = await ctx.loaders.device.load(device_id)
        bands = await ctx.loaders.bands_by_device_software.load(CapabilityKey(device_id, software_id))
    """

    lock: asyncio.Lock

    device: EntityDataLoader[Device]
    software: EntityDataLoader[Software]
    band: EntityDataLoader[Band]
    combo: EntityDataLoader[Combo]
    feature: EntityDataLoader[Feature]
    provider: EntityDataLoader[Provider]

    software_by_device: SoftwareByDeviceDataLoader
    bands_by_device_software: DeviceCapabilityDataLoader
    bands_by_device_software_provider: DeviceCapabilityDataLoader
    combos_by_device_software: DeviceCapabilityDataLoader
    combos_by_device_software_provider: DeviceCapabilityDataLoader
    features_by_device_software_provider: DeviceCapabilityDataLoader
    bands_by_combo: BandsByComboDataLoader

    devices_by_band: DevicesByCapabilityDataLoader
    devices_by_combo: DevicesByCapabilityDataLoader
    devices_by_feature: DevicesByCapabilityDataLoader


def create_dataloaders(
    session: AsyncSession,
    resolver: CapabilityResolver | None = None,
) -> DataLoaders:
    """Factory for creating request-scoped DataLoaders.

    Args:
        session: Database session for the current request
        resolver: Capability resolver bound to the same session; built when omitted

    Returns:
        DataLoaders container with all loaders initialized
    """
    lock = asyncio.Lock()
    resolver = resolver or CapabilityResolver(session)
    bands = BandRepository()
    combos = ComboRepository()
    features = FeatureRepository()
    software = SoftwareRepository()

    return DataLoaders(
        lock=lock,
        device=EntityDataLoader(session, DeviceRepository(), lock),
        software=EntityDataLoader(session, software, lock),
        band=EntityDataLoader(session, bands, lock),
        combo=EntityDataLoader(session, combos, lock),
        feature=EntityDataLoader(session, features, lock),
        provider=EntityDataLoader(session, ProviderRepository(), lock),
        software_by_device=SoftwareByDeviceDataLoader(session, software, lock),
        bands_by_device_software=DeviceCapabilityDataLoader(session, bands, lock),
        bands_by_device_software_provider=DeviceCapabilityDataLoader(session, bands, lock),
        combos_by_device_software=DeviceCapabilityDataLoader(session, combos, lock),
        combos_by_device_software_provider=DeviceCapabilityDataLoader(session, combos, lock),
        features_by_device_software_provider=DeviceCapabilityDataLoader(session, features, lock),
        bands_by_combo=BandsByComboDataLoader(session, combos, lock),
        devices_by_band=devices_by_band(resolver, lock),
        devices_by_combo=devices_by_combo(resolver, lock),
        devices_by_feature=devices_by_feature(resolver, lock),
    )


__all__ = [
    "CapabilityKey",
    "CapabilityQuery",
    "DataLoaders",
    "SoftwareKey",
    "create_dataloaders",
]

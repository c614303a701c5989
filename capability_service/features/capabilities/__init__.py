"""Device capability catalog: models, repositories and capability resolution."""

from __future__ import annotations

from .models import Band, Combo, Device, Feature, Provider, Software
from .repository import (
    BandRepository,
    ComboRepository,
    DeviceRepository,
    FeatureRepository,
    ProviderRepository,
    SoftwareRepository,
)
from .resolver import CapabilityResolver, hydrate_providers
from .schemas import CapabilityMatch, CapabilityResult, SupportStatus

__all__ = [
    "Band",
    "BandRepository",
    "CapabilityMatch",
    "CapabilityResolver",
    "CapabilityResult",
    "Combo",
    "ComboRepository",
    "Device",
    "DeviceRepository",
    "Feature",
    "FeatureRepository",
    "Provider",
    "ProviderRepository",
    "Software",
    "SoftwareRepository",
    "SupportStatus",
    "hydrate_providers",
]

"""GraphQL type definitions.

This package contains Strawberry types for:
- Catalog entities (Device, Software, Band, Combo, Feature, Provider)
- Capability lookup results (CapabilityResult, SupportStatus)
"""

from __future__ import annotations

from capability_service.features.graphql.types.capabilities import (
    CapabilityResultType,
    SupportStatusEnum,
    resolve_devices,
)
from capability_service.features.graphql.types.catalog import (
    BandType,
    ComboType,
    DeviceType,
    FeatureType,
    ProviderType,
    SoftwareType,
)

__all__ = [
    "BandType",
    "CapabilityResultType",
    "ComboType",
    "DeviceType",
    "FeatureType",
    "ProviderType",
    "SoftwareType",
    "SupportStatusEnum",
    "resolve_devices",
]

"""GraphQL resolvers for queries and mutations.

This package contains:
- devices_queries.py: devices and software builds
- catalog_queries.py: bands, combos, features and providers
- capabilities_queries.py: devices supporting a capability
- mutations.py: placeholder mutation root

The per-area query classes are merged into the single ``Query`` root.
"""

from __future__ import annotations

from strawberry.tools import merge_types

from capability_service.features.graphql.resolvers.capabilities_queries import CapabilityQueries
from capability_service.features.graphql.resolvers.catalog_queries import CatalogQueries
from capability_service.features.graphql.resolvers.devices_queries import DeviceQueries
from capability_service.features.graphql.resolvers.mutations import Mutation

Query = merge_types("Query", (DeviceQueries, CatalogQueries, CapabilityQueries))

__all__ = ["CapabilityQueries", "CatalogQueries", "DeviceQueries", "Mutation", "Query"]

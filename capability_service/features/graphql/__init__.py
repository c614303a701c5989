"""GraphQL API for the device capability catalog, built on Strawberry.

This module provides the GraphQL endpoint with:
- Catalog queries (devices, software, bands, combos, features, providers)
- Capability lookups (devices supporting a band, combo or feature)
- Request-scoped DataLoaders for N+1 prevention
- Depth and complexity guards run before any resolver
"""

from __future__ import annotations

from typing import Any

__all__ = ["create_graphql_router", "schema"]


def __getattr__(name: str) -> Any:
    if name == "create_graphql_router":
        from capability_service.features.graphql.router import create_graphql_router

        return create_graphql_router
    if name == "schema":
        from capability_service.features.graphql.schema import schema as graphql_schema

        return graphql_schema
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")

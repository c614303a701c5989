"""Mutation root.

The catalog is read-only over GraphQL; the root exists so clients and
tooling can rely on a Mutation type.
"""

from __future__ import annotations

import strawberry


@strawberry.type(description="Root mutation type")
class Mutation:
    @strawberry.field(name="_placeholder", description="Reserved; always null")
    def placeholder(self) -> str | None:
        return None


__all__ = ["Mutation"]

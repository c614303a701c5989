"""Helpers shared by GraphQL types and resolvers."""

from __future__ import annotations

import strawberry


def parse_id(value: strawberry.ID | str | int | None) -> int | None:
    """Convert a GraphQL ``ID`` to a primary key.

    Returns None for missing or non-numeric ids so lookups resolve to
    ``null`` or an empty list rather than an error.
    """
    if value is None:
        return None
    try:
        return int(str(value))
    except ValueError:
        return None


def to_id(pk: int) -> strawberry.ID:
    return strawberry.ID(str(pk))


__all__ = ["parse_id", "to_id"]

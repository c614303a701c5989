"""Unit tests for query depth calculation and rejection."""

from __future__ import annotations

from graphql import GraphQLError, parse
import pytest

from capability_service.features.graphql.extensions import (
    DEFAULT_MAX_DEPTH,
    QueryDepthLimiter,
    check_depth,
    operation_depth,
)
from capability_service.features.graphql.extensions.selection_walker import (
    fragment_definitions,
    operation_definitions,
)


def _depth(source: str) -> int:
    document = parse(source)
    return operation_depth(operation_definitions(document)[0], fragment_definitions(document))


@pytest.mark.parametrize(
    ("source", "expected"),
    [
        ("{ deviceCount }", 1),
        ("{ devices { id } }", 2),
        ("{ devices { id software { name } vendor } }", 3),
        ("{ a: devices { id } b: devices { software { device { id } } } }", 4),
        ("{ user { profile { settings { preferences { theme } } } } }", 5),
    ],
)
def test_operation_depth(source: str, expected: int) -> None:
    assert _depth(source) == expected


def test_siblings_take_the_maximum() -> None:
    assert _depth("{ devices { id } bands { id } combos { bands { id } } }") == 3


def test_introspection_does_not_add_depth() -> None:
    assert _depth("{ __schema { types { fields { type { name } } } } devices { id } }") == 2


def test_fragments_count_toward_depth() -> None:
    source = """
        query { devices { ...Nested } }
        fragment Nested on Device { software { device { id } } }
    """
    assert _depth(source) == 4


def test_check_depth_rejects_over_limit() -> None:
    document = parse("{ user { profile { settings { preferences { theme } } } } }")

    with pytest.raises(GraphQLError) as exc_info:
        check_depth(document, max_depth=3)

    assert "Query depth (5) exceeds maximum allowed depth (3)" in exc_info.value.message
    assert exc_info.value.extensions == {"code": "DEPTH_LIMIT_EXCEEDED", "depth": 5, "limit": 3}


def test_check_depth_allows_at_limit() -> None:
    document = parse("{ user { profile { settings { preferences { theme } } } } }")

    assert check_depth(document, max_depth=5) == 5


def test_each_operation_is_checked() -> None:
    document = parse(
        """
        query Shallow { deviceCount }
        mutation Deep { a { b { c { d } } } }
        """
    )

    with pytest.raises(GraphQLError) as exc_info:
        check_depth(document, max_depth=3)

    assert exc_info.value.extensions["depth"] == 4


def test_limiter_defaults() -> None:
    assert QueryDepthLimiter().max_depth == DEFAULT_MAX_DEPTH == 5

"""Unit tests for query complexity scoring and rejection."""

from __future__ import annotations

from graphql import GraphQLError, parse
import pytest

from capability_service.features.graphql.extensions import (
    ComplexityConfig,
    ComplexityLimiter,
    check_complexity,
    document_complexity,
)


def _complexity(source: str) -> int:
    return document_complexity(parse(source))


@pytest.mark.parametrize(
    ("source", "expected"),
    [
        ("{ deviceCount }", 1),
        ("{ devices { id } }", 12),
        ("{ devices { id software { name } } }", 35),
        ("{ device(id: 1) { supportedBands { id } } }", 1 + 20 + 3),
    ],
)
def test_document_complexity(source: str, expected: int) -> None:
    assert _complexity(source) == expected


def test_root_leaf_adds_exactly_one() -> None:
    base = _complexity("{ devices { id } }")

    assert _complexity("{ devices { id } deviceCount }") == base + 1


def test_deeper_lists_cost_more() -> None:
    shallow = _complexity("{ devices { id } }")
    nested = _complexity("{ device(id: 1) { software { id } } }")
    more_lists = _complexity("{ devices { id } bands { id } }")

    assert nested > _complexity("{ device(id: 1) { id } }")
    assert more_lists > shallow


def test_all_operations_are_summed() -> None:
    single = _complexity("query A { devices { id } }")

    assert _complexity("query A { devices { id } } query B { devices { id } }") == 2 * single


def test_fragments_and_introspection() -> None:
    with_fragment = _complexity(
        """
        query { devices { ...F } }
        fragment F on Device { id software { name } }
        """
    )

    assert with_fragment == 35
    assert _complexity("{ __typename __schema { types { name } } }") == 0


def test_check_complexity_rejects_over_limit() -> None:
    with pytest.raises(GraphQLError) as exc_info:
        check_complexity(parse("{ devices { id } }"), max_complexity=5)

    assert "(12 > 5)" in exc_info.value.message
    assert exc_info.value.extensions == {
        "code": "COMPLEXITY_LIMIT_EXCEEDED",
        "complexity": 12,
        "limit": 5,
    }


@pytest.mark.parametrize(("limit", "rejected"), [(11, True), (12, False), (13, False)])
def test_rejection_depends_only_on_limit(limit: int, rejected: bool) -> None:
    document = parse("{ devices { id } }")

    if rejected:
        with pytest.raises(GraphQLError):
            check_complexity(document, max_complexity=limit)
    else:
        assert check_complexity(document, max_complexity=limit) == 12


def test_custom_cost_table() -> None:
    class CheapLists(ComplexityConfig):
        LIST_COST = 2

    assert document_complexity(parse("{ devices { id } }"), CheapLists) == 4


def test_limiter_defaults() -> None:
    limiter = ComplexityLimiter()

    assert limiter.max_complexity == ComplexityConfig.DEFAULT_MAX_COMPLEXITY == 1000


def test_limiter_keeps_explicit_zero_limit() -> None:
    assert ComplexityLimiter(max_complexity=0).max_complexity == 0

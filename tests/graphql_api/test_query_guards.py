"""Tests for the depth and complexity guards running inside the schema."""

from __future__ import annotations

import asyncio
from functools import partial

import pytest
import strawberry

from capability_service.core.settings import GraphQLSettings
from capability_service.features.graphql.extensions import ComplexityLimiter, QueryDepthLimiter
from capability_service.features.graphql.resolvers import Query
from capability_service.features.graphql.schema import create_schema, get_extensions, schema

TOO_DEEP_QUERY = "{ devices { software { device { software { device { id } } } } } }"

# 13 aliases * (10 + 20 + 3 + 40 + 5) = 1014
TOO_COMPLEX_QUERY = (
    "{ "
    + " ".join(
        f"d{i}: devices {{ software {{ device {{ supportedBands {{ id }} }} }} }}"
        for i in range(13)
    )
    + " }"
)


@pytest.mark.asyncio
async def test_depth_limit_rejects_before_resolving(graphql_context, catalog) -> None:
    result = await schema.execute(TOO_DEEP_QUERY, context_value=graphql_context)

    assert result.data is None
    assert result.errors is not None
    error = result.errors[0]
    assert error.message == (
        "Query depth (6) exceeds maximum allowed depth (5). Please reduce nesting in your query."
    )
    assert error.extensions == {"code": "DEPTH_LIMIT_EXCEEDED", "depth": 6, "limit": 5}


@pytest.mark.asyncio
async def test_query_at_depth_limit_is_allowed(graphql_context, catalog) -> None:
    result = await schema.execute(
        "{ devices { software { device { software { id } } } } }",
        context_value=graphql_context,
    )

    assert result.errors is None
    assert len(result.data["devices"]) == 3


@pytest.mark.asyncio
async def test_complexity_limit_rejects_wide_query(graphql_context, catalog) -> None:
    result = await schema.execute(TOO_COMPLEX_QUERY, context_value=graphql_context)

    assert result.data is None
    assert result.errors is not None
    error = result.errors[0]
    assert error.message == (
        "Query is too complex (1014 > 1000). "
        "Please simplify your query or split it into multiple requests."
    )
    assert error.extensions == {
        "code": "COMPLEXITY_LIMIT_EXCEEDED",
        "complexity": 1014,
        "limit": 1000,
    }


@pytest.mark.asyncio
async def test_limits_follow_settings(graphql_context, catalog) -> None:
    strict = create_schema(GraphQLSettings(max_depth=2, max_complexity=11))

    listing = await strict.execute("{ devices { id } }", context_value=graphql_context)
    deep = await strict.execute("{ devices { software { id } } }", context_value=graphql_context)
    costly = await strict.execute("{ devices { id vendor } }", context_value=graphql_context)

    assert listing.errors is not None
    assert listing.errors[0].extensions["code"] == "COMPLEXITY_LIMIT_EXCEEDED"
    assert deep.errors[0].extensions["code"] == "DEPTH_LIMIT_EXCEEDED"
    assert costly.errors[0].extensions["complexity"] == 14


@pytest.mark.asyncio
async def test_introspection_is_not_counted(graphql_context) -> None:
    result = await schema.execute(
        "{ __schema { queryType { fields { name type { ofType { fields { name } } } } } } }",
        context_value=graphql_context,
    )

    assert result.errors is None
    names = {f["name"] for f in result.data["__schema"]["queryType"]["fields"]}
    assert {"devicesByBand", "devicesByCombo", "devicesByFeature", "deviceCount"} <= names


def test_extensions_are_built_per_request() -> None:
    settings = GraphQLSettings(max_depth=3, max_complexity=50)
    depth_factory, complexity_factory = get_extensions(settings)

    first = depth_factory()
    second = depth_factory()
    complexity = complexity_factory()

    assert isinstance(first, QueryDepthLimiter)
    assert first is not second
    assert first.max_depth == 3
    assert isinstance(complexity, ComplexityLimiter)
    assert complexity.max_complexity == 50


@pytest.mark.asyncio
async def test_concurrent_operations_are_judged_independently(graphql_context) -> None:
    queries = [TOO_DEEP_QUERY if i % 2 else "{ __typename }" for i in range(40)]

    results = await asyncio.gather(
        *(schema.execute(query, context_value=graphql_context) for query in queries)
    )

    for query, result in zip(queries, results, strict=True):
        if query == TOO_DEEP_QUERY:
            assert result.errors[0].extensions["code"] == "DEPTH_LIMIT_EXCEEDED"
        else:
            assert result.errors is None
            assert result.data == {"__typename": "Query"}


@pytest.mark.asyncio
async def test_zero_complexity_limit_rejects_any_field(graphql_context) -> None:
    strict = strawberry.Schema(
        query=Query,
        extensions=[partial(ComplexityLimiter, max_complexity=0)],
    )

    result = await strict.execute("{ deviceCount }", context_value=graphql_context)

    assert result.data is None
    assert result.errors[0].extensions == {
        "code": "COMPLEXITY_LIMIT_EXCEEDED",
        "complexity": 1,
        "limit": 0,
    }

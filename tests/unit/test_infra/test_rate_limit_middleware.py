"""Unit tests for the rate limiting middleware."""

from __future__ import annotations

from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
import pytest
from starlette.requests import Request

from capability_service.infra.ratelimit import (
    RateLimiter,
    RateLimitMiddleware,
    client_key_from_request,
)


def _request(headers: dict[str, str]) -> Request:
    scope = {
        "type": "http",
        "method": "POST",
        "path": "/graphql",
        "headers": [(k.lower().encode(), v.encode()) for k, v in headers.items()],
    }
    return Request(scope)


@pytest.mark.parametrize(
    ("headers", "expected"),
    [
        ({"X-Forwarded-For": "10.0.0.1"}, "10.0.0.1"),
        ({"X-Forwarded-For": " 10.0.0.1 , 172.16.0.1"}, "10.0.0.1"),
        ({"X-Forwarded-For": " , 172.16.0.1"}, "unknown"),
        ({}, "unknown"),
    ],
)
def test_client_key_from_request(headers: dict[str, str], expected: str) -> None:
    assert client_key_from_request(_request(headers)) == expected


def _app(limiter: RateLimiter, *, enabled: bool = True) -> FastAPI:
    app = FastAPI()
    app.add_middleware(RateLimitMiddleware, limiter=limiter, paths=["/graphql"], enabled=enabled)

    @app.post("/graphql")
    async def graphql() -> dict[str, str]:
        return {"ok": "yes"}

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/graphql-docs")
    async def graphql_docs() -> dict[str, str]:
        return {"docs": "yes"}

    @app.get("/graphql/schema")
    async def graphql_schema() -> dict[str, str]:
        return {"schema": "yes"}

    return app


@pytest.mark.asyncio
async def test_third_request_is_rejected_with_429() -> None:
    app = _app(RateLimiter(per_minute=2, per_hour=100))
    headers = {"X-Forwarded-For": "10.0.0.1"}

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        first = await client.post("/graphql", headers=headers)
        second = await client.post("/graphql", headers=headers)
        third = await client.post("/graphql", headers=headers)

    assert first.status_code == 200
    assert first.headers["X-RateLimit-Limit"] == "2"
    assert first.headers["X-RateLimit-Remaining"] == "1"
    assert second.status_code == 200
    assert third.status_code == 429
    assert 0 < int(third.headers["Retry-After"]) <= 60
    error = third.json()["errors"][0]
    assert error["message"].startswith("Rate limit exceeded. Try again in ")
    assert error["extensions"]["code"] == "RATE_LIMIT_EXCEEDED"
    assert error["extensions"]["resetIn"] == int(third.headers["Retry-After"])


@pytest.mark.asyncio
async def test_other_paths_are_not_counted() -> None:
    app = _app(RateLimiter(per_minute=1, per_hour=100))

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        responses = [await client.get("/health") for _ in range(3)]

    assert [r.status_code for r in responses] == [200, 200, 200]


@pytest.mark.asyncio
async def test_only_the_graphql_path_and_its_subpaths_are_counted() -> None:
    app = _app(RateLimiter(per_minute=1, per_hour=100))

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        sibling = [await client.get("/graphql-docs") for _ in range(3)]
        nested = [await client.get("/graphql/schema") for _ in range(2)]

    assert [r.status_code for r in sibling] == [200, 200, 200]
    assert "X-RateLimit-Limit" not in sibling[0].headers
    assert [r.status_code for r in nested] == [200, 429]


@pytest.mark.asyncio
async def test_disabled_middleware_passes_everything() -> None:
    app = _app(RateLimiter(per_minute=1, per_hour=1), enabled=False)

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        responses = [await client.post("/graphql") for _ in range(3)]

    assert [r.status_code for r in responses] == [200, 200, 200]
    assert "X-RateLimit-Limit" not in responses[0].headers

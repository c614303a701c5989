"""Tests for the liveness endpoint."""

from __future__ import annotations

from datetime import datetime

import pytest


@pytest.mark.asyncio
async def test_health_check(client) -> None:
    response = await client.get("/health")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "ok"
    assert body["environment"] == "test"
    assert datetime.fromisoformat(body["timestamp"].replace("Z", "+00:00")).tzinfo is not None


@pytest.mark.asyncio
async def test_unknown_route_returns_404(client) -> None:
    response = await client.get("/nope")

    assert response.status_code == 404

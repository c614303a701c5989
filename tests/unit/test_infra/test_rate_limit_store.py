"""Unit tests for the in-memory rate limit counter store."""

from __future__ import annotations

import pytest

from capability_service.infra.ratelimit import InMemoryRateLimitStore, WindowCounter


def test_put_get_and_increment() -> None:
    store = InMemoryRateLimitStore()
    store.put("client:minute", WindowCounter(count=0, reset_at=60.0))

    assert store.increment("client:minute").count == 1
    assert store.increment("client:minute").count == 2
    assert store.get("client:minute") == WindowCounter(count=2, reset_at=60.0)
    assert store.get("other:minute") is None


def test_increment_requires_existing_counter() -> None:
    with pytest.raises(KeyError):
        InMemoryRateLimitStore().increment("missing")


def test_expire_only_drops_elapsed_windows() -> None:
    store = InMemoryRateLimitStore()
    store.put("a", WindowCounter(count=3, reset_at=10.0))
    store.put("b", WindowCounter(count=1, reset_at=20.0))

    assert store.expire(20.0) == 1
    assert store.get("a") is None
    assert store.get("b") is not None
    assert len(store) == 1

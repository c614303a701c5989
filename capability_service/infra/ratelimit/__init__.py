"""Rate limiting infrastructure."""
from __future__ import annotations

from capability_service.infra.ratelimit.limiter import RateDecision, RateLimiter, RateWindow
from capability_service.infra.ratelimit.middleware import (
    RateLimitMiddleware,
    client_key_from_request,
    rate_limit_response,
)
from capability_service.infra.ratelimit.store import (
    InMemoryRateLimitStore,
    RateLimitStore,
    WindowCounter,
)

__all__ = [
    "InMemoryRateLimitStore",
    "RateDecision",
    "RateLimitMiddleware",
    "RateLimitStore",
    "RateLimiter",
    "RateWindow",
    "WindowCounter",
    "client_key_from_request",
    "rate_limit_response",
]

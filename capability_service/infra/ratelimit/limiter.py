"""Dual fixed-window rate limiter (per minute and per hour) keyed by client."""

from __future__ import annotations

import asyncio
import logging
import math
import time
from dataclasses import dataclass
from typing import TYPE_CHECKING

from capability_service.core.exceptions import RateLimitException
from capability_service.infra.ratelimit.store import InMemoryRateLimitStore, WindowCounter

if TYPE_CHECKING:
    from collections.abc import Callable

    from capability_service.infra.ratelimit.store import RateLimitStore

logger = logging.getLogger(__name__)

MINUTE = 60
HOUR = 3600


@dataclass(frozen=True, slots=True)
class RateWindow:
    """A named fixed window and the number of requests it admits."""

    name: str
    seconds: int
    limit: int


@dataclass(frozen=True, slots=True)
class RateDecision:
    """Outcome of counting one request.

    Attributes:
        allowed: False when some window's count went over its limit.
        window: The window that rejected the request, or the first window
            when the request was allowed.
        count: Requests counted in ``window`` including this one.
        remaining: Requests left in ``window`` (never negative).
        reset_in: Whole seconds until ``window`` resets.
    """

    allowed: bool
    window: RateWindow
    count: int
    remaining: int
    reset_in: int

    @property
    def message(self) -> str:
        """Client-facing rejection message."""
        if self.window.seconds >= HOUR:
            minutes = math.ceil(self.reset_in / 60)
            return f"Hourly rate limit exceeded. Try again in {minutes} minutes."
        return f"Rate limit exceeded. Try again in {self.reset_in} seconds."


class RateLimiter:
    """Fixed-window request counter with a minute and an hour window.

    Windows are checked minute first; a minute rejection returns before the
    hour counter is touched. A counter whose window has elapsed
    (``reset_at < now``) restarts at zero with a fresh window.

    Example:
        limiter = RateLimiter(per_minute=100, per_hour=1000)
        limiter.check_limit("10.0.0.1")  # raises RateLimitException when exceeded
    """

    def __init__(
        self,
        store: RateLimitStore | None = None,
        *,
        per_minute: int = 100,
        per_hour: int = 1000,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.store = store if store is not None else InMemoryRateLimitStore()
        self.windows = (
            RateWindow("minute", MINUTE, per_minute),
            RateWindow("hour", HOUR, per_hour),
        )
        self._clock = clock

    def check(self, client_key: str) -> RateDecision:
        """Count one request for ``client_key`` and decide whether it may proceed."""
        now = self._clock()
        first = self._count(client_key, self.windows[0], now)
        if not first.allowed:
            return first

        for window in self.windows[1:]:
            decision = self._count(client_key, window, now)
            if not decision.allowed:
                return decision
        return first

    def _count(self, client_key: str, window: RateWindow, now: float) -> RateDecision:
        key = f"{client_key}:{window.name}"
        counter = self.store.get(key)
        if counter is None or counter.reset_at < now:
            self.store.put(key, WindowCounter(count=0, reset_at=now + window.seconds))
        counter = self.store.increment(key)

        return RateDecision(
            allowed=counter.count <= window.limit,
            window=window,
            count=counter.count,
            remaining=max(0, window.limit - counter.count),
            reset_in=math.ceil(counter.reset_at - now),
        )

    def check_limit(self, client_key: str) -> RateDecision:
        """Like :meth:`check` but raise when the request is rejected.

        Raises:
            RateLimitException: With the rejecting window and ``reset_in``.
        """
        decision = self.check(client_key)
        if not decision.allowed:
            logger.warning(
                "Rate limit exceeded",
                extra={
                    "key": client_key,
                    "window": decision.window.name,
                    "limit": decision.window.limit,
                    "count": decision.count,
                    "reset_in": decision.reset_in,
                },
            )
            raise RateLimitException(
                detail=decision.message,
                window=decision.window.name,
                reset_in=decision.reset_in,
                extra={"limit": decision.window.limit},
            )
        logger.debug(
            "Rate limit check passed",
            extra={
                "key": client_key,
                "window": decision.window.name,
                "count": decision.count,
                "remaining": decision.remaining,
            },
        )
        return decision

    def sweep(self) -> int:
        """Evict counters whose window has fully elapsed."""
        evicted = self.store.expire(self._clock())
        if evicted:
            logger.debug(
                "Swept rate limit counters",
                extra={"evicted": evicted, "remaining_keys": len(self.store)},
            )
        return evicted

    async def run_sweeper(self, interval: float) -> None:
        """Call :meth:`sweep` every ``interval`` seconds until cancelled."""
        while True:
            await asyncio.sleep(interval)
            self.sweep()

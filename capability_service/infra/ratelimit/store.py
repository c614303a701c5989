"""Counter storage for fixed-window rate limiting.

The limiter only talks to :class:`RateLimitStore`; the in-process dict store
is the single implementation. Counters are per process, so several workers
each keep their own.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol


@dataclass(slots=True)
class WindowCounter:
    """Requests seen in the current window and when that window ends.

    ``reset_at`` is on the limiter's clock, in seconds.
    """

    count: int
    reset_at: float


class RateLimitStore(Protocol):
    """Keyed storage for window counters."""

    def get(self, key: str) -> WindowCounter | None: ...

    def put(self, key: str, counter: WindowCounter) -> None: ...

    def increment(self, key: str) -> WindowCounter: ...

    def expire(self, now: float) -> int: ...

    def __len__(self) -> int: ...


class InMemoryRateLimitStore:
    """Dict-backed store mutated synchronously from the event loop."""

    def __init__(self) -> None:
        self._counters: dict[str, WindowCounter] = {}

    def get(self, key: str) -> WindowCounter | None:
        return self._counters.get(key)

    def put(self, key: str, counter: WindowCounter) -> None:
        self._counters[key] = counter

    def increment(self, key: str) -> WindowCounter:
        """Add one request to an existing counter.

        Raises:
            KeyError: If no counter was stored under ``key``.
        """
        counter = self._counters[key]
        counter.count += 1
        return counter

    def expire(self, now: float) -> int:
        """Drop counters whose window ended before ``now``; return how many."""
        elapsed = [key for key, counter in self._counters.items() if counter.reset_at < now]
        for key in elapsed:
            del self._counters[key]
        return len(elapsed)

    def __len__(self) -> int:
        return len(self._counters)

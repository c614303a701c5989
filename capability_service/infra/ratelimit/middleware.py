"""Rate limiting middleware for the GraphQL endpoint."""
from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable

from fastapi import Request, Response
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from capability_service.core.exceptions import RateLimitException
from capability_service.infra.ratelimit.limiter import RateLimiter

logger = logging.getLogger(__name__)


def client_key_from_request(request: Request) -> str:
    """First X-Forwarded-For address, trimmed; ``unknown`` when absent."""
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        client_ip = forwarded.split(",")[0].strip()
        if client_ip:
            return client_ip
    return "unknown"


def rate_limit_response(exc: RateLimitException) -> JSONResponse:
    """429 response with a GraphQL-shaped error body."""
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "errors": [
                {
                    "message": exc.detail,
                    "extensions": {"code": "RATE_LIMIT_EXCEEDED", "resetIn": exc.reset_in},
                }
            ]
        },
        headers={"Retry-After": str(exc.reset_in)},
    )


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Short-circuits over-limit requests before GraphQL processing.

    Only requests to one of ``paths``, or below it, are counted.
    Rejections become a 429 response here, since exceptions raised inside
    ``BaseHTTPMiddleware`` never reach the application's exception handlers.

    Example:
        app.add_middleware(
            RateLimitMiddleware,
            limiter=RateLimiter(per_minute=100, per_hour=1000),
            paths=["/graphql"],
        )
    """

    def __init__(
        self,
        app: ASGIApp,
        limiter: RateLimiter,
        paths: list[str] | None = None,
        enabled: bool = True,
        key_func: Callable[[Request], str] | None = None,
    ) -> None:
        super().__init__(app)
        self.limiter = limiter
        self.paths = paths or ["/graphql"]
        self.enabled = enabled
        self.key_func = key_func or client_key_from_request

    def _is_limited(self, path: str) -> bool:
        return any(path == limited or path.startswith(f"{limited}/") for limited in self.paths)

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        if not self.enabled or not self._is_limited(request.url.path):
            return await call_next(request)

        client_key = self.key_func(request)
        try:
            decision = self.limiter.check_limit(client_key)
        except RateLimitException as exc:
            logger.info(
                "Rejected request over rate limit",
                extra={"path": request.url.path, "method": request.method, "key": client_key},
            )
            return rate_limit_response(exc)

        response = await call_next(request)
        response.headers["X-RateLimit-Limit"] = str(decision.window.limit)
        response.headers["X-RateLimit-Remaining"] = str(decision.remaining)
        return response

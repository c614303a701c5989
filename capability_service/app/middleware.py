"""Middleware configuration for FastAPI application."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from fastapi.middleware.cors import CORSMiddleware

from capability_service.infra.ratelimit import RateLimiter, RateLimitMiddleware

if TYPE_CHECKING:
    from fastapi import FastAPI

    from capability_service.core.settings import AppSettings, GraphQLSettings

logger = logging.getLogger(__name__)


def configure_middleware(
    app: FastAPI,
    app_settings: AppSettings,
    graphql_settings: GraphQLSettings,
    limiter: RateLimiter,
) -> None:
    """Configure middleware for the application.

    The rate limiter guards the GraphQL path only and is bypassed in
    development.

    Args:
        app: FastAPI application instance.
        app_settings: Application settings (environment).
        graphql_settings: GraphQL settings (path).
        limiter: Process-wide rate limiter shared with the sweeper task.
    """
    rate_limit_enabled = not app_settings.is_development
    app.add_middleware(
        RateLimitMiddleware,
        limiter=limiter,
        paths=[graphql_settings.path],
        enabled=rate_limit_enabled,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=["X-RateLimit-Limit", "X-RateLimit-Remaining", "Retry-After"],
        max_age=3600,
    )

    logger.info(
        "Middleware configured",
        extra={
            "rate_limit_enabled": rate_limit_enabled,
            "rate_limit_per_minute": graphql_settings.rate_limit_per_minute,
            "rate_limit_per_hour": graphql_settings.rate_limit_per_hour,
        },
    )


__all__ = ["configure_middleware"]

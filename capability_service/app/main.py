"""FastAPI application factory."""

from __future__ import annotations

from fastapi import FastAPI

from capability_service.app.exception_handlers import configure_exception_handlers
from capability_service.app.lifespan import lifespan
from capability_service.app.middleware import configure_middleware
from capability_service.core.settings import (
    AppSettings,
    GraphQLSettings,
    get_app_settings,
    get_graphql_settings,
)
from capability_service.features.graphql.router import create_graphql_router
from capability_service.features.health.router import router as health_router
from capability_service.infra.ratelimit import RateLimiter


def create_app(
    app_settings: AppSettings | None = None,
    graphql_settings: GraphQLSettings | None = None,
    limiter: RateLimiter | None = None,
) -> FastAPI:
    """Create and configure FastAPI application.

    Settings default to the cached environment-backed settings; tests pass
    their own settings and limiter.

    Returns:
        Configured FastAPI application instance.
    """
    app_settings = app_settings or get_app_settings()
    graphql_settings = graphql_settings or get_graphql_settings()
    limiter = limiter or RateLimiter(
        per_minute=graphql_settings.rate_limit_per_minute,
        per_hour=graphql_settings.rate_limit_per_hour,
    )

    app = FastAPI(
        title=app_settings.title,
        version=app_settings.version,
        debug=app_settings.debug,
        lifespan=lifespan,
    )
    app.state.rate_limiter = limiter

    # Configure exception handlers (must be before middleware)
    configure_exception_handlers(app)

    configure_middleware(app, app_settings, graphql_settings, limiter)

    app.include_router(health_router, tags=["health"])
    if graphql_settings.is_configured:
        app.include_router(create_graphql_router(graphql_settings), tags=["graphql"])

    return app


# Application instance for uvicorn
app = create_app()

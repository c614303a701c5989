"""Entry point for capability-service: runs the FastAPI app under uvicorn."""

from __future__ import annotations

import uvicorn

from capability_service.core.settings import get_app_settings, get_logging_settings


def main() -> None:
    """Run the FastAPI application server with settings from configuration."""
    settings = get_app_settings()
    log_settings = get_logging_settings()

    uvicorn.run(
        "capability_service.app.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.is_development and settings.debug,
        access_log=settings.debug,
        log_level=log_settings.level.lower(),
        log_config=None,
    )


if __name__ == "__main__":
    main()

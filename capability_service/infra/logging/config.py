"""Logging configuration setup.

Builds one ``dictConfig`` document from :class:`LoggingSettings`:
- JSON Lines records through :class:`JSONFormatter`, or a plain text format
- a stdout console handler and an optional size-rotated file handler
- handlers attached to the root logger; application loggers propagate up
"""

from __future__ import annotations

import logging
import logging.config
from pathlib import Path
from typing import TYPE_CHECKING, Any

logger = logging.getLogger(__name__)
_LOGGING_INITIALIZED = False

if TYPE_CHECKING:
    from capability_service.core.settings.logs import LoggingSettings

TEXT_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"
TEXT_DATEFMT = "%Y-%m-%d %H:%M:%S"
UVICORN_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")


def setup_logging(
    log_settings: LoggingSettings | None = None,
    *,
    force: bool = False,
    **configure_kwargs: Any,
) -> None:
    """Ensure logging is configured once across entrypoints.

    Args:
        log_settings: Optional logging settings instance. If omitted, settings
            are loaded via get_logging_settings().
        force: Reconfigure logging even if it was already initialized.
        **configure_kwargs: Explicit overrides for configure_logging().
    """
    global _LOGGING_INITIALIZED

    if _LOGGING_INITIALIZED and not force:
        return

    settings_obj = log_settings
    if settings_obj is None:
        from capability_service.core.settings import get_logging_settings

        settings_obj = get_logging_settings()

    log_config = settings_obj.to_logging_kwargs()
    if configure_kwargs:
        log_config = {**log_config, **configure_kwargs}

    configure_logging(**log_config)
    _LOGGING_INITIALIZED = True


def configure_logging(
    log_level: str = "INFO",
    *,
    service_name: str = "capability-service",
    json_logs: bool = True,
    console_enabled: bool = True,
    file_path: str | Path | None = None,
    file_max_bytes: int = 10 * 1024 * 1024,
    file_backup_count: int = 5,
    include_uvicorn: bool = True,
) -> dict[str, Any]:
    """Configure the root logger with dictConfig.

    Args:
        log_level: Root logger level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        service_name: Static ``service`` field added to every JSON record.
        json_logs: Emit JSON Lines instead of the text format.
        console_enabled: Attach a stdout handler.
        file_path: Rotating log file path. None disables file logging.
        file_max_bytes: Maximum log file size before rotation.
        file_backup_count: Number of rotated log files to keep.
        include_uvicorn: Route uvicorn loggers through the root handlers.

    Returns:
        The dictConfig document that was applied.
    """
    config = build_logging_config(
        log_level=log_level,
        service_name=service_name,
        json_logs=json_logs,
        console_enabled=console_enabled,
        file_path=Path(file_path) if file_path else None,
        file_max_bytes=file_max_bytes,
        file_backup_count=file_backup_count,
        include_uvicorn=include_uvicorn,
    )
    if file_path:
        Path(file_path).parent.mkdir(parents=True, exist_ok=True)

    logging.config.dictConfig(config)
    logger.debug(
        "Logging configured",
        extra={"log_level": log_level.upper(), "handlers": config["root"]["handlers"]},
    )
    return config


def build_logging_config(
    *,
    log_level: str,
    service_name: str,
    json_logs: bool,
    console_enabled: bool,
    file_path: Path | None,
    file_max_bytes: int,
    file_backup_count: int,
    include_uvicorn: bool,
) -> dict[str, Any]:
    """Build the dictConfig document without applying it."""
    formatter_name = "json" if json_logs else "text"
    formatters: dict[str, Any] = {
        "json": {
            "()": "capability_service.infra.logging.formatters.JSONFormatter",
            "fmt_keys": {"level": "levelname", "logger": "name", "message": "message"},
            "static": {"service": service_name},
        },
        "text": {"format": TEXT_FORMAT, "datefmt": TEXT_DATEFMT},
    }

    handlers: dict[str, Any] = {}
    if console_enabled:
        handlers["console"] = {
            "class": "logging.StreamHandler",
            "stream": "ext://sys.stdout",
            "formatter": formatter_name,
        }
    if file_path:
        handlers["file"] = {
            "class": "logging.handlers.RotatingFileHandler",
            "filename": str(file_path),
            "maxBytes": file_max_bytes,
            "backupCount": file_backup_count,
            "encoding": "utf-8",
            "formatter": formatter_name,
        }

    loggers: dict[str, Any] = {}
    if include_uvicorn:
        for name in UVICORN_LOGGERS:
            loggers[name] = {"handlers": [], "propagate": True}

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": formatters,
        "handlers": handlers,
        "loggers": loggers,
        "root": {
            "level": log_level.upper(),
            "handlers": list(handlers),
        },
    }

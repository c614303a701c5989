"""Database infrastructure: engine lifecycle and session context manager."""

from __future__ import annotations

from .session import (
    close_database,
    get_async_session,
    get_engine,
    get_session_factory,
    init_database,
)

__all__ = [
    "close_database",
    "get_async_session",
    "get_engine",
    "get_session_factory",
    "init_database",
]

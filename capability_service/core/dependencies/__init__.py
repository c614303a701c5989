"""FastAPI dependencies for route handlers.

Usage:
    from capability_service.core.dependencies import get_db_session
"""

from __future__ import annotations

from .database import get_db_session

__all__ = ["get_db_session"]

"""Modular Pydantic Settings v2 configuration.

Settings are split by domain (app, database, graphql, logging), read from
environment variables and an optional ``.env`` file, frozen after validation
and cached by the loaders in :mod:`.loader`:

    from capability_service.core.settings import get_graphql_settings

    limits = get_graphql_settings()
    print(limits.max_depth)
"""

from __future__ import annotations

from .app import AppSettings
from .graphql import GraphQLSettings
from .loader import (
    clear_all_caches,
    get_app_settings,
    get_db_settings,
    get_graphql_settings,
    get_logging_settings,
)
from .logs import LoggingSettings
from .postgres import DatabaseSettings

__all__ = [
    "AppSettings",
    "DatabaseSettings",
    "GraphQLSettings",
    "LoggingSettings",
    "clear_all_caches",
    "get_app_settings",
    "get_db_settings",
    "get_graphql_settings",
    "get_logging_settings",
]

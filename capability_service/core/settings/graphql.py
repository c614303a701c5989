"""GraphQL server configuration settings.

Controls the GraphQL endpoint, IDE, query limits and the request-rate governor.
Environment variables use GRAPHQL_ prefix.
"""

from __future__ import annotations

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

GraphQLIDE = Literal["graphiql", "apollo-sandbox", "pathfinder", False]


class GraphQLSettings(BaseSettings):
    """GraphQL server configuration.

    Environment variables use GRAPHQL_ prefix.
    Example: GRAPHQL_MAX_DEPTH=5, GRAPHQL_RATE_LIMIT_PER_MINUTE=100
    """

    # Enable/disable GraphQL
    enabled: bool = Field(
        default=True,
        description="Enable GraphQL endpoint",
    )

    # Endpoint configuration
    path: str = Field(
        default="/graphql",
        min_length=1,
        max_length=255,
        pattern=r"^/.*$",
        description="GraphQL endpoint path",
    )

    graphql_ide: GraphQLIDE = Field(
        default="graphiql",
        description="GraphQL IDE to use: graphiql, apollo-sandbox, pathfinder, or false to disable",
    )

    # Query limits for security
    max_depth: int = Field(
        default=5,
        ge=1,
        le=50,
        description="Maximum query nesting depth",
    )
    max_complexity: int = Field(
        default=1000,
        ge=1,
        le=100000,
        description="Maximum query complexity score",
    )

    # Request-rate governor
    rate_limit_per_minute: int = Field(
        default=100,
        ge=1,
        le=100000,
        description="Requests allowed per client within one 60 second window",
    )
    rate_limit_per_hour: int = Field(
        default=1000,
        ge=1,
        le=1000000,
        description="Requests allowed per client within one 3600 second window",
    )
    rate_limit_sweep_interval: float = Field(
        default=300.0,
        gt=0.0,
        le=86400.0,
        description="Seconds between sweeps evicting elapsed rate-limit counters",
    )

    model_config = SettingsConfigDict(
        env_prefix="GRAPHQL_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        frozen=True,
        extra="ignore",
        env_ignore_empty=True,
    )

    @property
    def is_configured(self) -> bool:
        """Check if GraphQL is enabled and configured."""
        return self.enabled

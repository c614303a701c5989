"""Query complexity limiting extension for GraphQL operations.

Every selected field costs ``base_cost * depth``: list fields (the catalog
collections) have a base cost of 10, every other field 1, and depth is the
field's 1-based nesting level. Costs add up over the whole tree and over all
operations in the document.

Example:
    query {
        devices {          # 10 * 1
            id             #  1 * 2
            software {     # 10 * 2
                name       #  1 * 3
            }
        }
    }
    # Complexity: 10 + 2 + 20 + 3 = 35

Usage:
    schema = strawberry.Schema(
        query=Query,
        extensions=[QueryDepthLimiter(max_depth=5), ComplexityLimiter(max_complexity=1000)],
    )
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, ClassVar

from graphql import GraphQLError
from strawberry.extensions import SchemaExtension

from capability_service.features.graphql.extensions.selection_walker import (
    fragment_definitions,
    operation_definitions,
    walk_operation,
)

if TYPE_CHECKING:
    from collections.abc import Iterator

    from graphql.language import DocumentNode
    from strawberry.types import ExecutionContext

logger = logging.getLogger(__name__)

__all__ = ["ComplexityConfig", "ComplexityLimiter", "check_complexity", "document_complexity"]


class ComplexityConfig:
    """Cost table for complexity scoring."""

    FIELD_COST = 1
    LIST_COST = 10

    DEFAULT_MAX_COMPLEXITY = 1000

    LIST_FIELDS: ClassVar[frozenset[str]] = frozenset(
        {
            "devices",
            "software",
            "bands",
            "combos",
            "features",
            "supportedBands",
            "supportedCombos",
            "deviceSupport",
            "bandComponents",
            "availability",
        }
    )

    @classmethod
    def base_cost(cls, field_name: str) -> int:
        return cls.LIST_COST if field_name in cls.LIST_FIELDS else cls.FIELD_COST


def document_complexity(document: DocumentNode, config: type[ComplexityConfig] = ComplexityConfig) -> int:
    """Sum of ``base_cost * depth`` over every field of every operation."""
    fragments = fragment_definitions(document)
    return sum(
        config.base_cost(visit.name) * visit.depth
        for operation in operation_definitions(document)
        for visit in walk_operation(operation, fragments)
    )


def check_complexity(
    document: DocumentNode,
    max_complexity: int,
    config: type[ComplexityConfig] = ComplexityConfig,
) -> int:
    """Return the document's complexity.

    Raises:
        GraphQLError: If the complexity exceeds ``max_complexity``.
    """
    complexity = document_complexity(document, config)
    if complexity > max_complexity:
        logger.warning(
            "GraphQL query complexity exceeded",
            extra={"complexity": complexity, "limit": max_complexity},
        )
        raise GraphQLError(
            f"Query is too complex ({complexity} > {max_complexity}). "
            "Please simplify your query or split it into multiple requests.",
            extensions={
                "code": "COMPLEXITY_LIMIT_EXCEEDED",
                "complexity": complexity,
                "limit": max_complexity,
            },
        )
    return complexity


class ComplexityLimiter(SchemaExtension):
    """Reject documents whose complexity exceeds ``max_complexity`` before execution."""

    def __init__(
        self,
        max_complexity: int | None = None,
        config: type[ComplexityConfig] = ComplexityConfig,
        *,
        execution_context: ExecutionContext | None = None,
    ) -> None:
        self.max_complexity = (
            ComplexityConfig.DEFAULT_MAX_COMPLEXITY if max_complexity is None else max_complexity
        )
        self.config = config
        if execution_context is not None:
            self.execution_context = execution_context

    def on_execute(self) -> Iterator[None]:
        document = self.execution_context.graphql_document
        if document is not None:
            complexity = check_complexity(document, self.max_complexity, self.config)
            logger.info(
                "GraphQL query complexity",
                extra={
                    "operation_name": self.execution_context.operation_name,
                    "complexity": complexity,
                    "limit": self.max_complexity,
                },
            )
        yield

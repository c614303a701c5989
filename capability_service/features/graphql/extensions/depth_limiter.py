"""Query depth limiting extension for GraphQL operations.

Depth of an operation is the deepest nesting level its fields reach: root
fields are level 1 and each sub-selection adds one. Siblings take the
maximum, never the sum. Every operation in the document is checked on its
own, mutations exactly like queries.

Usage:
    schema = strawberry.Schema(
        query=Query,
        extensions=[QueryDepthLimiter(max_depth=5)],
    )
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from graphql import GraphQLError
from strawberry.extensions import SchemaExtension

from capability_service.features.graphql.extensions.selection_walker import (
    fragment_definitions,
    operation_definitions,
    walk_operation,
)

if TYPE_CHECKING:
    from collections.abc import Iterator, Mapping

    from graphql.language import (
        DocumentNode,
        FragmentDefinitionNode,
        OperationDefinitionNode,
    )
    from strawberry.types import ExecutionContext

logger = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 5

__all__ = ["DEFAULT_MAX_DEPTH", "QueryDepthLimiter", "check_depth", "operation_depth"]


def operation_depth(
    operation: OperationDefinitionNode,
    fragments: Mapping[str, FragmentDefinitionNode],
) -> int:
    """Deepest nesting level reached by ``operation``."""
    return max(
        (visit.depth + 1 for visit in walk_operation(operation, fragments) if visit.has_selection),
        default=1,
    )


def check_depth(document: DocumentNode, max_depth: int) -> int:
    """Return the deepest operation depth in ``document``.

    Raises:
        GraphQLError: For the first operation whose depth exceeds ``max_depth``.
    """
    fragments = fragment_definitions(document)
    deepest = 0
    for operation in operation_definitions(document):
        depth = operation_depth(operation, fragments)
        if depth > max_depth:
            logger.warning(
                "GraphQL query depth exceeded",
                extra={
                    "operation_name": operation.name.value if operation.name else None,
                    "operation_type": operation.operation.value,
                    "depth": depth,
                    "limit": max_depth,
                },
            )
            raise GraphQLError(
                f"Query depth ({depth}) exceeds maximum allowed depth ({max_depth}). "
                "Please reduce nesting in your query.",
                extensions={"code": "DEPTH_LIMIT_EXCEEDED", "depth": depth, "limit": max_depth},
            )
        deepest = max(deepest, depth)
    return deepest


class QueryDepthLimiter(SchemaExtension):
    """Reject operations nested deeper than ``max_depth`` before any resolver runs."""

    def __init__(
        self,
        max_depth: int = DEFAULT_MAX_DEPTH,
        *,
        execution_context: ExecutionContext | None = None,
    ) -> None:
        self.max_depth = max_depth
        if execution_context is not None:
            self.execution_context = execution_context

    def on_execute(self) -> Iterator[None]:
        document = self.execution_context.graphql_document
        if document is not None:
            depth = check_depth(document, self.max_depth)
            logger.debug(
                "GraphQL query depth",
                extra={
                    "operation_name": self.execution_context.operation_name,
                    "depth": depth,
                    "limit": self.max_depth,
                },
            )
        yield

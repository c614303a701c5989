"""GraphQL extensions that guard the API against abusive query shapes.

- QueryDepthLimiter: rejects operations nested beyond a maximum depth
- ComplexityLimiter: rejects documents over a weighted cost budget
"""

from __future__ import annotations

from capability_service.features.graphql.extensions.complexity_limiter import (
    ComplexityConfig,
    ComplexityLimiter,
    check_complexity,
    document_complexity,
)
from capability_service.features.graphql.extensions.depth_limiter import (
    DEFAULT_MAX_DEPTH,
    QueryDepthLimiter,
    check_depth,
    operation_depth,
)
from capability_service.features.graphql.extensions.selection_walker import (
    FieldVisit,
    walk_operation,
    walk_selections,
)

__all__ = [
    "DEFAULT_MAX_DEPTH",
    "ComplexityConfig",
    "ComplexityLimiter",
    "FieldVisit",
    "QueryDepthLimiter",
    "check_complexity",
    "check_depth",
    "document_complexity",
    "operation_depth",
    "walk_operation",
    "walk_selections",
]

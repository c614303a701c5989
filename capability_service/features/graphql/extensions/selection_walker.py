"""Traversal of a parsed operation's selection tree.

Shared by the depth and complexity limiters. The walker yields one
:class:`FieldVisit` per selected field:

- root fields are at depth 1 and a field's sub-selection is one level deeper;
- inline fragments are flattened into their parent's level;
- named fragment spreads are expanded in place at the spread's level, and a
  spread that is already being expanded (a cycle) or names an unknown
  fragment contributes nothing;
- introspection fields (``__typename``, ``__schema``, ``__type``) are skipped
  together with everything beneath them.

Aliases play no part: visits carry the underlying field name.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from graphql.language import (
    DocumentNode,
    FieldNode,
    FragmentDefinitionNode,
    FragmentSpreadNode,
    InlineFragmentNode,
    OperationDefinitionNode,
)

if TYPE_CHECKING:
    from collections.abc import Iterator, Mapping

    from graphql.language import SelectionSetNode

INTROSPECTION_PREFIX = "__"


@dataclass(frozen=True, slots=True)
class FieldVisit:
    """A field selection reached during traversal."""

    name: str
    depth: int
    has_selection: bool


def operation_definitions(document: DocumentNode) -> list[OperationDefinitionNode]:
    return [d for d in document.definitions if isinstance(d, OperationDefinitionNode)]


def fragment_definitions(document: DocumentNode) -> dict[str, FragmentDefinitionNode]:
    return {
        d.name.value: d for d in document.definitions if isinstance(d, FragmentDefinitionNode)
    }


def walk_selections(
    selection_set: SelectionSetNode | None,
    fragments: Mapping[str, FragmentDefinitionNode],
    depth: int = 1,
    expanding: frozenset[str] = frozenset(),
) -> Iterator[FieldVisit]:
    """Yield every field visit below ``selection_set``.

    Raises:
        TypeError: On a selection node that is not a field, inline fragment
            or fragment spread.
    """
    if selection_set is None:
        return

    for selection in selection_set.selections:
        match selection:
            case FieldNode():
                name = selection.name.value
                if name.startswith(INTROSPECTION_PREFIX):
                    continue
                children = selection.selection_set
                has_selection = children is not None and len(children.selections) > 0
                yield FieldVisit(name, depth, has_selection)
                if has_selection:
                    yield from walk_selections(children, fragments, depth + 1, expanding)
            case InlineFragmentNode():
                yield from walk_selections(selection.selection_set, fragments, depth, expanding)
            case FragmentSpreadNode():
                fragment_name = selection.name.value
                fragment = fragments.get(fragment_name)
                if fragment is None or fragment_name in expanding:
                    continue
                yield from walk_selections(
                    fragment.selection_set,
                    fragments,
                    depth,
                    expanding | {fragment_name},
                )
            case _:
                raise TypeError(f"Unexpected selection node: {type(selection).__name__}")


def walk_operation(
    operation: OperationDefinitionNode,
    fragments: Mapping[str, FragmentDefinitionNode],
) -> Iterator[FieldVisit]:
    """Yield the field visits of one operation, starting at depth 1."""
    return walk_selections(operation.selection_set, fragments)


__all__ = [
    "FieldVisit",
    "fragment_definitions",
    "operation_definitions",
    "walk_operation",
    "walk_selections",
]

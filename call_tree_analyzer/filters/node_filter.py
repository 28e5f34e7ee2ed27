"""
Predicate filtering of call trees.
"""

import copy
import logging
import numbers
from typing import Any, List, Optional

from ..core.types import CallNode, CallTreeConfig, NodeFilter
from ..processors.tree_converter import TreeConverter

logger = logging.getLogger(__name__)

_MISSING = object()


def resolve_field(node: CallNode, field: str) -> Any:
    """
    Resolve a top-level key or dotted path (e.g. 'metadata.serviceName').

    Returns a sentinel when the field is not a string, or when any segment
    is missing or walks through a non-dict value.
    """
    if not isinstance(field, str):
        return _MISSING
    value: Any = node
    for part in field.split('.'):
        if not isinstance(value, dict) or part not in value:
            return _MISSING
        value = value[part]
    return value


def _is_number(value: Any) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


def _strict_equals(value: Any, expected: Any) -> bool:
    if value is _MISSING:
        return False
    if isinstance(value, bool) or isinstance(expected, bool):
        return isinstance(value, bool) and isinstance(expected, bool) and value == expected
    return value == expected


class NodeFilterEngine:
    """Evaluates filter clauses against nodes and prunes trees to the matches."""

    def __init__(self, config: Optional[CallTreeConfig] = None):
        """
        Initialize with configuration.

        Args:
            config: CallTreeConfig instance; supplies the 'custom' operator predicate
        """
        self.config = config or CallTreeConfig()

    def evaluate(self, node: CallNode, node_filter: NodeFilter) -> bool:
        """
        Evaluate a single filter clause. Type mismatches evaluate to False.

        Args:
            node: Node under test
            node_filter: Dict with 'field', 'operator' and optional 'value'

        Returns:
            True if the clause matches
        """
        operator = node_filter.get('operator')
        expected = node_filter.get('value')

        if operator == 'hasError':
            return node.get('error') is not None
        if operator == 'noError':
            return node.get('error') is None
        if operator == 'custom':
            predicate = self.config.custom_filter
            if predicate is None:
                return True
            return bool(predicate(node, expected))

        value = resolve_field(node, node_filter.get('field', ''))

        if operator == 'equals':
            return _strict_equals(value, expected)
        if operator in ('contains', 'startsWith', 'endsWith'):
            if not isinstance(value, str) or not isinstance(expected, str):
                return False
            if operator == 'contains':
                return expected in value
            if operator == 'startsWith':
                return value.startswith(expected)
            return value.endswith(expected)
        if operator in ('greaterThan', 'lessThan'):
            if not _is_number(value) or not _is_number(expected):
                return False
            return value > expected if operator == 'greaterThan' else value < expected

        logger.warning("Unknown filter operator '%s', treating as match", operator)
        return True

    def matches(self, node: CallNode, filters: List[NodeFilter]) -> bool:
        """True if every clause matches. An empty clause list always matches."""
        return all(self.evaluate(node, f) for f in filters)

    def apply_filters(self, node: CallNode, filters: List[NodeFilter]) -> Optional[CallNode]:
        """
        Prune a tree to the nodes matching every filter plus their ancestors.

        A node is kept when it matches or when any of its children survive,
        so the path from the root to every match is preserved. The result is
        a deep copy; the input tree is not modified.

        Args:
            node: Root of the tree
            filters: Filter clauses, ANDed together

        Returns:
            Filtered copy of the tree, or None if nothing matches
        """
        nodes, children_of = TreeConverter.index_tree(node)
        kept: List[Optional[CallNode]] = [None] * len(nodes)

        # Walk backwards so every child is decided before its parent
        for index in range(len(nodes) - 1, -1, -1):
            children = [kept[i] for i in children_of[index] if kept[i] is not None]
            current = nodes[index]
            if children or self.matches(current, filters):
                filtered = {
                    key: copy.deepcopy(value)
                    for key, value in current.items()
                    if key != 'children'
                }
                filtered['children'] = children
                kept[index] = filtered
        return kept[0]


def apply_filters(
    node: CallNode,
    filters: List[NodeFilter],
    config: Optional[CallTreeConfig] = None
) -> Optional[CallNode]:
    """Module-level shortcut for NodeFilterEngine(config).apply_filters()."""
    return NodeFilterEngine(config).apply_filters(node, filters)

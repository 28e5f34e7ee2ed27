"""
First-match search through a call tree.
"""

import numbers
from typing import Any, Optional

from ..core.types import CallNode


def _value_matches(value: Any, query: str, case_sensitive: bool) -> bool:
    if isinstance(value, str):
        if case_sensitive:
            return query in value
        return query.lower() in value.lower()
    if isinstance(value, numbers.Real) and not isinstance(value, bool):
        return query in str(value)
    return False


def _node_matches(node: CallNode, query: str, case_sensitive: bool) -> bool:
    if _value_matches(node.get('name'), query, case_sensitive):
        return True
    error = node.get('error')
    if error and _value_matches(error.get('message'), query, case_sensitive):
        return True
    if node.get('type') and _value_matches(node['type'], query, case_sensitive):
        return True

    metadata = node.get('metadata') or {}
    return any(_value_matches(v, query, case_sensitive) for v in metadata.values())


def deep_search(node: CallNode, query: str, case_sensitive: bool = False) -> Optional[CallNode]:
    """
    Return the first node, in pre-order, whose fields contain the query.

    Checks name, error message and type, then metadata values in insertion
    order. Numbers are matched against their string form. Only string and
    numeric values are inspected.

    Args:
        node: Root of the tree to search
        query: Substring to look for
        case_sensitive: If False (default), compare lower-cased strings

    Returns:
        The matching node itself (not a copy), or None
    """
    stack = [node]
    while stack:
        current = stack.pop()
        if _node_matches(current, query, case_sensitive):
            return current
        stack.extend(reversed(current.get('children') or []))
    return None


def find_node_by_id(node: CallNode, node_id: str) -> Optional[CallNode]:
    """Return the first node in pre-order whose id equals node_id."""
    stack = [node]
    while stack:
        current = stack.pop()
        if current.get('id') == node_id:
            return current
        stack.extend(reversed(current.get('children') or []))
    return None

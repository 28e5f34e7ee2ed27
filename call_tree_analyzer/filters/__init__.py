"""Query layer: predicate filtering and search."""

from .node_filter import NodeFilterEngine, apply_filters, resolve_field
from .deep_search import deep_search, find_node_by_id

__all__ = ["NodeFilterEngine", "apply_filters", "resolve_field", "deep_search", "find_node_by_id"]

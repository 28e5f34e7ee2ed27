"""
Call Tree Analyzer - transformation engine for nested asynchronous call traces
"""

__version__ = "1.0.0"

from .core.analyzer import CallTreeAnalyzer
from .core.exceptions import CallTreeError, TraceFormatError
from .core.types import CallError, CallNode, CallTreeConfig, NodeFilter, ResourceUsage
from .filters import apply_filters, deep_search, find_node_by_id
from .formatters import structural_digest, structural_hash
from .processors import TreeAggregator, TreeConverter
from .sanitizers import anonymize

__all__ = [
    "CallTreeAnalyzer",
    "CallTreeConfig",
    "CallTreeError",
    "TraceFormatError",
    "CallError",
    "CallNode",
    "NodeFilter",
    "ResourceUsage",
    "TreeConverter",
    "TreeAggregator",
    "apply_filters",
    "deep_search",
    "find_node_by_id",
    "anonymize",
    "structural_hash",
    "structural_digest",
]

"""Core components for call tree analysis."""

from .analyzer import CallTreeAnalyzer
from .exceptions import CallTreeError, TraceFormatError
from .types import CallError, CallNode, CallTreeConfig, NodeFilter, ResourceUsage

__all__ = [
    "CallTreeAnalyzer",
    "CallTreeError",
    "TraceFormatError",
    "CallError",
    "CallNode",
    "CallTreeConfig",
    "NodeFilter",
    "ResourceUsage",
]

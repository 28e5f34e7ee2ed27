"""Processors for call tree transformation and aggregation."""

from .file_processor import TraceFileProcessor
from .tree_converter import TreeConverter
from .aggregator import TreeAggregator

__all__ = [
    "TraceFileProcessor",
    "TreeConverter",
    "TreeAggregator",
]

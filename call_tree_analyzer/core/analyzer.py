"""
Main call tree analyzer orchestrator.
"""

import logging
from typing import Iterable, List, Optional

from ..core.types import CallNode, CallTreeConfig, CustomFilter, NodeFilter, ResourceUsage
from ..filters import NodeFilterEngine, deep_search, find_node_by_id
from ..formatters import convert_duration, format_time, structural_hash
from ..processors import TraceFileProcessor, TreeAggregator, TreeConverter
from ..sanitizers import SENSITIVE_FIELDS, anonymize

logger = logging.getLogger(__name__)


class CallTreeAnalyzer:
    """Main orchestrator for call tree analysis."""

    def __init__(
        self,
        duration_unit: str = 'ms',
        case_sensitive_search: bool = False,
        strip_flattened_children: bool = False,
        sensitive_fields: Optional[Iterable[str]] = None,
        custom_filter: Optional[CustomFilter] = None
    ):
        """
        Initialize the CallTreeAnalyzer.

        Args:
            duration_unit: Unit for reported durations ('ms', 's' or 'us')
            case_sensitive_search: If True, search() matches case exactly
            strip_flattened_children: If True, flatten() drops 'children' from entries
            sensitive_fields: Metadata keys redacted by anonymize()
            custom_filter: Predicate for filters using the 'custom' operator
        """
        self.config = CallTreeConfig(
            duration_unit=duration_unit,
            case_sensitive_search=case_sensitive_search,
            strip_flattened_children=strip_flattened_children,
            sensitive_fields=sensitive_fields,
            custom_filter=custom_filter
        )

        self.call_tree: Optional[CallNode] = None

        self.file_processor = TraceFileProcessor()
        self.node_filter = NodeFilterEngine(self.config)

    def process_trace_file(self, file_path: str) -> Optional[CallNode]:
        """
        Load a trace file and rebuild its call tree.

        Args:
            file_path: Path to a JSON array of nodes or a single node tree

        Returns:
            The loaded tree, or None if the file held no usable nodes
        """
        nodes = self.file_processor.process_file(file_path)
        return self.load_nodes(nodes)

    def load_nodes(self, nodes: List[CallNode]) -> Optional[CallNode]:
        """Rebuild and keep the tree described by a flat node list."""
        self.call_tree = TreeConverter.build_tree(nodes)
        if self.call_tree is None:
            logger.info("No nodes to analyze")
        return self.call_tree

    def load_tree(self, tree: CallNode) -> CallNode:
        """Keep an already hierarchical tree."""
        self.call_tree = tree
        return tree

    def _require_tree(self) -> CallNode:
        if self.call_tree is None:
            raise ValueError("No call tree loaded")
        return self.call_tree

    def flatten(self) -> List[CallNode]:
        """Flatten the loaded tree honoring strip_flattened_children."""
        return TreeConverter.flatten(
            self._require_tree(),
            strip_children=self.config.strip_flattened_children
        )

    def subtree_duration(self) -> float:
        return TreeAggregator.subtree_duration(self._require_tree())

    def wall_clock_duration(self) -> float:
        return TreeAggregator.wall_clock_duration(self._require_tree())

    def critical_path(self) -> List[CallNode]:
        return TreeAggregator.critical_path(self._require_tree())

    def resource_utilization(self) -> ResourceUsage:
        return TreeAggregator.resource_utilization(self._require_tree())

    def filter(self, filters: List[NodeFilter]) -> Optional[CallNode]:
        """Prune the loaded tree to nodes matching all filters and their ancestors."""
        return self.node_filter.apply_filters(self._require_tree(), filters)

    def search(self, query: str) -> Optional[CallNode]:
        """First node in pre-order containing the query."""
        return deep_search(self._require_tree(), query, self.config.case_sensitive_search)

    def find(self, node_id: str) -> Optional[CallNode]:
        return find_node_by_id(self._require_tree(), node_id)

    def anonymize(self, node: Optional[CallNode] = None) -> CallNode:
        """Anonymized copy of `node`, or of the loaded tree."""
        fields = self.config.sensitive_fields
        if fields is None:
            fields = SENSITIVE_FIELDS
        return anonymize(node if node is not None else self._require_tree(), fields)

    def structural_hash(self, node: CallNode) -> str:
        return structural_hash(node)

    def convert_duration(self, ms: float) -> float:
        """Express a millisecond duration in the configured unit."""
        return convert_duration(ms, self.config.duration_unit)

    def format_time(self, ms: float) -> str:
        """
        Format time in milliseconds to a human-readable string.

        Args:
            ms: Time in milliseconds

        Returns:
            Formatted time string
        """
        return format_time(ms)

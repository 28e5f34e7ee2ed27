"""
Aggregate views over a call tree.

Every rollup here is additive over own durations. Children may run
concurrently with each other and with gaps, so none of these values is a
wall-clock reconstruction; use wall_clock_duration() for covered time.
"""

from typing import List, Optional, Tuple

from ..core.types import CallNode, ResourceUsage
from ..formatters.interval_merger import calculate_parallelism_factor, effective_duration
from .tree_converter import TreeConverter


class TreeAggregator:
    """Computes duration, critical path and resource rollups for a tree."""

    @staticmethod
    def subtree_duration(node: CallNode) -> float:
        """
        Own duration of the node plus the subtree duration of every child.

        Args:
            node: Root of the subtree

        Returns:
            Summed duration in milliseconds
        """
        total = 0
        stack = [node]
        while stack:
            current = stack.pop()
            total += current.get('duration', 0)
            stack.extend(current.get('children') or [])
        return total

    @staticmethod
    def critical_path(node: CallNode) -> List[CallNode]:
        """
        Find the root-to-leaf branch whose own durations sum highest.

        Children are compared by the score of their own critical path; the
        first child wins a tie. Parallel scheduling between siblings is
        ignored, so this approximates rather than computes a critical path.

        Args:
            node: Root of the subtree

        Returns:
            Nodes from `node` down to a leaf
        """
        nodes, children_of = TreeConverter.index_tree(node)
        scores = [0.0] * len(nodes)
        best_child: List[Optional[int]] = [None] * len(nodes)

        # Children always carry higher indices than their parent
        for index in range(len(nodes) - 1, -1, -1):
            best = None
            for child_index in children_of[index]:
                if best is None or scores[child_index] > scores[best]:
                    best = child_index
            best_child[index] = best
            scores[index] = nodes[index].get('duration', 0) + (scores[best] if best is not None else 0)

        path = []
        current: Optional[int] = 0
        while current is not None:
            path.append(nodes[current])
            current = best_child[current]
        return path

    @staticmethod
    def resource_utilization(node: CallNode) -> ResourceUsage:
        """
        Sum CPU %, memory (KB) and network bytes over the node and its descendants.

        Args:
            node: Root of the subtree

        Returns:
            Dict with 'cpu', 'memory' and 'network' totals
        """
        usage: ResourceUsage = {'cpu': 0, 'memory': 0, 'network': 0}
        stack = [node]
        while stack:
            current = stack.pop()
            metadata = current.get('metadata') or {}
            usage['cpu'] += metadata.get('cpuUsage') or 0
            usage['memory'] += metadata.get('memoryUsageKB') or 0
            usage['network'] += metadata.get('networkBytesTransferred') or 0
            stack.extend(current.get('children') or [])
        return usage

    @staticmethod
    def collect_intervals(node: CallNode) -> List[Tuple[float, float]]:
        """
        Gather (startTime, endTime) for the node and every descendant.

        Nodes missing either timestamp are skipped.
        """
        intervals = []
        stack = [node]
        while stack:
            current = stack.pop()
            start = current.get('startTime')
            end = current.get('endTime')
            if start is not None and end is not None:
                intervals.append((start, end))
            stack.extend(current.get('children') or [])
        return intervals

    @staticmethod
    def wall_clock_duration(node: CallNode) -> float:
        """
        Time actually covered by the subtree, with overlapping spans merged.

        Args:
            node: Root of the subtree

        Returns:
            Covered time in milliseconds
        """
        return effective_duration(TreeAggregator.collect_intervals(node))

    @staticmethod
    def parallelism_factor(node: CallNode) -> float:
        """Ratio of the additive subtree duration to covered wall-clock time."""
        return calculate_parallelism_factor(
            TreeAggregator.subtree_duration(node),
            TreeAggregator.wall_clock_duration(node)
        )

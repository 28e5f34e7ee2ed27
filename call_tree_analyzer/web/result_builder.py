"""
Result builder for web interface output.
"""

from collections import Counter
from typing import Dict, List, Optional

from ..core.types import CallNode, NodeFilter
from ..formatters import structural_digest
from ..processors import TreeAggregator, TreeConverter


def _node_summary(node: CallNode, analyzer) -> Dict:
    duration = node.get('duration', 0)
    return {
        'id': node.get('id'),
        'name': node.get('name'),
        'type': node.get('type'),
        'status': node.get('status'),
        'duration_ms': duration,
        'duration': analyzer.convert_duration(duration),
        'duration_formatted': analyzer.format_time(duration),
    }


def prepare_results(
    analyzer,
    filters: Optional[List[NodeFilter]] = None,
    search_query: Optional[str] = None,
    highlight_id: Optional[str] = None,
    anonymize_output: bool = False
) -> Dict:
    """
    Convert analyzer state to a structured format for JSON output.

    Aggregates are computed on the full tree; filtering and anonymization
    only shape the tree and flat list that are returned.

    Args:
        analyzer: CallTreeAnalyzer instance with a loaded tree
        filters: Optional filter clauses applied to the returned tree
        search_query: Optional deep search query
        highlight_id: Optional id of a node to return as 'highlighted'
        anonymize_output: If True, redact the returned tree, nodes and search hit

    Returns:
        Dictionary with structured results for rendering
    """
    tree = analyzer.call_tree
    if tree is None:
        return {
            'summary': {'node_count': 0, 'duration_unit': analyzer.config.duration_unit},
            'tree': None,
            'nodes': [],
            'critical_path': {'nodes': [], 'duration_ms': 0, 'duration_formatted': analyzer.format_time(0)},
            'resources': {'cpu': 0, 'memory': 0, 'network': 0},
            'search': None,
            'highlighted': None,
            'fingerprints': {},
        }

    all_nodes = TreeConverter.flatten(tree, strip_children=True)

    subtree_ms = TreeAggregator.subtree_duration(tree)
    wall_clock_ms = TreeAggregator.wall_clock_duration(tree)
    status_counts = Counter(n.get('status') or 'unknown' for n in all_nodes)
    type_counts = Counter(n.get('type') or 'unknown' for n in all_nodes)
    error_nodes = [n for n in all_nodes if n.get('error')]

    critical_path = TreeAggregator.critical_path(tree)
    critical_ms = sum(n.get('duration', 0) for n in critical_path)

    view = tree
    if filters:
        view = analyzer.filter(filters)

    search_hit = None
    if search_query:
        search_hit = analyzer.search(search_query)

    highlighted = analyzer.find(highlight_id) if highlight_id else None

    if anonymize_output:
        view = analyzer.anonymize(view) if view is not None else None
        search_hit = analyzer.anonymize(search_hit) if search_hit is not None else None
        highlighted = analyzer.anonymize(highlighted) if highlighted is not None else None

    if view is not None:
        nodes = TreeConverter.flatten(view, strip_children=analyzer.config.strip_flattened_children)
    else:
        nodes = []

    fingerprints = {}
    for node in all_nodes:
        fingerprints[node.get('id')] = structural_digest(
            analyzer.anonymize(node) if anonymize_output else node
        )
    duplicate_shapes = sum(c - 1 for c in Counter(fingerprints.values()).values() if c > 1)

    return {
        'summary': {
            'root_id': tree.get('id'),
            'root_name': tree.get('name'),
            'is_virtual_root': tree.get('type') == 'virtualRoot',
            'node_count': len(all_nodes),
            'max_depth': max(n['depth'] for n in all_nodes),
            'error_count': len(error_nodes),
            'status_counts': dict(status_counts),
            'type_counts': dict(type_counts),
            'duration_unit': analyzer.config.duration_unit,
            'subtree_duration_ms': subtree_ms,
            'subtree_duration': analyzer.convert_duration(subtree_ms),
            'subtree_duration_formatted': analyzer.format_time(subtree_ms),
            'wall_clock_duration_ms': wall_clock_ms,
            'wall_clock_duration_formatted': analyzer.format_time(wall_clock_ms),
            'parallelism_factor': TreeAggregator.parallelism_factor(tree),
            'duplicate_shapes': duplicate_shapes,
        },
        'tree': view,
        'nodes': nodes,
        'critical_path': {
            'nodes': [_node_summary(n, analyzer) for n in critical_path],
            'duration_ms': critical_ms,
            'duration_formatted': analyzer.format_time(critical_ms),
        },
        'resources': TreeAggregator.resource_utilization(tree),
        'search': search_hit,
        'highlighted': highlighted,
        'fingerprints': fingerprints,
    }

"""
Conversion between hierarchical and flat call tree representations.
"""

import logging
import secrets
import string
import time
from typing import Dict, List, Optional, Tuple

from ..core.types import CallNode

logger = logging.getLogger(__name__)

ID_CHARS = string.ascii_lowercase + string.digits
ID_SUFFIX_LENGTH = 7

VIRTUAL_ROOT_NAME = 'Virtual Root (Multiple Entry Points)'
VIRTUAL_ROOT_SOURCE = 'call-tree-virtualization'


class TreeConverter:
    """Converts call trees to pre-order flat lists and back."""

    @staticmethod
    def generate_node_id(prefix: str = 'node') -> str:
        """
        Generate a fresh node id of the form '{prefix}-{epoch_ms}-{random}'.

        Args:
            prefix: Leading part of the id

        Returns:
            New id string
        """
        suffix = ''.join(secrets.choice(ID_CHARS) for _ in range(ID_SUFFIX_LENGTH))
        return f"{prefix}-{int(time.time() * 1000)}-{suffix}"

    @staticmethod
    def flatten(
        root: CallNode,
        parent_id: Optional[str] = None,
        depth: int = 0,
        strip_children: bool = False
    ) -> List[CallNode]:
        """
        Flatten a tree into a pre-order list of nodes.

        Each entry is a shallow copy of the original node annotated with
        'parentCallId' and 'depth'. Unless strip_children is set, entries keep
        their 'children' references; they are stream markers and consumers
        must rebuild edges from 'parentCallId' rather than follow 'children'.

        Args:
            root: Root of the (sub)tree to flatten
            parent_id: parentCallId recorded on the root entry
            depth: Depth recorded on the root entry
            strip_children: If True, remove 'children' from every entry

        Returns:
            List of annotated node copies, parents before children
        """
        flat_nodes = []
        # Explicit stack keeps very deep traces off the recursion limit
        stack = [(root, parent_id, depth)]
        while stack:
            node, current_parent_id, current_depth = stack.pop()

            entry = dict(node)
            entry['parentCallId'] = current_parent_id
            entry['depth'] = current_depth
            if strip_children:
                entry.pop('children', None)
            flat_nodes.append(entry)

            children = node.get('children') or []
            for child in reversed(children):
                stack.append((child, node.get('id'), current_depth + 1))

        return flat_nodes

    @staticmethod
    def index_tree(root: CallNode) -> Tuple[List[CallNode], List[List[int]]]:
        """
        Number the nodes of a tree in pre-order without recursion.

        Every descendant gets a higher index than its ancestors, so walking
        the indices backwards visits children before their parent.

        Args:
            root: Root of the tree

        Returns:
            (nodes, children_of): the original node objects in pre-order, and
            for each index the indices of its children in children order
        """
        nodes: List[CallNode] = []
        children_of: List[List[int]] = []
        stack: List[Tuple[CallNode, Optional[int]]] = [(root, None)]
        while stack:
            node, parent_index = stack.pop()
            index = len(nodes)
            nodes.append(node)
            children_of.append([])
            if parent_index is not None:
                children_of[parent_index].append(index)
            for child in reversed(node.get('children') or []):
                stack.append((child, index))
        return nodes, children_of

    @staticmethod
    def build_tree(nodes: List[CallNode]) -> Optional[CallNode]:
        """
        Rebuild a tree from a flat list of nodes linked by 'parentCallId'.

        Nodes whose parent id is missing or unknown become root candidates.
        When more than one root remains, a synthetic virtual root adopts them.

        Args:
            nodes: Flat list of nodes in any order

        Returns:
            Root node, a virtual root for multi-root input, or None if empty
        """
        if not nodes:
            return None

        node_map: Dict[str, CallNode] = {}
        for node in nodes:
            working = dict(node)
            working['children'] = []
            node_map[node.get('id')] = working

        root_nodes = []
        for node in nodes:
            current = node_map[node.get('id')]
            parent_id = node.get('parentCallId')
            if parent_id and parent_id in node_map:
                node_map[parent_id]['children'].append(current)
            else:
                root_nodes.append(current)

        if len(root_nodes) == 1:
            return root_nodes[0]

        logger.warning(
            "Found %d root nodes, creating a virtual root", len(root_nodes)
        )
        return {
            'id': TreeConverter.generate_node_id('virtual-root'),
            'name': VIRTUAL_ROOT_NAME,
            'type': 'virtualRoot',
            'duration': sum(r.get('duration', 0) for r in root_nodes),
            'startTime': min(r.get('startTime', 0) for r in root_nodes),
            'endTime': max(r.get('endTime', 0) for r in root_nodes),
            'metadata': {
                'source': VIRTUAL_ROOT_SOURCE,
                'originalRootCount': len(root_nodes),
            },
            'children': root_nodes,
        }

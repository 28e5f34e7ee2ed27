"""
JSON trace file processing using streaming parser.
"""

import logging
import numbers
from typing import Any, Dict, List

import ijson

from ..core.exceptions import TraceFormatError
from ..core.types import CallNode
from .tree_converter import TreeConverter

logger = logging.getLogger(__name__)

_WHITESPACE = b' \t\r\n'


class TraceFileProcessor:
    """Reads call trace JSON files into flat node lists."""

    @staticmethod
    def is_valid_node(node: Any) -> bool:
        """
        Check the minimal node shape: string id, string name, numeric duration.

        Args:
            node: Decoded JSON value

        Returns:
            True if the node can be used by the engine
        """
        if not isinstance(node, dict):
            return False
        duration = node.get('duration')
        return (
            isinstance(node.get('id'), str)
            and isinstance(node.get('name'), str)
            and isinstance(duration, numbers.Real)
            and not isinstance(duration, bool)
        )

    @staticmethod
    def _first_token(f) -> bytes:
        while True:
            char = f.read(1)
            if not char or char not in _WHITESPACE:
                return char

    @staticmethod
    def process_file(file_path: str) -> List[CallNode]:
        """
        Read a trace file as a flat list of nodes.

        A top-level JSON array is streamed as a flat node list. A top-level
        JSON object is treated as a single tree and flattened. Entries that
        fail the shape check are skipped with a warning.

        Args:
            file_path: Path to the trace JSON file

        Returns:
            Flat list of nodes linked by 'parentCallId'

        Raises:
            TraceFormatError: If the document is not an array or an object
        """
        logger.info("Processing %s...", file_path)

        with open(file_path, 'rb') as f:
            token = TraceFileProcessor._first_token(f)
            f.seek(0)

            if token == b'[':
                return TraceFileProcessor._read_flat_list(ijson.items(f, 'item', use_float=True))
            if token == b'{':
                tree = next(ijson.items(f, '', use_float=True))
                return TraceFileProcessor._read_tree(tree)

        raise TraceFormatError(
            f"{file_path}: expected a JSON array of nodes or a single node object"
        )

    @staticmethod
    def process_document(document: Any) -> List[CallNode]:
        """
        Same as process_file() for an already decoded JSON document.

        Raises:
            TraceFormatError: If the document is not a list or a dict
        """
        if isinstance(document, list):
            return TraceFileProcessor._read_flat_list(document)
        if isinstance(document, dict):
            return TraceFileProcessor._read_tree(document)
        raise TraceFormatError("expected a JSON array of nodes or a single node object")

    @staticmethod
    def _read_flat_list(items) -> List[CallNode]:
        nodes = []
        skipped = 0
        for item in items:
            if TraceFileProcessor.is_valid_node(item):
                nodes.append(item)
            else:
                skipped += 1
                logger.warning("Skipping malformed node: %r", _describe(item))

        logger.info("Read %d nodes (%d skipped)", len(nodes), skipped)
        return nodes

    @staticmethod
    def _read_tree(tree: Dict) -> List[CallNode]:
        return TraceFileProcessor._read_flat_list(
            TreeConverter.flatten(tree, strip_children=True)
        )


def _describe(item: Any) -> Any:
    if isinstance(item, dict):
        return {k: item.get(k) for k in ('id', 'name', 'duration')}
    return item

"""
Timing-independent fingerprints for call nodes.
"""

import hashlib
import json

from ..core.types import CallNode

VOLATILE_FIELDS = frozenset({'duration', 'startTime', 'endTime', 'children'})


def structural_hash(node: CallNode) -> str:
    """
    Canonical serialization of a single node, ignoring timing and children.

    Keys are sorted at every level, so two nodes with the same content hash
    equal regardless of the order their fields were set in. Values that are
    not JSON-native are serialized with str().

    Args:
        node: Node to fingerprint (descendants are not included)

    Returns:
        Comparison key string
    """
    comparable = {k: v for k, v in node.items() if k not in VOLATILE_FIELDS}
    return json.dumps(comparable, sort_keys=True, separators=(',', ':'), default=str)


def structural_digest(node: CallNode) -> str:
    """SHA-256 hex digest of structural_hash(node)."""
    return hashlib.sha256(structural_hash(node).encode('utf-8')).hexdigest()

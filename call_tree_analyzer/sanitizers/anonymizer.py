"""
Redaction of sensitive data before a call tree is exported or shared.
"""

import copy
from typing import Iterable, List, Tuple

from ..core.types import CallNode

SENSITIVE_FIELDS = (
    'userId', 'email', 'ipAddress', 'accessToken', 'creditCardNumber',
    'name', 'phone', 'address', 'password', 'jwt',
)

REDACTED = '[ANONYMIZED]'
REDACTED_ARGS = '[ANONYMIZED_ARGS]'
REDACTED_RETURN = '[ANONYMIZED_RETURN]'
REDACTED_STACK_TRACE = '[ANONYMIZED_STACK_TRACE]'


def anonymize(node: CallNode, sensitive_fields: Iterable[str] = SENSITIVE_FIELDS) -> CallNode:
    """
    Return a deep copy of the tree with sensitive values replaced.

    Metadata keys listed in sensitive_fields are redacted, 'arguments' and
    'returnValue' are replaced wholesale, and error stack traces are
    dropped. Other error fields are kept. Placeholders are stable, so
    anonymizing twice gives the same result as anonymizing once.

    Args:
        node: Root of the tree
        sensitive_fields: Metadata keys to redact

    Returns:
        Anonymized copy of the tree
    """
    sensitive_fields = tuple(sensitive_fields)

    result: List[CallNode] = []
    # Each entry pairs a node with the list its redacted copy is appended to
    stack = [(node, result)]
    while stack:
        current, siblings = stack.pop()
        anonymized = _redact_node(current, sensitive_fields)
        siblings.append(anonymized)

        if 'children' in current:
            anonymized['children'] = []
            for child in reversed(current['children'] or []):
                stack.append((child, anonymized['children']))
    return result[0]


def _redact_node(node: CallNode, sensitive_fields: Tuple[str, ...]) -> CallNode:
    anonymized = {
        key: copy.deepcopy(value)
        for key, value in node.items()
        if key != 'children'
    }

    metadata = anonymized.get('metadata')
    if metadata:
        for key in sensitive_fields:
            if key in metadata:
                metadata[key] = REDACTED
        if 'arguments' in metadata:
            metadata['arguments'] = REDACTED_ARGS
        if 'returnValue' in metadata:
            metadata['returnValue'] = REDACTED_RETURN

    error = anonymized.get('error')
    if error and 'stackTrace' in error:
        error['stackTrace'] = REDACTED_STACK_TRACE
    return anonymized

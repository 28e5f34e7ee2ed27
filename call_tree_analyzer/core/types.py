"""
Type definitions for call tree analysis.
"""

from typing import Any, Callable, Dict, Iterable, List, Optional, TypedDict


NODE_TYPES = (
    'function', 'serviceCall', 'databaseQuery', 'messageQueue', 'cacheOp',
    'externalAPI', 'internalAPI', 'compute', 'diskIO', 'networkIO', 'event',
    'task', 'virtualRoot',
)

NODE_STATUSES = ('success', 'failure', 'timeout', 'aborted', 'pending')

FILTER_OPERATORS = (
    'equals', 'contains', 'startsWith', 'endsWith', 'greaterThan', 'lessThan',
    'hasError', 'noError', 'custom',
)

DURATION_UNITS = ('ms', 's', 'us')


class CallError(TypedDict, total=False):
    """Structured error attached to a failed call."""
    message: str
    code: Any
    stackTrace: str
    severity: str
    category: str


class CallNode(TypedDict, total=False):
    """One recorded operation in a trace, keyed as the trace JSON is keyed."""
    id: str
    name: str
    type: str
    duration: float
    startTime: float
    endTime: float
    status: str
    error: CallError
    metadata: Dict[str, Any]
    children: List['CallNode']
    parentCallId: Optional[str]
    depth: int


class NodeFilter(TypedDict, total=False):
    """A single filter clause. Clauses in a list are ANDed."""
    field: str
    operator: str
    value: Any


class ResourceUsage(TypedDict):
    """Rolled-up resource usage for a subtree."""
    cpu: float
    memory: float
    network: float


CustomFilter = Callable[[CallNode, Any], bool]


class CallTreeConfig:
    """Configuration for call tree analysis."""

    def __init__(
        self,
        duration_unit: str = 'ms',
        case_sensitive_search: bool = False,
        strip_flattened_children: bool = False,
        sensitive_fields: Optional[Iterable[str]] = None,
        custom_filter: Optional[CustomFilter] = None
    ):
        """
        Initialize call tree analysis configuration.

        Args:
            duration_unit: Unit used when reporting durations ('ms', 's' or 'us').
                           Default: 'ms'

            case_sensitive_search: If True, deep search matches case exactly.
                                   Default: False

            strip_flattened_children: If True, flattened entries drop their
                                      'children' lists instead of keeping them
                                      as pre-order stream markers.
                                      Default: False (entries keep children)

            sensitive_fields: Metadata keys redacted by anonymization.
                              Default: None (use SENSITIVE_FIELDS)

            custom_filter: Predicate called as custom_filter(node, value) for
                           filters using the 'custom' operator. When None,
                           'custom' filters always match.
        """
        if duration_unit not in DURATION_UNITS:
            raise ValueError(
                f"Unsupported duration unit '{duration_unit}', "
                f"expected one of {', '.join(DURATION_UNITS)}"
            )
        self.duration_unit = duration_unit
        self.case_sensitive_search = case_sensitive_search
        self.strip_flattened_children = strip_flattened_children
        self.sensitive_fields = tuple(sensitive_fields) if sensitive_fields is not None else None
        self.custom_filter = custom_filter

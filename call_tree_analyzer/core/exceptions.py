"""
Exceptions raised at the edges of call tree analysis.

The engine functions themselves never raise for malformed nodes; these
errors only come from reading trace documents.
"""


class CallTreeError(Exception):
    """Base class for call tree analysis errors."""


class TraceFormatError(CallTreeError, ValueError):
    """A trace document is neither a node list nor a single node tree."""

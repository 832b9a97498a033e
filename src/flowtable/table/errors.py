"""Errors raised while building a flow table.

All of them mean the execution graph broke its contract (acyclic,
consistent start/end pairing). None are recoverable within a build.
"""


class FlowGraphError(ValueError):
    """Base class for flow table build failures."""


class ConsistencyViolation(FlowGraphError):
    """Start/end pairing or tree reachability is inconsistent."""


class MissingRoot(FlowGraphError):
    """No parentless node exists among a non-empty reachable set."""

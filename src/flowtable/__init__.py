"""
flowtable - Tabular tree views of execution graphs

flowtable turns the step graph of a running or finished process, where
every step points back at the steps that caused it, into an ordered,
indented list of rows ready for display.
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("flowtable")
except PackageNotFoundError:
    __version__ = "0.0.0+unknown"  # Not installed
__license__ = "MIT"

from flowtable.graph import FlowExecution, FlowNode, NodeRole
from flowtable.table import ConsistencyViolation, FlowGraphTable, MissingRoot, Row

__all__ = [
    "__version__",
    "ConsistencyViolation",
    "FlowExecution",
    "FlowGraphTable",
    "FlowNode",
    "MissingRoot",
    "NodeRole",
    "Row",
]

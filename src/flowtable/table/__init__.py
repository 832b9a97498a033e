"""Table module - Flow table construction and export.

Exports:
- FlowGraphTable: Builds ordered, indented rows from an execution graph
- Row: One line of the table
- FlowGraphError, ConsistencyViolation, MissingRoot: Build failures
"""

from flowtable.table.builder import FlowGraphTable
from flowtable.table.errors import ConsistencyViolation, FlowGraphError, MissingRoot
from flowtable.table.row import Row

__all__ = [
    "FlowGraphTable",
    "Row",
    "FlowGraphError",
    "ConsistencyViolation",
    "MissingRoot",
]

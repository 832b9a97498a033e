"""Graph module - Execution graph data structures.

Exports:
- NodeRole: Enum of node roles
- FlowNode: A recorded step with back-links to its causes
- ExecutionGraph: Protocol read by the table builder
- FlowExecution: Append-only in-memory ExecutionGraph
- load_execution: Load a FlowExecution from a TOML/JSON graph file
"""

from flowtable.graph.deserializer import execution_from_dict, load_execution
from flowtable.graph.execution import ExecutionGraph, FlowExecution
from flowtable.graph.FlowNode import FlowNode, NodeRole

__all__ = [
    "NodeRole",
    "FlowNode",
    "ExecutionGraph",
    "FlowExecution",
    "execution_from_dict",
    "load_execution",
]

"""Execution graphs - the source side of a flow table.

This module defines the contract a table builder reads from
(ExecutionGraph) and an append-only in-memory implementation of it
(FlowExecution).
"""

from __future__ import annotations

from typing import Any, Hashable, Iterable, Iterator, Protocol, Sequence, runtime_checkable

from flowtable.graph.FlowNode import FlowNode, NodeRole


@runtime_checkable
class ExecutionGraph(Protocol):
    """Read-only view of an execution graph.

    Implementations must only ever grow by appending nodes: once a node
    is published, its parents and role never change.
    """

    def current_heads(self) -> Sequence[Hashable]:
        """Return the terminal nodes of the graph at the time of the call."""
        ...

    def parents(self, node: Hashable) -> Sequence[Hashable]:
        """Return the direct predecessors of a node, in order."""
        ...

    def role(self, node: Hashable) -> NodeRole:
        """Return the role of a node."""
        ...

    def paired_start(self, node: Hashable) -> Hashable:
        """Return the START node paired with an END node."""
        ...


class FlowExecution:
    """In-memory, append-only execution graph.

    Nodes are added in causal order (parents before children). The head
    set tracks the nodes no other node has named as a parent yet, unless
    an explicit head set was pinned with set_heads().

    Example:
        execution = FlowExecution()
        start = execution.add_node("S", role=NodeRole.START)
        branch = execution.add_node("B", parents=["S"])
        execution.add_node("E", role=NodeRole.END, start="S", parents=["B"])
    """

    def __init__(self) -> None:
        self._index: dict[str, FlowNode] = {}
        self._heads: list[FlowNode] = []
        self._pinned_heads: list[FlowNode] | None = None

    def add_node(
        self,
        node_id: str,
        role: NodeRole | str = NodeRole.PLAIN,
        parents: Iterable[str] = (),
        start: str | None = None,
        label: str = "",
        content: dict[str, Any] | None = None,
    ) -> FlowNode:
        """Append a new node to the graph.

        Args:
            node_id: Identifier, unique within this execution.
            role: Node role (enum or its string value).
            parents: IDs of already-added predecessor nodes.
            start: For END nodes, the ID of the START node being closed.
            label: Display label.
            content: Opaque payload (status, timestamps, ...).

        Returns:
            The created FlowNode.

        Raises:
            ValueError: If the ID is taken or the role/start combination is invalid.
            KeyError: If a parent or start ID is unknown.
        """
        if node_id in self._index:
            raise ValueError(f"Node '{node_id}' already exists")

        role = NodeRole.parse(role)
        parent_nodes = tuple(self._require(pid, "Parent") for pid in parents)

        start_node = None
        if start is not None:
            start_node = self._require(start, "Start")
            if not start_node.is_start:
                raise ValueError(f"Node '{start}' is not a start node")

        node = FlowNode(
            id=node_id,
            role=role,
            label=label,
            start=start_node,
            _parents=parent_nodes,
            _content=dict(content or {}),
        )
        self._index[node_id] = node

        for parent in parent_nodes:
            if parent in self._heads:
                self._heads.remove(parent)
        self._heads.append(node)
        return node

    def set_heads(self, node_ids: Iterable[str]) -> None:
        """Pin the head set to the given node IDs, in order."""
        self._pinned_heads = [self._require(nid, "Head") for nid in node_ids]

    def find_by_id(self, node_id: str) -> FlowNode | None:
        """Find node by ID."""
        return self._index.get(node_id)

    def all_nodes(self) -> Iterator[FlowNode]:
        """Iterate all nodes in insertion order."""
        yield from self._index.values()

    def node_count(self) -> int:
        """Return total number of nodes."""
        return len(self._index)

    # ExecutionGraph protocol

    def current_heads(self) -> list[FlowNode]:
        if self._pinned_heads is not None:
            return list(self._pinned_heads)
        return list(self._heads)

    def parents(self, node: FlowNode) -> tuple[FlowNode, ...]:
        return node.parents

    def role(self, node: FlowNode) -> NodeRole:
        return node.role

    def paired_start(self, node: FlowNode) -> FlowNode:
        if node.start is None:
            raise ValueError(f"Node '{node.id}' is not an end node")
        return node.start

    def _require(self, node_id: str, what: str) -> FlowNode:
        node = self._index.get(node_id)
        if node is None:
            raise KeyError(f"{what} node '{node_id}' not found")
        return node

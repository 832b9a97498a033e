"""FlowNode - Step node representation for execution graphs.

This module provides the core data structures of an execution graph:
- NodeRole: Enum of node roles (plain step, region start, region end)
- FlowNode: A single recorded step with back-links to its causes
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class NodeRole(Enum):
    """Roles a node can play in an execution graph.

    - PLAIN: An ordinary step; its successors continue in sequence
    - START: Opens a region (e.g., a parallel block); its successors nest inside
    - END: Closes the region opened by its paired START node
    """

    PLAIN = "plain"
    START = "start"
    END = "end"

    @classmethod
    def parse(cls, value: str | NodeRole) -> NodeRole:
        """Resolve a role from its value or name (case-insensitive).

        Raises:
            ValueError: If the value names no known role.
        """
        if isinstance(value, NodeRole):
            return value
        text = str(value).strip().lower()
        for role in cls:
            if text in (role.value, role.name.lower()):
                return role
        raise ValueError(f"Unknown node role: {value!r}")


@dataclass(eq=False)
class FlowNode:
    """A step in a recorded execution.

    Nodes compare and hash by identity. Parents are fixed at creation
    time; the graph only ever grows by appending new nodes.

    Attributes:
        id: Identifier unique within one execution.
        role: The node's role (plain, region start or region end).
        label: Human-readable display label.
        start: For END nodes, the START node this node closes.
    """

    id: str
    role: NodeRole = NodeRole.PLAIN
    label: str = ""
    start: FlowNode | None = field(default=None, repr=False)

    # Internal storage (prefixed)
    _parents: tuple[FlowNode, ...] = field(default=(), repr=False)
    _content: dict[str, Any] = field(default_factory=dict, repr=False)

    def __post_init__(self) -> None:
        if self.role is NodeRole.END and self.start is None:
            raise ValueError(f"End node '{self.id}' requires a start node")
        if self.role is not NodeRole.END and self.start is not None:
            raise ValueError(f"Only end nodes may reference a start node: '{self.id}'")
        self._parents = tuple(self._parents)

    @property
    def parents(self) -> tuple[FlowNode, ...]:
        """Direct predecessors, in recorded order."""
        return self._parents

    @property
    def is_root(self) -> bool:
        """True if this node has no parents."""
        return len(self._parents) == 0

    @property
    def is_start(self) -> bool:
        return self.role is NodeRole.START

    @property
    def is_end(self) -> bool:
        return self.role is NodeRole.END

    def get_label(self) -> str:
        """Return the display label, falling back to the id."""
        return self.label or self.id

    def get_field(self, key: str, default: Any = None) -> Any:
        """Get a field from the opaque content payload."""
        return self._content.get(key, default)

    def get_all_content(self) -> dict[str, Any]:
        """Return a copy of the content payload."""
        return dict(self._content)

"""Row - One line of a flow table.

A Row wraps a single graph node and carries the links the table builder
derives from the graph: forward (child) edges, the tree placement and
the display depth.

The tree is stored as chains. A row points at its first tree child and
at the next row of the chain it belongs to; the remaining children of a
row are the chain that starts at its first child. Only the table builder
writes to a Row.
"""

from __future__ import annotations

from typing import Any, Hashable, Iterator

from flowtable.graph.FlowNode import NodeRole


class Row:
    """A node of the execution graph as it appears in the table.

    Start and end nodes of a region collapse into one row: the row wraps
    the START node and `paired_end` points at the row of its END node.
    """

    def __init__(
        self,
        node: Hashable,
        role: NodeRole = NodeRole.PLAIN,
        parents: tuple[Hashable, ...] = (),
    ) -> None:
        self._node = node
        self._role = role
        # Parents as read from the graph when the row was created
        self._parents = tuple(parents)

        self._paired_end: Row | None = None
        self._paired_start: Row | None = None

        # Reverse edges of the parent links, which form a DAG
        self._graph_children: list[Row] = []
        self._graph_siblings: list[Row] = []

        # Tree view
        self._first_tree_child: Row | None = None
        self._next_tree_sibling: Row | None = None

        self._depth: int | None = None

    def __repr__(self) -> str:
        return f"Row(node={self._node!r}, role={self._role}, depth={self._depth})"

    @property
    def node(self) -> Hashable:
        """The wrapped graph node."""
        return self._node

    @property
    def role(self) -> NodeRole:
        """The node's role, read once when the row was created."""
        return self._role

    @property
    def is_start(self) -> bool:
        return self._role is NodeRole.START

    @property
    def is_end(self) -> bool:
        return self._role is NodeRole.END

    @property
    def parents(self) -> tuple[Hashable, ...]:
        return self._parents

    @property
    def paired_end(self) -> Row | None:
        """Row of the END node closing this START row, if any."""
        return self._paired_end

    @property
    def end_node(self) -> Hashable | None:
        """The END node collapsed into this row, if any."""
        return self._paired_end.node if self._paired_end is not None else None

    @property
    def depth(self) -> int | None:
        """Indentation level; None until the depth annotator has run."""
        return self._depth

    @property
    def display_name(self) -> str:
        """Label of the wrapped node, or its string form."""
        get_label = getattr(self._node, "get_label", None)
        if callable(get_label):
            return get_label()
        return str(self._node)

    @property
    def first_tree_child(self) -> Row | None:
        return self._first_tree_child

    @property
    def next_tree_sibling(self) -> Row | None:
        return self._next_tree_sibling

    def iter_graph_children(self) -> Iterator[Row]:
        yield from self._graph_children

    def iter_tree_children(self) -> Iterator[Row]:
        """Iterate the rows nested directly under this one."""
        child = self._first_tree_child
        while child is not None:
            yield child
            child = child._next_tree_sibling

    def iter_tree_siblings(self) -> Iterator[Row]:
        """Iterate the rows chained after this one at the same depth."""
        sibling = self._next_tree_sibling
        while sibling is not None:
            yield sibling
            sibling = sibling._next_tree_sibling

    @property
    def tree_children(self) -> tuple[Row, ...]:
        return tuple(self.iter_tree_children())

    def content(self) -> dict[str, Any]:
        """Opaque payload of the wrapped node (empty if it has none)."""
        get_all_content = getattr(self._node, "get_all_content", None)
        if callable(get_all_content):
            return get_all_content()
        return {}

    # === Builder-only mutation ===

    def _add_graph_child(self, row: Row) -> None:
        self._graph_children.append(row)

    def _add_graph_sibling(self, row: Row) -> None:
        self._graph_siblings.append(row)

    def _pair_with_end(self, end_row: Row) -> bool:
        """Record `end_row` as the END closing this START row.

        Returns:
            False if a different end row is already paired with this row.
        """
        if self._paired_end is not None and self._paired_end is not end_row:
            return False
        self._paired_end = end_row
        end_row._paired_start = self
        return True

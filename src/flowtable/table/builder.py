"""Table Builder - Turns an execution graph into ordered, indented rows.

The build runs five stages, each feeding the next:

1. collect_rows: one Row per node reachable from the current heads
2. build_forward_references: child links, canonical root, start/end pairing
3. build_tree: graph edges become tree children (nesting) or siblings
4. annotate_depth: indentation level of every row in the tree
5. order_rows: pre-order flattening into the final sequence

In the graph, parent/child is a successor relationship: if step A runs
and then step B, A is B's parent. In the table we want B listed after A
at the same indentation, so A's graph children become its tree
siblings. A START node's graph children become tree children instead,
so that e.g. every branch of a parallel block nests under the block.
The END node is folded into its START row, and whatever follows the END
node continues as a tree sibling of the START row.

Tree siblings form chains: adding a sibling to a row appends it to the
end of the chain that row belongs to, not right after the row. Rows are
shaped in discovery order, so with parallel branches the continuation
of one branch can land after rows of another branch.
"""

from __future__ import annotations

import logging
from typing import Hashable

from flowtable.graph.execution import ExecutionGraph
from flowtable.graph.FlowNode import NodeRole
from flowtable.table.errors import ConsistencyViolation, MissingRoot
from flowtable.table.row import Row

logger = logging.getLogger(__name__)


def _name(node: Hashable) -> str:
    return repr(getattr(node, "id", node))


def collect_rows(graph: ExecutionGraph) -> dict[Hashable, Row]:
    """Create a Row for each node reachable from the current heads.

    Nodes are discovered depth-first through parent links. The returned
    mapping keeps discovery order, which decides the canonical root.

    Args:
        graph: The execution graph to read.

    Returns:
        Dict mapping each reachable node to its Row.
    """
    # it's a stack and not a queue to visit nodes in DFS order
    stack: list[Hashable] = list(graph.current_heads())
    rows: dict[Hashable, Row] = {}

    while stack:
        node = stack.pop()
        if node in rows:
            continue

        parents = tuple(graph.parents(node))
        rows[node] = Row(node, role=graph.role(node), parents=parents)
        stack.extend(parents)

    return rows


def build_forward_references(graph: ExecutionGraph, rows: dict[Hashable, Row]) -> Row | None:
    """Build forward (child) links from the parent back-links.

    Also pairs every END row with the row of its START node.

    Args:
        graph: The execution graph, consulted for start/end pairing.
        rows: Rows from collect_rows().

    Returns:
        The canonical root row, or None when there are no rows.

    Raises:
        ConsistencyViolation: If start/end pairing is not 1:1.
        MissingRoot: If no row is parentless.
    """
    first_row: Row | None = None

    for row in rows.values():
        for parent in row.parents:
            rows[parent]._add_graph_child(row)

        if not row.parents:
            if row.is_end:
                raise ConsistencyViolation(f"End node {_name(row.node)} has no parents")
            if first_row is None:
                first_row = row
            else:
                # several independent heads: treat them all as siblings
                first_row._add_graph_sibling(row)

        if row.is_end:
            start = graph.paired_start(row.node)
            start_row = rows.get(start)
            if start_row is None:
                raise ConsistencyViolation(
                    f"End node {_name(row.node)} closes {_name(start)}, which is not reachable"
                )
            if not start_row.is_start:
                raise ConsistencyViolation(
                    f"End node {_name(row.node)} is paired with non-start node {_name(start)}"
                )
            if not start_row._pair_with_end(row):
                raise ConsistencyViolation(
                    f"Start node {_name(start)} is already closed by "
                    f"{_name(start_row.end_node)}; cannot pair it with {_name(row.node)}"
                )

    # graph shouldn't contain any cycle, so there should be at least one head node
    if rows and first_row is None:
        raise MissingRoot(f"No parentless node among {len(rows)} reachable nodes")
    return first_row


class TreeLinker:
    """Writes first-child and next-sibling links while the tree is shaped.

    A row with several graph parents gets linked once per parent, so the
    links form a DAG rather than a strict tree. A link that would make a
    row part of its own continuation is refused. Before refusing, links
    into shared rows on the loop are withdrawn; a shared row stays
    reachable through its other placement.
    """

    def __init__(self) -> None:
        # While no row is linked twice the links form a forest, and the
        # root of a row's tree is enough to detect a loop
        self._tree_parent: dict[Row, Row] = {}
        self._incoming: dict[Row, int] = {}
        self._shared = False
        # Last known chain tail per row; next-sibling links are only ever
        # set on a tail, so a cached tail stays on the chain until a link
        # is withdrawn
        self._tails: dict[Row, Row] = {}

    def add_child(self, row: Row, child: Row) -> None:
        """Nest `child` under `row`, after any existing children."""
        if child.is_end:
            return
        if row._first_tree_child is None:
            self._link(row, child, as_child=True)
        else:
            self.add_sibling(row._first_tree_child, child)

    def add_sibling(self, row: Row, sibling: Row) -> None:
        """Append `sibling` to the end of the chain `row` belongs to."""
        if sibling.is_end:
            return
        self._link(self._chain_tail(row), sibling, as_child=False)

    def _chain_tail(self, row: Row) -> Row:
        passed = [row]
        tail = self._tails.get(row, row)
        while tail._next_tree_sibling is not None:
            passed.append(tail)
            tail = tail._next_tree_sibling
        for visited in passed:
            self._tails[visited] = tail
        return tail

    def _link(self, source: Row, target: Row, as_child: bool) -> None:
        if self._closes_loop(source, target):
            logger.debug(
                "Skipping tree link %s -> %s: it would close a loop",
                _name(source.node),
                _name(target.node),
            )
            return

        if as_child:
            source._first_tree_child = target
        else:
            source._next_tree_sibling = target

        count = self._incoming.get(target, 0)
        if count:
            self._shared = True
        else:
            self._tree_parent[target] = source
        self._incoming[target] = count + 1

    def _unlink(self, source: Row, target: Row) -> None:
        if source._next_tree_sibling is target:
            source._next_tree_sibling = None
        else:
            source._first_tree_child = None
        self._incoming[target] -= 1
        self._tails.clear()

    def _closes_loop(self, source: Row, target: Row) -> bool:
        if source is target:
            return True
        if not self._shared and target not in self._incoming:
            return self._root_of(source) is target

        while True:
            path = self._path(target, source)
            if path is None:
                return False
            shared = [(a, b) for a, b in path if self._incoming[b] > 1]
            if not shared:
                return True
            self._unlink(*shared[0])

    def _root_of(self, row: Row) -> Row:
        root = row
        while root in self._tree_parent:
            root = self._tree_parent[root]
        # path compression
        while row is not root:
            parent = self._tree_parent[row]
            self._tree_parent[row] = root
            row = parent
        return root

    @staticmethod
    def _path(start: Row, goal: Row) -> list[tuple[Row, Row]] | None:
        """Tree links leading from `start` to `goal`, or None if unreachable."""
        came_from: dict[Row, Row | None] = {start: None}
        stack = [start]
        while stack:
            row = stack.pop()
            if row is goal:
                path = []
                while came_from[row] is not None:
                    path.append((came_from[row], row))
                    row = came_from[row]
                path.reverse()
                return path
            for nxt in (row._first_tree_child, row._next_tree_sibling):
                if nxt is not None and nxt not in came_from:
                    came_from[nxt] = row
                    stack.append(nxt)
        return None


def build_tree(rows: dict[Hashable, Row], first_row: Row | None) -> None:
    """Convert the forward DAG into a tree of children and siblings.

    A node with several graph parents is placed under each of them; only
    END nodes are merged away.
    """
    linker = TreeLinker()
    for row in rows.values():
        match row.role:
            case NodeRole.START:
                for child in row.iter_graph_children():
                    linker.add_child(row, child)
            case NodeRole.END:
                start_row = row._paired_start
                for child in row.iter_graph_children():
                    linker.add_sibling(start_row, child)
            case NodeRole.PLAIN:
                for child in row.iter_graph_children():
                    linker.add_sibling(row, child)

    if first_row is not None:
        for head in first_row._graph_siblings:
            linker.add_sibling(first_row, head)


def annotate_depth(first_row: Row, rows: dict[Hashable, Row]) -> None:
    """Set the depth of every row in the tree (root = 0).

    A first tree child sits one level below its parent; the next sibling
    in a chain sits at the same level as its predecessor.

    Raises:
        ConsistencyViolation: If a non-END row cannot be reached through the tree.
    """
    first_row._depth = 0
    stack: list[Row] = [first_row]

    while stack:
        row = stack.pop()
        child = row._first_tree_child
        if child is not None:
            child._depth = row._depth + 1
            stack.append(child)
        sibling = row._next_tree_sibling
        if sibling is not None:
            sibling._depth = row._depth
            stack.append(sibling)

    unplaced = [_name(r.node) for r in rows.values() if r._depth is None and not r.is_end]
    if unplaced:
        raise ConsistencyViolation(
            "Nodes not reachable through the tree: " + ", ".join(unplaced)
        )


def order_rows(first_row: Row | None) -> list[Row]:
    """Flatten the tree into a list, parents before their descendants.

    Walks down to the first child while remembering where the current
    chain continues, moves along the chain when there is no child, and
    resumes the most recently remembered chain when both run out.
    """
    ordered: list[Row] = []
    ancestors: list[Row] = []
    row = first_row

    while row is not None:
        ordered.append(row)
        if row._first_tree_child is not None:
            if row._next_tree_sibling is not None:
                ancestors.append(row._next_tree_sibling)
            row = row._first_tree_child
        elif row._next_tree_sibling is not None:
            row = row._next_tree_sibling
        else:
            row = ancestors.pop() if ancestors else None

    return ordered


class FlowGraphTable:
    """Data model behind the tree-table view of an execution graph.

    Example:
        table = FlowGraphTable(execution)
        table.build()
        for row in table.rows:
            print("  " * row.depth + row.display_name)
    """

    def __init__(self, graph: ExecutionGraph) -> None:
        self.graph = graph
        self._rows: tuple[Row, ...] | None = None

    @property
    def rows(self) -> tuple[Row, ...]:
        """The ordered rows of the last successful build.

        Raises:
            RuntimeError: If build() has not completed yet.
        """
        if self._rows is None:
            raise RuntimeError("build() must be called before rows are available")
        return self._rows

    @property
    def is_built(self) -> bool:
        return self._rows is not None

    def build(self) -> tuple[Row, ...]:
        """Build the tabular view from the graph's current snapshot.

        On failure nothing is stored; rows from an earlier build stay.

        Returns:
            The ordered rows.
        """
        rows = collect_rows(self.graph)
        first_row = build_forward_references(self.graph, rows)
        build_tree(rows, first_row)
        if first_row is not None:
            annotate_depth(first_row, rows)
        ordered = tuple(order_rows(first_row))

        logger.debug(
            "Built flow table: %d reachable nodes, %d rows", len(rows), len(ordered)
        )
        self._rows = ordered
        return ordered

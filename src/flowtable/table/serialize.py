"""Table Serialization - Export flow table rows to data formats.

This module provides functions to serialize rows to JSON-compatible
dicts, indented plain text and CSV.
"""

from __future__ import annotations

import csv
import io
from typing import TYPE_CHECKING, Any, Iterable

if TYPE_CHECKING:
    from flowtable.table.builder import FlowGraphTable
    from flowtable.table.row import Row


def _node_id(node: Any) -> str:
    return str(getattr(node, "id", node))


def serialize_row(row: Row) -> dict[str, Any]:
    """Serialize a Row to a JSON-compatible dict.

    Args:
        row: The row to serialize.

    Returns:
        Dict suitable for JSON serialization.
    """
    result: dict[str, Any] = {
        "id": _node_id(row.node),
        "role": row.role.value,
        "label": row.display_name,
        "depth": row.depth,
    }

    if row.end_node is not None:
        result["end"] = _node_id(row.end_node)

    content = row.content()
    if content:
        result["content"] = content

    return result


def serialize_table(table: FlowGraphTable) -> dict[str, Any]:
    """Serialize a built FlowGraphTable to a JSON-compatible dict."""
    rows = [serialize_row(row) for row in table.rows]
    return {
        "rows": rows,
        "metadata": {
            "row_count": len(rows),
            "max_depth": max((r["depth"] for r in rows), default=0),
        },
    }


def to_text(rows: Iterable[Row], indent: str = "  ", show_ids: bool = True) -> str:
    """Render rows as indented plain text, one row per line.

    Args:
        rows: Ordered rows.
        indent: String repeated once per depth level.
        show_ids: Append the node id when it differs from the label.
    """
    lines = []
    for row in rows:
        text = row.display_name
        node_id = _node_id(row.node)
        if show_ids and node_id != text:
            text = f"{text} [{node_id}]"
        if row.end_node is not None:
            text = f"{text} (ends at {_node_id(row.end_node)})"
        lines.append(f"{indent * (row.depth or 0)}{text}")
    return "\n".join(lines)


def to_csv(rows: Iterable[Row]) -> str:
    """Render rows as CSV with columns: Depth, ID, Role, Label, End."""
    output = io.StringIO()
    writer = csv.writer(output)
    writer.writerow(["Depth", "ID", "Role", "Label", "End"])
    for row in rows:
        writer.writerow(
            [
                row.depth,
                _node_id(row.node),
                row.role.value,
                row.display_name,
                _node_id(row.end_node) if row.end_node is not None else "",
            ]
        )
    return output.getvalue()

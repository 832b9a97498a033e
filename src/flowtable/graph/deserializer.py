"""Graph file loading.

Reads an execution graph description from a TOML or JSON file and
replays it into a FlowExecution.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import tomlkit

from flowtable.graph.execution import FlowExecution

# Node keys with structural meaning; anything else is content payload
_RESERVED_KEYS = {"id", "role", "parents", "start", "label"}


def parse_graph_text(text: str, fmt: str = "toml") -> dict[str, Any]:
    """Parse graph file text into plain Python data.

    Args:
        text: File contents.
        fmt: "toml" or "json".

    Returns:
        Dict with a "nodes" list and an optional "heads" list.
    """
    if fmt == "toml":
        return tomlkit.parse(text).unwrap()
    if fmt == "json":
        return json.loads(text)
    raise ValueError(f"Unsupported graph format: {fmt}")


def execution_from_dict(data: dict[str, Any]) -> FlowExecution:
    """Build a FlowExecution from parsed graph data.

    Nodes are added in listed order, so every node must come after its
    parents and, for end nodes, after its start node.

    Raises:
        ValueError: On malformed entries, duplicate IDs or bad roles.
        KeyError: On references to unknown nodes.
    """
    nodes = data.get("nodes", [])
    if not isinstance(nodes, list):
        raise ValueError("'nodes' must be a list of node tables")

    execution = FlowExecution()
    for position, entry in enumerate(nodes, start=1):
        if not isinstance(entry, dict) or "id" not in entry:
            raise ValueError(f"Node entry #{position} is missing an 'id'")
        content = {k: v for k, v in entry.items() if k not in _RESERVED_KEYS}
        execution.add_node(
            str(entry["id"]),
            role=entry.get("role", "plain"),
            parents=[str(p) for p in entry.get("parents", [])],
            start=entry.get("start"),
            label=entry.get("label", ""),
            content=content,
        )

    heads = data.get("heads")
    if heads is not None:
        execution.set_heads(str(h) for h in heads)
    return execution


def load_execution(path: Path) -> FlowExecution:
    """Load an execution graph from a .toml or .json file."""
    fmt = "json" if path.suffix.lower() == ".json" else "toml"
    text = path.read_text(encoding="utf-8")
    return execution_from_dict(parse_graph_text(text, fmt))

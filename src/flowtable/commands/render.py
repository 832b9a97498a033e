"""
flowtable.commands.render - Render an execution graph as a flow table.
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict

from flowtable.config import (
    DEFAULT_CONFIG,
    apply_env_overrides,
    find_config_file,
    load_config,
    validate_config,
)
from flowtable.graph import load_execution
from flowtable.table import FlowGraphError, FlowGraphTable
from flowtable.table.serialize import serialize_table, to_csv, to_text


def resolve_config(args: argparse.Namespace) -> Dict[str, Any]:
    """Load the configuration named on the command line, or the nearest one.

    Raises:
        ValueError: If the settings, including environment overrides, are invalid
    """
    config_path = getattr(args, "config", None) or find_config_file(Path.cwd())
    if config_path and config_path.exists():
        return load_config(config_path)
    config = apply_env_overrides(DEFAULT_CONFIG)
    errors = validate_config(config)
    if errors:
        raise ValueError("Invalid configuration: " + "; ".join(errors))
    return config


def run(args: argparse.Namespace) -> int:
    """Run the render command."""
    graph_path: Path = args.graph_file
    if not graph_path.exists():
        print(f"Error: graph file not found: {graph_path}", file=sys.stderr)
        return 1

    config = resolve_config(args)
    render_config = config.get("render", {})
    fmt = args.format or render_config.get("format", "text")
    indent = args.indent if args.indent is not None else render_config.get("indent", "  ")
    show_ids = render_config.get("show_ids", True)

    execution = load_execution(graph_path)
    table = FlowGraphTable(execution)
    try:
        table.build()
    except FlowGraphError as e:
        if getattr(args, "verbose", False):
            raise
        print(f"Error: unable to render pipeline graph: {e}", file=sys.stderr)
        return 1

    if fmt == "json":
        output = json.dumps(serialize_table(table), indent=2, default=str)
    elif fmt == "csv":
        output = to_csv(table.rows)
    else:
        output = to_text(table.rows, indent=indent, show_ids=show_ids)

    if output:
        print(output.rstrip("\n"))
    return 0

"""
flowtable.commands.config_cmd - Inspect configuration.
"""

import argparse
import json
import sys
from pathlib import Path

import tomlkit

from flowtable.commands.render import resolve_config
from flowtable.config import find_config_file, get_config_value


def run(args: argparse.Namespace) -> int:
    """Run the config command."""
    action = getattr(args, "config_action", None)
    if action == "show":
        return cmd_show(args)
    elif action == "get":
        return cmd_get(args)
    elif action == "path":
        return cmd_path(args)

    print("Usage: flowtable config {show|get|path}")
    return 1


def cmd_show(args: argparse.Namespace) -> int:
    """Print the effective configuration."""
    config = resolve_config(args)
    if args.json:
        print(json.dumps(config, indent=2))
    else:
        print(tomlkit.dumps(config).rstrip("\n"))
    return 0


def cmd_get(args: argparse.Namespace) -> int:
    """Print one configuration value by dotted key."""
    config = resolve_config(args)
    value = get_config_value(config, args.key)
    if value is None:
        print(f"Error: unknown configuration key: {args.key}", file=sys.stderr)
        return 1
    print(json.dumps(value))
    return 0


def cmd_path(args: argparse.Namespace) -> int:
    """Print the location of the configuration file in effect."""
    config_path = getattr(args, "config", None) or find_config_file(Path.cwd())
    if config_path is None:
        print("No configuration file found (using defaults)")
        return 0
    print(config_path)
    return 0

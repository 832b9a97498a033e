"""
flowtable.cli - Command-line interface.

Main entry point for the flowtable CLI tool.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from flowtable import __version__
from flowtable.commands import config_cmd, render


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="flowtable",
        description="Tabular tree views of execution graphs",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  flowtable render run.toml                 # Indented text table
  flowtable render run.json --format json   # Rows as JSON
  flowtable render run.toml --format csv    # Rows as CSV
  flowtable config show                     # View effective settings
  flowtable config path                     # Show config file location

For detailed command help: flowtable <command> --help
        """,
    )

    # Global options
    parser.add_argument(
        "--version",
        action="version",
        version=f"flowtable {__version__}",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Path to configuration file",
        metavar="PATH",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Verbose output (debug logging, full tracebacks)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # render command
    render_parser = subparsers.add_parser(
        "render",
        help="Render an execution graph file as an indented table",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Graph files are TOML or JSON:

  heads = ["D"]

  [[nodes]]
  id = "S"
  role = "start"

  [[nodes]]
  id = "E"
  role = "end"
  start = "S"
  parents = ["S"]
        """,
    )
    render_parser.add_argument(
        "graph_file",
        type=Path,
        help="Execution graph file (.toml or .json)",
    )
    render_parser.add_argument(
        "--format",
        choices=["text", "json", "csv"],
        help="Output format (default: from config, else text)",
    )
    render_parser.add_argument(
        "--indent",
        help="Indentation unit for text output (default: two spaces)",
        metavar="STR",
    )

    # config command
    config_parser = subparsers.add_parser(
        "config",
        help="View configuration (show, get, path)",
    )
    config_subparsers = config_parser.add_subparsers(dest="config_action")

    config_show = config_subparsers.add_parser(
        "show",
        help="Show current configuration",
    )
    config_show.add_argument(
        "--json",
        action="store_true",
        help="Output as JSON",
    )

    config_get = config_subparsers.add_parser(
        "get",
        help="Get a configuration value",
    )
    config_get.add_argument(
        "key",
        help="Dotted key (e.g., render.indent)",
    )

    config_subparsers.add_parser(
        "path",
        help="Show configuration file location",
    )

    # version command
    subparsers.add_parser(
        "version",
        help="Show version",
    )

    return parser


def version_command(args: argparse.Namespace) -> int:
    """Handle version command."""
    print(f"flowtable {__version__}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0 for success, non-zero for failure)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    # Handle no command
    if not args.command:
        parser.print_help()
        return 0

    try:
        if args.command == "render":
            return render.run(args)
        elif args.command == "config":
            return config_cmd.run(args)
        elif args.command == "version":
            return version_command(args)
        else:
            parser.print_help()
            return 1

    except KeyboardInterrupt:
        print("\nOperation cancelled.", file=sys.stderr)
        return 130
    except Exception as e:
        if args.verbose:
            raise
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())

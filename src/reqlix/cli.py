"""
reqlix.cli - Command-line interface.

Main entry point for the reqlix CLI tool.
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from reqlix import __version__
from reqlix.commands import config_cmd, edit, query

QUERY_COMMANDS = ("instructions", "categories", "chapters", "requirements", "get", "search")
EDIT_COMMANDS = ("insert", "update", "delete")


def _add_text_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("text", nargs="?", help="Requirement text")
    parser.add_argument(
        "--text-file",
        type=Path,
        metavar="PATH",
        help="Read requirement text from a file ('-' for stdin)",
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="reqlix",
        description="Requirements kept as Markdown, served to AI agents over MCP",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  reqlix serve                           # Run the MCP server on stdio
  reqlix instructions --raw              # Show the project instructions
  reqlix chapters general                # List chapters of a category
  reqlix get G.TOOLS.1 G.TOOLS.2         # Show requirements
  reqlix insert general Tools "List tools" "The server SHALL list tools."
  reqlix search timeout retry            # Keyword search

Configuration:
  reqlix config path                     # Show config file location
  reqlix config show                     # View effective settings

For detailed command help: reqlix <command> --help
        """,
    )

    # Global options
    parser.add_argument(
        "--version",
        action="version",
        version=f"reqlix {__version__}",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Path to configuration file",
        metavar="PATH",
    )
    parser.add_argument(
        "--project-root",
        type=Path,
        help="Project root directory (default: current directory)",
        metavar="PATH",
    )
    parser.add_argument(
        "--description",
        help="Operation description passed to the requirement operations",
        metavar="TEXT",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Verbose output",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Suppress non-error output",
    )

    # Subcommands
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # serve command
    serve_parser = subparsers.add_parser(
        "serve",
        help="Start the MCP server (requires reqlix[mcp])",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
MCP client configuration:

    {
      "mcpServers": {
        "reqlix": {
          "command": "reqlix",
          "args": ["serve"]
        }
      }
    }

Tools:
  reqlix_get_instructions     Instructions and category list
  reqlix_get_categories       List categories
  reqlix_get_chapters         List chapters of a category
  reqlix_get_requirements     List requirements of a chapter
  reqlix_get_requirement      Get requirements by index
  reqlix_insert_requirement   Insert a requirement
  reqlix_update_requirement   Update requirements
  reqlix_delete_requirement   Delete requirements
  reqlix_search_requirements  Keyword search
  reqlix_get_version          Server version
""",
    )
    serve_parser.add_argument(
        "--transport",
        choices=["stdio", "sse", "streamable-http"],
        default="stdio",
        help="Transport type (default: stdio)",
    )

    # read commands
    instructions_parser = subparsers.add_parser(
        "instructions",
        help="Show instructions and categories (creates AGENTS.md if missing)",
    )
    instructions_parser.add_argument(
        "--raw",
        action="store_true",
        help="Print the instructions text instead of JSON",
    )

    subparsers.add_parser("categories", help="List categories")

    chapters_parser = subparsers.add_parser("chapters", help="List chapters of a category")
    chapters_parser.add_argument("category", help="Category name")

    requirements_parser = subparsers.add_parser(
        "requirements", help="List requirements of a chapter"
    )
    requirements_parser.add_argument("category", help="Category name")
    requirements_parser.add_argument("chapter", help="Chapter name")

    get_parser = subparsers.add_parser("get", help="Show requirements by index")
    get_parser.add_argument("index", nargs="+", help="Requirement index (e.g., G.TOOLS.1)")

    search_parser = subparsers.add_parser("search", help="Search requirements by keyword")
    search_parser.add_argument("keywords", nargs="+", help="Keywords (any may match)")

    # edit commands
    insert_parser = subparsers.add_parser("insert", help="Insert a requirement")
    insert_parser.add_argument("category", help="Category name")
    insert_parser.add_argument("chapter", help="Chapter name")
    insert_parser.add_argument("title", help="Requirement title")
    _add_text_arguments(insert_parser)

    update_parser = subparsers.add_parser("update", help="Update a requirement")
    update_parser.add_argument("index", help="Requirement index")
    _add_text_arguments(update_parser)
    update_parser.add_argument("--title", help="New title (default: keep current)")

    delete_parser = subparsers.add_parser("delete", help="Delete requirements")
    delete_parser.add_argument("index", nargs="+", help="Requirement index")

    # config command
    config_parser = subparsers.add_parser(
        "config",
        help="Inspect configuration",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Configuration file: .reqlix.toml (searched from the project root upwards)

  [requirements]
  rel_path = "docs/requirements"   # preferred requirements directory
  search_paths = ["docs/development/requirements", "docs/dev/req"]
  create_path = "docs/development/requirements"

  [limits]
  max_batch_size = 100

Environment overrides: REQLIX_<SECTION>_<KEY>, e.g. REQLIX_LIMITS_MAX_BATCH_SIZE=50.
REQLIX_REQ_REL_PATH sets requirements.rel_path.
""",
    )
    config_subparsers = config_parser.add_subparsers(dest="config_action")
    config_show = config_subparsers.add_parser("show", help="Show effective configuration")
    config_show.add_argument(
        "--json",
        action="store_true",
        help="Output as JSON",
    )
    config_subparsers.add_parser("path", help="Show config file location")

    # version command
    subparsers.add_parser("version", help="Show version")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0 for success, non-zero for failure)
    """
    parser = create_parser()

    # Enable shell tab-completion if argcomplete is installed
    # Install with: pip install reqlix[completion]
    # Then activate: eval "$(register-python-argcomplete reqlix)"
    try:
        import argcomplete

        argcomplete.autocomplete(parser)
    except ImportError:
        pass

    args = parser.parse_args(argv)

    # Handle no command
    if not args.command:
        parser.print_help()
        return 0

    try:
        if args.command == "serve":
            return serve_command(args)
        elif args.command in QUERY_COMMANDS:
            return query.run(args)
        elif args.command in EDIT_COMMANDS:
            return edit.run(args)
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


def version_command(args: argparse.Namespace) -> int:
    """Handle version command."""
    print(f"reqlix {__version__}")
    return 0


def serve_command(args: argparse.Namespace) -> int:
    """Run the MCP server."""
    from reqlix.mcp import MCP_AVAILABLE, run_server

    if not MCP_AVAILABLE:
        print("Error: MCP dependencies not installed.", file=sys.stderr)
        print("Install with: pip install reqlix[mcp]", file=sys.stderr)
        return 1

    settings = query.load_settings(args)
    working_dir = query.project_root(args)

    if args.verbose:
        print(f"Working directory: {working_dir}", file=sys.stderr)

    try:
        run_server(working_dir=working_dir, transport=args.transport, settings=settings)
    except KeyboardInterrupt:
        print("\nServer stopped.", file=sys.stderr)
    return 0


if __name__ == "__main__":
    sys.exit(main())

"""
reqlix.commands.query - Read-only requirement commands.

Runs the same operations as the MCP tools against a local project and
prints their JSON result. Also holds the helpers shared by the other
requirement commands.
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Optional

from reqlix.config import get_config
from reqlix.config.settings import Settings
from reqlix.mcp import handlers

DEFAULT_DESCRIPTION = "reqlix command line"


def load_settings(args: argparse.Namespace) -> Settings:
    """Resolve settings from --config, or by discovery from the project root."""
    config = get_config(
        config_path=args.config,
        start_path=project_root(args),
        quiet=not args.verbose,
    )
    return Settings.from_config(config)


def project_root(args: argparse.Namespace) -> Path:
    root = getattr(args, "project_root", None) or Path.cwd()
    return Path(root).resolve()


def description(args: argparse.Namespace) -> str:
    return getattr(args, "description", None) or DEFAULT_DESCRIPTION


def emit(result: str, args: argparse.Namespace) -> int:
    """Print a JSON envelope and turn it into an exit code."""
    succeeded = json.loads(result).get("success", False)
    if not args.quiet or not succeeded:
        print(result)
    return 0 if succeeded else 1


def index_argument(values: list) -> object:
    """One index stays a single request; several make a batch."""
    return values[0] if len(values) == 1 else list(values)


def run(args: argparse.Namespace) -> int:
    """
    Run a read-only requirement command.

    Args:
        args: Parsed command line arguments

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    settings = load_settings(args)
    root = str(project_root(args))
    desc = description(args)

    result: Optional[str] = None
    if args.command == "instructions":
        if args.raw:
            envelope = json.loads(handlers.handle_get_instructions(root, desc, settings))
            if not envelope["success"]:
                print(f"Error: {envelope['error']}", file=sys.stderr)
                return 1
            print(envelope["data"]["content"], end="")
            return 0
        result = handlers.handle_get_instructions(root, desc, settings)
    elif args.command == "categories":
        result = handlers.handle_get_categories(root, desc, settings)
    elif args.command == "chapters":
        result = handlers.handle_get_chapters(root, desc, args.category, settings)
    elif args.command == "requirements":
        result = handlers.handle_get_requirements(
            root, desc, args.category, args.chapter, settings
        )
    elif args.command == "get":
        result = handlers.handle_get_requirement(
            root, desc, index_argument(args.index), settings
        )
    elif args.command == "search":
        result = handlers.handle_search_requirements(root, desc, list(args.keywords), settings)

    if result is None:
        print(f"Unknown command: {args.command}", file=sys.stderr)
        return 1
    return emit(result, args)

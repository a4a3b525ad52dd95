"""
reqlix.commands.edit - Insert, update and delete requirements.
"""

import argparse
import sys
from pathlib import Path
from typing import Optional

from reqlix.commands.query import (
    description,
    emit,
    index_argument,
    load_settings,
    project_root,
)
from reqlix.mcp import handlers


def read_text(args: argparse.Namespace) -> Optional[str]:
    """Requirement text from the TEXT argument or --text-file ("-" is stdin)."""
    if args.text_file is not None:
        if str(args.text_file) == "-":
            return sys.stdin.read()
        return Path(args.text_file).read_text(encoding="utf-8")
    return args.text


def run(args: argparse.Namespace) -> int:
    """
    Run an editing command.

    Args:
        args: Parsed command line arguments

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    settings = load_settings(args)
    root = str(project_root(args))
    desc = description(args)

    if args.command == "insert":
        text = read_text(args)
        if text is None:
            print("Error: requirement text is required (TEXT or --text-file)", file=sys.stderr)
            return 1
        result = handlers.handle_insert_requirement(
            root, desc, args.category, args.chapter, args.title, text, settings
        )
    elif args.command == "update":
        text = read_text(args)
        result = handlers.handle_update_requirement(
            root, desc, index=args.index, text=text, title=args.title, settings=settings
        )
    elif args.command == "delete":
        result = handlers.handle_delete_requirement(
            root, desc, index_argument(args.index), settings
        )
    else:
        print(f"Unknown command: {args.command}", file=sys.stderr)
        return 1

    return emit(result, args)

"""
reqlix.commands.config_cmd - Inspect configuration.

Shows the effective configuration (defaults, config file and environment
overrides) or the location of the config file in use.
"""

import argparse
import json
import sys

import tomlkit

from reqlix.commands.query import project_root
from reqlix.config import find_config_file, get_config, validate_config


def run(args: argparse.Namespace) -> int:
    """Run the config command."""
    action = getattr(args, "config_action", None)
    if action == "path":
        return cmd_path(args)
    if action == "show":
        return cmd_show(args)

    print("Usage: reqlix config {show,path}", file=sys.stderr)
    return 1


def cmd_path(args: argparse.Namespace) -> int:
    """Print the config file location."""
    config_path = args.config or find_config_file(project_root(args))
    if config_path is None:
        if not args.quiet:
            print("No .reqlix.toml found; using defaults", file=sys.stderr)
        return 1
    print(config_path)
    return 0


def cmd_show(args: argparse.Namespace) -> int:
    """Print the effective configuration as TOML, or JSON with --json."""
    config = get_config(config_path=args.config, start_path=project_root(args), quiet=True)

    if args.json:
        print(json.dumps(config, indent=2))
    else:
        print(tomlkit.dumps(config), end="")

    problems = validate_config(config)
    for problem in problems:
        print(f"Warning: {problem}", file=sys.stderr)
    return 1 if problems else 0

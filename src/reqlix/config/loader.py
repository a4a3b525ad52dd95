"""
reqlix.config.loader - Configuration file discovery, parsing and merging.

Configuration comes from three layers, later ones winning:

1. ``DEFAULT_CONFIG``
2. ``.reqlix.toml`` found by walking up from the start directory
3. ``REQLIX_<SECTION>_<KEY>`` environment variables

This is the only module that reads the process environment.
"""

from __future__ import annotations

import copy
import json
import os
import sys
from pathlib import Path
from typing import Any

import tomlkit
from tomlkit.exceptions import ParseError

from reqlix.config.defaults import DEFAULT_CONFIG

CONFIG_FILENAME = ".reqlix.toml"
ENV_PREFIX = "REQLIX_"

# Environment variables kept for compatibility, mapped to (section, key).
LEGACY_ENV_VARS = {
    "REQLIX_REQ_REL_PATH": ("requirements", "rel_path"),
}


# ─────────────────────────────────────────────────────────────────────────────
# TOML parsing
# ─────────────────────────────────────────────────────────────────────────────


def parse_toml_document(content: str) -> tomlkit.TOMLDocument:
    """Parse TOML text, keeping comments and layout."""
    return tomlkit.parse(content)


def parse_toml(content: str) -> dict[str, Any]:
    """Parse TOML text into plain Python types."""
    return parse_toml_document(content).unwrap()


# ─────────────────────────────────────────────────────────────────────────────
# Discovery and loading
# ─────────────────────────────────────────────────────────────────────────────


def find_config_file(start_path: Path) -> Path | None:
    """Find ``.reqlix.toml`` in ``start_path`` or any parent directory.

    Args:
        start_path: Directory (or file) to start searching from.

    Returns:
        Path to the configuration file, or None if there is none.
    """
    current = Path(start_path).resolve()
    if current.is_file():
        current = current.parent

    for directory in (current, *current.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


def load_config(config_path: Path) -> dict[str, Any]:
    """Load a configuration file and merge it over the defaults.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the file is not valid TOML.
    """
    content = Path(config_path).read_text(encoding="utf-8")
    try:
        user_config = parse_toml(content)
    except ParseError as e:
        raise ValueError(f"Invalid TOML in {config_path}: {e}") from e
    return merge_configs(DEFAULT_CONFIG, user_config)


def merge_configs(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Deep-merge ``override`` into a copy of ``base``.

    Nested tables are merged key by key; any other value replaces the
    base value.
    """
    result = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(result.get(key), dict):
            result[key] = merge_configs(result[key], value)
        else:
            result[key] = copy.deepcopy(value)
    return result


# ─────────────────────────────────────────────────────────────────────────────
# Environment overrides
# ─────────────────────────────────────────────────────────────────────────────


def _try_parse_env_value(value: str) -> Any:
    """Interpret an environment variable value.

    JSON arrays and objects become lists and dicts, ``true``/``false``
    (any case) become booleans and integers become ints. Anything else,
    including malformed JSON, is returned unchanged.
    """
    stripped = value.strip()
    if stripped.startswith(("[", "{")):
        try:
            return json.loads(stripped)
        except json.JSONDecodeError:
            return value
    lowered = stripped.lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    if stripped.isdigit():
        return int(stripped)
    return value


def _apply_env_overrides(
    config: dict[str, Any],
    environ: dict[str, str] | None = None,
) -> dict[str, Any]:
    """Apply ``REQLIX_<SECTION>_<KEY>`` overrides to ``config`` in place.

    The section is the part between the prefix and the next underscore;
    the rest, lowercased, is the key. Missing sections are created.

    Args:
        config: Configuration dictionary to update.
        environ: Environment mapping (defaults to ``os.environ``).

    Returns:
        The updated configuration.
    """
    env = os.environ if environ is None else environ

    for name, (section, key) in LEGACY_ENV_VARS.items():
        if name in env:
            config.setdefault(section, {})[key] = env[name]

    for name, raw in env.items():
        if not name.startswith(ENV_PREFIX) or name in LEGACY_ENV_VARS:
            continue
        rest = name[len(ENV_PREFIX) :]
        section, sep, key = rest.partition("_")
        if not sep or not section or not key:
            continue
        config.setdefault(section.lower(), {})
        if isinstance(config[section.lower()], dict):
            config[section.lower()][key.lower()] = _try_parse_env_value(raw)

    return config


# ─────────────────────────────────────────────────────────────────────────────
# Validation
# ─────────────────────────────────────────────────────────────────────────────


def validate_config(config: dict[str, Any]) -> list[str]:
    """Check configuration values.

    Returns:
        A list of human-readable problems (empty when valid).
    """
    problems: list[str] = []

    requirements = config.get("requirements", {})
    if not isinstance(requirements, dict):
        problems.append("[requirements] must be a table")
        requirements = {}

    for key in ("rel_path", "create_path", "instructions_file"):
        value = requirements.get(key, "")
        if not isinstance(value, str):
            problems.append(f"requirements.{key} must be a string")

    if not requirements.get("instructions_file"):
        problems.append("requirements.instructions_file must not be empty")

    search_paths = requirements.get("search_paths", [])
    if not isinstance(search_paths, list) or not all(isinstance(p, str) for p in search_paths):
        problems.append("requirements.search_paths must be a list of strings")

    limits = config.get("limits", {})
    if not isinstance(limits, dict):
        problems.append("[limits] must be a table")
        limits = {}

    for key, value in limits.items():
        if isinstance(value, bool) or not isinstance(value, int):
            problems.append(f"limits.{key} must be an integer")
        elif value <= 0:
            problems.append(f"limits.{key} must be positive")

    return problems


def get_config(
    config_path: Path | None = None,
    start_path: Path | None = None,
    quiet: bool = False,
    environ: dict[str, str] | None = None,
) -> dict[str, Any]:
    """Resolve the effective configuration.

    Args:
        config_path: Explicit configuration file; discovered when None.
        start_path: Directory to start discovery from (defaults to cwd).
        quiet: Suppress notices on stderr.
        environ: Environment mapping (defaults to ``os.environ``).

    Returns:
        Configuration dictionary with defaults, file values and
        environment overrides applied.
    """
    if config_path is None:
        config_path = find_config_file(start_path or Path.cwd())

    if config_path is not None:
        config = load_config(config_path)
        if not quiet:
            print(f"Using config: {config_path}", file=sys.stderr)
    else:
        config = copy.deepcopy(DEFAULT_CONFIG)

    config = _apply_env_overrides(config, environ)

    if not quiet:
        for problem in validate_config(config):
            print(f"Warning: {problem}", file=sys.stderr)

    return config

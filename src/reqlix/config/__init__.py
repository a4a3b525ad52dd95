"""
reqlix.config - Configuration loading and defaults
"""

from reqlix.config.defaults import DEFAULT_CONFIG
from reqlix.config.loader import (
    _apply_env_overrides,
    _try_parse_env_value,
    find_config_file,
    get_config,
    load_config,
    merge_configs,
    parse_toml,
    parse_toml_document,
    validate_config,
)
from reqlix.config.settings import Limits, Settings

__all__ = [
    "load_config",
    "find_config_file",
    "get_config",
    "merge_configs",
    "parse_toml",
    "parse_toml_document",
    "validate_config",
    "Limits",
    "Settings",
    "DEFAULT_CONFIG",
]

"""
reqlix.config.settings - Typed views over a configuration dictionary.

Everything below the configuration layer receives these objects instead
of reading files or environment variables itself.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any

from reqlix.config.defaults import DEFAULT_CONFIG
from reqlix.utilities.locator import RequirementsLocator


@dataclass(frozen=True)
class Limits:
    """Parameter length and batch-size limits (lengths in UTF-8 bytes)."""

    max_project_root_len: int = 1000
    max_operation_desc_len: int = 10000
    max_category_len: int = 100
    max_chapter_len: int = 100
    max_index_len: int = 100
    max_text_len: int = 10000
    max_title_len: int = 100
    max_batch_size: int = 100
    max_keyword_len: int = 200

    @classmethod
    def from_config(cls, section: dict[str, Any]) -> Limits:
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in section.items() if k in known})


@dataclass(frozen=True)
class Settings:
    """
    Resolved settings for the operation layer.

    Attributes:
        rel_path: Preferred requirements directory ("" if unset)
        search_paths: Fallback requirements directories
        create_path: Directory used to create the instructions file
        instructions_file: Instructions file name
        limits: Parameter limits
    """

    rel_path: str = ""
    search_paths: tuple[str, ...] = tuple(DEFAULT_CONFIG["requirements"]["search_paths"])
    create_path: str = DEFAULT_CONFIG["requirements"]["create_path"]
    instructions_file: str = DEFAULT_CONFIG["requirements"]["instructions_file"]
    limits: Limits = field(default_factory=Limits)

    @classmethod
    def from_config(cls, config: dict[str, Any]) -> Settings:
        """Build settings from a configuration dictionary."""
        requirements = config.get("requirements", {})
        defaults = DEFAULT_CONFIG["requirements"]
        return cls(
            rel_path=requirements.get("rel_path") or "",
            search_paths=tuple(requirements.get("search_paths", defaults["search_paths"])),
            create_path=requirements.get("create_path") or defaults["create_path"],
            instructions_file=(
                requirements.get("instructions_file") or defaults["instructions_file"]
            ),
            limits=Limits.from_config(config.get("limits", {})),
        )

    def locator(self, project_root: str | Path) -> RequirementsLocator:
        """Create a locator for ``project_root`` using these settings."""
        return RequirementsLocator(
            project_root=Path(project_root),
            rel_path=self.rel_path,
            search_paths=self.search_paths,
            create_path=self.create_path,
            instructions_file=self.instructions_file,
        )

"""reqlix.mcp.server - MCP server implementation.

Creates and runs the MCP server exposing the reqlix_* tools.

The tools are a thin interface layer: each one forwards its arguments to
the matching handler in ``reqlix.mcp.handlers`` together with the
settings resolved when the server was created.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any

try:
    from mcp.server.fastmcp import FastMCP

    MCP_AVAILABLE = True
except ImportError:
    MCP_AVAILABLE = False
    FastMCP = None

from reqlix import __version__
from reqlix.config import get_config
from reqlix.config.settings import Settings
from reqlix.mcp import MISSING_MCP_MESSAGE, handlers

MCP_SERVER_INSTRUCTIONS = """\
reqlix MCP Server - Requirements stored as Markdown

Requirements live in Markdown files inside the project's requirements
directory. Never edit those files directly; use these tools instead.

## Quick Start

1. `reqlix_get_instructions(project_root, operation_description)` - Read the
   project instructions and the list of categories. Call this first.
2. `reqlix_get_chapters(..., category)` - List chapters of a category
3. `reqlix_get_requirements(..., category, chapter)` - List requirements
4. `reqlix_get_requirement(..., index)` - Read full requirements

## Structure

- **Category**: one Markdown file (lowercase letters and underscores)
- **Chapter**: a `# Chapter` heading inside a category
- **Requirement**: a `## {index}: {title}` heading with its text
- **Index**: `{CATEGORY}.{CHAPTER}.{NUMBER}`, e.g. `G.TOOLS.3`

## Editing

- `reqlix_insert_requirement` creates missing categories and chapters and
  assigns the next index. Titles must be unique within a chapter.
- `reqlix_update_requirement` replaces the text (and optionally the title);
  pass `items` to update up to 100 requirements at once.
- `reqlix_delete_requirement` removes requirements; a chapter left without
  requirements is removed too.
- `reqlix_search_requirements` matches keywords case-insensitively against
  titles and text.

Every tool returns JSON: `{"success": true, "data": ...}` or
`{"success": false, "error": "..."}`. Batch calls return one such object
per item.
"""


def create_server(
    settings: Settings | None = None,
    working_dir: Path | None = None,
) -> FastMCP:
    """Create the MCP server with all tools registered.

    Args:
        settings: Optional pre-resolved settings (for testing).
        working_dir: Directory to start configuration discovery from.

    Returns:
        FastMCP server instance.
    """
    if not MCP_AVAILABLE:
        raise ImportError(MISSING_MCP_MESSAGE)

    if working_dir is None:
        working_dir = Path.cwd()

    if settings is None:
        settings = Settings.from_config(get_config(start_path=working_dir, quiet=True))

    mcp = FastMCP("reqlix", instructions=MCP_SERVER_INSTRUCTIONS)

    # ─────────────────────────────────────────────────────────────────────
    # Read tools
    # ─────────────────────────────────────────────────────────────────────

    @mcp.tool()
    def reqlix_get_instructions(project_root: str, operation_description: str) -> str:
        """Get the project's requirement instructions and its categories.

        Call this before any other reqlix tool. Creates the instructions
        file with default content when the project has none.

        Args:
            project_root: Absolute path of the project root directory.
            operation_description: What you are about to do and why.
        """
        return handlers.handle_get_instructions(project_root, operation_description, settings)

    @mcp.tool()
    def reqlix_get_categories(project_root: str, operation_description: str) -> str:
        """List requirement categories, sorted by name.

        Args:
            project_root: Absolute path of the project root directory.
            operation_description: What you are about to do and why.
        """
        return handlers.handle_get_categories(project_root, operation_description, settings)

    @mcp.tool()
    def reqlix_get_chapters(project_root: str, operation_description: str, category: str) -> str:
        """List the chapters of a category in document order.

        Args:
            project_root: Absolute path of the project root directory.
            operation_description: What you are about to do and why.
            category: Category name.
        """
        return handlers.handle_get_chapters(
            project_root, operation_description, category, settings
        )

    @mcp.tool()
    def reqlix_get_requirements(
        project_root: str,
        operation_description: str,
        category: str,
        chapter: str,
    ) -> str:
        """List index and title of every requirement in a chapter.

        Args:
            project_root: Absolute path of the project root directory.
            operation_description: What you are about to do and why.
            category: Category name.
            chapter: Chapter name.
        """
        return handlers.handle_get_requirements(
            project_root, operation_description, category, chapter, settings
        )

    @mcp.tool()
    def reqlix_get_requirement(
        project_root: str,
        operation_description: str,
        index: str | list[str],
    ) -> str:
        """Get full requirements by index.

        Pass a single index for one requirement, or a list of up to 100
        indices to get one result object per index.

        Args:
            project_root: Absolute path of the project root directory.
            operation_description: What you are about to do and why.
            index: Requirement index (e.g. "G.TOOLS.3") or list of indices.
        """
        return handlers.handle_get_requirement(
            project_root, operation_description, index, settings
        )

    @mcp.tool()
    def reqlix_search_requirements(
        project_root: str,
        operation_description: str,
        keywords: str | list[str],
    ) -> str:
        """Search requirements whose title or text contains any keyword.

        Matching is case-insensitive. Empty keywords are ignored.

        Args:
            project_root: Absolute path of the project root directory.
            operation_description: What you are about to do and why.
            keywords: A keyword or a list of up to 100 keywords.
        """
        return handlers.handle_search_requirements(
            project_root, operation_description, keywords, settings
        )

    @mcp.tool()
    def reqlix_get_version() -> str:
        """Get the version of the reqlix server."""
        return handlers.handle_get_version()

    # ─────────────────────────────────────────────────────────────────────
    # Write tools
    # ─────────────────────────────────────────────────────────────────────

    @mcp.tool()
    def reqlix_insert_requirement(
        project_root: str,
        operation_description: str,
        category: str,
        chapter: str,
        title: str,
        text: str,
    ) -> str:
        """Insert a new requirement at the end of a chapter.

        The category and chapter are created when missing. The index is
        assigned automatically. The title must be unique within the chapter.

        Args:
            project_root: Absolute path of the project root directory.
            operation_description: What you are about to do and why.
            category: Category name (lowercase letters and underscores).
            chapter: Chapter name (letters, spaces, colons, hyphens, underscores).
            title: Short requirement title.
            text: Requirement text (Markdown).
        """
        return handlers.handle_insert_requirement(
            project_root, operation_description, category, chapter, title, text, settings
        )

    @mcp.tool()
    def reqlix_update_requirement(
        project_root: str,
        operation_description: str,
        index: str | None = None,
        text: str | None = None,
        title: str | None = None,
        items: list[dict[str, Any]] | None = None,
    ) -> str:
        """Update the text, and optionally the title, of requirements.

        Use index + text (+ title) for one requirement, or items for up to
        100 requirements at once. Omitting the title keeps the current one.

        Args:
            project_root: Absolute path of the project root directory.
            operation_description: What you are about to do and why.
            index: Index of the requirement to update.
            text: New requirement text.
            title: New title.
            items: List of {"index", "text", "title"?} objects.
        """
        return handlers.handle_update_requirement(
            project_root,
            operation_description,
            index=index,
            text=text,
            title=title,
            items=items,
            settings=settings,
        )

    @mcp.tool()
    def reqlix_delete_requirement(
        project_root: str,
        operation_description: str,
        index: str | list[str],
    ) -> str:
        """Delete requirements by index.

        A chapter left without requirements is removed as well.

        Args:
            project_root: Absolute path of the project root directory.
            operation_description: What you are about to do and why.
            index: Requirement index or list of up to 100 indices.
        """
        return handlers.handle_delete_requirement(
            project_root, operation_description, index, settings
        )

    return mcp


def run_server(
    working_dir: Path | None = None,
    transport: str = "stdio",
    settings: Settings | None = None,
) -> None:
    """Run the MCP server.

    Args:
        working_dir: Directory to start configuration discovery from.
        transport: Transport type ('stdio' or 'sse').
        settings: Optional pre-resolved settings.
    """
    mcp = create_server(settings=settings, working_dir=working_dir)
    # stdout carries the protocol on stdio
    print(f"Starting reqlix MCP server {__version__} ({transport})", file=sys.stderr)
    mcp.run(transport=transport)

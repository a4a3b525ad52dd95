"""Shared pytest fixtures: sample category documents and a temporary project."""

from pathlib import Path

import pytest

GENERAL_DOC = """\
# General

## G.G.1: First

First text.

## G.G.2: Second

Second text.

# Tools

## G.T.1: List

List text.
"""

REQUIREMENTS_REL = "docs/development/requirements"


@pytest.fixture
def general_doc() -> str:
    """Category document with two chapters and three requirements."""
    return GENERAL_DOC


@pytest.fixture
def requirements_dir(tmp_path: Path) -> Path:
    """Requirements directory with AGENTS.md and a 'general' category."""
    directory = tmp_path / REQUIREMENTS_REL
    directory.mkdir(parents=True)
    (directory / "AGENTS.md").write_text("# Instructions\n\nUse the tools.\n", encoding="utf-8")
    (directory / "general.md").write_text(GENERAL_DOC, encoding="utf-8")
    return directory


@pytest.fixture
def project_root(tmp_path: Path, requirements_dir: Path) -> str:
    """Project root (as the string tools receive) holding ``requirements_dir``."""
    return str(tmp_path)

"""Tests for reqlix.utilities.locator."""

import pytest

from reqlix.core.errors import StorageError
from reqlix.utilities.locator import RequirementsLocator, render_placeholder


class TestCandidatePaths:
    def test_default_order(self, tmp_path):
        locator = RequirementsLocator(tmp_path)
        assert locator.candidate_paths() == [
            tmp_path / "docs/development/requirements/AGENTS.md",
            tmp_path / "docs/dev/req/AGENTS.md",
        ]

    def test_rel_path_first(self, tmp_path):
        locator = RequirementsLocator(tmp_path, rel_path="reqs")
        assert locator.candidate_paths()[0] == tmp_path / "reqs/AGENTS.md"
        assert locator.creation_path() == tmp_path / "reqs/AGENTS.md"


class TestFindOrCreateInstructions:
    def test_existing_file_found(self, tmp_path):
        existing = tmp_path / "docs/dev/req/AGENTS.md"
        existing.parent.mkdir(parents=True)
        existing.write_text("# Mine\n", encoding="utf-8")
        locator = RequirementsLocator(tmp_path)
        assert locator.find_or_create_instructions() == existing
        assert locator.requirements_dir() == existing.parent

    def test_first_existing_candidate_wins(self, tmp_path):
        for rel in ("docs/development/requirements", "docs/dev/req"):
            path = tmp_path / rel / "AGENTS.md"
            path.parent.mkdir(parents=True)
            path.write_text("", encoding="utf-8")
        locator = RequirementsLocator(tmp_path)
        assert locator.requirements_dir() == tmp_path / "docs/development/requirements"

    def test_created_with_placeholder(self, tmp_path):
        path = RequirementsLocator(tmp_path).find_or_create_instructions()
        assert path == tmp_path / "docs/development/requirements/AGENTS.md"
        content = path.read_text(encoding="utf-8")
        assert content.startswith("# Instructions\n")
        assert "Never edit files in docs/development/requirements directly." in content
        assert "{requirements_directory}" not in content
        assert "`{CATEGORY}.{CHAPTER}.{NUMBER}`" in content

    def test_created_under_rel_path(self, tmp_path):
        path = RequirementsLocator(tmp_path, rel_path="design/reqs").find_or_create_instructions()
        assert path == tmp_path / "design/reqs/AGENTS.md"
        assert "Never edit files in design/reqs directly." in path.read_text(encoding="utf-8")

    def test_creation_failure(self, tmp_path):
        (tmp_path / "docs").write_text("", encoding="utf-8")
        with pytest.raises(StorageError, match="Failed to create requirements file"):
            RequirementsLocator(tmp_path).find_or_create_instructions()


def test_render_placeholder_replaces_directory():
    assert "Never edit files in x/y directly" in render_placeholder("x/y")

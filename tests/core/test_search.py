"""Tests for reqlix.core.search."""

from reqlix.core.search import search_requirements
from reqlix.core.store import RequirementsStore


def _indices(results):
    return sorted(r.index for r in results)


class TestSearchRequirements:
    def test_matches_title(self, requirements_dir):
        results = search_requirements(RequirementsStore(requirements_dir), ["second"])
        assert _indices(results) == ["G.G.2"]

    def test_matches_text_case_insensitive(self, requirements_dir):
        results = search_requirements(RequirementsStore(requirements_dir), ["LIST TEXT"])
        assert _indices(results) == ["G.T.1"]

    def test_any_keyword_matches(self, requirements_dir):
        results = search_requirements(RequirementsStore(requirements_dir), ["first", "list"])
        assert _indices(results) == ["G.G.1", "G.T.1"]

    def test_no_keywords(self, requirements_dir):
        assert search_requirements(RequirementsStore(requirements_dir), []) == []

    def test_results_are_full_requirements(self, requirements_dir):
        (result,) = search_requirements(RequirementsStore(requirements_dir), ["second text"])
        assert result.to_dict() == {
            "index": "G.G.2",
            "title": "Second",
            "text": "Second text.",
            "category": "general",
            "chapter": "General",
        }

    def test_across_categories(self, requirements_dir):
        (requirements_dir / "testing.md").write_text(
            "# Unit\n\n## T.U.1: Coverage\n\nList every case.\n", encoding="utf-8"
        )
        results = search_requirements(RequirementsStore(requirements_dir), ["list"])
        assert _indices(results) == ["G.T.1", "T.U.1"]

    def test_unreadable_category_skipped(self, requirements_dir):
        (requirements_dir / "broken.md").write_bytes(b"# Bad\n\n## B.B.1: \xff\xfe\n")
        results = search_requirements(RequirementsStore(requirements_dir), ["first"])
        assert _indices(results) == ["G.G.1"]

    def test_duplicate_chapter_names_not_repeated(self, requirements_dir):
        (requirements_dir / "testing.md").write_text(
            "# Unit\n\n## T.U.1: Alpha\n\nx\n\n# Other\n\n# Unit\n\n## T.U.2: Beta\n\nalpha\n",
            encoding="utf-8",
        )
        results = search_requirements(RequirementsStore(requirements_dir), ["alpha"])
        assert _indices(results) == ["T.U.1", "T.U.2"]

"""Tests for reqlix.core.document: heading scan, block outline and lookup."""

import pytest

from reqlix.core.document import (
    BlockKind,
    CategoryDocument,
    HeadingKind,
    find_requirement,
    list_chapters,
    list_requirements,
    scan_headings,
)
from reqlix.core.errors import NotFoundError
from reqlix.core.models import RequirementSummary

FENCED_DOC = (
    "# A\n\n"
    "```json\n# X\n## A.A.9: no\n```\n\n"
    "````\n# Y\n## A.A.8: no\n````\n\n"
    "## A.A.1: yes\n"
)


class TestScanHeadings:
    def test_events_in_order(self, general_doc):
        events = scan_headings(general_doc)
        assert [(e.kind, e.name) for e in events] == [
            (HeadingKind.CHAPTER, "General"),
            (HeadingKind.REQUIREMENT, "G.G.1"),
            (HeadingKind.REQUIREMENT, "G.G.2"),
            (HeadingKind.CHAPTER, "Tools"),
            (HeadingKind.REQUIREMENT, "G.T.1"),
        ]

    def test_line_numbers(self, general_doc):
        events = scan_headings(general_doc)
        assert [e.line for e in events] == [1, 3, 7, 11, 13]

    def test_headings_inside_fence_ignored(self):
        text = "# A\n\n```\n# Not a chapter\n## X.Y.1: Not a requirement\n```\n\n## A.A.1: Real\n"
        events = scan_headings(text)
        assert [e.name for e in events] == ["A", "A.A.1"]

    def test_unterminated_fence_runs_to_end(self):
        text = "# A\n```\n# B\n"
        assert [e.name for e in scan_headings(text)] == ["A"]


class TestCategoryDocument:
    def test_render_round_trip(self, general_doc):
        assert CategoryDocument.from_text(general_doc).render() == general_doc

    def test_render_round_trip_with_crlf_and_preamble(self):
        text = "Preamble\r\n\r\n# A\r\n## A.A.1: T\r\nBody\r\n"
        assert CategoryDocument.from_text(text).render() == text

    def test_block_kinds(self, general_doc):
        document = CategoryDocument.from_text(general_doc)
        kinds = [block.kind for block in document.blocks]
        assert kinds == [
            BlockKind.CHAPTER,
            BlockKind.TEXT,
            BlockKind.REQUIREMENT,
            BlockKind.REQUIREMENT,
            BlockKind.CHAPTER,
            BlockKind.TEXT,
            BlockKind.REQUIREMENT,
        ]

    def test_requirement_before_first_chapter_has_no_chapter(self):
        document = CategoryDocument.from_text("## A.A.1: Loose\n\nText\n\n# A\n")
        requirement = document.find("alpha", "A.A.1")
        assert requirement.chapter == ""
        assert requirement.text == "Text"

    def test_chapter_span_missing(self, general_doc):
        with pytest.raises(NotFoundError, match="Chapter not found"):
            CategoryDocument.from_text(general_doc).chapter_span("Missing")


class TestListChapters:
    def test_chapters(self, general_doc):
        assert list_chapters(general_doc) == ["General", "Tools"]

    def test_duplicates_preserved(self):
        assert list_chapters("# A\n\n# B\n\n# A\n") == ["A", "B", "A"]

    def test_empty_document(self):
        assert list_chapters("  \n\n") == []

    def test_language_tagged_fence_hides_headings(self):
        assert list_chapters(FENCED_DOC) == ["A"]

    def test_four_backtick_fence_hides_headings(self):
        text = "# A\n\n````\n# Y\n## A.A.5: hidden\n````\n\n# B\n"
        assert list_chapters(text) == ["A", "B"]


class TestListRequirements:
    def test_requirements_of_chapter(self, general_doc):
        assert list_requirements(general_doc, "General") == [
            RequirementSummary("G.G.1", "First"),
            RequirementSummary("G.G.2", "Second"),
        ]

    def test_unknown_chapter_is_empty(self, general_doc):
        assert list_requirements(general_doc, "Missing") == []

    def test_fenced_requirement_headings_ignored(self):
        assert list_requirements(FENCED_DOC, "A") == [RequirementSummary("A.A.1", "yes")]
        assert list_requirements(FENCED_DOC, "X") == []
        assert list_requirements(FENCED_DOC, "Y") == []


class TestFindRequirement:
    def test_full_requirement(self, general_doc):
        requirement = find_requirement(general_doc, "general", "G.G.2")
        assert requirement.index == "G.G.2"
        assert requirement.title == "Second"
        assert requirement.text == "Second text."
        assert requirement.category == "general"
        assert requirement.chapter == "General"

    def test_body_stops_at_next_chapter(self):
        text = "# Chapter\n## G.G.1: Title\nText before\n# NextChapter\nText after\n"
        assert find_requirement(text, "general", "G.G.1").text == "Text before"

    def test_body_keeps_inner_blank_lines_and_fences(self):
        text = "# A\n\n## A.A.1: T\n\nLine 1\n\n```\n# inside\n```\n\nLine 2\n"
        requirement = find_requirement(text, "alpha", "A.A.1")
        assert requirement.text == "Line 1\n\n```\n# inside\n```\n\nLine 2"

    def test_crlf_stripped_from_text(self):
        text = "# A\r\n\r\n## A.A.1: T\r\n\r\nOne\r\nTwo\r\n"
        assert find_requirement(text, "alpha", "A.A.1").text == "One\nTwo"

    def test_missing_requirement(self, general_doc):
        with pytest.raises(NotFoundError, match="Requirement not found"):
            find_requirement(general_doc, "general", "G.G.9")

"""Tests for reqlix.core.prefixes."""

import pytest

from reqlix.core.document import CategoryDocument
from reqlix.core.errors import InvalidParameterError, NotFoundError
from reqlix.core.prefixes import (
    category_prefix_for,
    chapter_prefix_for,
    next_requirement_number,
    parse_index,
    resolve_category,
    title_exists_in_chapter,
    unique_prefix,
)


class TestUniquePrefix:
    def test_single_name(self):
        assert unique_prefix("general", ["general"]) == "G"

    def test_shared_first_letter(self):
        names = ["general", "guidelines"]
        assert unique_prefix("general", names) == "GE"
        assert unique_prefix("guidelines", names) == "GU"

    def test_non_letters_skipped(self):
        names = ["test_a", "test_b"]
        assert unique_prefix("test_a", names) == "TESTA"
        assert unique_prefix("test_b", names) == "TESTB"

    def test_prefix_of_other_name_returns_all_letters(self):
        assert unique_prefix("ab", ["ab", "abc"]) == "AB"

    def test_chapter_names_with_spaces(self):
        names = ["Get Version", "General"]
        assert unique_prefix("Get Version", names) == "GET"
        assert unique_prefix("General", names) == "GEN"

    def test_no_letters(self):
        assert unique_prefix("___", ["___", "a"]) == ""


class TestResolveCategory:
    def test_recomputes_prefixes(self):
        categories = ["general", "guidelines", "testing"]
        assert resolve_category(categories, "GE") == "general"
        assert resolve_category(categories, "GU") == "guidelines"
        assert resolve_category(categories, "T") == "testing"

    def test_unknown_prefix(self):
        with pytest.raises(NotFoundError, match="Category not found"):
            resolve_category(["general"], "X")

    def test_stale_prefix_no_longer_resolves(self):
        # "G" was general's prefix before guidelines existed
        with pytest.raises(NotFoundError):
            resolve_category(["general", "guidelines"], "G")


class TestParseIndex:
    def test_three_segments(self):
        assert parse_index("G.G.1") == ("G", "G", "1")

    def test_two_segments_rejected(self):
        with pytest.raises(InvalidParameterError, match="Invalid index format: G.G"):
            parse_index("G.G")

    def test_four_segments_rejected(self):
        with pytest.raises(InvalidParameterError):
            parse_index("G.G.1.2")


class TestAllocation:
    def test_existing_category_prefix_reused(self, general_doc):
        document = CategoryDocument.from_text(general_doc)
        # guidelines would force "GE" if recomputed
        assert category_prefix_for(document, "general", ["general", "guidelines"]) == "G"

    def test_new_category_prefix_computed(self):
        document = CategoryDocument.from_text("")
        assert category_prefix_for(document, "testing", ["general", "tools"]) == "TE"

    def test_existing_chapter_prefix_reused(self, general_doc):
        document = CategoryDocument.from_text(general_doc)
        assert chapter_prefix_for(document, "Tools") == "T"

    def test_new_chapter_prefix_against_siblings(self, general_doc):
        document = CategoryDocument.from_text(general_doc + "\n# Tests\n")
        assert chapter_prefix_for(document, "Tests") == "TE"

    def test_next_number(self, general_doc):
        document = CategoryDocument.from_text(general_doc)
        assert next_requirement_number(document, "General") == 3
        assert next_requirement_number(document, "Tools") == 2

    def test_next_number_skips_gaps_and_bad_indices(self):
        text = "# A\n\n## A.A.1: One\n\nx\n\n## A.A.7: Seven\n\nx\n\n## A.A.x: Bad\n\nx\n"
        document = CategoryDocument.from_text(text)
        assert next_requirement_number(document, "A") == 8

    def test_next_number_empty_chapter(self):
        document = CategoryDocument.from_text("# A\n")
        assert next_requirement_number(document, "A") == 1

    def test_title_exists(self, general_doc):
        document = CategoryDocument.from_text(general_doc)
        assert title_exists_in_chapter(document, "General", "First")
        assert not title_exists_in_chapter(document, "Tools", "First")
        assert not title_exists_in_chapter(document, "General", "First", exclude_index="G.G.1")

"""Unit tests for review view models: content blocks, filters, RAG table and summary."""

import pytest

from tdd_review.classification import RowClassifier
from tdd_review.models import ContentBlock, RagStatus, ReviewRow
from tdd_review.parsers import ReviewCSVParser
from tdd_review.review import (
    ALL_PAGES,
    ContentBlockBuilder,
    DiffWordChangeStrategy,
    apply_filters,
    build_rag_table,
    extract_executive_summary,
    filter_by_page,
    filter_by_tags,
    page_options,
    status_class,
    status_counts,
    tag_options,
)


@pytest.fixture
def parsed(sample_csv):
    """Classify the sample CSV."""
    return RowClassifier().classify_rows(ReviewCSVParser().parse(sample_csv).rows)


@pytest.fixture
def blocks(parsed):
    """Build content blocks for the sample content rows."""
    return ContentBlockBuilder().build_all(parsed.edit_types)


def make_block(block_id, page, edit_types):
    return ContentBlock(
        id=block_id,
        page=page,
        original_text="original",
        revised_text="revised",
        edit_types=edit_types,
    )


class TestContentBlockBuilder:
    """Tests for building content blocks from rows."""

    def test_blocks_numbered_in_order(self, blocks):
        """Test that blocks are numbered from 1 in source order."""
        assert [block.id for block in blocks] == ["1", "2", "3", "4", "5"]
        assert blocks[0].page == "Page 4, Introduction (Section 1)"

    def test_block_fields(self, blocks, sample_records):
        """Test that block fields come from the row."""
        block = blocks[0]

        assert block.original_text == sample_records[0]["original_text"]
        assert block.revised_text == sample_records[0]["proposed_revision"]
        assert block.justification == sample_records[0]["justification"]
        assert block.edit_types == ["Grammar", "Clarity", "Internal Consistency", "Professionalism & Presentation"]

    def test_inline_markup_built(self, blocks):
        """Test that the static word changes are rendered into the block."""
        block = blocks[0]

        assert len(block.word_changes) == 5
        assert '<span class="line-through text-red-600">The is a</span>' in block.inline_html

    def test_alternative_strategy(self, parsed):
        """Test that the word-change strategy can be swapped."""
        builder = ContentBlockBuilder(strategy=DiffWordChangeStrategy())

        block = builder.build(parsed.edit_types[1], "b1")

        assert block.id == "b1"
        assert any(change.corrected == "on-site" for change in block.word_changes)


class TestFilters:
    """Tests for page and tag filtering."""

    def test_all_pages_keeps_everything(self, blocks):
        """Test that 'All Pages' and an empty selection do not filter."""
        assert filter_by_page(blocks, ALL_PAGES) == blocks
        assert filter_by_page(blocks, None) == blocks
        assert filter_by_page(blocks, "") == blocks

    def test_page_filter_is_substring_match(self, blocks):
        """Test that the page filter matches the page label verbatim."""
        result = filter_by_page(blocks, "Page 8")

        assert [block.page for block in result] == ["Page 8, Survey Report (Section 3)"]

    def test_page_filter_is_case_sensitive(self, blocks):
        """Test that page labels are matched exactly."""
        assert filter_by_page(blocks, "page 8") == []

    def test_tag_filter_case_insensitive_containment(self):
        """Test that a selected tag matches tags containing it in any case."""
        blocks = [
            make_block("1", "Page 1", ["Grammar", "Clarity"]),
            make_block("2", "Page 2", ["Technical Accuracy", "Formatting"]),
        ]

        assert [b.id for b in filter_by_tags(blocks, ["technical"])] == ["2"]
        assert [b.id for b in filter_by_tags(blocks, ["grammar", "formatting"])] == ["1", "2"]
        assert filter_by_tags(blocks, ["Sparkle"]) == []

    def test_empty_tag_selection(self, blocks):
        """Test that no selected tags means no filtering."""
        assert filter_by_tags(blocks, []) == blocks
        assert filter_by_tags(blocks, None) == blocks

    def test_filters_combined(self, blocks):
        """Test that page and tag filters both apply."""
        result = apply_filters(blocks, page="Page", tags=["Formatting"])

        assert [block.id for block in result] == ["2", "5"]

    def test_page_options(self):
        """Test that page options are derived from the page labels."""
        blocks = [
            make_block("1", "Page 4, Introduction", []),
            make_block("2", "Page 8, Survey Report", []),
            make_block("3", "Page 8, Survey Report", []),
        ]

        assert page_options(blocks) == [ALL_PAGES, "Page 4", "Page 8"]
        assert page_options([]) == [ALL_PAGES]

    def test_tag_options(self):
        """Test that tag options are distinct and in order of appearance."""
        blocks = [
            make_block("1", "Page 1", ["Grammar", "Clarity"]),
            make_block("2", "Page 2", ["Clarity", "Formatting"]),
        ]

        assert tag_options(blocks) == ["Grammar", "Clarity", "Formatting"]


class TestRagTable:
    """Tests for the RAG table view."""

    def test_one_line_per_row(self, parsed):
        """Test that every RAG row becomes its own table line."""
        table = build_rag_table(parsed.rag_suggestions)

        assert [line.system for line in table] == [
            "Heating, Cooling & Ventilation",
            "Cooling System / BMS",
            "Electrical Supply & Distribution",
        ]

    def test_sides_and_justifications(self, parsed):
        """Test that the derived side carries the justification."""
        table = build_rag_table(parsed.rag_suggestions)

        lenient_line, critical_line = table[0], table[1]
        assert lenient_line.lenient.safety == RagStatus.GREEN
        assert lenient_line.lenient.justification is not None
        assert lenient_line.critical.justification is None
        assert critical_line.critical.safety == RagStatus.RED
        assert critical_line.lenient.justification is None

    def test_status_counts(self, parsed):
        """Test rating counts per column."""
        counts = status_counts(build_rag_table(parsed.rag_suggestions))

        assert counts["critical_safety"] == {"Red": 1, "Amber": 2, "Green": 0}
        assert counts["lenient_cost"] == {"Red": 0, "Amber": 2, "Green": 1}
        assert counts["lenient_safety"] == {"Red": 0, "Amber": 1, "Green": 2}

    def test_status_class(self):
        """Test badge classes for ratings."""
        assert status_class(RagStatus.RED) == "bg-red-500 text-white"
        assert status_class(RagStatus.GREEN) == "bg-green-500 text-white"


class TestExecutiveSummary:
    """Tests for executive summary extraction."""

    def make_row(self, edit_type, text):
        return ReviewRow("Page 2, Executive Summary", "orig", text, "why", edit_type)

    def test_no_summary_rows(self, parsed):
        """Test that rows without the summary marker give an empty summary."""
        summary = extract_executive_summary(parsed.edit_types)

        assert not summary.has_content()

    def test_original_and_variants(self):
        """Test that the original and AI audience variants are picked out."""
        rows = [
            self.make_row("Executive Summary, Clarity", "Original summary"),
            self.make_row("Executive Summary, AI Concise", "Short summary"),
            self.make_row("Executive Summary, AI Buyer", "Buyer summary"),
            self.make_row("Executive Summary, AI Lender", "Lender summary"),
            self.make_row("Executive Summary, AI Owner", "Owner summary"),
            self.make_row("Executive Summary, AI Vendor Due Diligence", "Vendor summary"),
        ]

        summary = extract_executive_summary(rows)

        assert summary.original == "Original summary"
        assert summary.concise == "Short summary"
        assert summary.buyer == "Buyer summary"
        assert summary.lender == "Lender summary"
        assert summary.owner == "Owner summary"
        assert summary.seller == "Vendor summary"

    def test_ai_marker_is_a_word(self):
        """Test that 'ai' inside another word does not mark a row as AI-written."""
        rows = [self.make_row("Executive Summary, Maintainability", "Original summary")]

        summary = extract_executive_summary(rows)

        assert summary.original == "Original summary"

    def test_first_variant_wins(self):
        """Test that the first AI row for an audience is used."""
        rows = [
            self.make_row("Executive Summary, AI Buyer", "First"),
            self.make_row("Executive Summary, AI Buyer", "Second"),
        ]

        summary = extract_executive_summary(rows)

        assert summary.buyer == "First"
        assert summary.original == ""

    def test_seller_variant_only(self):
        """Test that a lone seller variant counts as summary content."""
        rows = [self.make_row("Executive Summary, AI Seller", "Seller summary")]

        summary = extract_executive_summary(rows)

        assert summary.seller == "Seller summary"
        assert summary.has_content()

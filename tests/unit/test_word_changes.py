"""Unit tests for word-change strategies and inline highlighting."""

import pytest
from markupsafe import Markup

from tdd_review.classification import ClassificationRules, WordChangeEntry
from tdd_review.models import ChangeCategory, WordChange
from tdd_review.review import (
    DiffWordChangeStrategy,
    InlineHighlighter,
    StaticWordChangeStrategy,
    get_word_change_strategy,
)


INTRO_TAGS = ["Grammar", "Clarity", "Internal Consistency", "Professionalism & Presentation"]


class TestStaticWordChangeStrategy:
    """Tests for the tag lookup table."""

    def test_changes_follow_table_order(self):
        """Test that entries for present tags are emitted in table order."""
        strategy = StaticWordChangeStrategy()

        changes = strategy.create_word_changes("ignored", "ignored", INTRO_TAGS)

        assert [(c.original, c.corrected) for c in changes] == [
            ("advane", "advanced"),
            ("safety", "security"),
            ("6th", "sixth"),
            ("covering", "comprising"),
            ("The is a", "The property is an"),
        ]

    def test_grammar_has_two_entries(self):
        """Test that one tag can contribute several substitutions."""
        changes = StaticWordChangeStrategy().create_word_changes("", "", ["Grammar"])

        assert changes == [
            WordChange("advane", "advanced", ChangeCategory.GRAMMAR),
            WordChange("The is a", "The property is an", ChangeCategory.GRAMMAR),
        ]

    def test_tags_match_exactly(self):
        """Test that tag lookup is exact and case-sensitive."""
        strategy = StaticWordChangeStrategy()

        assert strategy.create_word_changes("", "", ["grammar"]) == []
        assert strategy.create_word_changes("", "", ["Technical Accuracy"]) == [
            WordChange("Air Handling units", "Air Handling Units", ChangeCategory.TECHNICAL),
        ]

    def test_no_tags_no_changes(self):
        """Test that an empty tag list yields no changes."""
        assert StaticWordChangeStrategy().create_word_changes("a", "b", []) == []

    def test_custom_table(self):
        """Test that the table comes from the rules."""
        rules = ClassificationRules(word_changes=[
            WordChangeEntry("Risk", "may", "will", ChangeCategory.OTHER),
        ])

        changes = StaticWordChangeStrategy(rules).create_word_changes("", "", ["Risk"])

        assert changes == [WordChange("may", "will", ChangeCategory.OTHER)]


class TestDiffWordChangeStrategy:
    """Tests for the difflib-based strategy."""

    def test_replacement_detected(self):
        """Test that replaced words become changes and insertions are skipped."""
        strategy = DiffWordChangeStrategy()

        changes = strategy.create_word_changes("The is a office", "The property is an office", ["Grammar"])

        assert changes == [WordChange("a", "an", ChangeCategory.GRAMMAR)]

    def test_deletion_detected(self):
        """Test that deleted words map to an empty correction."""
        changes = DiffWordChangeStrategy().create_word_changes("very old boiler", "old boiler", ["Clarity"])

        assert changes == [WordChange("very", "", ChangeCategory.CLARITY)]

    def test_duplicates_removed(self):
        """Test that the same substitution is reported once."""
        changes = DiffWordChangeStrategy().create_word_changes("a b a", "x b x", [])

        assert changes == [WordChange("a", "x", ChangeCategory.OTHER)]

    def test_max_changes(self):
        """Test that the number of changes is capped."""
        changes = DiffWordChangeStrategy(max_changes=1).create_word_changes("a b c", "x b y", [])

        assert len(changes) == 1

    def test_identical_texts(self):
        """Test that identical texts produce no changes."""
        assert DiffWordChangeStrategy().create_word_changes("same text", "same text", []) == []


class TestStrategyFactory:
    """Tests for selecting a strategy by name."""

    def test_known_names(self):
        """Test that both strategies can be selected."""
        assert isinstance(get_word_change_strategy(), StaticWordChangeStrategy)
        assert isinstance(get_word_change_strategy("diff"), DiffWordChangeStrategy)

    def test_unknown_name(self):
        """Test that an unknown strategy name is rejected."""
        with pytest.raises(ValueError, match="Unknown word change strategy"):
            get_word_change_strategy("llm")


class TestInlineHighlighter:
    """Tests for rendering word changes into the original text."""

    def test_changes_rendered_inline(self):
        """Test the strikethrough and correction markup."""
        highlighter = InlineHighlighter()
        changes = StaticWordChangeStrategy().create_word_changes("", "", INTRO_TAGS)

        html = highlighter.create_inline_text(
            "The is a office building covering ground to 6th floors", changes
        )

        assert isinstance(html, Markup)
        assert str(html) == (
            '<span class="line-through text-red-600">The is a</span> '
            '<span class="font-medium text-red-600">The property is an</span>'
            ' office building '
            '<span class="line-through text-purple-600">covering</span> '
            '<span class="font-medium text-purple-600">comprising</span>'
            ' ground to '
            '<span class="line-through text-red-600">6th</span> '
            '<span class="font-medium text-red-600">sixth</span>'
            ' floors'
        )

    def test_case_insensitive_keeps_matched_text(self):
        """Test that matching ignores case but shows the text as written."""
        html = InlineHighlighter().create_inline_text(
            "Safety first", [WordChange("safety", "security", ChangeCategory.CLARITY)]
        )

        assert '<span class="line-through text-purple-600">Safety</span>' in str(html)

    @pytest.mark.parametrize("text, original, matched", [
        ("\u017fafety first", "safety", "\u017fafety"),
        ("The \u0130s a building", "is", "\u0130s"),
    ])
    def test_case_folding_beyond_lower(self, text, original, matched):
        """Test letters whose regex case folding differs from str.lower()."""
        html = InlineHighlighter().create_inline_text(
            text, [WordChange(original, "corrected", ChangeCategory.CLARITY)]
        )

        assert f'<span class="line-through text-purple-600">{matched}</span>' in str(html)
        assert '<span class="font-medium text-purple-600">corrected</span>' in str(html)

    def test_every_occurrence_replaced(self):
        """Test that all occurrences are highlighted."""
        html = InlineHighlighter().create_inline_text(
            "system and system", [WordChange("system", "systems", ChangeCategory.TECHNICAL)]
        )

        assert str(html).count("line-through") == 2

    def test_longest_original_wins(self):
        """Test that a longer original is preferred over its prefix."""
        html = InlineHighlighter().create_inline_text(
            "on site works",
            [
                WordChange("on", "at", ChangeCategory.OTHER),
                WordChange("on site", "on-site", ChangeCategory.FORMATTING),
            ],
        )

        assert '<span class="line-through text-indigo-600">on site</span>' in str(html)
        assert "text-cyan-600" not in str(html)

    def test_inserted_markup_not_rematched(self):
        """Test that corrections and markup are never matched again."""
        html = InlineHighlighter().create_inline_text(
            "system",
            [
                WordChange("system", "systems", ChangeCategory.TECHNICAL),
                WordChange("class", "klass", ChangeCategory.OTHER),
            ],
        )

        assert str(html).count("line-through") == 1
        assert "klass" not in str(html)

    def test_text_is_escaped(self):
        """Test that the original text and corrections are HTML-escaped."""
        html = InlineHighlighter().create_inline_text(
            "a < b & safety", [WordChange("safety", "<b>security</b>", ChangeCategory.CLARITY)]
        )

        assert str(html).startswith("a &lt; b &amp; ")
        assert "&lt;b&gt;security&lt;/b&gt;" in str(html)

    def test_no_changes(self):
        """Test that text without changes is only escaped."""
        assert str(InlineHighlighter().create_inline_text("x > y", [])) == "x &gt; y"

    def test_tag_classes(self):
        """Test tag badge classes with the fallback for unknown tags."""
        highlighter = InlineHighlighter()

        assert highlighter.tag_class("Grammar") == "bg-red-100 text-red-800 border-red-200"
        assert highlighter.tag_class("Sparkle") == highlighter.default_tag_class

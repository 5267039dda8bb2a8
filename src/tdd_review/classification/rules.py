"""Declarative rule tables for review row validation and classification.

This module holds the phrase tables that decide whether a row is kept,
which bucket it lands in, and how RAG ratings are read out of the
free-text assessment change in ``proposed_revision``.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from ..models.enums import ChangeCategory, RagAxis, RagStatus


HEADER_MARKER = "section_name"

# Checked case-sensitively against every mandatory field.
MALFORMED_MARKERS = ["undefined"]

# Checked case-insensitively against every mandatory field.
TEMPLATE_LEAKAGE_PHRASES = ["this is an example", "your task is to"]

RAG_SUGGESTION_MARKER = "rag suggestion"
TONE_PREFIX = "Tone"
LENIENT_MARKER = "lenient"

CONTENT_VOCABULARY = [
    "Grammar",
    "Clarity",
    "Formatting",
    "Professionalism",
    "Technical",
    "Consistency",
    "Risk",
]


@dataclass
class RagPhraseRule:
    """
    Maps assessment-change phrases to a rating on one axis.

    A rule matches when any of its phrases occurs in the lowercased
    ``proposed_revision``.
    """
    axis: RagAxis
    status: RagStatus
    phrases: List[str]
    priority: int = 0  # Higher priority rules are checked first
    id: str = ""

    def matches(self, text: str) -> bool:
        text_lower = text.lower()
        return any(phrase.lower() in text_lower for phrase in self.phrases)


@dataclass
class WordChangeEntry:
    """Static substitution shown for rows carrying ``tag``."""
    tag: str
    original: str
    corrected: str
    category: ChangeCategory


def _build_rag_rules() -> List[RagPhraseRule]:
    """Build the default RAG phrase rules, Green before Red before Amber."""
    rules: List[RagPhraseRule] = []
    for priority, status in ((3, RagStatus.GREEN), (2, RagStatus.RED), (1, RagStatus.AMBER)):
        colour = status.value.lower()
        rules.append(
            RagPhraseRule(
                axis=RagAxis.SAFETY,
                status=status,
                phrases=[f"safety change to {colour}"],
                priority=priority,
                id=f"safety_{colour}",
            )
        )
        rules.append(
            RagPhraseRule(
                axis=RagAxis.COST,
                status=status,
                phrases=[
                    f"operation / cost change to {colour}",
                    f"cost change to {colour}",
                ],
                priority=priority,
                id=f"cost_{colour}",
            )
        )
    return rules


DEFAULT_RAG_RULES = _build_rag_rules()

DEFAULT_WORD_CHANGES = [
    WordChangeEntry("Grammar", "advane", "advanced", ChangeCategory.GRAMMAR),
    WordChangeEntry("Clarity", "safety", "security", ChangeCategory.CLARITY),
    WordChangeEntry("Technical", "system", "systems", ChangeCategory.TECHNICAL),
    WordChangeEntry("Internal Consistency", "6th", "sixth", ChangeCategory.GRAMMAR),
    WordChangeEntry(
        "Professionalism & Presentation", "covering", "comprising", ChangeCategory.CLARITY
    ),
    WordChangeEntry("Formatting", "on site", "on-site", ChangeCategory.FORMATTING),
    WordChangeEntry("Grammar", "The is a", "The property is an", ChangeCategory.GRAMMAR),
    WordChangeEntry(
        "Technical Accuracy", "Air Handling units", "Air Handling Units", ChangeCategory.TECHNICAL
    ),
]

# Ratings used for the side of a RAG row that the source row does not describe.
LENIENT_PLACEHOLDER = (RagStatus.GREEN, RagStatus.AMBER)
CRITICAL_PLACEHOLDER = (RagStatus.AMBER, RagStatus.AMBER)


@dataclass
class ClassificationRules:
    """
    Complete rule set used by the parser, classifier and word changes.

    Defaults reproduce the phrase tables above; ``ConfigurationManager``
    builds customised instances from JSON.
    """
    header_marker: str = HEADER_MARKER
    malformed_markers: List[str] = field(default_factory=lambda: list(MALFORMED_MARKERS))
    leakage_phrases: List[str] = field(default_factory=lambda: list(TEMPLATE_LEAKAGE_PHRASES))
    content_vocabulary: List[str] = field(default_factory=lambda: list(CONTENT_VOCABULARY))
    rag_rules: List[RagPhraseRule] = field(default_factory=lambda: list(DEFAULT_RAG_RULES))
    word_changes: List[WordChangeEntry] = field(default_factory=lambda: list(DEFAULT_WORD_CHANGES))
    rag_default: RagStatus = RagStatus.AMBER
    lenient_placeholder: Tuple[RagStatus, RagStatus] = LENIENT_PLACEHOLDER
    critical_placeholder: Tuple[RagStatus, RagStatus] = CRITICAL_PLACEHOLDER

    def rules_for(self, axis: RagAxis) -> List[RagPhraseRule]:
        """Rules for one axis, highest priority first, stable otherwise."""
        return sorted(
            [rule for rule in self.rag_rules if rule.axis == axis],
            key=lambda rule: -rule.priority,
        )

    def find_defect(self, values: Dict[str, str]) -> Optional[Tuple[str, str]]:
        """
        Check mandatory field values against the sentinel rules.

        Args:
            values: Mandatory field values keyed by field name.

        Returns:
            None when all values are acceptable, otherwise a tuple of
            (reason, field name) for the first defect found.
        """
        for name, value in values.items():
            if not value:
                return "empty_field", name
            for marker in self.malformed_markers:
                if marker in value:
                    return "malformed_marker", name
            value_lower = value.lower()
            for phrase in self.leakage_phrases:
                if phrase.lower() in value_lower:
                    return "template_leakage", name
        return None

    def find_vocabulary_term(self, edit_type: str) -> Optional[str]:
        """Return the first recognised category term in ``edit_type``."""
        for term in self.content_vocabulary:
            if term in edit_type:
                return term
        return None


class RagPhraseMatcher:
    """
    Reads RAG ratings out of free-text assessment changes.

    Evaluates the rule table per axis; the first matching rule wins and
    the configured default applies when nothing matches.
    """

    def __init__(self, rules: Optional[ClassificationRules] = None):
        self._rules = rules or ClassificationRules()
        self._by_axis = {axis: self._rules.rules_for(axis) for axis in RagAxis}

    def match(self, text: str, axis: RagAxis) -> Optional[RagStatus]:
        """
        Find the rating ``text`` assigns on ``axis``.

        Args:
            text: Assessment change text, typically ``proposed_revision``.
            axis: Safety or cost.

        Returns:
            The matched RagStatus, or None when no rule matches.
        """
        for rule in self._by_axis[axis]:
            if rule.matches(text):
                return rule.status
        return None

    def rate(self, text: str, axis: RagAxis) -> RagStatus:
        """Like ``match`` but falls back to the default rating."""
        status = self.match(text, axis)
        return status if status is not None else self._rules.rag_default

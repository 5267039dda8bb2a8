"""Word-change strategies for inline highlighting of content suggestions."""

import difflib
import logging
from typing import Dict, List, Optional

from ..classification.rules import ClassificationRules
from ..interfaces.word_changes import IWordChangeStrategy
from ..models.enums import ChangeCategory
from ..models.rows import WordChange


logger = logging.getLogger(__name__)

TAG_CATEGORIES: Dict[str, ChangeCategory] = {
    "grammar": ChangeCategory.GRAMMAR,
    "internal consistency": ChangeCategory.GRAMMAR,
    "technical": ChangeCategory.TECHNICAL,
    "technical accuracy": ChangeCategory.TECHNICAL,
    "clarity": ChangeCategory.CLARITY,
    "professionalism & presentation": ChangeCategory.CLARITY,
    "formatting": ChangeCategory.FORMATTING,
}


def category_for_tags(edit_types: List[str]) -> ChangeCategory:
    """Map the first recognised tag to a change category."""
    for tag in edit_types:
        category = TAG_CATEGORIES.get(tag.strip().lower())
        if category:
            return category
    return ChangeCategory.OTHER


class StaticWordChangeStrategy(IWordChangeStrategy):
    """
    Tag-driven lookup of illustrative substitutions.

    No diffing takes place: for every table entry whose tag is present on
    the row, the entry's fixed (original, corrected) pair is emitted, in
    table order.
    """

    name = "static"

    def __init__(self, rules: Optional[ClassificationRules] = None):
        self._rules = rules or ClassificationRules()

    def create_word_changes(
        self,
        original_text: str,
        proposed_revision: str,
        edit_types: List[str],
    ) -> List[WordChange]:
        tags = set(edit_types)
        return [
            WordChange(original=entry.original, corrected=entry.corrected, category=entry.category)
            for entry in self._rules.word_changes
            if entry.tag in tags
        ]


class DiffWordChangeStrategy(IWordChangeStrategy):
    """
    Word-level diff between the original text and the proposed revision.

    Uses difflib to align the two texts token by token. Replaced and
    deleted runs become word changes; pure insertions have nothing to
    strike through in the original and are skipped.
    """

    name = "diff"

    def __init__(self, max_changes: int = 50):
        self.max_changes = max_changes

    def create_word_changes(
        self,
        original_text: str,
        proposed_revision: str,
        edit_types: List[str],
    ) -> List[WordChange]:
        original_words = original_text.split()
        revised_words = proposed_revision.split()
        category = category_for_tags(edit_types)

        matcher = difflib.SequenceMatcher(None, original_words, revised_words, autojunk=False)
        changes: List[WordChange] = []
        seen = set()

        for tag, i1, i2, j1, j2 in matcher.get_opcodes():
            if tag not in ("replace", "delete"):
                continue
            original = " ".join(original_words[i1:i2])
            corrected = " ".join(revised_words[j1:j2])
            if (original, corrected) in seen:
                continue
            seen.add((original, corrected))
            changes.append(WordChange(original=original, corrected=corrected, category=category))

        if len(changes) > self.max_changes:
            logger.debug(f"Truncating {len(changes)} word changes to {self.max_changes}")
            changes = changes[: self.max_changes]
        return changes


def get_word_change_strategy(
    name: str = "static",
    rules: Optional[ClassificationRules] = None,
) -> IWordChangeStrategy:
    """
    Create a word-change strategy by name.

    Args:
        name: "static" for the tag lookup table, "diff" for difflib.
        rules: Rules supplying the static lookup table.

    Raises:
        ValueError: If the name is not a known strategy.
    """
    if name == StaticWordChangeStrategy.name:
        return StaticWordChangeStrategy(rules)
    if name == DiffWordChangeStrategy.name:
        return DiffWordChangeStrategy()
    raise ValueError(f"Unknown word change strategy: {name}")

"""Inline highlighting of word changes within original text."""

import re
from typing import Dict, List, Optional

from markupsafe import Markup, escape

from ..models.enums import ChangeCategory
from ..models.rows import WordChange


class InlineHighlighter:
    """
    Renders word changes into the original text.

    Each occurrence of a change's ``original`` is shown struck through and
    followed by its correction. Matching is case-insensitive and prefers
    the longest original, and all changes are applied in a single pass so
    inserted markup is never matched again.
    """

    def __init__(self):
        """Initialize the highlighter with its colour classes."""
        self.change_classes: Dict[ChangeCategory, str] = {
            ChangeCategory.GRAMMAR: "text-red-600",
            ChangeCategory.TECHNICAL: "text-blue-600",
            ChangeCategory.CLARITY: "text-purple-600",
            ChangeCategory.FORMATTING: "text-indigo-600",
            ChangeCategory.OTHER: "text-cyan-600",
        }
        self.tag_classes: Dict[str, str] = {
            "grammar": "bg-red-100 text-red-800 border-red-200",
            "technical": "bg-blue-100 text-blue-800 border-blue-200",
            "technical accuracy": "bg-blue-100 text-blue-800 border-blue-200",
            "clarity": "bg-purple-100 text-purple-800 border-purple-200",
            "internal consistency": "bg-green-100 text-green-800 border-green-200",
            "professionalism & presentation": "bg-orange-100 text-orange-800 border-orange-200",
            "formatting": "bg-indigo-100 text-indigo-800 border-indigo-200",
            "risk mitigation": "bg-pink-100 text-pink-800 border-pink-200",
        }
        self.default_tag_class = "bg-gray-100 text-gray-800 border-gray-200"

    def change_class(self, category: ChangeCategory) -> str:
        return self.change_classes.get(category, self.change_classes[ChangeCategory.OTHER])

    def tag_class(self, tag: str) -> str:
        """CSS classes for an edit-type tag badge."""
        return self.tag_classes.get(tag.strip().lower(), self.default_tag_class)

    def create_inline_text(self, original_text: str, word_changes: List[WordChange]) -> Markup:
        """
        Render word changes inline.

        Args:
            original_text: Text to highlight changes in.
            word_changes: Changes to render.

        Returns:
            HTML-safe markup of the original text with changes applied.
        """
        pattern = self._build_pattern(word_changes)
        if pattern is None:
            return escape(original_text)

        candidates = sorted(
            (change for change in word_changes if change.original),
            key=lambda c: len(c.original),
            reverse=True,
        )

        parts: List[str] = []
        position = 0
        for match in pattern.finditer(original_text):
            parts.append(str(escape(original_text[position:match.start()])))
            change = self._change_for(match.group(0), candidates)
            parts.append(self._render_change(match.group(0), change))
            position = match.end()
        parts.append(str(escape(original_text[position:])))

        return Markup("".join(parts))

    @staticmethod
    def _change_for(matched: str, candidates: List[WordChange]) -> WordChange:
        # Same case folding as the pattern; str.lower() disagrees for some letters.
        for change in candidates:
            if re.fullmatch(re.escape(change.original), matched, re.IGNORECASE):
                return change
        raise LookupError(f"No word change matches {matched!r}")

    def _render_change(self, matched: str, change: WordChange) -> str:
        css_class = self.change_class(change.category)
        return (
            f'<span class="line-through {css_class}">{escape(matched)}</span> '
            f'<span class="font-medium {css_class}">{escape(change.corrected)}</span>'
        )

    @staticmethod
    def _build_pattern(word_changes: List[WordChange]) -> Optional["re.Pattern[str]"]:
        """Alternation of all originals, longest first, case-insensitive."""
        originals = sorted(
            {change.original for change in word_changes if change.original},
            key=lambda original: (-len(original), original),
        )
        if not originals:
            return None
        return re.compile("|".join(re.escape(o) for o in originals), re.IGNORECASE)

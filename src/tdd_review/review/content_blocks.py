"""Conversion of content rows into display blocks."""

from typing import List, Optional

from ..interfaces.word_changes import IWordChangeStrategy
from ..models.review import ContentBlock
from ..models.rows import ReviewRow
from .inline_highlighter import InlineHighlighter
from .word_changes import StaticWordChangeStrategy


class ContentBlockBuilder:
    """
    Builds ContentBlocks from classified content rows.

    Word changes come from the configured strategy and are rendered into
    the original text by the inline highlighter.
    """

    def __init__(
        self,
        strategy: Optional[IWordChangeStrategy] = None,
        highlighter: Optional[InlineHighlighter] = None,
    ):
        self.strategy = strategy or StaticWordChangeStrategy()
        self.highlighter = highlighter or InlineHighlighter()

    def build(self, row: ReviewRow, block_id: str) -> ContentBlock:
        """
        Build one content block.

        Args:
            row: A content row.
            block_id: Identifier to assign to the block.

        Returns:
            ContentBlock with word changes and inline markup.
        """
        edit_types = row.tags()
        word_changes = self.strategy.create_word_changes(
            row.original_text, row.proposed_revision, edit_types
        )
        return ContentBlock(
            id=block_id,
            page=row.section_name or "Unknown Page",
            original_text=row.original_text,
            revised_text=row.proposed_revision,
            justification=row.justification,
            edit_types=edit_types,
            word_changes=word_changes,
            inline_html=str(self.highlighter.create_inline_text(row.original_text, word_changes)),
            diff_output=row.diff_output,
        )

    def build_all(self, rows: List[ReviewRow]) -> List[ContentBlock]:
        """Build blocks for rows in order, numbering them from 1."""
        return [self.build(row, str(index)) for index, row in enumerate(rows, start=1)]

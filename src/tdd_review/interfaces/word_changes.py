"""Word-change strategy interface for the TDD review data library."""

from abc import ABC, abstractmethod
from typing import List

from ..models.rows import WordChange


class IWordChangeStrategy(ABC):
    """
    Abstract interface for producing word-level changes for a content row.

    The changes are used for inline highlighting only. Implementations may
    use a static lookup keyed on category tags or a real text diff.
    """

    name: str = ""

    @abstractmethod
    def create_word_changes(
        self,
        original_text: str,
        proposed_revision: str,
        edit_types: List[str],
    ) -> List[WordChange]:
        """
        Produce the word changes to highlight for a row.

        Args:
            original_text: The source excerpt.
            proposed_revision: The suggested replacement text.
            edit_types: Category tags extracted from the row's edit type.

        Returns:
            Ordered list of WordChange records.
        """
        pass

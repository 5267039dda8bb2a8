"""Row classifier interface for the TDD review data library."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional

from ..models.enums import RowKind
from ..models.rows import ParsedData, ReviewRow


@dataclass
class ClassifiedRow:
    """
    Outcome of classifying a single row.

    ``row`` is a ``RagRow`` when ``kind`` is ``RowKind.RAG``. Discarded
    rows carry the ``reason`` they were rejected for.
    """
    kind: RowKind
    row: ReviewRow
    reason: Optional[str] = None

    @property
    def is_discarded(self) -> bool:
        return self.kind == RowKind.DISCARDED


class IRowClassifier(ABC):
    """
    Abstract interface for routing parsed rows into output buckets.
    """

    @abstractmethod
    def classify(self, row: ReviewRow) -> ClassifiedRow:
        """
        Classify one validated row.

        Args:
            row: The row to classify.

        Returns:
            ClassifiedRow tagged with the bucket the row belongs to.
        """
        pass

    @abstractmethod
    def classify_rows(self, rows: List[ReviewRow]) -> ParsedData:
        """
        Classify rows into RAG, tone and content collections.

        Args:
            rows: Validated rows in source order.

        Returns:
            ParsedData with three disjoint, source-ordered collections.
        """
        pass

"""Review data source interface for the TDD review data library."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, List, Optional


@dataclass
class ReviewPayload:
    """
    Raw review data as fetched from a source.

    Exactly one of ``csv_text`` and ``records`` is set: CSV exports arrive
    as text, the review-data endpoint serves a JSON envelope of records.
    """
    source: str
    csv_text: Optional[str] = None
    records: Optional[List[Dict[str, Any]]] = None

    @property
    def is_csv(self) -> bool:
        return self.csv_text is not None


class IReviewSource(ABC):
    """
    Abstract interface for fetching review data.
    """

    @abstractmethod
    def fetch(self) -> ReviewPayload:
        """
        Fetch the review data once.

        Returns:
            ReviewPayload with either CSV text or row records.

        Raises:
            SourceUnavailableError: If the data cannot be retrieved.
            MalformedPayloadError: If the data cannot be interpreted.
        """
        pass

    @abstractmethod
    def describe(self) -> str:
        """Return a human-readable location of the source."""
        pass

"""CSV parser interface for the TDD review data library."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List

from ..models.rows import ParseDiagnostic, ReviewRow


@dataclass
class ParseResult:
    """
    Result of parsing a review CSV blob.

    Holds the rows that passed validation, in source order, along with
    a diagnostic for each line that was dropped.
    """
    rows: List[ReviewRow] = field(default_factory=list)
    diagnostics: List[ParseDiagnostic] = field(default_factory=list)
    line_count: int = 0  # data lines seen, header excluded

    @property
    def dropped_count(self) -> int:
        return len(self.diagnostics)


class IReviewCSVParser(ABC):
    """
    Abstract interface for review CSV parsing.

    Implementations turn the raw text exported by the analysis backend
    into validated ``ReviewRow`` records.
    """

    @abstractmethod
    def parse(self, csv_text: str) -> ParseResult:
        """
        Parse a CSV text blob into validated rows.

        Args:
            csv_text: Raw CSV text, optionally starting with a header line.

        Returns:
            ParseResult with the retained rows and drop diagnostics.
        """
        pass

    @abstractmethod
    def parse_records(self, records: List[Dict[str, Any]]) -> ParseResult:
        """
        Clean and validate rows that arrive already split into fields.

        Args:
            records: Row objects keyed by column name, as found in the
                JSON envelope served by the review-data endpoint.

        Returns:
            ParseResult with the retained rows and drop diagnostics.
        """
        pass

"""View models consumed by the review screens and the HTML report."""

from dataclasses import dataclass, field
from typing import List, Optional

from .enums import RagStatus
from .rows import WordChange


@dataclass
class ContentBlock:
    """
    A content suggestion prepared for display.

    Built from a content row: ``page`` is the row's section name and
    ``edit_types`` its category tags. ``inline_html`` holds the original
    text with the word changes rendered as strikethrough and correction.
    """
    id: str
    page: str
    original_text: str
    revised_text: str
    justification: str = ""
    edit_types: List[str] = field(default_factory=list)
    word_changes: List[WordChange] = field(default_factory=list)
    inline_html: str = ""
    diff_output: str = ""


@dataclass
class RagAssessment:
    """Safety and cost rating under one severity interpretation."""
    safety: RagStatus
    cost: RagStatus
    justification: Optional[str] = None


@dataclass
class RagTableRow:
    """One system line of the RAG table."""
    system: str
    section_name: str
    critical: RagAssessment
    lenient: RagAssessment


@dataclass
class ExecutiveSummary:
    """Original executive summary and its AI-rewritten audience variants."""
    original: str = ""
    concise: str = ""
    buyer: str = ""
    lender: str = ""
    owner: str = ""
    seller: str = ""

    def has_content(self) -> bool:
        return any([self.original, self.concise, self.buyer, self.lender, self.owner, self.seller])

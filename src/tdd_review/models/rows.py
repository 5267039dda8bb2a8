"""Row-level data models for parsed review CSV data."""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .enums import AssessmentVariant, ChangeCategory, DiagnosticStage, RagStatus


MANDATORY_FIELDS = (
    "section_name",
    "original_text",
    "proposed_revision",
    "justification",
    "edit_type",
)


@dataclass
class ReviewRow:
    """
    A single record from the review CSV.

    Represents one proposed document edit or risk assessment produced by
    the analysis backend. ``edit_type`` decides which bucket the row is
    classified into.
    """
    section_name: str
    original_text: str
    proposed_revision: str
    justification: str
    edit_type: str
    diff_output: str = ""  # pre-rendered diff markup, newer exports only

    def mandatory_values(self) -> Dict[str, str]:
        """Return the five mandatory fields keyed by name."""
        return {name: getattr(self, name) for name in MANDATORY_FIELDS}

    def tags(self) -> List[str]:
        """Split ``edit_type`` into its comma-separated category tags."""
        return [tag.strip() for tag in self.edit_type.split(",") if tag.strip()]


@dataclass
class RagRow(ReviewRow):
    """
    Review row classified as a RAG suggestion.

    Only one side (lenient or critical) carries values derived from the
    source row; the other side holds fixed placeholder ratings and no
    justification.
    """
    system_name: str = ""
    critical_safety: RagStatus = RagStatus.AMBER
    critical_cost: RagStatus = RagStatus.AMBER
    lenient_safety: RagStatus = RagStatus.GREEN
    lenient_cost: RagStatus = RagStatus.AMBER
    critical_justification: Optional[str] = None
    lenient_justification: Optional[str] = None

    @property
    def variant(self) -> AssessmentVariant:
        """Which side of the assessment came from the source row."""
        if self.lenient_justification is not None:
            return AssessmentVariant.LENIENT
        return AssessmentVariant.CRITICAL


@dataclass
class ParseDiagnostic:
    """Structured record explaining why a row was dropped."""
    stage: DiagnosticStage
    reason: str
    location: Optional[str] = None  # "line 7", "row 3"
    detail: Dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, object]:
        return {
            "stage": self.stage.value,
            "reason": self.reason,
            "location": self.location,
            "detail": dict(self.detail),
        }


@dataclass
class ParsedData:
    """
    Classification output.

    Three disjoint, source-ordered collections plus the diagnostics of
    every row that was dropped along the way.
    """
    rag_suggestions: List[RagRow] = field(default_factory=list)
    tone_changes: List[ReviewRow] = field(default_factory=list)
    edit_types: List[ReviewRow] = field(default_factory=list)
    diagnostics: List[ParseDiagnostic] = field(default_factory=list)

    @property
    def total_rows(self) -> int:
        """Number of rows retained across all three buckets."""
        return len(self.rag_suggestions) + len(self.tone_changes) + len(self.edit_types)

    def counts(self) -> Dict[str, int]:
        return {
            "rag_suggestions": len(self.rag_suggestions),
            "tone_changes": len(self.tone_changes),
            "edit_types": len(self.edit_types),
            "discarded": len(self.diagnostics),
        }

    def is_empty(self) -> bool:
        return self.total_rows == 0


@dataclass
class WordChange:
    """Illustrative before/after substitution shown inline in the UI."""
    original: str
    corrected: str
    category: ChangeCategory = ChangeCategory.OTHER

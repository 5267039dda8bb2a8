"""Data models and enums for the TDD review data library."""

from .enums import (
    AssessmentVariant,
    ChangeCategory,
    DiagnosticStage,
    RagAxis,
    RagStatus,
    RowKind,
)
from .rows import (
    MANDATORY_FIELDS,
    ParseDiagnostic,
    ParsedData,
    RagRow,
    ReviewRow,
    WordChange,
)
from .review import ContentBlock, ExecutiveSummary, RagAssessment, RagTableRow

__all__ = [
    # Enums
    "AssessmentVariant",
    "ChangeCategory",
    "DiagnosticStage",
    "RagAxis",
    "RagStatus",
    "RowKind",
    # Row models
    "MANDATORY_FIELDS",
    "ParseDiagnostic",
    "ParsedData",
    "RagRow",
    "ReviewRow",
    "WordChange",
    # View models
    "ContentBlock",
    "ExecutiveSummary",
    "RagAssessment",
    "RagTableRow",
]

"""Enumerations for the TDD review data library."""

from enum import Enum


class RagStatus(Enum):
    """Red/Amber/Green risk rating."""
    RED = "Red"
    AMBER = "Amber"
    GREEN = "Green"


class AssessmentVariant(Enum):
    """Severity interpretation a RAG suggestion row was produced under."""
    LENIENT = "lenient"
    CRITICAL = "critical"


class RowKind(Enum):
    """Output bucket a parsed row is routed into."""
    RAG = "rag"
    TONE = "tone"
    CONTENT = "content"
    DISCARDED = "discarded"


class ChangeCategory(Enum):
    """Display category of a word-level change."""
    GRAMMAR = "grammar"
    TECHNICAL = "technical"
    CLARITY = "clarity"
    FORMATTING = "formatting"
    OTHER = "other"


class DiagnosticStage(Enum):
    """Stage of processing that produced a diagnostic."""
    PARSE = "parse"
    CLASSIFY = "classify"


class RagAxis(Enum):
    """Axis a RAG rating applies to."""
    SAFETY = "safety"
    COST = "cost"

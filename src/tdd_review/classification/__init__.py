"""Row classification components for the TDD review data library."""

from .rules import (
    ClassificationRules,
    RagPhraseMatcher,
    RagPhraseRule,
    WordChangeEntry,
)
from .rag_extractor import RagExtractor
from .classifier import RowClassifier

__all__ = [
    "ClassificationRules",
    "RagPhraseMatcher",
    "RagPhraseRule",
    "WordChangeEntry",
    "RagExtractor",
    "RowClassifier",
]

"""Abstract interfaces for the TDD review data library."""

from .parser import IReviewCSVParser, ParseResult
from .classifier import ClassifiedRow, IRowClassifier
from .word_changes import IWordChangeStrategy
from .source import IReviewSource, ReviewPayload

__all__ = [
    "IReviewCSVParser",
    "ParseResult",
    "ClassifiedRow",
    "IRowClassifier",
    "IWordChangeStrategy",
    "IReviewSource",
    "ReviewPayload",
]

"""Review data sources for the TDD review data library."""

from .data_source import (
    DEFAULT_REVIEW_DATA_PATH,
    FileReviewSource,
    HttpReviewSource,
    TextReviewSource,
    interpret_payload,
)

__all__ = [
    "DEFAULT_REVIEW_DATA_PATH",
    "FileReviewSource",
    "HttpReviewSource",
    "TextReviewSource",
    "interpret_payload",
]

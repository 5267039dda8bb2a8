"""
TDD Review Data

Parsing and classification of Technical Due Diligence review data: CSV
rows produced by the analysis backend are split into RAG suggestions,
tone changes and content recommendations, and prepared for review.
"""

__version__ = "0.1.0"

# Export main components
from .models.enums import (
    AssessmentVariant,
    ChangeCategory,
    DiagnosticStage,
    RagAxis,
    RagStatus,
    RowKind,
)
from .models.rows import ParseDiagnostic, ParsedData, RagRow, ReviewRow, WordChange
from .models.review import ContentBlock, ExecutiveSummary, RagAssessment, RagTableRow
from .parsers import (
    DiagnosticsCollector,
    MalformedPayloadError,
    ReviewCSVParser,
    ReviewDataError,
    SourceUnavailableError,
    deserialize_parsed_data,
    serialize_parsed_data,
)
from .classification import ClassificationRules, RagExtractor, RowClassifier
from .review import (
    ContentBlockBuilder,
    DiffWordChangeStrategy,
    InlineHighlighter,
    ReportRenderer,
    StaticWordChangeStrategy,
    get_word_change_strategy,
)
from .sources import FileReviewSource, HttpReviewSource, TextReviewSource
from .config import ConfigurationError, ConfigurationManager, ValidationResult
from .pipeline import PipelineConfig, PipelineResult, PipelineStats, ReviewPipeline

__all__ = [
    "AssessmentVariant",
    "ChangeCategory",
    "DiagnosticStage",
    "RagAxis",
    "RagStatus",
    "RowKind",
    "ParseDiagnostic",
    "ParsedData",
    "RagRow",
    "ReviewRow",
    "WordChange",
    "ContentBlock",
    "ExecutiveSummary",
    "RagAssessment",
    "RagTableRow",
    "DiagnosticsCollector",
    "MalformedPayloadError",
    "ReviewCSVParser",
    "ReviewDataError",
    "SourceUnavailableError",
    "deserialize_parsed_data",
    "serialize_parsed_data",
    "ClassificationRules",
    "RagExtractor",
    "RowClassifier",
    "ContentBlockBuilder",
    "DiffWordChangeStrategy",
    "InlineHighlighter",
    "ReportRenderer",
    "StaticWordChangeStrategy",
    "get_word_change_strategy",
    "FileReviewSource",
    "HttpReviewSource",
    "TextReviewSource",
    "ConfigurationError",
    "ConfigurationManager",
    "ValidationResult",
    "PipelineConfig",
    "PipelineResult",
    "PipelineStats",
    "ReviewPipeline",
]

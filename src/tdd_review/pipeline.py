"""End-to-end processing pipeline for the TDD review data library.

This module wires the data source, CSV parser, row classifier and view
model builders together: fetch -> parse -> classify -> build views.
"""

import logging
import os
import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .classification.classifier import RowClassifier
from .config.config_manager import ConfigurationManager
from .interfaces.classifier import IRowClassifier
from .interfaces.parser import IReviewCSVParser, ParseResult
from .interfaces.source import IReviewSource, ReviewPayload
from .interfaces.word_changes import IWordChangeStrategy
from .models.review import ContentBlock, ExecutiveSummary, RagTableRow
from .models.rows import ParsedData
from .parsers.csv_parser import ReviewCSVParser
from .parsers.exceptions import DiagnosticsCollector, ReviewDataError, SourceUnavailableError
from .parsers.serialization import ParsedDataSerializer
from .review.content_blocks import ContentBlockBuilder
from .review.executive_summary import extract_executive_summary
from .review.rag_table import build_rag_table, status_counts
from .review.word_changes import get_word_change_strategy
from .sources.data_source import (
    DEFAULT_REVIEW_DATA_PATH,
    FileReviewSource,
    HttpReviewSource,
    TextReviewSource,
)


logger = logging.getLogger(__name__)


@dataclass
class PipelineConfig:
    """Configuration for the review pipeline."""

    # Review data source; a local export takes precedence over the backend
    backend_url: Optional[str] = None
    review_data_path: str = DEFAULT_REVIEW_DATA_PATH
    source_path: Optional[str] = None
    timeout: float = 15.0

    # Classification configuration files
    config_dir: Optional[str] = None

    # "static" (tag lookup table) or "diff" (difflib)
    word_change_strategy: str = "static"

    @classmethod
    def from_env(cls) -> "PipelineConfig":
        """
        Build a configuration from ``TDD_REVIEW_*`` environment variables.

        Raises:
            ValueError: If TDD_REVIEW_TIMEOUT is not a number.
        """
        config = cls(
            backend_url=os.getenv("TDD_REVIEW_BACKEND_URL") or None,
            source_path=os.getenv("TDD_REVIEW_SOURCE_PATH") or None,
            config_dir=os.getenv("TDD_REVIEW_CONFIG_DIR") or None,
        )
        strategy = os.getenv("TDD_REVIEW_WORD_CHANGE_STRATEGY")
        if strategy:
            config.word_change_strategy = strategy.strip().lower()
        timeout = os.getenv("TDD_REVIEW_TIMEOUT")
        if timeout:
            try:
                config.timeout = float(timeout)
            except ValueError as e:
                raise ValueError(f"TDD_REVIEW_TIMEOUT must be a number, got {timeout!r}") from e
        return config


@dataclass
class PipelineResult:
    """Result of a complete pipeline execution."""

    success: bool
    parsed_data: ParsedData = field(default_factory=ParsedData)
    content_blocks: List[ContentBlock] = field(default_factory=list)
    rag_table: List[RagTableRow] = field(default_factory=list)
    executive_summary: ExecutiveSummary = field(default_factory=ExecutiveSummary)
    diagnostics: Dict[str, Any] = field(default_factory=dict)
    source: Optional[str] = None
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    processing_time: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        """Convert the result to a JSON-compatible dictionary."""
        return {
            "success": self.success,
            "source": self.source,
            "data": ParsedDataSerializer.to_dict(self.parsed_data),
            "counts": self.parsed_data.counts(),
            "content_blocks": [
                {
                    "id": block.id,
                    "page": block.page,
                    "original_text": block.original_text,
                    "revised_text": block.revised_text,
                    "justification": block.justification,
                    "edit_types": list(block.edit_types),
                    "word_changes": [
                        {
                            "original": change.original,
                            "corrected": change.corrected,
                            "category": change.category.value,
                        }
                        for change in block.word_changes
                    ],
                    "inline_html": block.inline_html,
                    "diff_output": block.diff_output,
                }
                for block in self.content_blocks
            ],
            "rag_table": [
                {
                    "system": line.system,
                    "section_name": line.section_name,
                    "critical": {
                        "safety": line.critical.safety.value,
                        "cost": line.critical.cost.value,
                        "justification": line.critical.justification,
                    },
                    "lenient": {
                        "safety": line.lenient.safety.value,
                        "cost": line.lenient.cost.value,
                        "justification": line.lenient.justification,
                    },
                }
                for line in self.rag_table
            ],
            "rag_status_counts": status_counts(self.rag_table),
            "executive_summary": {
                "original": self.executive_summary.original,
                "concise": self.executive_summary.concise,
                "buyer": self.executive_summary.buyer,
                "lender": self.executive_summary.lender,
                "owner": self.executive_summary.owner,
                "seller": self.executive_summary.seller,
            },
            "diagnostics": self.diagnostics,
            "errors": list(self.errors),
            "warnings": list(self.warnings),
            "processing_time": self.processing_time,
        }


@dataclass
class PipelineStats:
    """Statistics about pipeline execution."""

    total_executions: int = 0
    successful_executions: int = 0
    failed_executions: int = 0
    average_processing_time: float = 0.0
    total_processing_time: float = 0.0


class ReviewPipeline:
    """
    Main processing pipeline for TDD review data.

    Fetches the review CSV, parses and classifies it, and prepares the
    content blocks, RAG table and executive summary. Fetch failures are
    soft: the result reports them and carries empty collections.
    """

    def __init__(
        self,
        config: Optional[PipelineConfig] = None,
        source: Optional[IReviewSource] = None,
        parser: Optional[IReviewCSVParser] = None,
        classifier: Optional[IRowClassifier] = None,
        word_change_strategy: Optional[IWordChangeStrategy] = None,
        config_manager: Optional[ConfigurationManager] = None,
    ):
        """
        Initialize the review pipeline.

        Args:
            config: Pipeline configuration.
            source: Optional review data source (derived from config if not provided).
            parser: Optional CSV parser (created if not provided).
            classifier: Optional row classifier (created if not provided).
            word_change_strategy: Optional word-change strategy (selected by config if not provided).
            config_manager: Optional configuration manager (created if not provided).

        Raises:
            ValueError: If the configured word-change strategy is unknown.
        """
        self.config = config or PipelineConfig()
        self.stats = PipelineStats()

        self._config_manager = config_manager or ConfigurationManager(
            config_dir=self.config.config_dir
        )

        # Load configuration if directory specified
        if self.config.config_dir:
            validation = self._config_manager.load_from_directory(self.config.config_dir)
            if validation.is_valid:
                logger.info(f"Loaded configuration from {self.config.config_dir}")
            else:
                logger.warning(
                    f"Configuration in {self.config.config_dir} rejected: {validation.errors}"
                )

        rules = self._config_manager.rules
        self._source = source or self._create_source()
        self._parser = parser or ReviewCSVParser(rules)
        self._classifier = classifier or RowClassifier(rules)
        self._block_builder = ContentBlockBuilder(
            strategy=word_change_strategy
            or get_word_change_strategy(self.config.word_change_strategy, rules)
        )

        logger.info("Review pipeline initialized")

    def _create_source(self) -> Optional[IReviewSource]:
        """Create the data source named by the configuration."""
        if self.config.source_path:
            return FileReviewSource(self.config.source_path)
        if self.config.backend_url:
            return HttpReviewSource(
                self.config.backend_url,
                path=self.config.review_data_path,
                timeout=self.config.timeout,
            )
        return None

    @property
    def source(self) -> Optional[IReviewSource]:
        return self._source

    def run(self, source: Optional[IReviewSource] = None) -> PipelineResult:
        """
        Execute the complete pipeline.

        Args:
            source: Source to read from instead of the configured one.

        Returns:
            PipelineResult with the classified data and view models. On a
            fetch failure ``success`` is False and the collections are empty.
        """
        start_time = time.time()
        result = PipelineResult(success=False)
        source = source or self._source

        try:
            if source is None:
                raise SourceUnavailableError(
                    message="No review data source configured; set TDD_REVIEW_BACKEND_URL "
                    "or TDD_REVIEW_SOURCE_PATH"
                )

            result.source = source.describe()
            logger.info(f"Starting review pipeline for source: {result.source}")

            payload = source.fetch()
            self._process_payload(payload, result)
            result.success = True

            logger.info(
                f"Review pipeline completed in {time.time() - start_time:.2f}s: "
                f"{result.parsed_data.counts()}"
            )

        except ReviewDataError as e:
            error_msg = f"Review data unavailable: {e}"
            result.errors.append(error_msg)
            result.diagnostics = DiagnosticsCollector(result.source).get_summary()
            logger.warning(error_msg)

        except Exception as e:
            error_msg = f"Review pipeline failed: {str(e)}"
            result.errors.append(error_msg)
            logger.exception(error_msg)

        finally:
            result.processing_time = time.time() - start_time
            self._update_stats(result)

        return result

    def run_text(self, csv_text: str, label: str = "<text>") -> PipelineResult:
        """Run the pipeline over an in-memory CSV (or JSON envelope) body."""
        return self.run(TextReviewSource(csv_text, label=label))

    def parse_text(self, csv_text: str) -> ParsedData:
        """
        Parse and classify a CSV blob without building view models.

        Args:
            csv_text: Raw review CSV text.

        Returns:
            ParsedData whose diagnostics cover both parse and classify stages.
        """
        return self._classify(self._parser.parse(csv_text))

    def _process_payload(self, payload: ReviewPayload, result: PipelineResult) -> None:
        """Parse, classify and build views for a fetched payload."""
        if payload.is_csv:
            parse_result = self._parser.parse(payload.csv_text or "")
        else:
            parse_result = self._parser.parse_records(payload.records or [])

        parsed = self._classify(parse_result)
        result.parsed_data = parsed

        collector = DiagnosticsCollector(payload.source)
        collector.extend(parsed.diagnostics)
        result.diagnostics = collector.get_summary()

        result.content_blocks = self._block_builder.build_all(parsed.edit_types)
        result.rag_table = build_rag_table(parsed.rag_suggestions)
        result.executive_summary = extract_executive_summary(parsed.edit_types)

        if parsed.is_empty():
            warning = f"No usable review rows in {payload.source}"
            result.warnings.append(warning)
            logger.warning(warning)

    def _classify(self, parse_result: ParseResult) -> ParsedData:
        parsed = self._classifier.classify_rows(parse_result.rows)
        parsed.diagnostics = parse_result.diagnostics + parsed.diagnostics
        return parsed

    def _update_stats(self, result: PipelineResult) -> None:
        """Update pipeline statistics."""
        self.stats.total_executions += 1

        if result.success:
            self.stats.successful_executions += 1
        else:
            self.stats.failed_executions += 1

        self.stats.total_processing_time += result.processing_time
        self.stats.average_processing_time = (
            self.stats.total_processing_time / self.stats.total_executions
        )

    def get_stats(self) -> PipelineStats:
        """Get pipeline execution statistics."""
        return self.stats

"""Custom exceptions and diagnostics collection for review data handling."""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ..models.enums import DiagnosticStage
from ..models.rows import ParseDiagnostic


logger = logging.getLogger(__name__)


@dataclass
class ReviewDataError(Exception):
    """
    Base exception for review data errors.

    Provides the source the data came from, a location within it, and
    additional context for logging and API responses.

    Attributes:
        message: Human-readable error description.
        source: URL or file path the data was read from.
        location: Specific location within the data (line, row index).
        details: Additional error details.
    """
    message: str
    source: Optional[str] = None
    location: Optional[str] = None
    details: Optional[dict] = field(default_factory=dict)

    def __post_init__(self):
        if self.details is None:
            self.details = {}
        super().__init__(str(self))

    def __str__(self) -> str:
        parts = [self.message]
        if self.source:
            parts.append(f"Source: {self.source}")
        if self.location:
            parts.append(f"Location: {self.location}")
        return " | ".join(parts)

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "source": self.source,
            "location": self.location,
            "details": self.details,
        }


@dataclass
class SourceUnavailableError(ReviewDataError):
    """
    Raised when the review CSV cannot be fetched.

    Covers network failures, non-success HTTP statuses and missing files.
    Callers treat it as a soft, recoverable condition.
    """

    @property
    def status_code(self) -> Optional[int]:
        """HTTP status returned by the backend, if any."""
        return self.details.get("status_code")


@dataclass
class MalformedPayloadError(ReviewDataError):
    """
    Raised when a fetched payload cannot be interpreted.

    For example a JSON envelope whose ``data`` member is not a list of
    row objects.
    """


class DiagnosticsCollector:
    """
    Collects diagnostics for rows dropped while parsing and classifying.

    Replaces ad-hoc console output with a structured side-channel that is
    returned alongside the parsed data.
    """

    def __init__(self, source: Optional[str] = None):
        self.source = source
        self.diagnostics: List[ParseDiagnostic] = []

    def record(
        self,
        stage: DiagnosticStage,
        reason: str,
        location: Optional[str] = None,
        **detail: str,
    ) -> ParseDiagnostic:
        """Record a dropped row and log it at debug level."""
        diagnostic = ParseDiagnostic(
            stage=stage,
            reason=reason,
            location=location,
            detail={key: str(value) for key, value in detail.items()},
        )
        self.diagnostics.append(diagnostic)
        logger.debug(f"Dropped row ({stage.value}) at {location or 'unknown'}: {reason}")
        return diagnostic

    def extend(self, diagnostics: List[ParseDiagnostic]) -> None:
        self.diagnostics.extend(diagnostics)

    def has_diagnostics(self) -> bool:
        return len(self.diagnostics) > 0

    def by_stage(self, stage: DiagnosticStage) -> List[ParseDiagnostic]:
        return [d for d in self.diagnostics if d.stage == stage]

    def get_summary(self) -> Dict[str, Any]:
        """Get a summary of all recorded diagnostics."""
        reasons: Dict[str, int] = {}
        for diagnostic in self.diagnostics:
            reasons[diagnostic.reason] = reasons.get(diagnostic.reason, 0) + 1
        return {
            "source": self.source,
            "dropped_count": len(self.diagnostics),
            "parse_dropped": len(self.by_stage(DiagnosticStage.PARSE)),
            "classify_dropped": len(self.by_stage(DiagnosticStage.CLASSIFY)),
            "reasons": reasons,
        }

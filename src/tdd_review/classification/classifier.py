"""Row classifier implementation for the TDD review data library.

Routes each validated row into exactly one of the RAG, tone or content
buckets, or discards it. The first matching rule wins:

1. ``edit_type`` mentions "rag suggestion" (any case) -> RAG
2. ``edit_type`` starts with "Tone" -> tone
3. anything else -> content, provided the edit type is a comma-separated
   list containing a recognised category term
"""

import logging
from typing import List, Optional

from ..interfaces.classifier import ClassifiedRow, IRowClassifier
from ..models.enums import DiagnosticStage, RowKind
from ..models.rows import ParsedData, ReviewRow
from ..parsers.exceptions import DiagnosticsCollector
from .rag_extractor import RagExtractor
from .rules import RAG_SUGGESTION_MARKER, TONE_PREFIX, ClassificationRules


logger = logging.getLogger(__name__)


class RowClassifier(IRowClassifier):
    """
    Rule-driven classifier for review rows.

    Discarded rows never reach any output bucket; they are reported
    through the diagnostics attached to the returned ParsedData.
    """

    def __init__(self, rules: Optional[ClassificationRules] = None):
        self._rules = rules or ClassificationRules()
        self._rag_extractor = RagExtractor(self._rules)

    def classify(self, row: ReviewRow) -> ClassifiedRow:
        """
        Classify one validated row.

        Args:
            row: The row to classify.

        Returns:
            ClassifiedRow tagged with the bucket the row belongs to.
        """
        if RAG_SUGGESTION_MARKER in row.edit_type.lower():
            return ClassifiedRow(kind=RowKind.RAG, row=self._rag_extractor.extract(row))

        if row.edit_type.startswith(TONE_PREFIX):
            return ClassifiedRow(kind=RowKind.TONE, row=row)

        reason = self._content_rejection(row)
        if reason:
            return ClassifiedRow(kind=RowKind.DISCARDED, row=row, reason=reason)
        return ClassifiedRow(kind=RowKind.CONTENT, row=row)

    def classify_rows(self, rows: List[ReviewRow]) -> ParsedData:
        """
        Classify rows into RAG, tone and content collections.

        Args:
            rows: Validated rows in source order.

        Returns:
            ParsedData with three disjoint, source-ordered collections and
            a diagnostic for each discarded row.
        """
        result = ParsedData()
        collector = DiagnosticsCollector()

        for index, row in enumerate(rows, start=1):
            classified = self.classify(row)

            if classified.kind == RowKind.RAG:
                result.rag_suggestions.append(classified.row)
            elif classified.kind == RowKind.TONE:
                result.tone_changes.append(classified.row)
            elif classified.kind == RowKind.CONTENT:
                result.edit_types.append(classified.row)
                logger.debug(
                    f"Content recommendation row: section={row.section_name!r} "
                    f"edit_type={row.edit_type!r}"
                )
            else:
                collector.record(
                    DiagnosticStage.CLASSIFY,
                    classified.reason or "unrecognized_edit_type",
                    f"row {index}",
                    section_name=row.section_name,
                    edit_type=row.edit_type,
                )

        result.diagnostics = collector.diagnostics
        logger.info(
            f"Classified {len(rows)} rows: {len(result.rag_suggestions)} RAG, "
            f"{len(result.tone_changes)} tone, {len(result.edit_types)} content, "
            f"{len(result.diagnostics)} discarded"
        )
        return result

    def _content_rejection(self, row: ReviewRow) -> Optional[str]:
        """Return why a content candidate is rejected, or None if it is kept."""
        defect = self._rules.find_defect(row.mandatory_values())
        if defect:
            return defect[0]
        if "," not in row.edit_type:
            return "single_category_edit_type"
        if self._rules.find_vocabulary_term(row.edit_type) is None:
            return "unrecognized_edit_type"
        return None

"""RAG field extraction for rows classified as risk suggestions."""

import logging
from typing import Optional

from ..models.enums import AssessmentVariant, RagAxis
from ..models.rows import RagRow, ReviewRow
from .rules import LENIENT_MARKER, ClassificationRules, RagPhraseMatcher


logger = logging.getLogger(__name__)


class RagExtractor:
    """
    Derives a RagRow from a RAG suggestion row.

    Reads the system name and the safety/cost ratings out of the row's
    free text. The side of the assessment the row does not describe is
    filled with the configured placeholder ratings.
    """

    def __init__(self, rules: Optional[ClassificationRules] = None):
        self._rules = rules or ClassificationRules()
        self._matcher = RagPhraseMatcher(self._rules)

    def variant_of(self, row: ReviewRow) -> AssessmentVariant:
        """Lenient when the edit type mentions it, critical otherwise."""
        if LENIENT_MARKER in row.edit_type.lower():
            return AssessmentVariant.LENIENT
        return AssessmentVariant.CRITICAL

    def extract_system_name(self, row: ReviewRow) -> str:
        """
        Find the system a RAG row refers to.

        Uses the second comma-separated part of the section name, falling
        back to the whole section name. The text before the first colon of
        the proposed revision takes precedence when it is usable.

        The name keeps the case it is written in, since it is shown as the
        RAG table row label; it is never lowercased.
        """
        parts = row.section_name.split(",")
        system_name = parts[1].strip() if len(parts) > 1 and parts[1].strip() else row.section_name

        if ":" in row.proposed_revision:
            candidate = row.proposed_revision.split(":", 1)[0].strip()
            if candidate and candidate != "-":
                system_name = candidate

        return system_name

    def extract(self, row: ReviewRow) -> RagRow:
        """
        Build the RagRow for a RAG suggestion row.

        Args:
            row: A row whose edit type marks it as a RAG suggestion.

        Returns:
            RagRow with one side derived from the row and the other side
            set to placeholder ratings.
        """
        revision = row.proposed_revision
        safety = self._matcher.rate(revision, RagAxis.SAFETY)
        cost = self._matcher.rate(revision, RagAxis.COST)
        variant = self.variant_of(row)
        system_name = self.extract_system_name(row)

        if variant == AssessmentVariant.LENIENT:
            critical_safety, critical_cost = self._rules.critical_placeholder
            rag_row = RagRow(
                **row.mandatory_values(),
                diff_output=row.diff_output,
                system_name=system_name,
                critical_safety=critical_safety,
                critical_cost=critical_cost,
                lenient_safety=safety,
                lenient_cost=cost,
                critical_justification=None,
                lenient_justification=row.justification,
            )
        else:
            lenient_safety, lenient_cost = self._rules.lenient_placeholder
            rag_row = RagRow(
                **row.mandatory_values(),
                diff_output=row.diff_output,
                system_name=system_name,
                critical_safety=safety,
                critical_cost=cost,
                lenient_safety=lenient_safety,
                lenient_cost=lenient_cost,
                critical_justification=row.justification,
                lenient_justification=None,
            )

        logger.debug(
            f"RAG row parsed: system={system_name!r} variant={variant.value} "
            f"safety={safety.value} cost={cost.value}"
        )
        return rag_row

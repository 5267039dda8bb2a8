"""RAG table assembly from classified RAG suggestions."""

from typing import Dict, List

from ..models.enums import RagStatus
from ..models.review import RagAssessment, RagTableRow
from ..models.rows import RagRow


STATUS_CLASSES: Dict[RagStatus, str] = {
    RagStatus.RED: "bg-red-500 text-white",
    RagStatus.AMBER: "bg-amber-500 text-white",
    RagStatus.GREEN: "bg-green-500 text-white",
}


def build_rag_table(rows: List[RagRow]) -> List[RagTableRow]:
    """
    Convert RAG rows into table lines, one per source row.

    Rows are not merged by system: a lenient and a critical suggestion
    for the same system appear as two lines.
    """
    return [
        RagTableRow(
            system=row.system_name,
            section_name=row.section_name,
            critical=RagAssessment(
                safety=row.critical_safety,
                cost=row.critical_cost,
                justification=row.critical_justification,
            ),
            lenient=RagAssessment(
                safety=row.lenient_safety,
                cost=row.lenient_cost,
                justification=row.lenient_justification,
            ),
        )
        for row in rows
    ]


def status_counts(table: List[RagTableRow]) -> Dict[str, Dict[str, int]]:
    """Count ratings per column, e.g. ``counts["critical_safety"]["Red"]``."""
    counts: Dict[str, Dict[str, int]] = {}
    for line in table:
        for column, status in (
            ("critical_safety", line.critical.safety),
            ("critical_cost", line.critical.cost),
            ("lenient_safety", line.lenient.safety),
            ("lenient_cost", line.lenient.cost),
        ):
            column_counts = counts.setdefault(column, {s.value: 0 for s in RagStatus})
            column_counts[status.value] += 1
    return counts


def status_class(status: RagStatus) -> str:
    return STATUS_CLASSES.get(status, "bg-gray-500 text-white")

"""Executive summary extraction from content rows."""

import re
from typing import Dict, List, Tuple

from ..models.review import ExecutiveSummary
from ..models.rows import ReviewRow


SUMMARY_MARKER = "executive summary"

AI_MARKER = re.compile(r"\bai\b", re.IGNORECASE)

# Audience variant -> keywords looked for in the lowercased edit type.
AUDIENCE_KEYWORDS: Dict[str, Tuple[str, ...]] = {
    "concise": ("concise",),
    "buyer": ("buyer", "acquisition"),
    "lender": ("lender", "financing"),
    "owner": ("owner", "management"),
    "seller": ("seller", "vendor"),
}


def extract_executive_summary(rows: List[ReviewRow]) -> ExecutiveSummary:
    """
    Pick the executive summary and its AI variants out of content rows.

    Rows whose edit type mentions "Executive Summary" are considered. The
    first one not marked as AI-generated supplies the original summary;
    AI-marked rows are matched to audiences by keyword, first match wins.
    Every value is taken from the row's proposed revision.
    """
    summary_rows = [row for row in rows if SUMMARY_MARKER in row.edit_type.lower()]
    summary = ExecutiveSummary()
    if not summary_rows:
        return summary

    ai_rows = [row for row in summary_rows if AI_MARKER.search(row.edit_type)]
    for row in summary_rows:
        if not AI_MARKER.search(row.edit_type):
            summary.original = row.proposed_revision
            break

    for audience, keywords in AUDIENCE_KEYWORDS.items():
        for row in ai_rows:
            edit_type = row.edit_type.lower()
            if any(keyword in edit_type for keyword in keywords):
                setattr(summary, audience, row.proposed_revision)
                break

    return summary

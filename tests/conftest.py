"""Shared fixtures for the TDD review data tests."""

from typing import Dict, List

import pytest


SAMPLE_RECORDS: List[Dict[str, str]] = [
    {
        "section_name": "Page 4, Introduction (Section 1)",
        "original_text": "The is a office building covering ground to 6th floors that are occupiable.",
        "proposed_revision": "The property is an office building comprising ground to sixth floors, all of which are occupiable.",
        "justification": "Corrects 'The is a' to 'The property is an', changes '6th' to 'sixth' and replaces 'covering' with 'comprising'.",
        "edit_type": "Grammar, Clarity, Internal Consistency, Professionalism & Presentation",
    },
    {
        "section_name": "Page 5, Executive Summary (Section 2)",
        "original_text": "The building is provided with an on site utility transformer and meter within an external enclosure as is the gas supply.",
        "proposed_revision": "The building is provided with an on-site utility transformer and meter within an external enclosure, as is the gas supply.",
        "justification": "Hyphenated 'on-site' as it is used as a compound adjective.",
        "edit_type": "Grammar, Formatting",
    },
    {
        "section_name": "Page 8, Survey Report (Section 3)",
        "original_text": "The heating Dating back to construction circa 1980 two of the original three Hoval sectional boilers are still in situ.",
        "proposed_revision": "Regarding the heating system, two of the original three Hoval sectional boilers (circa 1980) are still in situ.",
        "justification": "Restructures the original text to correct significant grammatical errors and improve clarity.",
        "edit_type": "Clarity, Grammar, Professionalism & Presentation, Technical Accuracy",
    },
    {
        "section_name": "Page 9, Survey Report (Section 3)",
        "original_text": "The secondary circulation for the heating serving the roof void Air Handling units and building wide Fan Coil units.",
        "proposed_revision": "The secondary circulation for heating, which serves the roof void Air Handling Units and building-wide Fan Coil Units.",
        "justification": "Uses consistent capitalisation for defined systems and correct hyphenation for 'building-wide'.",
        "edit_type": "Grammar, Clarity, Technical Accuracy, Professionalism & Presentation",
    },
    {
        "section_name": "Page 10, Survey Report (Section 3)",
        "original_text": "A building wide Fire alarm panel and system is provided located within the data room adjacent to reception.",
        "proposed_revision": "A building-wide fire alarm panel and system are located within the data room adjacent to reception.",
        "justification": "Hyphenates 'building-wide' and corrects subject-verb agreement.",
        "edit_type": "Grammar, Professionalism & Presentation, Formatting",
    },
    {
        "section_name": "Page 6, Executive Summary (Section 2)",
        "original_text": "-",
        "proposed_revision": "Heating, Cooling & Ventilation: Safety change to Green, Operation / Cost change to Amber",
        "justification": "Safety is Green because new boilers are in place. Operation/Cost is Amber due to old fan coil units.",
        "edit_type": "RAG suggestion (lenient)",
    },
    {
        "section_name": "Page 7, Survey Report (Section 3)",
        "original_text": "-",
        "proposed_revision": "Cooling System / BMS: Safety change to Red, Operation / Cost change to Amber",
        "justification": "Safety is Red due to critical system failures and potential hazards.",
        "edit_type": "RAG suggestion (critical)",
    },
    {
        "section_name": "Page 8, Survey Report (Section 3)",
        "original_text": "-",
        "proposed_revision": "Electrical Supply & Distribution: Safety change to Amber, Operation / Cost change to Green",
        "justification": "Safety is Amber due to aging infrastructure concerns.",
        "edit_type": "RAG suggestion (lenient)",
    },
]

HEADER = "section_name,original_text,proposed_revision,justification,edit_type"


def quote_field(value: str) -> str:
    """Wrap a value in double quotes, escaping internal quotes with a backslash."""
    return '"' + value.replace("\\", "\\\\").replace('"', '\\"') + '"'


def to_csv(records: List[Dict[str, str]], header: bool = True) -> str:
    """Render records in the review CSV layout."""
    lines = [HEADER] if header else []
    for record in records:
        lines.append(",".join(
            quote_field(record[name])
            for name in ("section_name", "original_text", "proposed_revision", "justification", "edit_type")
        ))
    return "\n".join(lines) + "\n"


@pytest.fixture
def sample_records() -> List[Dict[str, str]]:
    return [dict(record) for record in SAMPLE_RECORDS]


@pytest.fixture
def sample_csv() -> str:
    return to_csv(SAMPLE_RECORDS)


@pytest.fixture
def make_csv():
    """Build review CSV text from record dictionaries."""
    return to_csv

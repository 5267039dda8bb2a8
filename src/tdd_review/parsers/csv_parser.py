"""Review CSV parser implementation.

This module implements the IReviewCSVParser interface. It tokenizes the
semi-structured CSV exported by the analysis backend line by line,
cleans each field and drops rows that fail validation.
"""

import logging
from typing import Any, Dict, List, Optional, Tuple

from ..classification.rules import ClassificationRules
from ..interfaces.parser import IReviewCSVParser, ParseResult
from ..models.enums import DiagnosticStage
from ..models.rows import MANDATORY_FIELDS, ReviewRow
from .exceptions import DiagnosticsCollector


logger = logging.getLogger(__name__)

MIN_FIELD_COUNT = len(MANDATORY_FIELDS)

QUOTE = '"'
ESCAPE = "\\"
DELIMITER = ","


class _FieldBuffer:
    """
    Characters of one field, each flagged as escaped or structural.

    Escaped characters are always literal: they are never trimmed as
    outer quotes nor collapsed as doubled quotes.
    """

    def __init__(self):
        self._chars: List[Tuple[str, bool]] = []

    def append(self, char: str, escaped: bool = False) -> None:
        self._chars.append((char, escaped))

    def clean(self) -> str:
        """Trim, strip one layer of outer quotes, collapse doubled quotes."""
        chars = self._strip_whitespace(self._chars)
        if chars and chars[0] == (QUOTE, False):
            chars = chars[1:]
        if chars and chars[-1] == (QUOTE, False):
            chars = chars[:-1]

        collapsed: List[str] = []
        previous_quote = False
        for char, escaped in chars:
            is_quote = char == QUOTE and not escaped
            if is_quote and previous_quote:
                previous_quote = False
                continue
            collapsed.append(char)
            previous_quote = is_quote
        return "".join(collapsed).strip()

    @staticmethod
    def _strip_whitespace(chars: List[Tuple[str, bool]]) -> List[Tuple[str, bool]]:
        start, end = 0, len(chars)
        while start < end and chars[start][0].isspace() and not chars[start][1]:
            start += 1
        while end > start and chars[end - 1][0].isspace() and not chars[end - 1][1]:
            end -= 1
        return chars[start:end]


def clean_field(value: str) -> str:
    """Clean a field that arrived already separated, as a CSV field would be."""
    buffer = _FieldBuffer()
    for char in value:
        buffer.append(char)
    return buffer.clean()


def split_line(line: str) -> Tuple[List[str], bool]:
    """
    Split one CSV line into cleaned fields.

    A backslash makes the next character literal, an unescaped double
    quote toggles quoting, and an unescaped comma outside quotes ends the
    current field.

    Args:
        line: A single physical line of CSV text.

    Returns:
        Tuple of (cleaned fields, whether the line ended inside quotes).
    """
    fields: List[str] = []
    current = _FieldBuffer()
    in_quotes = False
    escape_next = False

    for char in line:
        if escape_next:
            current.append(char, escaped=True)
            escape_next = False
            continue

        if char == ESCAPE:
            escape_next = True
            continue

        if char == QUOTE:
            in_quotes = not in_quotes
            current.append(char)
        elif char == DELIMITER and not in_quotes:
            fields.append(current.clean())
            current = _FieldBuffer()
        else:
            current.append(char)

    fields.append(current.clean())
    return fields, in_quotes


class ReviewCSVParser(IReviewCSVParser):
    """
    Line-oriented parser for the review CSV.

    Embedded newlines inside quoted fields are not supported: every
    physical line is parsed on its own and quoting state never carries
    over to the next line.
    """

    def __init__(self, rules: Optional[ClassificationRules] = None):
        self._rules = rules or ClassificationRules()

    def parse(self, csv_text: str) -> ParseResult:
        """
        Parse a CSV text blob into validated rows.

        Args:
            csv_text: Raw CSV text, optionally starting with a header line.

        Returns:
            ParseResult with the retained rows and drop diagnostics.
        """
        collector = DiagnosticsCollector()
        rows: List[ReviewRow] = []

        lines = [
            (number, line.rstrip("\r"))
            for number, line in enumerate(csv_text.split("\n"), start=1)
            if line.strip()
        ]
        if lines and self._rules.header_marker in lines[0][1]:
            lines = lines[1:]

        for number, line in lines:
            location = f"line {number}"
            fields, unbalanced = split_line(line)
            if unbalanced:
                logger.debug(f"Unbalanced quotes at {location}")

            if len(fields) < MIN_FIELD_COUNT:
                collector.record(
                    DiagnosticStage.PARSE,
                    "too_few_fields",
                    location,
                    field_count=str(len(fields)),
                )
                continue

            row = ReviewRow(
                section_name=fields[0],
                original_text=fields[1],
                proposed_revision=fields[2],
                justification=fields[3],
                edit_type=fields[4],
                diff_output=fields[5] if len(fields) > 5 else "",
            )
            if self._accept(row, location, collector):
                rows.append(row)

        logger.info(f"Parsed {len(lines)} raw CSV lines, kept {len(rows)} valid rows")
        return ParseResult(rows=rows, diagnostics=collector.diagnostics, line_count=len(lines))

    def parse_records(self, records: List[Dict[str, Any]]) -> ParseResult:
        """
        Clean and validate rows that arrive already split into fields.

        Args:
            records: Row objects keyed by column name.

        Returns:
            ParseResult with the retained rows and drop diagnostics.
        """
        collector = DiagnosticsCollector()
        rows: List[ReviewRow] = []

        for index, record in enumerate(records, start=1):
            location = f"record {index}"
            if not isinstance(record, dict):
                collector.record(DiagnosticStage.PARSE, "not_an_object", location)
                continue

            values = {
                name: self._text(record.get(name))
                for name in MANDATORY_FIELDS + ("diff_output",)
            }
            row = ReviewRow(**values)
            if self._accept(row, location, collector):
                rows.append(row)

        logger.info(f"Parsed {len(records)} review records, kept {len(rows)} valid rows")
        return ParseResult(rows=rows, diagnostics=collector.diagnostics, line_count=len(records))

    def validate(self, row: ReviewRow) -> Optional[Tuple[str, str]]:
        """
        Check a row against the mandatory-field and sentinel rules.

        Args:
            row: The row to check.

        Returns:
            None when the row is valid, otherwise (reason, field name).
        """
        return self._rules.find_defect(row.mandatory_values())

    def _accept(self, row: ReviewRow, location: str, collector: DiagnosticsCollector) -> bool:
        failure = self.validate(row)
        if failure is None:
            return True
        reason, field_name = failure
        collector.record(
            DiagnosticStage.PARSE,
            reason,
            location,
            field=field_name,
            section_name=row.section_name,
        )
        return False

    @staticmethod
    def _text(value: Any) -> str:
        if value is None:
            return ""
        return clean_field(str(value))

"""Serialization and deserialization utilities for parsed review data."""

import json
from typing import Any, Optional

from ..models.enums import DiagnosticStage, RagStatus
from ..models.rows import MANDATORY_FIELDS, ParseDiagnostic, ParsedData, RagRow, ReviewRow


class ParsedDataSerializer:
    """
    Handles serialization and deserialization of ParsedData structures.

    Field names follow the CSV column names so the JSON stays readable
    next to the source export. Ensures deserialize(serialize(data)) == data.
    """

    @staticmethod
    def serialize(data: ParsedData, indent: Optional[int] = 2) -> str:
        """
        Serialize ParsedData to a JSON string.

        Args:
            data: The ParsedData to serialize.
            indent: JSON indentation, None for compact output.

        Returns:
            JSON string representation of the data.
        """
        return json.dumps(
            ParsedDataSerializer.to_dict(data),
            ensure_ascii=False,
            indent=indent,
        )

    @staticmethod
    def deserialize(json_str: str) -> ParsedData:
        """
        Deserialize a JSON string to ParsedData.

        Raises:
            ValueError: If the JSON is invalid or malformed.
        """
        try:
            data = json.loads(json_str)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON: {str(e)}")

        return ParsedDataSerializer.from_dict(data)

    @staticmethod
    def to_dict(data: ParsedData) -> dict[str, Any]:
        """Convert ParsedData to a JSON-compatible dictionary."""
        return {
            "rag_suggestions": [ParsedDataSerializer._rag_row_to_dict(r) for r in data.rag_suggestions],
            "tone_changes": [ParsedDataSerializer._row_to_dict(r) for r in data.tone_changes],
            "edit_types": [ParsedDataSerializer._row_to_dict(r) for r in data.edit_types],
            "diagnostics": [d.to_dict() for d in data.diagnostics],
        }

    @staticmethod
    def from_dict(data: dict[str, Any]) -> ParsedData:
        """Convert a dictionary back to ParsedData."""
        if not isinstance(data, dict):
            raise ValueError("Expected dictionary for ParsedData")

        return ParsedData(
            rag_suggestions=[ParsedDataSerializer._dict_to_rag_row(r) for r in data.get("rag_suggestions", [])],
            tone_changes=[ParsedDataSerializer._dict_to_row(r) for r in data.get("tone_changes", [])],
            edit_types=[ParsedDataSerializer._dict_to_row(r) for r in data.get("edit_types", [])],
            diagnostics=[ParsedDataSerializer._dict_to_diagnostic(d) for d in data.get("diagnostics", [])],
        )

    @staticmethod
    def _row_to_dict(row: ReviewRow) -> dict[str, Any]:
        """Convert ReviewRow to dictionary."""
        result: dict[str, Any] = dict(row.mandatory_values())
        result["diff_output"] = row.diff_output
        return result

    @staticmethod
    def _dict_to_row(data: dict[str, Any]) -> ReviewRow:
        """Convert dictionary to ReviewRow."""
        if not isinstance(data, dict):
            raise ValueError("Expected dictionary for ReviewRow")

        for field in MANDATORY_FIELDS:
            if field not in data:
                raise ValueError(f"Missing required field '{field}' in ReviewRow")

        return ReviewRow(
            section_name=data["section_name"],
            original_text=data["original_text"],
            proposed_revision=data["proposed_revision"],
            justification=data["justification"],
            edit_type=data["edit_type"],
            diff_output=data.get("diff_output", ""),
        )

    @staticmethod
    def _rag_row_to_dict(row: RagRow) -> dict[str, Any]:
        """Convert RagRow to dictionary."""
        result = ParsedDataSerializer._row_to_dict(row)
        result.update({
            "system_name": row.system_name,
            "critical_safety": row.critical_safety.value,
            "critical_cost": row.critical_cost.value,
            "lenient_safety": row.lenient_safety.value,
            "lenient_cost": row.lenient_cost.value,
            "critical_justification": row.critical_justification,
            "lenient_justification": row.lenient_justification,
        })
        return result

    @staticmethod
    def _dict_to_rag_row(data: dict[str, Any]) -> RagRow:
        """Convert dictionary to RagRow."""
        base = ParsedDataSerializer._dict_to_row(data)

        required_fields = ["system_name", "critical_safety", "critical_cost", "lenient_safety", "lenient_cost"]
        for field in required_fields:
            if field not in data:
                raise ValueError(f"Missing required field '{field}' in RagRow")

        try:
            return RagRow(
                **base.mandatory_values(),
                diff_output=base.diff_output,
                system_name=data["system_name"],
                critical_safety=RagStatus(data["critical_safety"]),
                critical_cost=RagStatus(data["critical_cost"]),
                lenient_safety=RagStatus(data["lenient_safety"]),
                lenient_cost=RagStatus(data["lenient_cost"]),
                critical_justification=data.get("critical_justification"),
                lenient_justification=data.get("lenient_justification"),
            )
        except ValueError as e:
            raise ValueError(f"Invalid RAG status in RagRow: {str(e)}")

    @staticmethod
    def _dict_to_diagnostic(data: dict[str, Any]) -> ParseDiagnostic:
        """Convert dictionary to ParseDiagnostic."""
        if not isinstance(data, dict) or "stage" not in data or "reason" not in data:
            raise ValueError("Expected dictionary with 'stage' and 'reason' for ParseDiagnostic")

        return ParseDiagnostic(
            stage=DiagnosticStage(data["stage"]),
            reason=data["reason"],
            location=data.get("location"),
            detail=data.get("detail", {}),
        )


def serialize_parsed_data(data: ParsedData) -> str:
    """Convenience function to serialize ParsedData."""
    return ParsedDataSerializer.serialize(data)


def deserialize_parsed_data(json_str: str) -> ParsedData:
    """Convenience function to deserialize ParsedData."""
    return ParsedDataSerializer.deserialize(json_str)

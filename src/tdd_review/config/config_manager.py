"""Configuration Manager implementation for the TDD review data library.

This module loads, validates and persists the classification rule tables:
the content vocabulary and sentinel phrases, the RAG phrase rules, and the
static word-change table.
"""

import json
import logging
from dataclasses import replace
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

from ..classification.rules import ClassificationRules, RagPhraseRule, WordChangeEntry
from ..models.enums import ChangeCategory, RagAxis, RagStatus
from .models import (
    CONFIGURATION_FILES,
    ConfigurationError,
    ConfigurationType,
    ValidationResult,
)


logger = logging.getLogger(__name__)

Source = Union[str, Path, Dict[str, Any], List[Dict[str, Any]]]


class ConfigurationManager:
    """
    Manager for classification configuration.

    Starts from the built-in rule tables and replaces sections as they
    are loaded. Every load validates its input first and raises
    ConfigurationError without applying anything when validation fails.
    """

    def __init__(self, config_dir: Optional[Union[str, Path]] = None):
        """
        Initialize the configuration manager.

        Args:
            config_dir: Optional directory path for configuration files.
        """
        self._config_dir = Path(config_dir) if config_dir else None
        self._rules = ClassificationRules()
        self._is_loaded = False

    @property
    def rules(self) -> ClassificationRules:
        """Get the current classification rules."""
        return self._rules

    @property
    def is_loaded(self) -> bool:
        """Check if any configuration has been loaded."""
        return self._is_loaded

    # =========================================================================
    # Vocabulary and sentinel phrases
    # =========================================================================

    def load_vocabulary(self, source: Source) -> ValidationResult:
        """
        Load the content vocabulary and row sentinel phrases.

        Recognised keys: ``content_vocabulary``, ``malformed_markers``,
        ``leakage_phrases`` and ``header_marker``. Keys that are absent
        keep their current values.

        Args:
            source: File path or dictionary.

        Returns:
            ValidationResult indicating success with any warnings.

        Raises:
            ConfigurationError: If validation fails.
        """
        data = self._parse_source(source)
        result = ValidationResult(is_valid=True)

        if not isinstance(data, dict):
            result.add_error("Vocabulary configuration must be an object")
            raise ConfigurationError("Vocabulary validation failed", validation_result=result)

        updates: Dict[str, Any] = {}
        for key in ("content_vocabulary", "malformed_markers", "leakage_phrases"):
            if key not in data:
                continue
            values = data[key]
            if not isinstance(values, list) or not all(isinstance(v, str) and v.strip() for v in values):
                result.add_error(f"'{key}' must be a list of non-empty strings")
                continue
            updates[key] = [v.strip() for v in values]

        if "content_vocabulary" in updates and not updates["content_vocabulary"]:
            result.add_error("'content_vocabulary' must not be empty")

        if "header_marker" in data:
            marker = data["header_marker"]
            if not isinstance(marker, str) or not marker.strip():
                result.add_error("'header_marker' must be a non-empty string")
            else:
                updates["header_marker"] = marker.strip()

        unknown = set(data) - {"content_vocabulary", "malformed_markers", "leakage_phrases", "header_marker"}
        if unknown:
            result.add_warning(f"Unknown vocabulary keys ignored: {sorted(unknown)}")

        if not result.is_valid:
            raise ConfigurationError("Vocabulary validation failed", validation_result=result)

        self._rules = replace(self._rules, **updates)
        self._is_loaded = True
        return result

    # =========================================================================
    # RAG phrase rules
    # =========================================================================

    def load_rag_rules(self, source: Source) -> ValidationResult:
        """
        Load RAG phrase rules.

        Accepts a list of rule objects or an object with a ``rules`` list
        and optional ``default``, ``lenient_placeholder`` and
        ``critical_placeholder`` settings.

        Args:
            source: File path, dictionary, or list of dictionaries.

        Returns:
            ValidationResult indicating success with any warnings.

        Raises:
            ConfigurationError: If validation fails.
        """
        raw_data = self._parse_source(source)
        settings: Dict[str, Any] = {}

        replace_rules = True
        if isinstance(raw_data, dict):
            replace_rules = "rules" in raw_data
            rules_data = raw_data.get("rules", [])
            settings = raw_data
        else:
            rules_data = raw_data

        result = ValidationResult(is_valid=True)
        rules: List[RagPhraseRule] = []

        if not isinstance(rules_data, list):
            result.add_error("'rules' must be a list")
            rules_data = []

        for i, rule_dict in enumerate(rules_data):
            rule_result, rule = self._validate_rag_rule(rule_dict, index=i)
            result = result.merge(rule_result)
            if rule:
                rules.append(rule)

        ids = [r.id for r in rules]
        duplicates = [id for id in ids if ids.count(id) > 1]
        if duplicates:
            result.add_error(f"Duplicate RAG rule IDs found: {set(duplicates)}")

        updates: Dict[str, Any] = {}
        if replace_rules:
            updates["rag_rules"] = rules

        if "default" in settings:
            status = self._parse_status(settings["default"])
            if status is None:
                result.add_error(f"'default' must be one of {[s.value for s in RagStatus]}")
            else:
                updates["rag_default"] = status

        for key, attribute in (
            ("lenient_placeholder", "lenient_placeholder"),
            ("critical_placeholder", "critical_placeholder"),
        ):
            if key in settings:
                placeholder = self._parse_placeholder(settings[key])
                if placeholder is None:
                    result.add_error(f"'{key}' must have 'safety' and 'cost' RAG statuses")
                else:
                    updates[attribute] = placeholder

        active_rules = rules if replace_rules else self._rules.rag_rules
        for axis in RagAxis:
            if not any(rule.axis == axis for rule in active_rules):
                result.add_warning(f"No RAG rules for axis '{axis.value}'; every row will use the default")

        if not result.is_valid:
            raise ConfigurationError("RAG rule validation failed", validation_result=result)

        self._rules = replace(self._rules, **updates)
        self._is_loaded = True
        return result

    def _validate_rag_rule(
        self,
        data: Dict[str, Any],
        index: int = 0
    ) -> Tuple[ValidationResult, Optional[RagPhraseRule]]:
        """Validate a single RAG rule dictionary."""
        result = ValidationResult(is_valid=True)
        prefix = f"RAG rule [{index}]"

        if not isinstance(data, dict):
            result.add_error(f"{prefix}: Expected an object")
            return result, None

        required_fields = ["id", "axis", "status", "phrases"]
        for field in required_fields:
            if field not in data:
                result.add_error(f"{prefix}: Missing required field '{field}'")

        if not result.is_valid:
            return result, None

        if not isinstance(data["id"], str) or not data["id"].strip():
            result.add_error(f"{prefix}: 'id' must be a non-empty string")

        valid_axes = [a.value for a in RagAxis]
        if data["axis"] not in valid_axes:
            result.add_error(f"{prefix}: 'axis' must be one of {valid_axes}")

        status = self._parse_status(data["status"])
        if status is None:
            result.add_error(f"{prefix}: 'status' must be one of {[s.value for s in RagStatus]}")

        phrases = data["phrases"]
        if not isinstance(phrases, list) or not phrases:
            result.add_error(f"{prefix}: 'phrases' must be a non-empty list")
        elif not all(isinstance(p, str) and p.strip() for p in phrases):
            result.add_error(f"{prefix}: All phrases must be non-empty strings")

        priority = data.get("priority", 0)
        if not isinstance(priority, int):
            result.add_error(f"{prefix}: 'priority' must be an integer")

        if not result.is_valid:
            return result, None

        rule = RagPhraseRule(
            axis=RagAxis(data["axis"]),
            status=status,
            phrases=[p.strip().lower() for p in phrases],
            priority=priority,
            id=data["id"].strip(),
        )
        return result, rule

    # =========================================================================
    # Word-change table
    # =========================================================================

    def load_word_changes(self, source: Source) -> ValidationResult:
        """
        Load the static word-change table.

        Args:
            source: File path, object with a ``word_changes`` list, or list.

        Returns:
            ValidationResult indicating success with any warnings.

        Raises:
            ConfigurationError: If validation fails.
        """
        raw_data = self._parse_source(source)
        if isinstance(raw_data, dict):
            entries_data = raw_data.get("word_changes", [])
        else:
            entries_data = raw_data

        result = ValidationResult(is_valid=True)
        entries: List[WordChangeEntry] = []
        valid_categories = [c.value for c in ChangeCategory]

        if not isinstance(entries_data, list):
            result.add_error("'word_changes' must be a list")
            entries_data = []

        for i, entry in enumerate(entries_data):
            prefix = f"Word change [{i}]"
            if not isinstance(entry, dict):
                result.add_error(f"{prefix}: Expected an object")
                continue
            missing = [f for f in ("tag", "original", "corrected") if f not in entry]
            if missing:
                for field in missing:
                    result.add_error(f"{prefix}: Missing required field '{field}'")
                continue
            if not isinstance(entry["original"], str) or not entry["original"]:
                result.add_error(f"{prefix}: 'original' must be a non-empty string")
                continue
            category = entry.get("category", ChangeCategory.OTHER.value)
            if category not in valid_categories:
                result.add_error(f"{prefix}: 'category' must be one of {valid_categories}")
                continue
            entries.append(
                WordChangeEntry(
                    tag=str(entry["tag"]).strip(),
                    original=entry["original"],
                    corrected=str(entry["corrected"]),
                    category=ChangeCategory(category),
                )
            )

        if not result.is_valid:
            raise ConfigurationError("Word change validation failed", validation_result=result)

        self._rules = replace(self._rules, word_changes=entries)
        self._is_loaded = True
        return result

    # =========================================================================
    # Whole-configuration validation
    # =========================================================================

    def validate_configuration(self) -> ValidationResult:
        """
        Validate the consistency of the current rule set.

        Returns:
            ValidationResult with errors for unusable settings and warnings
            for suspicious ones.
        """
        result = ValidationResult(is_valid=True)

        if not self._rules.content_vocabulary:
            result.add_error("Content vocabulary is empty; no content rows can be kept")

        for axis in RagAxis:
            if not self._rules.rules_for(axis):
                result.add_warning(f"No RAG rules for axis '{axis.value}'")

        seen_phrases: Dict[Tuple[str, str], str] = {}
        for rule in self._rules.rag_rules:
            for phrase in rule.phrases:
                key = (rule.axis.value, phrase.lower())
                if key in seen_phrases and seen_phrases[key] != rule.id:
                    result.add_warning(
                        f"Phrase '{phrase}' on axis '{rule.axis.value}' appears in rules "
                        f"'{seen_phrases[key]}' and '{rule.id}'"
                    )
                seen_phrases.setdefault(key, rule.id)

        for entry in self._rules.word_changes:
            if entry.original == entry.corrected:
                result.add_warning(f"Word change for tag '{entry.tag}' does not change '{entry.original}'")

        return result

    # =========================================================================
    # Utility Methods
    # =========================================================================

    def _parse_source(self, source: Source) -> Union[Dict[str, Any], List[Dict[str, Any]]]:
        """Parse configuration source to raw data."""
        if isinstance(source, (str, Path)):
            path = Path(source)
            if not path.exists():
                raise ConfigurationError(f"Configuration file not found: {path}")

            try:
                with open(path, "r", encoding="utf-8") as f:
                    return json.load(f)
            except json.JSONDecodeError as e:
                raise ConfigurationError(f"Invalid JSON in {path}: {e}")

        return source

    @staticmethod
    def _parse_status(value: Any) -> Optional[RagStatus]:
        if not isinstance(value, str):
            return None
        for status in RagStatus:
            if status.value.lower() == value.strip().lower():
                return status
        return None

    def _parse_placeholder(self, value: Any) -> Optional[Tuple[RagStatus, RagStatus]]:
        if not isinstance(value, dict):
            return None
        safety = self._parse_status(value.get("safety"))
        cost = self._parse_status(value.get("cost"))
        if safety is None or cost is None:
            return None
        return safety, cost

    def load_from_directory(self, config_dir: Union[str, Path]) -> ValidationResult:
        """
        Load all configuration files from a directory.

        Expects files named:
        - vocabulary.json
        - rag_rules.json
        - word_changes.json

        Missing files leave the built-in tables in place.

        Args:
            config_dir: Directory containing configuration files.

        Returns:
            Combined ValidationResult for all loaded configurations.
        """
        config_dir = Path(config_dir)
        result = ValidationResult(is_valid=True)

        loaders = {
            ConfigurationType.VOCABULARY: self.load_vocabulary,
            ConfigurationType.RAG_RULES: self.load_rag_rules,
            ConfigurationType.WORD_CHANGES: self.load_word_changes,
        }

        for config_type, loader in loaders.items():
            path = config_dir / CONFIGURATION_FILES[config_type]
            if not path.exists():
                continue
            try:
                result = result.merge(loader(path))
                logger.info(f"Loaded {config_type.value} configuration from {path}")
            except ConfigurationError as e:
                result.add_error(f"{config_type.value} loading failed: {e.message}")
                if e.validation_result:
                    result = result.merge(e.validation_result)

        self._config_dir = config_dir
        return result

    def save_to_directory(self, config_dir: Optional[Union[str, Path]] = None) -> None:
        """
        Save current configuration to a directory.

        Args:
            config_dir: Directory to save to. Uses current config_dir if None.
        """
        config_dir = Path(config_dir) if config_dir else self._config_dir
        if not config_dir:
            raise ConfigurationError("No configuration directory specified")

        config_dir.mkdir(parents=True, exist_ok=True)
        data = self.to_dict()

        sections = {
            ConfigurationType.VOCABULARY: data["vocabulary"],
            ConfigurationType.RAG_RULES: data["rag_rules"],
            ConfigurationType.WORD_CHANGES: {"word_changes": data["word_changes"]},
        }
        for config_type, section in sections.items():
            with open(config_dir / CONFIGURATION_FILES[config_type], "w", encoding="utf-8") as f:
                json.dump(section, f, indent=2, ensure_ascii=False)

    def reset(self) -> None:
        """Reset configuration to the built-in tables."""
        self._rules = ClassificationRules()
        self._is_loaded = False

    def to_dict(self) -> Dict[str, Any]:
        """Export current configuration as a dictionary."""
        rules = self._rules
        return {
            "vocabulary": {
                "header_marker": rules.header_marker,
                "content_vocabulary": list(rules.content_vocabulary),
                "malformed_markers": list(rules.malformed_markers),
                "leakage_phrases": list(rules.leakage_phrases),
            },
            "rag_rules": {
                "default": rules.rag_default.value,
                "lenient_placeholder": {
                    "safety": rules.lenient_placeholder[0].value,
                    "cost": rules.lenient_placeholder[1].value,
                },
                "critical_placeholder": {
                    "safety": rules.critical_placeholder[0].value,
                    "cost": rules.critical_placeholder[1].value,
                },
                "rules": [
                    {
                        "id": r.id,
                        "axis": r.axis.value,
                        "status": r.status.value,
                        "phrases": list(r.phrases),
                        "priority": r.priority,
                    }
                    for r in rules.rag_rules
                ],
            },
            "word_changes": [
                {
                    "tag": e.tag,
                    "original": e.original,
                    "corrected": e.corrected,
                    "category": e.category.value,
                }
                for e in rules.word_changes
            ],
        }

"""Configuration management for the TDD review data library."""

from .config_manager import ConfigurationManager
from .models import (
    CONFIGURATION_FILES,
    ConfigurationError,
    ConfigurationType,
    ValidationResult,
)

__all__ = [
    "ConfigurationManager",
    "CONFIGURATION_FILES",
    "ConfigurationError",
    "ConfigurationType",
    "ValidationResult",
]

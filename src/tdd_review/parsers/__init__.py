"""Review CSV parsing for the TDD review data library."""

from .csv_parser import ReviewCSVParser, clean_field, split_line
from .serialization import (
    ParsedDataSerializer,
    deserialize_parsed_data,
    serialize_parsed_data,
)
from .exceptions import (
    DiagnosticsCollector,
    MalformedPayloadError,
    ReviewDataError,
    SourceUnavailableError,
)

__all__ = [
    "ReviewCSVParser",
    "split_line",
    "clean_field",
    "ParsedDataSerializer",
    "serialize_parsed_data",
    "deserialize_parsed_data",
    "DiagnosticsCollector",
    "MalformedPayloadError",
    "ReviewDataError",
    "SourceUnavailableError",
]

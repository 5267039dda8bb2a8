"""Review view models for the TDD review data library."""

from .content_blocks import ContentBlockBuilder
from .executive_summary import extract_executive_summary
from .filters import ALL_PAGES, apply_filters, filter_by_page, filter_by_tags, page_options, tag_options
from .inline_highlighter import InlineHighlighter
from .rag_table import build_rag_table, status_class, status_counts
from .view_renderer import ReportRenderer
from .word_changes import (
    DiffWordChangeStrategy,
    StaticWordChangeStrategy,
    get_word_change_strategy,
)

__all__ = [
    "ContentBlockBuilder",
    "extract_executive_summary",
    "ALL_PAGES",
    "apply_filters",
    "filter_by_page",
    "filter_by_tags",
    "page_options",
    "tag_options",
    "InlineHighlighter",
    "build_rag_table",
    "status_class",
    "status_counts",
    "ReportRenderer",
    "DiffWordChangeStrategy",
    "StaticWordChangeStrategy",
    "get_word_change_strategy",
]

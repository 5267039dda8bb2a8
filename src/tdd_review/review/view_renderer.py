"""HTML report rendering for review pipeline results."""

import os
from typing import Dict, Iterable, List, Optional

from jinja2 import Environment, FileSystemLoader, select_autoescape

from ..models.review import ContentBlock, RagTableRow
from .filters import apply_filters, page_options, tag_options
from .inline_highlighter import InlineHighlighter
from .rag_table import status_class, status_counts


class ReportRenderer:
    """
    Renders a review report for a pipeline result.

    Uses Jinja2 templates to generate an HTML page with the content
    suggestions, the RAG table and the executive summary.
    """

    def __init__(
        self,
        template_dir: Optional[str] = None,
        highlighter: Optional[InlineHighlighter] = None,
    ):
        """
        Initialize the report renderer.

        Args:
            template_dir: Directory containing Jinja2 templates.
                         If not provided, uses the package templates directory.
            highlighter: Supplies the CSS classes for tag badges.
        """
        if template_dir is None:
            template_dir = os.path.join(os.path.dirname(os.path.dirname(__file__)), "templates")

        self.template_dir = template_dir
        self.highlighter = highlighter or InlineHighlighter()
        self.env = Environment(
            loader=FileSystemLoader(template_dir),
            autoescape=select_autoescape(['html', 'xml'])
        )
        self.env.globals["status_class"] = status_class
        self.env.globals["tag_class"] = self.highlighter.tag_class

    def render_report(
        self,
        result,
        page: Optional[str] = None,
        tags: Optional[Iterable[str]] = None,
    ) -> str:
        """
        Render the review report.

        Args:
            result: PipelineResult to render.
            page: Optional page filter for the content suggestions.
            tags: Optional tag filter for the content suggestions.

        Returns:
            HTML string for the report.
        """
        blocks = apply_filters(result.content_blocks, page=page, tags=tags)

        template = self.env.get_template('review_report.html')
        return template.render(
            success=result.success,
            source=result.source or '',
            errors=result.errors,
            warnings=result.warnings,
            counts=result.parsed_data.counts(),
            blocks=self._prepare_blocks(blocks),
            page_options=page_options(result.content_blocks),
            tag_options=tag_options(result.content_blocks),
            selected_page=page or '',
            selected_tags=list(tags or []),
            rag_rows=self._prepare_rag_rows(result.rag_table),
            rag_counts=status_counts(result.rag_table),
            summary=result.executive_summary,
        )

    def _prepare_blocks(self, blocks: List[ContentBlock]) -> List[Dict]:
        """Convert content blocks to template-friendly format."""
        return [
            {
                'id': block.id,
                'page': block.page,
                'revised_text': block.revised_text,
                'justification': block.justification,
                'edit_types': block.edit_types,
                'inline_html': block.inline_html,
                'change_count': len(block.word_changes),
            }
            for block in blocks
        ]

    def _prepare_rag_rows(self, table: List[RagTableRow]) -> List[Dict]:
        """Convert RAG table lines to template-friendly format."""
        return [
            {
                'system': line.system,
                'section_name': line.section_name,
                'critical_safety': line.critical.safety,
                'critical_cost': line.critical.cost,
                'critical_justification': line.critical.justification or '',
                'lenient_safety': line.lenient.safety,
                'lenient_cost': line.lenient.cost,
                'lenient_justification': line.lenient.justification or '',
            }
            for line in table
        ]

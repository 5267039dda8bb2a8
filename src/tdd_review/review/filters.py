"""Page and tag filtering for content suggestions."""

from typing import Iterable, List, Optional

from ..models.review import ContentBlock


ALL_PAGES = "All Pages"


def filter_by_page(blocks: List[ContentBlock], page: Optional[str]) -> List[ContentBlock]:
    """Keep blocks whose page label contains ``page`` verbatim."""
    if not page or page == ALL_PAGES:
        return list(blocks)
    return [block for block in blocks if page in block.page]


def filter_by_tags(blocks: List[ContentBlock], tags: Optional[Iterable[str]]) -> List[ContentBlock]:
    """
    Keep blocks carrying at least one of the selected tags.

    A block tag matches a selected tag when it contains it,
    case-insensitively. An empty selection keeps everything.
    """
    selected = [tag.lower() for tag in (tags or []) if tag.strip()]
    if not selected:
        return list(blocks)
    return [
        block
        for block in blocks
        if any(choice in tag.lower() for tag in block.edit_types for choice in selected)
    ]


def apply_filters(
    blocks: List[ContentBlock],
    page: Optional[str] = None,
    tags: Optional[Iterable[str]] = None,
) -> List[ContentBlock]:
    return filter_by_tags(filter_by_page(blocks, page), tags)


def page_options(blocks: List[ContentBlock]) -> List[str]:
    """
    Page filter choices, "All Pages" first.

    Uses the part of each page label before the first comma
    ("Page 4, Introduction" -> "Page 4"), in order of first appearance.
    """
    options = [ALL_PAGES]
    for block in blocks:
        label = block.page.split(",", 1)[0].strip()
        if label and label not in options:
            options.append(label)
    return options


def tag_options(blocks: List[ContentBlock]) -> List[str]:
    """Distinct edit-type tags in order of first appearance."""
    options: List[str] = []
    for block in blocks:
        for tag in block.edit_types:
            if tag not in options:
                options.append(tag)
    return options

"""
Node detail rendering.

Section bodies are rendered with markdown-it; link nodes get a fixed
sentence naming their text.
"""

import html
import logging
from typing import Union

from markdown_it import MarkdownIt

from ..core.types import HeadingNode, NodeDetail, NodeKind, ReferenceNode, SectionIndex

logger = logging.getLogger(__name__)

EMPTY_BODY_HTML = "<p>No content available for this node.</p>"


class MarkdownInlineRenderer:
    """Converts a single section body to an HTML fragment."""

    def __init__(self) -> None:
        self._md = MarkdownIt("commonmark", {"html": False}).enable("table").enable("strikethrough")

    def render_to_html(self, text: str) -> str:
        """Render Markdown; never fails, degrading to escaped text."""
        if not text:
            return ""
        try:
            return self._md.render(text)
        except Exception as e:
            logger.debug(f"Markdown render failed, using escaped text: {e}")
            return f"<p>{html.escape(text)}</p>"


def reference_body_html(text: str) -> str:
    return f"<p>This is a reference to <strong>{html.escape(text)}</strong>.</p>"


def build_detail(
    node: Union[HeadingNode, ReferenceNode],
    sections: SectionIndex,
    renderer: MarkdownInlineRenderer,
) -> NodeDetail:
    """Assemble the detail payload for one node."""
    if isinstance(node, HeadingNode):
        body = renderer.render_to_html(sections.get(node.id))
        return NodeDetail(
            title=node.text,
            kind=NodeKind.HEADING,
            level=node.level,
            source_line=node.source_line,
            body_html=body or EMPTY_BODY_HTML,
        )
    return NodeDetail(
        title=node.text,
        kind=NodeKind.LINK,
        url=node.url,
        body_html=reference_body_html(node.text),
    )

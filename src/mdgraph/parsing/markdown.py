"""
Markdown Structural Graph Builder.

Turns raw Markdown into heading nodes joined by hierarchy edges and link
nodes joined to their enclosing heading by reference edges, in a single
left-to-right pass over the lines.

Only headings and inline links are structurally significant; everything
else is body text attributed to the most recent heading.
"""

import logging
import re
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Union

from ..core.types import (
    EdgeKind,
    GraphEdge,
    GraphSnapshot,
    HeadingNode,
    ReferenceNode,
    SectionIndex,
)
from .base import ParseResult, ParseSource, compute_stats

logger = logging.getLogger(__name__)

HEADING_PATTERN = re.compile(r"^(#{1,6})\s+(.+)$")
LINK_PATTERN = re.compile(r"\[([^\]]+)\]\(([^)]+)\)")

DEFAULT_FILENAME = "document.md"


@dataclass
class _OpenHeading:
    id: str
    level: int


class GraphBuilder:
    """
    Builds a ``GraphSnapshot`` from Markdown text.

    ``build`` is total and reentrant: all state lives inside the call, and
    the heading id counter restarts for every document.
    """

    def build(self, text: str) -> GraphSnapshot:
        if not isinstance(text, str) or not text:
            return GraphSnapshot.empty()

        nodes: List[Union[HeadingNode, ReferenceNode]] = []
        edges: List[GraphEdge] = []
        sections: Dict[str, str] = {}
        link_ids = set()

        stack: List[_OpenHeading] = []
        current: Optional[str] = None
        body: List[str] = []
        counter = 0

        for index, line in enumerate(text.split("\n")):
            match = HEADING_PATTERN.match(line)
            heading_text = match.group(2).strip() if match else ""

            if match and heading_text:
                level = len(match.group(1))
                node_id = f"node-{counter}"
                counter += 1

                if current is not None:
                    sections[current] = _join_section(body)
                    body = []

                nodes.append(HeadingNode(id=node_id, text=heading_text, level=level, source_line=index + 1))
                current = node_id

                # A heading only nests under a strictly shallower one
                while stack and stack[-1].level >= level:
                    stack.pop()
                if stack:
                    edges.append(GraphEdge(source=stack[-1].id, target=node_id, kind=EdgeKind.HIERARCHY))
                stack.append(_OpenHeading(node_id, level))

            elif current is not None:
                body.append(line)

            # Runs after the push, so a link on a heading line belongs to that heading
            for link in LINK_PATTERN.finditer(line):
                link_text, url = link.group(1), link.group(2)
                link_id = ReferenceNode.id_for(url)
                if link_id not in link_ids:
                    link_ids.add(link_id)
                    nodes.append(ReferenceNode(id=link_id, text=link_text, url=url))
                if stack:
                    edges.append(GraphEdge(source=stack[-1].id, target=link_id, kind=EdgeKind.REFERENCE))

        if current is not None:
            sections[current] = _join_section(body)

        logger.debug(f"Built graph: {len(nodes)} nodes, {len(edges)} edges")
        return GraphSnapshot(nodes=tuple(nodes), edges=tuple(edges), sections=SectionIndex(sections))


def _join_section(lines: List[str]) -> str:
    """Join body lines, dropping leading and trailing blank lines."""
    start, end = 0, len(lines)
    while start < end and not lines[start].strip():
        start += 1
    while end > start and not lines[end - 1].strip():
        end -= 1
    return "\n".join(lines[start:end])


class MarkdownParser:
    """
    Local parse path: wraps the builder into a ``ParseResult``.
    """

    name = "markdown"

    def __init__(self, builder: GraphBuilder | None = None):
        self.builder = builder or GraphBuilder()

    def parse_document(
        self,
        text: str,
        filename: str | None = None,
        metadata: Dict[str, Any] | None = None,
    ) -> ParseResult:
        snapshot = self.builder.build(text)
        return ParseResult(
            snapshot=snapshot,
            stats=compute_stats(text if isinstance(text, str) else "", snapshot),
            filename=filename or DEFAULT_FILENAME,
            source=ParseSource.LOCAL,
            metadata=dict(metadata or {}),
        )


def build(text: str) -> GraphSnapshot:
    """Module-level convenience for ``GraphBuilder().build``."""
    return GraphBuilder().build(text)

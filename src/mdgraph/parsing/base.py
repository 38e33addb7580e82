"""
Base Parsing Infrastructure.

Defines the single ``ParseResult`` shape produced by both the local graph
builder and the remote processing client, so everything downstream of a
parse is agnostic to where the parse happened.
"""

import re
from dataclasses import dataclass, field
from enum import StrEnum
from pathlib import Path
from typing import Any, Dict

from ..config import ACCEPTED_EXTENSIONS
from ..core.types import GraphSnapshot, GraphStats

_WHITESPACE_RUN = re.compile(r"\s+")


class ParseSource(StrEnum):
    """Provenance of a parse result."""
    LOCAL = "local"
    REMOTE = "remote"


@dataclass(frozen=True)
class ParseResult:
    """
    Standardized result object returned by every parse path.
    """

    snapshot: GraphSnapshot
    stats: GraphStats
    filename: str
    source: ParseSource = ParseSource.LOCAL
    metadata: Dict[str, Any] = field(default_factory=dict)


def compute_stats(text: str, snapshot: GraphSnapshot) -> GraphStats:
    """
    Count nodes, edges, lines, words and characters.

    Words are the pieces left by splitting on whitespace runs, so leading or
    trailing whitespace contributes one empty piece each.
    """
    return GraphStats(
        node_count=len(snapshot.nodes),
        edge_count=len(snapshot.edges),
        line_count=len(text.split("\n")),
        word_count=len(_WHITESPACE_RUN.split(text)),
        char_count=len(text),
    )


def is_markdown_file(path: Path) -> bool:
    """Check whether a path carries an accepted Markdown extension."""
    return path.suffix.lower() in ACCEPTED_EXTENSIONS

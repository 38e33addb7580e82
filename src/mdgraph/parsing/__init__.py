"""
Parsing for mdgraph: the local graph builder and the remote processing path.
"""

from .base import ParseResult, ParseSource, compute_stats
from .markdown import GraphBuilder, MarkdownParser, build
from .remote import RemoteParseClient

__all__ = [
    "ParseResult", "ParseSource", "compute_stats",
    "GraphBuilder", "MarkdownParser", "build",
    "RemoteParseClient",
]

"""
Core modules for mdgraph.

This package contains the fundamental building blocks:
- types: Data structures (nodes, edges, snapshot, stats)
- errors: Error taxonomy
- result: Ok/Err result type
- session: Session controller (import from ``mdgraph.core.session``)
"""

from .errors import (
    BackendInitError, ErrorCode, MdGraphError, ParseInputError,
    RemoteError, RemoteRejected, RemoteUnavailable,
    SessionBusyError, UnknownNodeSelected,
)
from .result import Err, Ok, Result
from .types import (
    BackendKind, EdgeKind, GraphEdge, GraphSnapshot, GraphStats,
    HeadingNode, NodeDetail, NodeKind, ReferenceNode, SectionIndex, SessionState,
)

__all__ = [
    # Types
    "BackendKind", "EdgeKind", "GraphEdge", "GraphSnapshot", "GraphStats",
    "HeadingNode", "NodeDetail", "NodeKind", "ReferenceNode", "SectionIndex", "SessionState",
    # Errors
    "BackendInitError", "ErrorCode", "MdGraphError", "ParseInputError",
    "RemoteError", "RemoteRejected", "RemoteUnavailable",
    "SessionBusyError", "UnknownNodeSelected",
    # Result
    "Err", "Ok", "Result",
]

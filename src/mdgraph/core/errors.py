"""
Error taxonomy for mdgraph.

Remote failures are recovered by the session controller and only surface in
logs. Backend initialization failures are reported to the caller because
there is no safe automatic fallback between rendering technologies.
"""

from enum import StrEnum
from typing import Optional


class ErrorCode(StrEnum):
    """Machine-readable codes returned by the processing service."""
    INVALID_CONTENT = "INVALID_CONTENT"
    CONTENT_TOO_LARGE = "CONTENT_TOO_LARGE"
    PROCESSING_ERROR = "PROCESSING_ERROR"

    @classmethod
    def parse(cls, value: object) -> "ErrorCode":
        try:
            return cls(str(value))
        except ValueError:
            return cls.PROCESSING_ERROR


class MdGraphError(Exception):
    """Base class for all mdgraph errors."""


class ParseInputError(MdGraphError):
    """Content handed to the session is not a non-empty string."""


class RemoteError(MdGraphError):
    """Base class for failures of the remote processing path."""


class RemoteUnavailable(RemoteError):
    """Network or transport failure talking to the processing service."""


class RemoteRejected(RemoteError):
    """The processing service answered with a structured error."""

    def __init__(self, code: ErrorCode, message: str = "", status: Optional[int] = None):
        self.code = ErrorCode.parse(code)
        self.status = status
        super().__init__(message or self.code.value)

    def __str__(self) -> str:
        base = super().__str__()
        if self.status is not None:
            return f"{self.code.value} (HTTP {self.status}): {base}"
        return f"{self.code.value}: {base}"


class BackendInitError(MdGraphError):
    """A rendering backend failed to acquire its resources."""


class UnknownNodeSelected(MdGraphError):
    """A selection referenced an id absent from the current snapshot."""

    def __init__(self, node_id: str):
        self.node_id = node_id
        super().__init__(f"Unknown node: {node_id}")


class SessionBusyError(MdGraphError):
    """The session rejected a call because a backend switch is in flight."""

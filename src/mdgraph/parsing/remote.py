"""
Remote Parse Client.

Sends raw Markdown to the processing service and converts its response into
the same ``ParseResult`` the local builder produces. Every failure mode is
returned as an ``Err`` so the caller can fall back to local parsing without
exception handling around the network call.
"""

import http.client
import json
import logging
from typing import Any, Dict, List, Optional
from urllib import error, request

from pydantic import ValidationError

from ..config import DEFAULT_TIMEOUT_SECONDS, MAX_CONTENT_BYTES, UPLOAD_PATH
from ..core.errors import ErrorCode, RemoteError, RemoteRejected, RemoteUnavailable
from ..core.result import Err, Ok, Result
from ..core.types import NODE_ADAPTER, GraphEdge, GraphSnapshot, GraphStats, SectionIndex
from .base import ParseResult, ParseSource

logger = logging.getLogger(__name__)


def content_size(content: str) -> int:
    """Size of the content as transmitted (UTF-8 bytes)."""
    return len(content.encode("utf-8"))


class RemoteParseClient:
    """
    Client for the ``POST /api/markdown/upload`` endpoint.
    """

    def __init__(self, base_url: Optional[str], timeout: float = DEFAULT_TIMEOUT_SECONDS):
        self.base_url = (base_url or "").rstrip("/")
        self.timeout = timeout

    @property
    def is_configured(self) -> bool:
        return bool(self.base_url)

    @property
    def upload_url(self) -> str:
        return f"{self.base_url}{UPLOAD_PATH}"

    def parse(
        self,
        content: str,
        filename: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> Result[ParseResult, RemoteError]:
        """
        Submit content for processing.

        Oversized or empty content is rejected before anything is sent.
        """
        if not isinstance(content, str) or not content:
            return Err(RemoteRejected(ErrorCode.INVALID_CONTENT, "Invalid markdown content"))

        if content_size(content) > MAX_CONTENT_BYTES:
            return Err(RemoteRejected(ErrorCode.CONTENT_TOO_LARGE, "Content too large (max 10MB)"))

        if not self.is_configured:
            return Err(RemoteUnavailable("No processing service configured"))

        payload: Dict[str, Any] = {"content": content, "metadata": metadata or {}}
        if filename:
            payload["filename"] = filename

        fetched = self._post(payload)
        if fetched.is_err():
            return fetched

        return self._to_parse_result(fetched.unwrap(), filename, metadata)

    def _post(self, payload: Dict[str, Any]) -> Result[Dict[str, Any], RemoteError]:
        """Internal method to send the HTTP request via urllib."""
        try:
            data = json.dumps(payload).encode("utf-8")
        except (TypeError, ValueError) as e:
            return Err(RemoteRejected(ErrorCode.INVALID_CONTENT, f"Request is not JSON-serializable: {e}"))

        req = request.Request(
            self.upload_url,
            data=data,
            headers={"Content-Type": "application/json"},
            method="POST",
        )
        try:
            with request.urlopen(req, timeout=self.timeout) as response:
                raw = response.read()
        except error.HTTPError as e:
            return Err(self._rejection_from(e))
        except (error.URLError, http.client.HTTPException, OSError) as e:
            return Err(RemoteUnavailable(f"Processing service unreachable: {e}"))

        try:
            body = json.loads(raw.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            return Err(RemoteRejected(ErrorCode.PROCESSING_ERROR, f"Malformed response: {e}"))

        if not isinstance(body, dict):
            return Err(RemoteRejected(ErrorCode.PROCESSING_ERROR, "Malformed response: not an object"))
        return Ok(body)

    @staticmethod
    def _rejection_from(e: error.HTTPError) -> RemoteRejected:
        message = e.reason if isinstance(e.reason, str) else ""
        code: Any = ErrorCode.PROCESSING_ERROR
        try:
            body = json.loads(e.read().decode("utf-8"))
            if isinstance(body, dict):
                code = body.get("code", code)
                message = body.get("error", message) or message
        except (OSError, http.client.HTTPException, UnicodeDecodeError, json.JSONDecodeError):
            pass
        return RemoteRejected(ErrorCode.parse(code), str(message), status=e.code)

    def _to_parse_result(
        self,
        body: Dict[str, Any],
        filename: Optional[str],
        metadata: Optional[Dict[str, Any]],
    ) -> Result[ParseResult, RemoteError]:
        data = body.get("data", body)
        if not isinstance(data, dict):
            return Err(RemoteRejected(ErrorCode.PROCESSING_ERROR, "Malformed response: missing data"))

        raw_nodes = data.get("nodes")
        raw_edges = data.get("edges")
        if not isinstance(raw_nodes, list) or not isinstance(raw_edges, list):
            return Err(RemoteRejected(ErrorCode.PROCESSING_ERROR, "Malformed response: missing nodes or edges"))

        try:
            nodes = [NODE_ADAPTER.validate_python(n) for n in raw_nodes]
            edges = [GraphEdge.model_validate(e) for e in raw_edges]
            stats = GraphStats.model_validate(data.get("stats") or {})
        except ValidationError as e:
            return Err(RemoteRejected(ErrorCode.PROCESSING_ERROR, f"Malformed response: {e.error_count()} invalid items"))

        problem = _check_consistency(nodes, edges)
        if problem:
            return Err(RemoteRejected(ErrorCode.PROCESSING_ERROR, f"Malformed response: {problem}"))

        sections = data.get("sections")
        if not isinstance(sections, dict):
            sections = {}
        sections = {str(k): v for k, v in sections.items() if isinstance(v, str)}

        snapshot = GraphSnapshot(nodes=tuple(nodes), edges=tuple(edges), sections=SectionIndex(sections))
        remote_meta = {"remote_filename": data.get("filename"), "processed_at": data.get("processedAt")}
        return Ok(ParseResult(
            snapshot=snapshot,
            stats=stats,
            filename=filename or data.get("filename") or "uploaded.md",
            source=ParseSource.REMOTE,
            metadata={**(metadata or {}), **{k: v for k, v in remote_meta.items() if v is not None}},
        ))


def _check_consistency(nodes: List[Any], edges: List[GraphEdge]) -> Optional[str]:
    ids = set()
    for node in nodes:
        if node.id in ids:
            return f"duplicate node id {node.id!r}"
        ids.add(node.id)
    for edge in edges:
        if edge.source not in ids or edge.target not in ids:
            return f"edge {edge.source!r} -> {edge.target!r} references an unknown node"
    return None

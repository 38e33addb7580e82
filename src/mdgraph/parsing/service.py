"""
Processing Service Handlers.

Framework-free request handlers for the Markdown processing API. Each
handler takes the decoded JSON body and returns ``(status, body)``; mounting
them on an HTTP server is left to the host application.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, Tuple

from ..config import MAX_CONTENT_BYTES, SERVICE_NAME, SERVICE_VERSION, UPLOAD_PATH
from ..core.errors import ErrorCode
from ..core.sample import SAMPLE_API_DOCUMENT
from .base import ParseResult
from .markdown import MarkdownParser
from .remote import content_size

logger = logging.getLogger(__name__)

_parser = MarkdownParser()

Response = Tuple[int, Dict[str, Any]]


def _error(status: int, message: str, code: ErrorCode) -> Response:
    return status, {"error": message, "code": code.value}


def _envelope(result: ParseResult) -> Dict[str, Any]:
    wire = result.snapshot.to_dict()
    return {
        "success": True,
        "data": {
            "filename": result.filename,
            "nodes": wire["nodes"],
            "edges": wire["edges"],
            "sections": wire["sections"],
            "stats": result.stats.to_wire(),
            "metadata": result.metadata,
            "processedAt": datetime.now(timezone.utc).isoformat(),
        },
    }


def handle_upload(payload: Any) -> Response:
    """
    Handle ``POST /api/markdown/upload``.
    """
    if not isinstance(payload, dict):
        return _error(400, "Invalid markdown content", ErrorCode.INVALID_CONTENT)

    content = payload.get("content")
    if not content or not isinstance(content, str):
        return _error(400, "Invalid markdown content", ErrorCode.INVALID_CONTENT)

    if content_size(content) > MAX_CONTENT_BYTES:
        return _error(413, "Content too large (max 10MB)", ErrorCode.CONTENT_TOO_LARGE)

    metadata = payload.get("metadata")
    try:
        result = _parser.parse_document(
            content,
            filename=payload.get("filename") or "uploaded.md",
            metadata=metadata if isinstance(metadata, dict) else {},
        )
        return 200, _envelope(result)
    except Exception as e:
        logger.exception(f"Markdown processing error: {e}")
        return _error(500, "Failed to process markdown content", ErrorCode.PROCESSING_ERROR)


def sample_payload() -> Response:
    """Handle ``GET /api/markdown/sample``."""
    result = _parser.parse_document(
        SAMPLE_API_DOCUMENT,
        filename="sample-api.md",
        metadata={"source": "api-sample"},
    )
    return 200, _envelope(result)


def service_info() -> Response:
    """Handle ``GET /api/markdown/``."""
    return 200, {
        "service": SERVICE_NAME,
        "version": SERVICE_VERSION,
        "endpoints": {
            f"POST {UPLOAD_PATH}": "Process markdown content",
            "GET /api/markdown/sample": "Get sample markdown data",
            "GET /api/markdown/": "API information",
        },
        "examples": {
            "upload": {
                "method": "POST",
                "url": UPLOAD_PATH,
                "body": {
                    "content": "# Hello World\n\nThis is markdown content.",
                    "filename": "example.md",
                    "metadata": {},
                },
            }
        },
    }

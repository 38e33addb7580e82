"""
Unit tests for the processing service handlers.
"""

from unittest.mock import patch

import pytest

from mdgraph.config import MAX_CONTENT_BYTES, UPLOAD_PATH
from mdgraph.parsing.service import handle_upload, sample_payload, service_info


class TestHandleUpload:
    def test_success_envelope(self):
        status, body = handle_upload({
            "content": "# Title\nintro\n## Sub\n[Doc](http://x)",
            "filename": "notes.md",
            "metadata": {"author": "me"},
        })

        assert status == 200
        assert body["success"] is True
        data = body["data"]
        assert data["filename"] == "notes.md"
        assert data["metadata"] == {"author": "me"}
        assert "processedAt" in data
        assert [n["id"] for n in data["nodes"]] == ["node-0", "node-1", "link-http://x"]
        assert data["nodes"][0] == {
            "id": "node-0", "text": "Title", "level": 1, "sourceLine": 1, "kind": "heading",
        }
        assert data["nodes"][2] == {"id": "link-http://x", "text": "Doc", "url": "http://x", "kind": "link"}
        assert data["edges"] == [
            {"source": "node-0", "target": "node-1", "kind": "hierarchy"},
            {"source": "node-1", "target": "link-http://x", "kind": "reference"},
        ]
        assert data["sections"] == {"node-0": "intro", "node-1": "[Doc](http://x)"}
        assert data["stats"]["nodeCount"] == 3
        assert data["stats"]["edgeCount"] == 2
        assert data["stats"]["lineCount"] == 4

    def test_filename_defaults(self):
        _, body = handle_upload({"content": "# A"})
        assert body["data"]["filename"] == "uploaded.md"
        assert body["data"]["metadata"] == {}

    @pytest.mark.parametrize("payload", [None, [], {}, {"content": ""}, {"content": 42}])
    def test_invalid_content(self, payload):
        status, body = handle_upload(payload)
        assert status == 400
        assert body == {"error": "Invalid markdown content", "code": "INVALID_CONTENT"}

    def test_content_too_large(self):
        status, body = handle_upload({"content": "a" * (MAX_CONTENT_BYTES + 1)})
        assert status == 413
        assert body["code"] == "CONTENT_TOO_LARGE"

    def test_limit_counts_encoded_bytes(self):
        # Two bytes per character in UTF-8
        content = "é" * (MAX_CONTENT_BYTES // 2 + 1)
        status, _ = handle_upload({"content": content})
        assert status == 413

    @patch("mdgraph.parsing.service._parser.parse_document", side_effect=RuntimeError("boom"))
    def test_processing_error(self, _mock_parse):
        status, body = handle_upload({"content": "# A"})
        assert status == 500
        assert body == {"error": "Failed to process markdown content", "code": "PROCESSING_ERROR"}


class TestInfoHandlers:
    def test_sample_payload(self):
        status, body = sample_payload()
        assert status == 200
        data = body["data"]
        assert data["filename"] == "sample-api.md"
        assert data["metadata"] == {"source": "api-sample"}
        assert [n["text"] for n in data["nodes"] if n["kind"] == "heading"] == [
            "Sample Markdown", "Features", "Links", "Nested Section",
        ]
        assert any(n.get("url") == "https://d3js.org" for n in data["nodes"])

    def test_service_info_lists_upload_endpoint(self):
        status, body = service_info()
        assert status == 200
        assert f"POST {UPLOAD_PATH}" in body["endpoints"]
        assert body["examples"]["upload"]["url"] == UPLOAD_PATH

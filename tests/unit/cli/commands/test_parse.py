"""
Unit tests for the 'parse' command.
"""

import json
from unittest.mock import patch
from urllib import error

from mdgraph.cli.commands.parse import parse
from mdgraph.cli.main import main


class TestParseCommand:
    def test_json_output(self, runner, settings, doc_path):
        result = runner.invoke(parse, [str(doc_path), "--json"], obj={"settings": settings})

        assert result.exit_code == 0
        payload = json.loads(result.output)
        assert payload["meta"] == {"status": "success", "source": "local"}
        data = payload["data"]
        assert data["filename"] == "doc.md"
        assert [n["id"] for n in data["nodes"]] == ["node-0", "node-1", "link-http://x"]
        assert data["sections"]["node-0"] == "intro line"
        assert data["stats"]["nodeCount"] == 3
        assert data["stats"]["edgeCount"] == 2

    def test_summary_table(self, runner, settings, doc_path):
        result = runner.invoke(parse, [str(doc_path)], obj={"settings": settings})

        assert result.exit_code == 0
        assert "Headings" in result.output
        assert "Characters" in result.output
        assert "local" in result.output

    def test_missing_file(self, runner, settings, tmp_path):
        result = runner.invoke(parse, [str(tmp_path / "missing.md")], obj={"settings": settings})
        assert result.exit_code == 0
        assert "File not found" in result.output

    def test_empty_document_fails(self, runner, settings, tmp_path):
        empty = tmp_path / "empty.md"
        empty.write_text("")

        result = runner.invoke(parse, [str(empty)], obj={"settings": settings})

        assert result.exit_code == 1
        assert "non-empty" in result.output

    @patch("mdgraph.parsing.remote.request.urlopen")
    def test_unreachable_remote_falls_back(self, mock_urlopen, runner, settings, doc_path):
        mock_urlopen.side_effect = error.URLError("refused")

        result = runner.invoke(
            parse, [str(doc_path), "--json", "--remote", "http://127.0.0.1:9"], obj={"settings": settings}
        )

        assert result.exit_code == 0
        assert mock_urlopen.called
        assert json.loads(result.output)["meta"]["source"] == "local"

    def test_through_main_group(self, runner, doc_path, tmp_path, monkeypatch):
        monkeypatch.delenv("MDGRAPH_API_URL", raising=False)
        config = tmp_path / "config.yaml"
        config.write_text("view:\n  backend: spatial\n")

        result = runner.invoke(main, ["-c", str(config), "parse", str(doc_path), "--json"])

        assert result.exit_code == 0
        assert json.loads(result.output)["data"]["filename"] == "doc.md"

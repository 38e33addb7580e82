"""
Unit tests for the 'show' command.
"""

import json

from mdgraph.cli.commands.show import show


class TestShowCommand:
    def test_heading_detail(self, runner, settings, doc_path):
        result = runner.invoke(show, [str(doc_path), "node-1"], obj={"settings": settings})

        assert result.exit_code == 0
        detail = json.loads(result.output)
        assert detail["title"] == "Sub"
        assert detail["kind"] == "heading"
        assert detail["level"] == 2
        assert detail["sourceLine"] == 3
        assert '<a href="http://x">Doc</a>' in detail["bodyHtml"]

    def test_link_detail(self, runner, settings, doc_path):
        result = runner.invoke(show, [str(doc_path), "link-http://x"], obj={"settings": settings})

        detail = json.loads(result.output)
        assert detail["url"] == "http://x"
        assert detail["bodyHtml"] == "<p>This is a reference to <strong>Doc</strong>.</p>"

    def test_unknown_node(self, runner, settings, doc_path):
        result = runner.invoke(show, [str(doc_path), "node-9"], obj={"settings": settings})

        assert result.exit_code == 0
        assert "Unknown node: node-9" in result.output
        assert "mdgraph parse --json" in result.output

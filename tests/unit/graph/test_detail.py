"""
Unit tests for node detail rendering.
"""

from unittest.mock import patch

import pytest

from mdgraph.core.types import HeadingNode, NodeKind, ReferenceNode, SectionIndex
from mdgraph.graph.detail import EMPTY_BODY_HTML, MarkdownInlineRenderer, build_detail, reference_body_html


class TestMarkdownInlineRenderer:
    @pytest.fixture
    def renderer(self):
        return MarkdownInlineRenderer()

    def test_renders_inline_markup(self, renderer):
        html = renderer.render_to_html("Some **bold** and [a link](http://x)")
        assert "<strong>bold</strong>" in html
        assert '<a href="http://x">a link</a>' in html

    def test_tables_and_strikethrough(self, renderer):
        html = renderer.render_to_html("| a | b |\n|---|---|\n| 1 | 2 |\n\n~~gone~~")
        assert "<table>" in html
        assert "<s>gone</s>" in html

    def test_raw_html_is_escaped(self, renderer):
        html = renderer.render_to_html("<script>alert(1)</script>")
        assert "<script>" not in html

    def test_empty_text(self, renderer):
        assert renderer.render_to_html("") == ""

    def test_render_failure_degrades_to_escaped_text(self, renderer):
        with patch.object(renderer._md, "render", side_effect=RuntimeError("boom")):
            assert renderer.render_to_html("a < b") == "<p>a &lt; b</p>"


class TestBuildDetail:
    @pytest.fixture
    def renderer(self):
        return MarkdownInlineRenderer()

    def test_heading_with_body(self, renderer):
        node = HeadingNode(id="node-0", text="Title", level=1, source_line=1)
        detail = build_detail(node, SectionIndex({"node-0": "intro *line*"}), renderer)

        assert detail.title == "Title"
        assert detail.kind == NodeKind.HEADING
        assert detail.level == 1
        assert detail.source_line == 1
        assert detail.url is None
        assert "<em>line</em>" in detail.body_html

    def test_heading_without_body(self, renderer):
        node = HeadingNode(id="node-3", text="Empty", level=2, source_line=9)
        detail = build_detail(node, SectionIndex(), renderer)
        assert detail.body_html == EMPTY_BODY_HTML

    def test_reference(self, renderer):
        node = ReferenceNode(id="link-u", text="<Docs>", url="u")
        detail = build_detail(node, SectionIndex(), renderer)

        assert detail.kind == NodeKind.LINK
        assert detail.url == "u"
        assert detail.level is None
        assert detail.body_html == reference_body_html("<Docs>")
        assert "<strong>&lt;Docs&gt;</strong>" in detail.body_html

"""
Unit tests for the core graph types.
"""

import pytest
from pydantic import ValidationError

from mdgraph.core.types import (
    NODE_ADAPTER,
    EdgeKind,
    GraphEdge,
    GraphSnapshot,
    GraphStats,
    HeadingNode,
    NodeDetail,
    NodeKind,
    ReferenceNode,
    SectionIndex,
)


class TestNodes:
    def test_heading_wire_shape_uses_camel_case(self):
        node = HeadingNode(id="node-0", text="Title", level=1, source_line=1)
        assert node.to_wire() == {
            "id": "node-0", "text": "Title", "level": 1, "sourceLine": 1, "kind": "heading",
        }

    @pytest.mark.parametrize("level", [0, 7])
    def test_heading_level_bounds(self, level):
        with pytest.raises(ValidationError):
            HeadingNode(id="node-0", text="x", level=level, source_line=1)

    def test_reference_id_derives_from_url(self):
        assert ReferenceNode.id_for("http://x") == "link-http://x"

    def test_adapter_dispatches_on_kind(self):
        heading = NODE_ADAPTER.validate_python(
            {"id": "node-0", "text": "A", "level": 2, "sourceLine": 4, "kind": "heading"}
        )
        link = NODE_ADAPTER.validate_python({"id": "link-u", "text": "u", "url": "u", "kind": "link"})

        assert isinstance(heading, HeadingNode)
        assert heading.source_line == 4
        assert isinstance(link, ReferenceNode)

    def test_nodes_are_frozen(self):
        node = ReferenceNode(id="link-u", text="u", url="u")
        with pytest.raises(ValidationError):
            node.text = "changed"

    def test_stats_accept_wire_names(self):
        stats = GraphStats.model_validate({"nodeCount": 3, "wordCount": 7})
        assert stats.node_count == 3
        assert stats.word_count == 7
        assert stats.char_count == 0

    def test_detail_omits_unset_fields(self):
        detail = NodeDetail(title="Doc", kind=NodeKind.LINK, url="u", body_html="<p>x</p>")
        assert detail.to_wire() == {"title": "Doc", "kind": "link", "url": "u", "bodyHtml": "<p>x</p>"}


class TestSectionIndex:
    def test_unknown_id_returns_empty_string(self):
        sections = SectionIndex({"node-0": "body"})
        assert sections.get("node-0") == "body"
        assert sections.get("node-9") == ""
        with pytest.raises(KeyError):
            sections["node-9"]

    def test_is_read_only_copy(self):
        source = {"node-0": "body"}
        sections = SectionIndex(source)
        source["node-0"] = "mutated"
        assert sections["node-0"] == "body"
        with pytest.raises(TypeError):
            sections._sections["node-0"] = "x"


class TestGraphSnapshot:
    @pytest.fixture
    def snapshot(self):
        return GraphSnapshot(
            nodes=[
                HeadingNode(id="node-0", text="A", level=1, source_line=1),
                HeadingNode(id="node-1", text="B", level=2, source_line=2),
                ReferenceNode(id="link-u", text="u", url="u"),
            ],
            edges=[
                GraphEdge(source="node-0", target="node-1", kind=EdgeKind.HIERARCHY),
                GraphEdge(source="node-1", target="link-u", kind=EdgeKind.REFERENCE),
            ],
            sections={"node-0": "", "node-1": "text"},
        )

    def test_collections_are_tuples(self, snapshot):
        assert isinstance(snapshot.nodes, tuple)
        assert isinstance(snapshot.edges, tuple)
        assert isinstance(snapshot.sections, SectionIndex)

    def test_lookup(self, snapshot):
        assert snapshot.has_node("link-u")
        assert snapshot.get_node("node-1").text == "B"
        assert snapshot.get_node("missing") is None

    def test_partitions(self, snapshot):
        assert [n.id for n in snapshot.headings()] == ["node-0", "node-1"]
        assert [n.id for n in snapshot.references()] == ["link-u"]
        assert len(snapshot.edges_of_kind(EdgeKind.REFERENCE)) == 1

    def test_empty(self):
        empty = GraphSnapshot.empty()
        assert empty.is_empty
        assert empty.to_dict() == {"nodes": [], "edges": [], "sections": {}}

    def test_to_dict(self, snapshot):
        data = snapshot.to_dict()
        assert data["edges"][1] == {"source": "node-1", "target": "link-u", "kind": "reference"}
        assert data["sections"] == {"node-0": "", "node-1": "text"}

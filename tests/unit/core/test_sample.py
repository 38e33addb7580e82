"""
Unit tests for the Sample Manager.
"""

from mdgraph.core.sample import SAMPLE_FILENAME, SampleManager
from mdgraph.parsing.markdown import build


class TestSampleManager:
    """Test the sample document provisioning."""

    def test_provision_writes_document(self, tmp_path):
        target = tmp_path / "nested" / "dir"
        sample_file = SampleManager(target).provision()

        assert sample_file == target / SAMPLE_FILENAME
        assert sample_file.read_text().startswith("# Markdown Graph Sample")

    def test_sample_exercises_the_builder(self, tmp_path):
        snapshot = build(SampleManager(tmp_path).provision().read_text())

        levels = [n.level for n in snapshot.headings()]
        assert levels == [1, 2, 3, 3, 2, 4]
        # Repeated link collapses to one node
        assert [n.url for n in snapshot.references()] == ["https://example.com/notes", "https://d3js.org"]
        # Level jump: Deep Dive hangs off Concepts
        assert ("node-4", "node-5") in [(e.source, e.target) for e in snapshot.edges]

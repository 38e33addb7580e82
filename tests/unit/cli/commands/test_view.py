"""
Unit tests for the 'view' command.
"""

from unittest.mock import patch

from mdgraph.cli.commands.view import view
from mdgraph.config import Settings


class TestViewCommand:
    def test_planar_output(self, runner, settings, doc_path, tmp_path):
        out = tmp_path / "graph.html"

        result = runner.invoke(view, [str(doc_path), "-o", str(out), "--no-open"], obj={"settings": settings})

        assert result.exit_code == 0
        assert "Generated" in result.output
        assert "(planar view)" in result.output
        html = out.read_text()
        assert "d3.forceSimulation" in html
        assert "link-http://x" in html

    def test_spatial_backend(self, runner, settings, doc_path, tmp_path):
        out = tmp_path / "graph.html"

        result = runner.invoke(
            view, [str(doc_path), "--backend", "spatial", "-o", str(out), "--no-open"], obj={"settings": settings}
        )

        assert result.exit_code == 0
        assert "(spatial view)" in result.output
        assert "ForceGraph3D" in out.read_text()

    def test_output_from_settings(self, runner, doc_path, tmp_path):
        out = tmp_path / "from-settings.html"
        settings = Settings(output=str(out), backend="spatial")

        result = runner.invoke(view, [str(doc_path), "--no-open"], obj={"settings": settings})

        assert result.exit_code == 0
        assert "ForceGraph3D" in out.read_text()

    @patch("mdgraph.cli.commands.view.webbrowser.open")
    def test_opens_browser(self, mock_open, runner, settings, doc_path, tmp_path):
        out = tmp_path / "graph.html"

        runner.invoke(view, [str(doc_path), "-o", str(out)], obj={"settings": settings})

        mock_open.assert_called_once_with(out.resolve().as_uri())

    def test_invalid_backend(self, runner, settings, doc_path):
        result = runner.invoke(view, [str(doc_path), "--backend", "hologram"], obj={"settings": settings})
        assert result.exit_code == 2

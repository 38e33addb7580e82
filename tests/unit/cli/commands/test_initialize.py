"""
Unit tests for the 'init' command.
"""

from unittest.mock import patch

import pytest
import yaml

from mdgraph.cli.commands.initialize import init
from mdgraph.config import load_settings


class TestInitCommand:
    """Test the init command."""

    @pytest.fixture
    def mock_cwd(self, tmp_path):
        """Mock current working directory to a temp path."""
        with patch("pathlib.Path.cwd", return_value=tmp_path):
            yield tmp_path

    def test_init_creates_config(self, runner, mock_cwd):
        result = runner.invoke(init, ["--api-url", "http://svc"])

        assert result.exit_code == 0
        assert "Initialized successfully" in result.output

        config_path = mock_cwd / ".mdgraph/config.yaml"
        with open(config_path) as f:
            config = yaml.safe_load(f)
        assert config["remote"]["api_url"] == "http://svc"
        assert config["view"] == {"backend": "planar", "output": "mdgraph.html"}

        settings = load_settings(config_path)
        assert settings.api_url == "http://svc"
        assert settings.timeout == 10.0

    def test_init_with_sample(self, runner, mock_cwd):
        result = runner.invoke(init, ["--sample"])

        assert result.exit_code == 0
        assert (mock_cwd / "sample.md").exists()
        assert "mdgraph view sample.md" in result.output

    def test_gitignore_entry_written_once(self, runner, mock_cwd):
        runner.invoke(init)
        runner.invoke(init, ["--force"])

        assert (mock_cwd / ".gitignore").read_text().count("mdgraph.html") == 1

    @patch("mdgraph.cli.commands.initialize.Confirm.ask", return_value=False)
    def test_existing_config_kept_when_declined(self, mock_confirm, runner, mock_cwd):
        runner.invoke(init, ["--api-url", "http://first"])

        result = runner.invoke(init, ["--api-url", "http://second"])

        mock_confirm.assert_called_once()
        assert "Aborted." in result.output
        config = yaml.safe_load((mock_cwd / ".mdgraph/config.yaml").read_text())
        assert config["remote"]["api_url"] == "http://first"

    @patch("mdgraph.cli.commands.initialize.Confirm.ask")
    def test_force_skips_prompt(self, mock_confirm, runner, mock_cwd):
        runner.invoke(init, ["--api-url", "http://first"])

        runner.invoke(init, ["--force", "--api-url", "http://second"])

        mock_confirm.assert_not_called()
        config = yaml.safe_load((mock_cwd / ".mdgraph/config.yaml").read_text())
        assert config["remote"]["api_url"] == "http://second"

import pytest
from click.testing import CliRunner

from mdgraph.config import Settings

DOC = "# Title\nintro line\n## Sub\nbody\n[Doc](http://x) more\n"


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def settings():
    return Settings()


@pytest.fixture
def doc_path(tmp_path):
    path = tmp_path / "doc.md"
    path.write_text(DOC, encoding="utf-8")
    return path

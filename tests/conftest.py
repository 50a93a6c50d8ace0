from pathlib import Path

import pytest

from inkorg.config.model import InkscapeCfg
from inkorg.document.buffer import TextBuffer
from inkorg.editor import Editor
from inkorg.integration import InkscapeLinks

from tests.infrastructure.file_utils import write
from tests.infrastructure.testing_utils import FakeLauncher


@pytest.fixture(autouse=True)
def _no_config_env(monkeypatch):
    # a developer's INKORG_CONFIG must not leak into tests
    monkeypatch.delenv("INKORG_CONFIG", raising=False)
    monkeypatch.delenv("INKORG_DEBUG", raising=False)


@pytest.fixture
def launcher() -> FakeLauncher:
    return FakeLauncher()


@pytest.fixture
def make_editor(tmp_path: Path, launcher: FakeLauncher):
    """Editor visiting <tmp>/doc.org with drawing links installed."""
    def _make(text: str, name: str = "doc.org"):
        path = write(tmp_path / name, text)
        editor = Editor(TextBuffer.from_file(path))
        links = InkscapeLinks(editor, InkscapeCfg(), launcher=launcher).install()
        return editor, links
    return _make

import json

import pytest

from inkorg.cli import main

from tests.infrastructure.file_utils import write, write_svg
from tests.infrastructure.testing_utils import FakeLauncher


@pytest.fixture
def doc(tmp_path):
    write_svg(tmp_path / "a.svg")
    return write(tmp_path / "doc.org", "inkscape:a.svg and [[https://x.org][site]] [[inkscape:b.svg]]\n")


@pytest.fixture
def fake_launcher(monkeypatch):
    launcher = FakeLauncher()
    monkeypatch.setattr("inkorg.integration.ShellProcessLauncher", lambda: launcher)
    return launcher


def test_links_report(doc, tmp_path, capsys):
    assert main(["links", str(doc)]) == 0
    data = json.loads(capsys.readouterr().out)

    assert data["scheme"] == "inkscape"
    assert data["total"] == 2
    first, second = data["links"]
    assert (first["path"], first["begin"], first["end"]) == ("a.svg", 0, 14)
    assert first["exists"] is True
    assert first["resolved"] == str(tmp_path / "a.svg")
    assert second["bracketed"] is True
    assert second["exists"] is False


def test_links_report_all(doc, capsys):
    assert main(["links", str(doc), "--all"]) == 0
    data = json.loads(capsys.readouterr().out)
    assert data["scheme"] is None
    assert [(e["scheme"], e["description"]) for e in data["links"]] == [
        ("inkscape", None),
        ("https", "site"),
        ("inkscape", None),
    ]


def test_export_to_file(doc, tmp_path):
    out = tmp_path / "out.org"
    assert main(["export", str(doc), "-o", str(out)]) == 0
    assert out.read_text(encoding="utf-8") == "file:a.svg and [[https://x.org][site]] [[file:b.svg]]\n"
    assert "inkscape:a.svg" in doc.read_text(encoding="utf-8")


def test_export_html_to_stdout(doc, capsys):
    assert main(["export", str(doc), "--backend", "html"]) == 0
    assert '<img src="a.svg" alt="a.svg"/>' in capsys.readouterr().out


def test_unknown_backend(doc, capsys):
    assert main(["export", str(doc), "--backend", "pdf"]) == 2
    assert "Unknown export backend 'pdf'" in capsys.readouterr().err


def test_missing_document(tmp_path, capsys):
    assert main(["links", str(tmp_path / "absent.org")]) == 2
    assert "Document not found" in capsys.readouterr().err


def test_bad_config_reported(doc, tmp_path, capsys):
    write(tmp_path / "inkorg.yaml", "colour: blue\n")
    assert main(["links", str(doc)]) == 2
    assert "unknown key" in capsys.readouterr().err


def test_insert(doc, tmp_path, fake_launcher, capsys):
    assert main(["insert", str(doc), "--name", "figs/p.svg"]) == 0

    assert capsys.readouterr().out.strip() == str(tmp_path / "figs" / "p.svg")
    assert doc.read_text(encoding="utf-8").endswith("\n[[inkscape:figs/p.svg]]")
    (call,) = fake_launcher.calls
    assert call.command.startswith("cp ")
    assert (tmp_path / "figs").is_dir()


def test_insert_at_offset(doc, fake_launcher):
    assert main(["insert", str(doc), "--at", "0"]) == 0
    assert doc.read_text(encoding="utf-8").startswith("[[inkscape:.inkscape/")


def test_open_wait_returns_exit_code(tmp_path, monkeypatch):
    launcher = FakeLauncher(returncode=5)
    monkeypatch.setattr("inkorg.integration.ShellProcessLauncher", lambda: launcher)

    assert main(["open", str(tmp_path / "d.svg"), "--wait"]) == 5
    (call,) = launcher.calls
    assert call.command.endswith("inkscape d.svg")


def test_open_without_wait(tmp_path, fake_launcher):
    write_svg(tmp_path / "d.svg")
    assert main(["open", str(tmp_path / "d.svg")]) == 0
    assert fake_launcher.calls[0].command == "inkscape d.svg"

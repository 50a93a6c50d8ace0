import re

from inkorg.config.model import InkscapeCfg

from tests.infrastructure.file_utils import write_svg


def test_insert_relative_link(tmp_path, make_editor, launcher):
    editor, links = make_editor("Intro\n")
    buffer = editor.current_buffer
    buffer.goto_char(len(buffer))

    target = links.insert_link()

    assert re.fullmatch(r"Intro\n\[\[inkscape:\.inkscape/[0-9a-f]{32}\.svg\]\]", buffer.text)
    assert target.parent == (tmp_path / ".inkscape").resolve()
    assert target.parent.is_dir()
    assert buffer.text.endswith(f"{target.name}]]")
    assert buffer.point == len(buffer)

    (call,) = launcher.calls
    assert call.command.startswith("cp ")
    assert call.command.endswith(f"inkscape {target.name}")
    assert call.cwd == target.parent
    # the drawing does not exist yet, so nothing to preview
    assert links.overlays.overlays == []


def test_insert_absolute_link_with_prompt(tmp_path, make_editor):
    editor, links = make_editor("")
    links.cfg = InkscapeCfg(ask_for_file_name=True, use_absolute_paths=True)
    wanted = tmp_path / "figs" / "plan.svg"
    defaults = []

    def prompt(default):
        defaults.append(default)
        return str(wanted)

    target = links.insert_link(prompt)

    assert target == wanted
    assert editor.current_buffer.text == f"[[inkscape:{wanted.resolve().as_posix()}]]"
    assert len(defaults) == 1 and defaults[0].endswith(".svg")


def test_empty_prompt_answer_keeps_generated_name(make_editor):
    editor, links = make_editor("")
    links.cfg = InkscapeCfg(ask_for_file_name=True)
    target = links.insert_link(lambda default: None)
    assert target.parent.name == ".inkscape"


def test_prompt_ignored_unless_enabled(make_editor):
    editor, links = make_editor("")
    asked = []
    links.insert_link(lambda default: asked.append(default) or "other.svg")
    assert asked == []
    assert ".inkscape/" in editor.current_buffer.text


def test_insert_redraws_existing_previews(tmp_path, make_editor):
    write_svg(tmp_path / "a.svg")
    editor, links = make_editor("inkscape:a.svg\n")
    editor.fontify()
    assert links.overlays.generation == 1

    buffer = editor.current_buffer
    buffer.goto_char(len(buffer))
    links.insert_link()

    (ov,) = links.overlays.overlays
    assert ov.region == (0, 14)
    assert ov.generation == 2
    assert ov.live

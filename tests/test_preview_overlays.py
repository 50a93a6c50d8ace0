import pytest

from inkorg.config.model import InkscapeCfg
from inkorg.document.buffer import TextBuffer
from inkorg.editor import Editor
from inkorg.integration import InkscapeLinks
from inkorg.preview.images import ImageHandle
from inkorg.preview.overlays import PreviewOverlay

from tests.infrastructure.file_utils import write, write_svg
from tests.infrastructure.testing_utils import FailingLoader


def test_preview_for_existing_image(tmp_path, make_editor):
    write_svg(tmp_path / "a.svg")
    editor, links = make_editor("See inkscape:a.svg here\n")

    assert editor.fontify() == 1
    (ov,) = links.overlays.overlays
    assert ov.region == (4, 18)
    assert ov.image.path == tmp_path / "a.svg"
    assert ov.image.mime_type == "image/svg+xml"
    assert ov.live and not ov.bracketed
    assert editor.current_buffer.overlays == [ov]
    assert links.overlays.overlays_at(10) == [ov]
    assert links.overlays.overlays_at(18) == []


def test_no_preview_for_missing_image(make_editor):
    editor, links = make_editor("See inkscape:a.svg here\n")
    editor.fontify()
    assert links.overlays.overlays == []
    assert editor.current_buffer.text == "See inkscape:a.svg here\n"


def test_empty_path_ignored(make_editor):
    editor, links = make_editor("")
    links.overlays.render_overlay(0, 0, "", False)
    links.overlays.render_overlay(0, 0, None, True)
    assert links.overlays.overlays == []


def test_bracket_link_preview(tmp_path, make_editor):
    write_svg(tmp_path / "img" / "a.svg")
    editor, links = make_editor("[[inkscape:img/a.svg][the plan]]\n")
    editor.fontify()
    (ov,) = links.overlays.overlays
    assert ov.bracketed
    assert ov.region == (0, 32)


def test_edit_inside_region_removes_preview(tmp_path, make_editor):
    write_svg(tmp_path / "a.svg")
    editor, links = make_editor("See inkscape:a.svg here\n")
    editor.fontify()
    (ov,) = links.overlays.overlays

    buffer = editor.current_buffer
    buffer.goto_char(10)
    buffer.insert("x")

    assert not ov.live
    assert links.overlays.overlays == []
    assert buffer.overlays == []
    assert buffer.bus.subscriptions == []


def test_edit_outside_region_shifts_preview(tmp_path, make_editor):
    write_svg(tmp_path / "a.svg")
    editor, links = make_editor("See inkscape:a.svg here\n")
    editor.fontify()
    (ov,) = links.overlays.overlays

    buffer = editor.current_buffer
    buffer.goto_char(0)
    buffer.insert("Now ")
    buffer.goto_char(len(buffer))
    buffer.insert("more\n")

    assert ov.live
    assert ov.region == (8, 22)
    assert buffer.text[8:22] == "inkscape:a.svg"


def test_same_region_rendered_once(tmp_path, make_editor):
    write_svg(tmp_path / "a.svg")
    editor, links = make_editor("inkscape:a.svg\n")
    editor.fontify()
    editor.fontify()
    assert len(links.overlays.overlays) == 1
    assert len(editor.current_buffer.bus.subscriptions) == 1


def test_redraw_is_idempotent(tmp_path, make_editor):
    write_svg(tmp_path / "a.svg")
    write_svg(tmp_path / "b.svg")
    editor, links = make_editor("inkscape:a.svg and inkscape:b.svg\n")
    editor.fontify()
    first = links.overlays.overlays

    links.overlays.invalidate_and_redraw()
    links.overlays.invalidate_and_redraw()

    current = links.overlays.overlays
    assert [ov.region for ov in current] == [(0, 14), (19, 33)]
    assert all(ov.generation == 3 for ov in current)
    assert not any(ov.live for ov in first)
    assert len(editor.current_buffer.overlays) == 2


def test_redraw_picks_up_new_links(tmp_path, make_editor):
    write_svg(tmp_path / "a.svg")
    editor, links = make_editor("Intro\n")
    editor.fontify()
    assert links.overlays.overlays == []

    buffer = editor.current_buffer
    buffer.goto_char(len(buffer))
    buffer.insert("inkscape:a.svg\n")
    links.overlays.invalidate_and_redraw()

    assert [ov.region for ov in links.overlays.overlays] == [(6, 20)]


def test_overlays_live_on_base_buffer(tmp_path, make_editor):
    write_svg(tmp_path / "a.svg")
    editor, links = make_editor("inkscape:a.svg\n")
    base = editor.current_buffer
    view = editor.visit(base.make_indirect())
    editor.fontify()

    (ov,) = links.overlays.overlays
    assert ov.surface is base
    assert base.overlays == [ov]
    assert view.overlays == []

    view.goto_char(3)
    view.insert("!")
    assert not ov.live
    assert base.overlays == []


def test_loader_error_propagates(tmp_path, launcher):
    write_svg(tmp_path / "a.svg")
    doc = write(tmp_path / "doc.org", "inkscape:a.svg\n")
    editor = Editor(TextBuffer.from_file(doc))
    InkscapeLinks(editor, InkscapeCfg(), launcher=launcher, loader=FailingLoader()).install()

    with pytest.raises(ValueError, match="cannot decode"):
        editor.fontify()


def test_clear_removes_everything(tmp_path, make_editor):
    write_svg(tmp_path / "a.svg")
    editor, links = make_editor("inkscape:a.svg\n")
    editor.fontify()
    links.overlays.clear()
    assert links.overlays.overlays == []
    assert editor.current_buffer.bus.subscriptions == []


def test_fontify_drops_preview_of_deleted_image(tmp_path, make_editor):
    image = write_svg(tmp_path / "a.svg")
    editor, links = make_editor("inkscape:a.svg\n")
    editor.fontify()
    (ov,) = links.overlays.overlays

    image.unlink()
    editor.fontify()

    assert links.overlays.overlays == []
    assert not ov.live
    assert editor.current_buffer.overlays == []
    assert editor.current_buffer.bus.subscriptions == []


def test_fontify_drops_preview_of_link_no_longer_recognised(tmp_path, make_editor):
    write_svg(tmp_path / "a.svg")
    editor, links = make_editor("x inkscape:a.svg y\n")
    editor.fontify()
    (ov,) = links.overlays.overlays

    # wrapping the line in =...= makes it verbatim without editing the link text
    buffer = editor.current_buffer
    buffer.goto_char(0)
    buffer.insert("=")
    buffer.goto_char(19)
    buffer.insert("=")
    assert buffer.text == "=x inkscape:a.svg y=\n"
    assert ov.live

    assert editor.fontify() == 0
    assert links.overlays.overlays == []
    assert not ov.live


def test_fontify_keeps_previews_of_other_buffers(tmp_path, make_editor):
    write_svg(tmp_path / "a.svg")
    editor, links = make_editor("inkscape:a.svg\n")
    first = editor.current_buffer
    editor.fontify()
    (ov,) = links.overlays.overlays

    editor.visit(TextBuffer("nothing here\n", path=tmp_path / "other.org"))
    editor.fontify()

    assert links.overlays.overlays == [ov]
    assert ov.live
    assert first.overlays == [ov]


def test_each_pass_is_a_new_generation(tmp_path, make_editor):
    write_svg(tmp_path / "a.svg")
    editor, links = make_editor("inkscape:a.svg\n")
    editor.fontify()
    editor.fontify()
    (ov,) = links.overlays.overlays
    assert links.overlays.generation == 2
    assert ov.generation == 2


def test_unattached_overlay_has_no_region(tmp_path):
    overlay = PreviewOverlay(surface=TextBuffer(""), image=ImageHandle(tmp_path / "a.svg", b""), generation=0)
    with pytest.raises(RuntimeError):
        overlay.region

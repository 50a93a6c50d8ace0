"""
Drawing links for an editor: the `inkscape:` link type with previews,
follow/create, export rewrite, action-menu entry and link insertion.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Optional

from .config.load import load_config
from .config.model import InkscapeCfg
from .document.buffer import TextBuffer
from .editor import Editor
from .actions import enclosing_link
from .export.rewriter import ExportRewriter
from .links.registry import SchemeHandlers
from .materialize import open_or_create
from .paths import link_text_path, resolve_link_path
from .preview.images import ImageLoader
from .preview.overlays import PreviewOverlayManager
from .process.launcher import Launch, ProcessLauncher, ShellProcessLauncher
from .types import INKSCAPE_LINK_TAG, INKSCAPE_SCHEME, ActionTarget

logger = logging.getLogger(__name__)

#: Asked for the drawing path; receives the generated default
FileNamePrompt = Callable[[str], Optional[str]]


class InkscapeLinks:
    """Wires drawing links into one editor. Call install() once."""

    def __init__(
        self,
        editor: Editor,
        cfg: Optional[InkscapeCfg] = None,
        *,
        launcher: Optional[ProcessLauncher] = None,
        loader: Optional[ImageLoader] = None,
    ):
        self.editor = editor
        self.cfg = cfg if cfg is not None else load_config(editor.current_buffer.path)
        self.launcher: ProcessLauncher = launcher if launcher is not None else ShellProcessLauncher()
        self.overlays = PreviewOverlayManager(editor, loader)
        self.rewriter = ExportRewriter(editor)

    def install(self) -> InkscapeLinks:
        self.editor.links.register(
            INKSCAPE_SCHEME,
            SchemeHandlers(
                tooltip=self.tooltip,
                activate=self.overlays.render_overlay,
                follow=self.follow,
            ),
        )
        self.editor.add_fontify_listener(self.overlays)
        self.editor.export_pipeline.add_before_processing_hook(self.rewriter.preprocess)
        self.editor.actions.add_target_finder(self.inkscape_link_at)
        self.editor.actions.set_actions(INKSCAPE_LINK_TAG, {"open-or-create": self.follow})
        return self

    # --- link callbacks --------------------------------------------------
    @staticmethod
    def tooltip(path: str) -> str:
        return f"Open or create the drawing {path}"

    def follow(self, path: str) -> Launch:
        return open_or_create(resolve_link_path(path, self.editor.current_buffer), self.cfg, self.launcher)

    def inkscape_link_at(self, buffer: TextBuffer, point: Optional[int] = None) -> Optional[ActionTarget]:
        pos = buffer.point if point is None else point
        link = enclosing_link(self.editor.parse(buffer), pos)
        if link is None or link.get("type") != INKSCAPE_SCHEME:
            return None
        return ActionTarget(INKSCAPE_LINK_TAG, str(resolve_link_path(link.get("path"), buffer)))

    # --- insertion -------------------------------------------------------
    def insert_link(self, prompt: Optional[FileNamePrompt] = None) -> Path:
        """
        Insert a link to a new drawing at point, start the editor on it and
        redraw the previews. Returns the drawing's absolute path.
        """
        buffer = self.editor.current_buffer
        target = resolve_link_path(str(self.cfg.generator()(buffer.path)), buffer)
        if self.cfg.ask_for_file_name and prompt is not None:
            answer = prompt(str(target))
            if answer:
                target = resolve_link_path(answer, buffer)

        text_path = link_text_path(target, buffer.directory, absolute=self.cfg.use_absolute_paths)
        buffer.insert(f"[[{INKSCAPE_SCHEME}:{text_path}]]")
        logger.info("Inserted link to %s", target)
        self.follow(str(target))
        self.overlays.invalidate_and_redraw()
        return target


__all__ = ["InkscapeLinks", "FileNamePrompt"]

"""
The host editor: current buffer, link table, export pipeline and action
menu, plus the full highlighting pass that activates link previews.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator, List, Optional, Protocol

from .actions import ActionMenu, enclosing_link
from .document.buffer import TextBuffer
from .document.parser import parse_document
from .document.tree import Element, walk
from .errors import LinkError
from .export.pipeline import ExportPipeline
from .links.registry import LinkDispatcher, SchemeHandlers
from .types import FILE_SCHEME

logger = logging.getLogger(__name__)

# Link types every editor knows about
BUILTIN_SCHEMES = (FILE_SCHEME, "http", "https")


class FontifyListener(Protocol):
    """Told when a full highlighting pass over a buffer starts and ends."""

    def begin_pass(self, buffer: TextBuffer) -> None:
        ...

    def end_pass(self, buffer: TextBuffer) -> None:
        ...


class Editor:
    def __init__(self, buffer: Optional[TextBuffer] = None):
        self.links = LinkDispatcher()
        self.actions = ActionMenu()
        self.export_pipeline = ExportPipeline()
        self._buffer = buffer if buffer is not None else TextBuffer()
        self._fontify_listeners: List[FontifyListener] = []
        for scheme in BUILTIN_SCHEMES:
            self.links.register(scheme, SchemeHandlers(tooltip=f"{scheme} link"))

    # --- buffers ---------------------------------------------------------
    @property
    def current_buffer(self) -> TextBuffer:
        return self._buffer

    def visit(self, buffer: TextBuffer) -> TextBuffer:
        self._buffer = buffer
        return buffer

    @contextmanager
    def with_buffer(self, buffer: TextBuffer) -> Iterator[TextBuffer]:
        """Make `buffer` current for the duration of the block."""
        previous = self._buffer
        self._buffer = buffer
        try:
            yield buffer
        finally:
            self._buffer = previous

    def parse(self, buffer: Optional[TextBuffer] = None) -> Element:
        buf = buffer if buffer is not None else self._buffer
        return parse_document(buf.text, self.links.schemes())

    # --- highlighting ----------------------------------------------------
    def add_fontify_listener(self, listener: FontifyListener) -> None:
        if listener not in self._fontify_listeners:
            self._fontify_listeners.append(listener)

    def fontify(self) -> int:
        """
        Full highlighting pass over the current buffer: every link whose
        scheme has an activate handler gets it called once.
        Listeners hear about the pass before the first activation and after
        the last one. Returns the number of activations.
        """
        buffer = self._buffer
        for listener in self._fontify_listeners:
            listener.begin_pass(buffer)
        tree = self.parse()
        count = 0
        for link in walk(tree, "link"):
            handlers = self.links.get(link.get("type"))
            if handlers is None or handlers.activate is None:
                continue
            handlers.activate(link.begin, link.end, link.get("path"), link.get("format") == "bracket")
            count += 1
        for listener in self._fontify_listeners:
            listener.end_pass(buffer)
        logger.debug("Fontified %s: %d link(s) activated", buffer.name, count)
        return count

    # --- links -----------------------------------------------------------
    def link_at(self, point: Optional[int] = None) -> Optional[Element]:
        pos = self._buffer.point if point is None else point
        return enclosing_link(self.parse(), pos)

    def follow_link_at(self, point: Optional[int] = None) -> None:
        link = self.link_at(point)
        if link is None:
            raise LinkError("No link at point")
        self.links.follow(link.get("type"), link.get("path"))

    # --- export ----------------------------------------------------------
    def export(self, backend: str = "org", buffer: Optional[TextBuffer] = None) -> str:
        return self.export_pipeline.run(self, buffer if buffer is not None else self._buffer, backend)


__all__ = ["Editor", "FontifyListener", "BUILTIN_SCHEMES"]

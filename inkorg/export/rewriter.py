"""
Export-time rewrite of drawing links into portable file links.

Runs as a before-processing hook of the export pipeline, on the export
copy of the buffer: `inkscape:` prefixes become `file:` by text search and
replace, so the backend's own parse sees ordinary file links.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, List

from ..document.buffer import TextBuffer
from ..document.parser import link_occurrences, parse_document
from ..errors import ConsistencyError
from ..types import FILE_SCHEME, INKSCAPE_SCHEME, LinkOccurrence

if TYPE_CHECKING:
    from ..editor import Editor

logger = logging.getLogger(__name__)


class ExportRewriter:
    """
    Rewrites every `<scheme>:` link of the current buffer to `<target_scheme>:`.

    The two prefixes may differ in length; each replacement shifts the
    offsets of the links after it and the pass compensates for that.
    """

    def __init__(self, editor: Editor, *, scheme: str = INKSCAPE_SCHEME, target_scheme: str = FILE_SCHEME):
        self._editor = editor
        self.scheme = scheme
        self.target_scheme = target_scheme

    @property
    def source_token(self) -> str:
        return f"{self.scheme}:"

    @property
    def target_token(self) -> str:
        return f"{self.target_scheme}:"

    def preprocess(self, backend: str) -> None:
        """Before-processing hook: parse afresh, then rewrite in document order."""
        buffer = self._editor.current_buffer
        occurrences = self.collect(buffer)
        logger.debug("Rewriting %d %s link(s) before %s export", len(occurrences), self.scheme, backend)
        self.rewrite(buffer, occurrences)

    def collect(self, buffer: TextBuffer) -> List[LinkOccurrence]:
        """Links of the rewritten scheme, in document order."""
        schemes = set(self._editor.links.schemes()) | {self.scheme}
        tree = parse_document(buffer.text, schemes)
        return link_occurrences(tree, self.scheme)

    def rewrite(self, buffer: TextBuffer, occurrences: List[LinkOccurrence]) -> int:
        """
        Replace the scheme prefix of each occurrence, first to last.

        Raises:
            ConsistencyError: If a prefix is no longer where the parse saw
                it. Occurrences handled before the failing one stay rewritten.
        """
        step = len(self.target_token) - len(self.source_token)
        delta = 0
        for occ in occurrences:
            occ = occ.shifted(delta)
            buffer.goto_char(occ.begin)
            if buffer.search_forward(self.source_token, bound=occ.end) is None:
                raise ConsistencyError(self.source_token, occ.begin, occ.end)
            buffer.replace_match(self.target_token)
            delta += step
        return len(occurrences)


__all__ = ["ExportRewriter"]
